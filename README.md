# tapclock

A tap-tempo MIDI clock generator, modelled as plain Python objects.

## Modules

- `tapclock.midi`
  - `MidiClock(now=0, bpm=120, on_clock=None)` emits MIDI timing clock bytes
    (`0xF8`), 24 per quarter note. Times are microsecond counter values that
    wrap at 32 bits.
    - `process(now)` emits at most one tick per call and returns the tick count.
    - `set_bpm(bpm)` ignores tempos outside 30–260 BPM and returns `False` for them.
    - `add(amount)` lowers the tempo by `amount`.
  - `MidiParser(channel=1, on_message=None)` follows Control Change messages on
    one channel (1–16, or 0 for any channel). `feed(byte)` returns
    `(command, control, value)` when a message completes.
- `tapclock.debounce`: `Debouncer.update(value)` turns raw switch readings into
  `KeyEvent` values.
  - It returns `KeyEvent.DOWN` on the second active sample in a row.
  - It returns `KeyEvent.UP` on the first inactive sample after an active one.
  - Every other sample gives `KeyEvent.NOCHANGE`.
- `tapclock.squeue`: `ByteQueue(size=32)`, a byte FIFO that holds at most
  `size - 1` bytes.
  - `enqueue` returns `False` and drops the byte when the queue is full.
  - `dequeue` raises `IndexError` when the queue is empty.
- `tapclock.panel`: the display model.
  - `Display` records drawing commands (strings, boxes, bitmaps) page by page.
  - `Screen` redraws a panel one step per `refresh` call after `reload`.
  - The panels are `Menu`, `CheckMenu`, `Terminal` (a four-line, 21-column
    scrolling log) and `BigNumber`.
- `tapclock.controller`: `Controller(config=None, display=None, micros=None)`
  ties these together:
  - MIDI thru with logging to the terminal panel (`receive`);
  - tap tempo (`process_tap`, and a Control Change with value 127 on the
    configured TAP controller number);
  - clock output and LED/switch blinking on each beat (`timer_tick`);
  - the dial button and encoder (`menu_click`, `encoder_turn`);
  - a periodic idle step (`update_view`).

  Bytes the controller sends are appended to `Controller.sent`. While
  `tx_ready` is false they wait in `Controller.queue` instead. `Config` holds
  the settings. `Config.to_eeprom()` and `Config.from_eeprom(data)` convert
  them to and from a 7-byte image. `save_config()` stores that image in
  `Controller.eeprom`.
- `tapclock.count`: `BpmCounter.feed(line, now)` counts lines reading `F8`. On
  every 24th one it returns the tempo in BPM, measured from the previous beat.

## Installation

```
pip install .
```

With the test dependencies:

```
pip install ".[test]"
```

## Example

```python
from tapclock.controller import Controller

ctl = Controller(micros=lambda: 0)
ctl.process_tap(1_000_000)   # first tap starts a measurement
ctl.process_tap(1_500_000)   # half a second later
print(ctl.clock.bpm)         # 120
```

## Measuring the tempo of a clock stream

`tapclock-count` reads MIDI bytes from standard input, one hex value per line.
It counts the lines that read exactly `F8`. After every 24 of them it prints
the measured tempo in BPM, overwriting the same line on the terminal:

```
some-midi-dump | tapclock-count
```

## What the package does not do

- It does not talk to MIDI ports, serial lines or any hardware. The caller
  feeds bytes in and reads `Controller.sent`.
- It does not drive a real screen. `Display` only records what would be drawn.
- It keeps the EEPROM image in memory as `bytes`. Writing it to a file or
  device is left to the caller.
- Apart from `tapclock-count`, it has no command that runs the device.

## Running the tests

```
pytest
```