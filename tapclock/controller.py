"""Tap-tempo MIDI clock: configuration, menus and event handling."""

from __future__ import annotations

import enum
import time
from dataclasses import dataclass, field
from typing import Callable, Optional

from tapclock.midi import CLOCKS_PER_BEAT, CONTROL_CHANGE, MAX_TIME, MidiClock, MidiParser
from tapclock.panel import BigNumber, CheckMenu, Display, Menu, Screen, Terminal
from tapclock.squeue import ByteQueue

_U32 = 0xFFFFFFFF
EEPROM_SIZE = 7
BLINK_TICKS = 100
TAP_VALUE = 127

MAIN_ITEMS = ("BPM View", "Messages", "Config", "Save")
BUTTON_ITEMS = ("Normally Closed", "Normally Opened", "Latched", "Return")
CONFIG_ITEMS = ("MIDI Channel", "MIDI CC TAP Key", "Switch 1", "Switch 2", "Return")


class ButtonType(enum.IntEnum):
    NORMALLY_CLOSED = 0
    NORMALLY_OPEN = 1
    LATCHED = 2


def _default_buttons() -> list[int]:
    return [ButtonType.NORMALLY_CLOSED, ButtonType.NORMALLY_OPEN]


@dataclass
class Config:
    """Settings kept in EEPROM."""

    channel: int = 1
    tap_cc: int = 64
    button_types: list[int] = field(default_factory=_default_buttons)
    bpm: int = 200

    @classmethod
    def from_eeprom(cls, data: bytes) -> "Config":
        """Read settings from an EEPROM image (bytes 1-4, little-endian word at 5)."""
        if len(data) < EEPROM_SIZE:
            raise ValueError(f"EEPROM image needs {EEPROM_SIZE} bytes, got {len(data)}")
        return cls(
            channel=data[1],
            tap_cc=data[2],
            button_types=[data[3], data[4]],
            bpm=int.from_bytes(bytes(data[5:7]), "little"),
        )

    def to_eeprom(self) -> bytes:
        """Encode the settings as an EEPROM image; byte 0 is left erased."""
        head = bytes(
            [
                0xFF,
                self.channel & 0xFF,
                self.tap_cc & 0xFF,
                self.button_types[0] & 0xFF,
                self.button_types[1] & 0xFF,
            ]
        )
        return head + (self.bpm & 0xFFFF).to_bytes(2, "little")


def _micros() -> int:
    return (time.monotonic_ns() // 1000) & _U32


class Controller:
    """The device logic: MIDI thru, tap tempo, clock output, menus and switches."""

    def __init__(
        self,
        config: Optional[Config] = None,
        display: Optional[Display] = None,
        micros: Optional[Callable[[], int]] = None,
    ) -> None:
        self.config = config if config is not None else Config()
        self._micros = micros if micros is not None else _micros
        self.screen = Screen(display if display is not None else Display())
        self.eeprom = self.config.to_eeprom()

        self.queue = ByteQueue()
        self.sent: list[int] = []
        self.tx_ready = True

        self.in_tap = False
        self.blink_time = 0
        self.tap_led = False
        self.button_state = [0, 0]
        self.switch_levels = [0, 0]
        self._tap_last = 0
        self._clock_last = 0

        self.main_menu = Menu(MAIN_ITEMS)
        self.terminal = Terminal()
        self.switch_menus = (
            CheckMenu(BUTTON_ITEMS, self.config.button_types[0]),
            CheckMenu(BUTTON_ITEMS, self.config.button_types[1]),
        )
        self.config_menu = Menu(CONFIG_ITEMS)
        self.bpm_panel = BigNumber("bpm", 0)
        self.channel_panel = BigNumber("channel", 0)
        self.tap_cc_panel = BigNumber("TAP CC", 0)
        self.panel = self.bpm_panel

        self.parser = MidiParser(self.config.channel, on_message=self._on_message)
        self.clock = MidiClock(self._micros(), self.config.bpm, on_clock=self._on_clock)

        self.screen.reload()
        self.terminal.puts("Messages\n")

    def _send(self, byte: int) -> None:
        if self.tx_ready:
            self.sent.append(byte)
        else:
            self.queue.enqueue(byte)

    def _apply_bpm(self, bpm: int) -> None:
        self.config.bpm = bpm & 0xFFFF
        self.clock.set_bpm(self.config.bpm)
        self.screen.reload()

    def process_tap(self, now: int) -> None:
        """Handle a tap; two taps within MAX_TIME set the tempo."""
        now &= _U32
        diff = (now - self._tap_last) & _U32
        if not self._tap_last:
            self.in_tap = True
            self._tap_last = now
            return
        if diff > MAX_TIME:
            self._tap_last = 0
            self.in_tap = False
            return
        if diff:
            self._apply_bpm(60_000_000 // diff)
        self.in_tap = False
        self._tap_last = now

    def process_midi_clock(self, now: int) -> None:
        """Derive the tempo from the time since the previous external clock."""
        now &= _U32
        diff = (now - self._clock_last) & _U32
        if diff:
            self._apply_bpm(25_000_000 // diff)
        self.in_tap = False
        self._clock_last = now

    def _on_message(self, command: int, control: int, value: int) -> None:
        if (command & 0xF0) == CONTROL_CHANGE and control == self.config.tap_cc and value == TAP_VALUE:
            self.process_tap(self._micros())
            self.terminal.printf("\nTAP %d\n", self.clock.bpm)

    def _on_clock(self, message: int, position: int, bpm: int) -> None:
        if position % CLOCKS_PER_BEAT == 0:
            self.blink_time = BLINK_TICKS
        self._send(message)

    def receive(self, byte: int) -> None:
        """Handle one byte from the MIDI input: log it, parse it and pass it through."""
        byte &= 0xFF
        self.terminal.printf("%02x ", byte)
        self.parser.feed(byte)
        self._send(byte)
        self.screen.reload()

    def _switch_button(self, index: int, state: int) -> None:
        if self.button_state[index] == state:
            return
        kind = self.config.button_types[index]
        if kind == ButtonType.NORMALLY_OPEN:
            self.switch_levels[index] = state
        elif kind == ButtonType.NORMALLY_CLOSED:
            self.switch_levels[index] = int(not state)
        elif kind == ButtonType.LATCHED:
            self.switch_levels[index] = self.button_state[index]
        self.button_state[index] = state

    def timer_tick(self, now: int) -> None:
        """The millisecond timer: advance the clock and drive the LED and switches."""
        self.clock.process(now)
        if self.in_tap:
            self.tap_led = True
        elif self.blink_time:
            self.blink_time -= 1
            level = 1 if self.blink_time else 0
            self.tap_led = bool(level)
            self._switch_button(0, level)
            self._switch_button(1, level)

    def menu_click(self) -> None:
        """React to a press of the dial button."""
        panel = self.panel
        if panel is self.main_menu:
            choice = panel.current
            if choice == 3:
                self.save_config()
            else:
                targets = {0: self.bpm_panel, 1: self.terminal, 2: self.config_menu}
                self.panel = targets.get(choice, self.panel)
        elif any(panel is menu for menu in self.switch_menus):
            index = 0 if panel is self.switch_menus[0] else 1
            choice = panel.current
            if choice == 3:
                self.panel = self.config_menu
            else:
                panel.checked = choice
                self.config.button_types[index] = choice
        elif panel is self.config_menu:
            targets = (
                self.channel_panel,
                self.tap_cc_panel,
                self.switch_menus[0],
                self.switch_menus[1],
                self.main_menu,
            )
            if 0 <= panel.current < len(targets):
                self.panel = targets[panel.current]
        elif panel is self.channel_panel or panel is self.tap_cc_panel:
            self.panel = self.config_menu
        else:
            self.panel = self.main_menu
        self.screen.reload()

    def encoder_turn(self, direction: int, coarse: bool = False) -> None:
        """React to the dial turning: positive is up, ``coarse`` steps by ten."""
        if not direction:
            return
        step = -1 if direction > 0 else 1
        if coarse:
            step *= 10
        panel = self.panel
        if panel is self.bpm_panel:
            self.clock.add(step)
        elif panel is self.channel_panel:
            self.config.channel = (self.config.channel - step) & 15
            self.parser.channel = self.config.channel
        elif panel is self.tap_cc_panel:
            self.config.tap_cc = (self.config.tap_cc - step) & 127
        elif panel is self.terminal:
            return
        else:
            panel.update(1 if direction > 0 else -1)
            self.in_tap = False
        self.screen.reload()

    def save_config(self) -> bytes:
        """Store the settings in EEPROM, then reset out-of-range values in memory."""
        self.eeprom = self.config.to_eeprom()
        config = self.config
        if config.channel > 15:
            config.channel = 1
        if config.tap_cc > 127:
            config.tap_cc = 64
        if config.button_types[0] > ButtonType.LATCHED:
            config.button_types[0] = ButtonType.NORMALLY_CLOSED
        if config.button_types[1] > ButtonType.LATCHED:
            config.button_types[1] = ButtonType.NORMALLY_OPEN
        for menu, kind in zip(self.switch_menus, config.button_types):
            menu.checked = kind
        return self.eeprom

    def update_view(self) -> None:
        """One idle step: send a queued byte, update the shown value, redraw a little."""
        if self.tx_ready and not self.queue.is_empty():
            self.sent.append(self.queue.dequeue())

        if self.panel is self.bpm_panel:
            self.config.bpm = self.bpm_panel.number = self.clock.bpm
        elif self.panel is self.channel_panel:
            self.channel_panel.number = self.config.channel
        elif self.panel is self.tap_cc_panel:
            self.tap_cc_panel.number = self.config.tap_cc

        self.screen.refresh(self.panel)