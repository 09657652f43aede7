"""MIDI control-change parsing and MIDI clock generation."""

from __future__ import annotations

import enum
from typing import Callable, Optional

MIN_BPM = 30
MAX_BPM = 260
MIN_TIME = 60_000_000 // MAX_BPM
MAX_TIME = 60_000_000 // MIN_BPM

CLOCK = 0xF8
CONTROL_CHANGE = 0xB0
CLOCKS_PER_BEAT = 24

_U32 = 0xFFFFFFFF

MessageHandler = Callable[[int, int, int], None]
ClockHandler = Callable[[int, int, int], None]


class ParserState(enum.IntEnum):
    IDLE = 0
    WAIT_FOR_CONTROLLER_ID = 1
    WAIT_FOR_CONTROL_VALUE = 2


class MidiParser:
    """Extracts control-change messages for one channel from a byte stream.

    ``channel`` is 1 to 16, or 0 for omni (any channel).
    """

    def __init__(self, channel: int = 1, on_message: Optional[MessageHandler] = None) -> None:
        self.channel = channel
        self.on_message = on_message
        self.command = 0
        self.state = ParserState.IDLE
        self.control = 0
        self.data = 0

    def feed(self, byte: int) -> Optional[tuple[int, int, int]]:
        """Consume one byte; return (command, control, value) when a message completes."""
        byte &= 0xFF
        if byte & 0x80:
            if byte == CLOCK:
                return None
            msg_channel = byte & 0x0F
            if self.channel == 0 or msg_channel == self.channel - 1:
                self.command = byte & 0xF0
                if self.command == CONTROL_CHANGE:
                    self.state = ParserState.WAIT_FOR_CONTROLLER_ID
            return None

        if self.command != CONTROL_CHANGE:
            return None
        if self.state is ParserState.WAIT_FOR_CONTROLLER_ID:
            self.control = byte
            self.state = ParserState.WAIT_FOR_CONTROL_VALUE
        elif self.state is ParserState.WAIT_FOR_CONTROL_VALUE:
            self.data = byte
            self.state = ParserState.IDLE
            message = (self.command, self.control, self.data)
            if self.on_message is not None:
                self.on_message(*message)
            return message
        return None


class MidiClock:
    """Emits 24 clock ticks per beat at a settable tempo.

    Times are microsecond counter values that wrap at 32 bits.
    """

    def __init__(self, now: int = 0, bpm: int = 120, on_clock: Optional[ClockHandler] = None) -> None:
        self.on_clock = on_clock
        self._bpm = 0
        self._period_us = 0
        self._position = 0
        self._last = now & _U32
        self.set_bpm(bpm)

    @property
    def bpm(self) -> int:
        return self._bpm

    @property
    def period_us(self) -> int:
        """Microseconds between two clock ticks."""
        return self._period_us

    @property
    def position(self) -> int:
        """Number of clock ticks emitted so far."""
        return self._position

    def set_bpm(self, bpm: int) -> bool:
        """Set the tempo; values outside MIN_BPM..MAX_BPM are ignored (returns False)."""
        if not MIN_BPM <= bpm <= MAX_BPM:
            return False
        self._bpm = bpm
        self._period_us = 60_000_000 // (CLOCKS_PER_BEAT * bpm)
        return True

    def add(self, amount: int) -> bool:
        """Lower the tempo by ``amount`` (a negative amount raises it)."""
        return self.set_bpm((self._bpm - amount) & 0xFFFF)

    def process(self, now: int) -> int:
        """Emit a tick if a period has elapsed since the last one; return the position."""
        now &= _U32
        if now > self._last:
            diff = now - self._last
        else:
            diff = _U32 - self._last + now

        if diff >= self._period_us:
            self._last = (now - (diff - self._period_us)) & _U32
            if self.on_clock is not None:
                self.on_clock(CLOCK, self._position, self._bpm)
            self._position += 1
        return self._position