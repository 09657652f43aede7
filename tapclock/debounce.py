"""Two-sample debouncing of a push button."""

from __future__ import annotations

import enum


class KeyEvent(enum.IntEnum):
    """Result of feeding one sample to a debouncer."""

    NOCHANGE = 0
    UP = 1
    DOWN = 2


class Debouncer:
    """Reports a key press after two consecutive active samples.

    A release is reported as soon as an inactive sample follows any
    active one.
    """

    def __init__(self) -> None:
        self._state = 0

    @property
    def pressed(self) -> bool:
        """True once a press has been reported and not yet released."""
        return self._state == 2

    def update(self, value) -> KeyEvent:
        """Feed one sample (truthy means active) and return the event."""
        if value:
            if self._state == 0:
                self._state = 1
            elif self._state == 1:
                self._state = 2
                return KeyEvent.DOWN
        elif self._state:
            self._state = 0
            return KeyEvent.UP
        return KeyEvent.NOCHANGE