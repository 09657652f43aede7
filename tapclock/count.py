"""Measure the tempo of a stream of MIDI clock bytes printed as hex lines."""

from __future__ import annotations

import argparse
import sys
import time
from typing import Optional

from tapclock.midi import CLOCKS_PER_BEAT


class BpmCounter:
    """Counts "F8" lines and reports the tempo once per beat."""

    def __init__(self, start: int = 0) -> None:
        self._last = start
        self._count = 0

    def feed(self, line: str, now: int) -> Optional[int]:
        """Consume a line read at ``now`` (microseconds); return the BPM after each beat."""
        if line.endswith("\n"):
            line = line[:-1]
        if line != "F8":
            return None
        self._count += 1
        if self._count < CLOCKS_PER_BEAT:
            return None
        self._count = 0
        elapsed = now - self._last
        self._last = now
        return 60_000_000 // elapsed


def _now_us() -> int:
    return time.monotonic_ns() // 1000


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(
        prog="tapclock-count",
        description="Read hex MIDI bytes, one per line, from standard input and print the tempo.",
    )
    parser.parse_args(argv)

    counter = BpmCounter(_now_us())
    for line in sys.stdin:
        bpm = counter.feed(line, _now_us())
        if bpm is not None:
            sys.stdout.write(f"{bpm}       \r")
            sys.stdout.flush()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())