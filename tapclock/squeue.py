"""Bounded FIFO of bytes waiting to be transmitted."""

from __future__ import annotations

from collections import deque

QUEUE_SIZE = 32


class ByteQueue:
    """A ring-buffer style byte queue holding at most ``size - 1`` items.

    Bytes offered while the queue is full are dropped.
    """

    def __init__(self, size: int = QUEUE_SIZE) -> None:
        if size < 2:
            raise ValueError("queue size must be at least 2")
        self.capacity = size - 1
        self._items: deque[int] = deque()

    def enqueue(self, value: int) -> bool:
        """Append a byte; return False if it was dropped because the queue is full."""
        if not 0 <= value <= 0xFF:
            raise ValueError(f"not a byte: {value!r}")
        if len(self._items) >= self.capacity:
            return False
        self._items.append(value)
        return True

    def dequeue(self) -> int:
        """Remove and return the oldest byte; raise IndexError when empty."""
        if not self._items:
            raise IndexError("dequeue from empty queue")
        return self._items.popleft()

    def is_empty(self) -> bool:
        return not self._items

    def __len__(self) -> int:
        return len(self._items)