"""Thread-safe mailboxes and queues for passing data between threads."""

from __future__ import annotations

import threading
from collections import deque
from typing import Any, Generic, TypeVar

T = TypeVar("T")


class Mailbox(Generic[T]):
    """Holds at most one item; posting replaces what was there."""

    def __init__(self) -> None:
        self._data: T | None = None
        self._lock = threading.Lock()

    def get(self) -> T:
        """Return the current item; raise RuntimeError when empty."""
        with self._lock:
            if self._data is None:
                raise RuntimeError("Can not retrieve mail from empty mailbox")
            return self._data

    def post(self, new_data: T) -> T | None:
        """Store ``new_data`` and return the item it replaced, if any."""
        with self._lock:
            old, self._data = self._data, new_data
            return old

    def clear(self) -> T | None:
        """Empty the mailbox and return what it held."""
        with self._lock:
            old, self._data = self._data, None
            return old

    def is_empty(self) -> bool:
        with self._lock:
            return self._data is None


class Queue(Generic[T]):
    """Unbounded FIFO queue for many producers and one consumer."""

    def __init__(self) -> None:
        self._items: deque[T] = deque()
        self._lock = threading.Lock()

    def push(self, value: T) -> None:
        with self._lock:
            self._items.append(value)

    def pop(self) -> T:
        """Remove and return the oldest item; raise IndexError when empty."""
        with self._lock:
            if not self._items:
                raise IndexError("pop from an empty queue")
            return self._items.popleft()

    def pop_safe(self) -> T | None:
        """Remove and return the oldest item, or None when empty."""
        with self._lock:
            return self._items.popleft() if self._items else None

    def empty(self) -> bool:
        with self._lock:
            return not self._items

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)


class MPMCQueue(Generic[T]):
    """Bounded FIFO queue for many producers and many consumers.

    The capacity must be a power of two, at least 2.
    """

    def __init__(self, size: int) -> None:
        if size < 2 or size & (size - 1):
            raise ValueError("The size must be a power of 2")
        self._size = size
        self._items: deque[Any] = deque()
        self._lock = threading.Lock()

    @property
    def capacity(self) -> int:
        return self._size

    def enqueue(self, data: T) -> bool:
        """Add ``data``; return False when the queue is full."""
        with self._lock:
            if len(self._items) >= self._size:
                return False
            self._items.append(data)
            return True

    def dequeue(self) -> T:
        """Remove and return the oldest item; raise IndexError when empty."""
        with self._lock:
            if not self._items:
                raise IndexError("dequeue from an empty queue")
            return self._items.popleft()

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)