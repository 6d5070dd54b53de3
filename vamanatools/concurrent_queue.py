"""A thread-safe FIFO queue with notification hooks."""

from __future__ import annotations

import threading
from collections import deque
from typing import Any, Iterable


class ConcurrentQueue:
    """FIFO queue whose pop returns a sentinel value instead of blocking."""

    def __init__(self, null_value: Any = None) -> None:
        self._items: deque = deque()
        self._lock = threading.Lock()
        self._push_cv = threading.Condition(threading.Lock())
        self._pop_cv = threading.Condition(threading.Lock())
        self.null_value = null_value

    def size(self) -> int:
        """Return the number of queued items."""
        with self._lock:
            return len(self._items)

    def __len__(self) -> int:
        return self.size()

    def empty(self) -> bool:
        """Return True if the queue holds nothing."""
        return self.size() == 0

    def push(self, value: Any) -> None:
        """Append one item at the back."""
        with self._lock:
            self._items.append(value)

    def insert(self, values: Iterable[Any]) -> None:
        """Append every item of an iterable at the back, in order."""
        with self._lock:
            self._items.extend(values)

    def pop(self) -> Any:
        """Remove and return the front item, or the null value if empty."""
        with self._lock:
            if not self._items:
                return self.null_value
            return self._items.popleft()

    def wait_for_push_notify(self, wait_time: float = 1e-5) -> bool:
        """Wait up to wait_time seconds for a push notification."""
        with self._push_cv:
            return self._push_cv.wait(wait_time)

    def wait_for_pop_notify(self, wait_time: float = 1e-5) -> bool:
        """Wait up to wait_time seconds for a pop notification."""
        with self._pop_cv:
            return self._pop_cv.wait(wait_time)

    def push_notify_one(self) -> None:
        with self._push_cv:
            self._push_cv.notify()

    def push_notify_all(self) -> None:
        with self._push_cv:
            self._push_cv.notify_all()

    def pop_notify_one(self) -> None:
        with self._pop_cv:
            self._pop_cv.notify()

    def pop_notify_all(self) -> None:
        with self._pop_cv:
            self._pop_cv.notify_all()