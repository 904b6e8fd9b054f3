"""A value that can be set only once, safely across threads."""

from __future__ import annotations

import threading
from typing import Generic, TypeVar

T = TypeVar("T")


class OnceValue(Generic[T]):
    """Holds the first value passed to set; later calls are ignored."""

    def __init__(self, value: T | None = None) -> None:
        self.value = value
        self._lock = threading.Lock()
        self._done = False

    def set(self, value: T) -> None:
        with self._lock:
            if not self._done:
                self.value = value
                self._done = True