"""
Keyed process-local locks.

Booking creation is a check-then-insert sequence: look for overlapping
bookings, then insert. Two requests for the same property must not
interleave between those steps. ``KeyedLock`` hands out one mutex per key
(the property id) so requests for different properties still run in
parallel. Cross-process exclusion comes from ``select_for_update()`` on the
property row inside the same critical section.
"""

from __future__ import annotations

import threading
from contextlib import contextmanager
from typing import Dict, Hashable, Iterator


class _Entry:
    __slots__ = ("lock", "holders")

    def __init__(self) -> None:
        self.lock = threading.Lock()
        self.holders = 0


class KeyedLock:
    """A registry of mutexes keyed by an arbitrary hashable value."""

    def __init__(self) -> None:
        self._guard = threading.Lock()
        self._entries: Dict[Hashable, _Entry] = {}

    @contextmanager
    def hold(self, key: Hashable) -> Iterator[None]:
        with self._guard:
            entry = self._entries.get(key)
            if entry is None:
                entry = self._entries[key] = _Entry()
            entry.holders += 1
        entry.lock.acquire()
        try:
            yield
        finally:
            entry.lock.release()
            with self._guard:
                entry.holders -= 1
                if entry.holders == 0:
                    del self._entries[key]

    def __len__(self) -> int:
        with self._guard:
            return len(self._entries)


property_locks = KeyedLock()
