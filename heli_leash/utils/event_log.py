"""Thread-safe event feed of routed damage/leash events, exposed via the API."""

from __future__ import annotations

import threading
from collections import deque
from dataclasses import dataclass

from heli_leash.core.enums import EventCategory


@dataclass(frozen=True, slots=True)
class LeashEvent:
    """A single entry in the service event feed."""

    seq: int
    category: EventCategory
    message: str
    entity_ids: tuple[int, ...] = ()  # heli handles and player handles involved


class EventLog:
    """Bounded event log. Writers append; readers snapshot a slice.

    Thread-safe via a simple lock — writes happen once per routed event and
    reads are non-blocking copies.
    """

    __slots__ = ("_buffer", "_lock", "_next_seq")

    def __init__(self, maxlen: int | None = 5000) -> None:
        self._buffer: deque[LeashEvent] = deque(maxlen=maxlen)
        self._lock = threading.Lock()
        self._next_seq = 0

    def append(self, category: EventCategory, message: str, entity_ids: tuple[int, ...] = ()) -> LeashEvent:
        with self._lock:
            event = LeashEvent(self._next_seq, category, message, entity_ids)
            self._next_seq += 1
            self._buffer.append(event)
        return event

    def since(self, seq: int) -> list[LeashEvent]:
        """Return all retained events with seq >= *seq*."""
        with self._lock:
            return [e for e in self._buffer if e.seq >= seq]

    def latest(self, count: int = 50) -> list[LeashEvent]:
        """Return the *count* most recent events."""
        with self._lock:
            items = list(self._buffer)
        return items[-count:]

    def __len__(self) -> int:
        with self._lock:
            return len(self._buffer)
