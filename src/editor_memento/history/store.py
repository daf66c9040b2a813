"""Bounded two-stack undo/redo bookkeeping for editor snapshots."""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from enum import Enum
from typing import Deque, Iterator, Optional

from editor_memento.runtime import telemetry
from editor_memento.runtime.settings import (
    DEFAULT_CAPACITY,
    HistorySettings,
    parse_capacity,
)

from .errors import EmptyFuture, EmptyHistory
from .snapshot import Snapshot

LOGGER_NAME = "editor_memento.history"


class SessionPhase(str, Enum):
    """Where an editing session sits relative to its history."""

    FRESH = "fresh"
    EDITABLE = "editable"
    BRANCHED = "branched"


@dataclass(slots=True)
class HistoryStats:
    """Lightweight view of store occupancy."""

    capacity: Optional[int]
    past: int
    future: int
    evicted: int


class HistoryStore:
    """Past and future snapshot stacks pivoting around an external "current".

    The store never learns what is current. ``undo`` and ``redo`` take the
    caller's live snapshot so it can be parked on the opposite stack. The past
    stack holds at most ``capacity`` entries; ``None`` lifts the bound.
    """

    def __init__(self, capacity: Optional[int] = DEFAULT_CAPACITY) -> None:
        self._capacity = parse_capacity(capacity)
        self._past: Deque[Snapshot] = deque(maxlen=self._capacity)
        self._future: Deque[Snapshot] = deque()
        self._evicted = 0

    @classmethod
    def from_settings(cls, settings: HistorySettings) -> "HistoryStore":
        return cls(capacity=settings.capacity)

    @property
    def capacity(self) -> Optional[int]:
        return self._capacity

    @property
    def phase(self) -> SessionPhase:
        if self._future:
            return SessionPhase.BRANCHED
        if self._past:
            return SessionPhase.EDITABLE
        return SessionPhase.FRESH

    def record(self, snapshot: Snapshot) -> None:
        evicting = self._capacity is not None and len(self._past) >= self._capacity
        if evicting:
            self._evicted += 1
            telemetry.record_event(
                "history.evict",
                level="debug",
                data={"capacity": self._capacity, "evicted": self._evicted},
                logger_name=LOGGER_NAME,
            )
        self._past.append(snapshot)
        dropped_future = len(self._future)
        self._future.clear()
        telemetry.record_event(
            "history.record",
            level="debug",
            data={"past": len(self._past), "dropped_future": dropped_future},
            logger_name=LOGGER_NAME,
        )

    def undo(self, current: Snapshot) -> Snapshot:
        if not self._past:
            self._report_empty("undo")
            raise EmptyHistory()
        previous = self._past.pop()
        self._future.append(current)
        telemetry.record_event(
            "history.undo",
            level="debug",
            data={"past": len(self._past), "future": len(self._future)},
            logger_name=LOGGER_NAME,
        )
        return previous

    def redo(self, current: Snapshot) -> Snapshot:
        if not self._future:
            self._report_empty("redo")
            raise EmptyFuture()
        following = self._future.pop()
        # past + future never exceeds capacity, so this append cannot evict
        self._past.append(current)
        telemetry.record_event(
            "history.redo",
            level="debug",
            data={"past": len(self._past), "future": len(self._future)},
            logger_name=LOGGER_NAME,
        )
        return following

    def clear(self) -> None:
        self._past.clear()
        self._future.clear()
        telemetry.record_event("history.clear", level="debug", logger_name=LOGGER_NAME)

    def can_undo(self) -> bool:
        return bool(self._past)

    def can_redo(self) -> bool:
        return bool(self._future)

    def iter_past(self) -> Iterator[Snapshot]:
        """Yield recorded snapshots oldest first."""

        position = 0
        while position < len(self._past):
            yield self._past[position]
            position += 1

    def iter_future(self) -> Iterator[Snapshot]:
        """Yield undone snapshots in redo order (next redo first)."""

        position = len(self._future) - 1
        while 0 <= position < len(self._future):
            yield self._future[position]
            position -= 1

    def stats(self) -> HistoryStats:
        return HistoryStats(
            capacity=self._capacity,
            past=len(self._past),
            future=len(self._future),
            evicted=self._evicted,
        )

    def _report_empty(self, operation: str) -> None:
        telemetry.record_event(
            "history.empty",
            level="debug",
            data={"operation": operation},
            logger_name=LOGGER_NAME,
        )


__all__ = ["HistoryStats", "HistoryStore", "SessionPhase"]
