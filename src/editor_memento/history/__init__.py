"""Snapshot history: immutable states, the bounded store, and the editor."""

from .editor import Editor, Listener
from .errors import EmptyFuture, EmptyHistory, HistoryError
from .snapshot import DOCUMENT_FIELDS, Snapshot
from .store import HistoryStats, HistoryStore, SessionPhase

__all__ = [
    "DOCUMENT_FIELDS",
    "Editor",
    "EmptyFuture",
    "EmptyHistory",
    "HistoryError",
    "HistoryStats",
    "HistoryStore",
    "Listener",
    "SessionPhase",
    "Snapshot",
]
