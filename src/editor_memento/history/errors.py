"""Signals raised when undo or redo has nothing to step to."""

from __future__ import annotations


class HistoryError(LookupError):
    """Base class for recoverable history conditions."""

    def __init__(self, message: str, *, operation: str) -> None:
        super().__init__(message)
        self.operation = operation


class EmptyHistory(HistoryError):
    """Raised by ``undo`` when no past snapshot is recorded."""

    def __init__(self, message: str = "Nothing to undo") -> None:
        super().__init__(message, operation="undo")


class EmptyFuture(HistoryError):
    """Raised by ``redo`` when no undone snapshot is waiting."""

    def __init__(self, message: str = "Nothing to redo") -> None:
        super().__init__(message, operation="redo")


__all__ = ["EmptyFuture", "EmptyHistory", "HistoryError"]
