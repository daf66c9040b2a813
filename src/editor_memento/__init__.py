"""Bounded undo/redo history for editable documents."""

__all__ = [
    "adapters",
    "history",
    "runtime",
]

__version__ = "0.1.0"
