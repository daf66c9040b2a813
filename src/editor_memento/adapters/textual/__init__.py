"""Textual host for the editor history engine."""

from .controller import KeyResult, TextualEditorAdapter, TextualUIHooks

__all__ = ["KeyResult", "TextualEditorAdapter", "TextualUIHooks"]
