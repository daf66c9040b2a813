"""Minimal Textual adapter that turns key presses into Editor calls."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Iterable, Optional

from editor_memento.history import Editor, HistoryError, HistoryStats, Snapshot


def _noop(*_args, **_kwargs) -> None:  # pragma: no cover - default hook
    return None


@dataclass(slots=True)
class TextualUIHooks:
    """Callbacks invoked by the adapter to update Textual widgets."""

    update_document: Callable[[Snapshot], None]
    update_status: Callable[[str], None] = _noop
    update_history: Callable[[HistoryStats], None] = _noop
    log: Callable[[str], None] = _noop


@dataclass(slots=True)
class KeyResult:
    """Outcome of a single key press."""

    consumed: bool
    status: str = "ok"
    message: Optional[str] = None


class TextualEditorAdapter:
    """Bridges an ``Editor`` session to a Textual-friendly surface."""

    UNDO_KEYS = frozenset({"ctrl+z"})
    REDO_KEYS = frozenset({"ctrl+y", "ctrl+shift+z"})
    RESET_KEYS = frozenset({"ctrl+r"})

    def __init__(self, editor: Editor, hooks: TextualUIHooks) -> None:
        self.editor = editor
        self.hooks = hooks
        self.editor.subscribe(self._on_editor_event)
        if self.editor.get_state() is None:
            self.editor.reset(Snapshot.document())
        else:
            self._refresh()

    def handle_textual_key(
        self,
        key: str,
        *,
        text: Optional[str] = None,
        modifiers: Iterable[str] = (),
    ) -> KeyResult:
        """Translate a Textual key event into an editor operation."""

        chord = self._chord(key, modifiers)
        self._log_state("key ->", key=chord, text=text)
        result = self._dispatch(chord, text)
        if result.message:
            self.hooks.update_status(result.message)
        self._log_state("result <-", status=result.status, message=result.message)
        return result

    def _dispatch(self, chord: str, text: Optional[str]) -> KeyResult:
        if chord in self.UNDO_KEYS:
            return self._step(self.editor.undo, "undo")
        if chord in self.REDO_KEYS:
            return self._step(self.editor.redo, "redo")
        if chord in self.RESET_KEYS:
            self.editor.reset()
            return KeyResult(consumed=True, status="reset", message="history cleared")
        if chord == "backspace":
            content = self.editor.content
            if not content:
                return KeyResult(consumed=True, status="noop")
            self.editor.set_state(content=content[:-1])
            return KeyResult(consumed=True, status="delete")
        if chord == "enter":
            self.editor.set_state(content=self.editor.content + "\n")
            return KeyResult(consumed=True, status="insert")
        if text and len(text) == 1 and text.isprintable():
            self.editor.set_state(content=self.editor.content + text)
            return KeyResult(consumed=True, status="insert")
        return KeyResult(consumed=False, status="ignored")

    def _step(self, operation: Callable[[], Snapshot], label: str) -> KeyResult:
        try:
            operation()
        except HistoryError as exc:
            return KeyResult(consumed=True, status=f"{label}:empty", message=str(exc))
        return KeyResult(consumed=True, status=label, message=label)

    def _on_editor_event(self, event: str, snapshot: Optional[Snapshot]) -> None:
        self._log_state("event ->", event=event)
        self._refresh(snapshot)

    def _refresh(self, snapshot: Optional[Snapshot] = None) -> None:
        current = snapshot if snapshot is not None else self.editor.get_state()
        self.hooks.update_document(current if current is not None else Snapshot())
        self.hooks.update_history(self.editor.history.stats())

    def _log_state(self, prefix: str, **fields: object) -> None:
        snapshot = self._state_metadata()
        snapshot.update({k: v for k, v in fields.items() if v is not None})
        parts = [prefix]
        for key, value in snapshot.items():
            parts.append(f"{key}={value!r}")
        self.hooks.log(" ".join(parts))

    def _state_metadata(self) -> Dict[str, object]:
        stats = self.editor.history.stats()
        return {
            "editor": self.editor.name,
            "phase": self.editor.phase.value,
            "past": stats.past,
            "future": stats.future,
        }

    @staticmethod
    def _chord(key: str, modifiers: Iterable[str]) -> str:
        normalized = [str(mod).lower() for mod in modifiers]
        lowered = key.lower()
        prefix = [mod for mod in normalized if not lowered.startswith(f"{mod}+")]
        return "+".join([*prefix, lowered]) if prefix else lowered


__all__ = ["KeyResult", "TextualEditorAdapter", "TextualUIHooks"]
