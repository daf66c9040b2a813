"""Editor façade: the single owner of "current state" for a session."""

from __future__ import annotations

from typing import Any, Callable, List, Optional

from editor_memento.runtime import telemetry
from editor_memento.runtime.settings import HistorySettings

from .errors import EmptyFuture, EmptyHistory, HistoryError
from .snapshot import Snapshot
from .store import HistoryStore, SessionPhase

Listener = Callable[[str, Optional[Snapshot]], None]


class Editor:
    """Originator that snapshots itself into a ``HistoryStore``.

    Every mutation goes through ``set_state``, which parks the outgoing
    snapshot in history before installing the new one. An editor built
    without ``initial`` has no state until its first ``set_state``, which
    installs the snapshot without recording anything. ``undo`` and ``redo``
    raise ``EmptyHistory`` / ``EmptyFuture`` and leave the current snapshot
    untouched when there is nothing to step to.
    """

    def __init__(
        self,
        initial: Optional[Snapshot] = None,
        *,
        history: Optional[HistoryStore] = None,
        name: str = "default",
    ) -> None:
        self.name = name
        self.history = history if history is not None else HistoryStore()
        self._current: Optional[Snapshot] = initial
        self._listeners: List[Listener] = []

    @classmethod
    def from_settings(
        cls,
        settings: Optional[HistorySettings] = None,
        *,
        initial: Optional[Snapshot] = None,
        name: str = "default",
    ) -> "Editor":
        resolved = settings if settings is not None else HistorySettings.from_env()
        return cls(initial, history=HistoryStore.from_settings(resolved), name=name)

    def get_state(self) -> Optional[Snapshot]:
        return self._current

    @property
    def phase(self) -> SessionPhase:
        return self.history.phase

    def can_undo(self) -> bool:
        return self.history.can_undo()

    def can_redo(self) -> bool:
        return self.history.can_redo()

    def set_state(
        self, snapshot: Optional[Snapshot] = None, /, **fields: Any
    ) -> Snapshot:
        """Install a new current snapshot, recording the outgoing one.

        Pass a whole ``Snapshot``, keyword fields to evolve the current one,
        or both (fields are applied on top of the given snapshot).
        """

        base = snapshot if snapshot is not None else self._current
        updated = (base if base is not None else Snapshot()).evolve(**fields)
        with telemetry.span(
            "editor::set_state",
            component="editor",
            metadata={"editor": self.name, "fields": sorted(fields)},
        ):
            if self._current is not None:
                self.history.record(self._current)
            self._current = updated
        self._notify("set_state")
        return updated

    def undo(self) -> Snapshot:
        current = self._require_state()
        with telemetry.span(
            "editor::undo",
            component="editor",
            metadata={"editor": self.name},
            expected=(HistoryError,),
        ):
            restored = self.history.undo(current)
            self._current = restored
        self._notify("undo")
        return restored

    def redo(self) -> Snapshot:
        current = self._require_state(empty=EmptyFuture)
        with telemetry.span(
            "editor::redo",
            component="editor",
            metadata={"editor": self.name},
            expected=(HistoryError,),
        ):
            restored = self.history.redo(current)
            self._current = restored
        self._notify("redo")
        return restored

    def reset(self, initial: Optional[Snapshot] = None) -> Optional[Snapshot]:
        """Start a new session: drop all history, optionally swap the state."""

        self.history.clear()
        if initial is not None:
            self._current = initial
        telemetry.record_event(
            "editor.reset",
            data={"editor": self.name},
            logger_name="editor_memento.editor",
        )
        self._notify("reset")
        return self._current

    def subscribe(self, callback: Listener) -> None:
        self._listeners.append(callback)

    def _require_state(self, empty: type[HistoryError] = EmptyHistory) -> Snapshot:
        if self._current is None:
            raise empty()
        return self._current

    def _notify(self, event: str) -> None:
        for callback in list(self._listeners):
            callback(event, self._current)

    # document accessors

    def _field(self, name: str, default: Any) -> Any:
        if self._current is None:
            return default
        return self._current.get(name, default)

    @property
    def content(self) -> str:
        return self._field("content", "")

    @property
    def title(self) -> str:
        return self._field("title", "")

    @property
    def font_name(self) -> str:
        return self._field("font_name", "")

    @property
    def font_size(self) -> float:
        return self._field("font_size", 0.0)


__all__ = ["Editor", "Listener"]
