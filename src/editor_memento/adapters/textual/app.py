"""Executable Textual app that hosts an undoable editing session."""

from __future__ import annotations

import argparse
from dataclasses import dataclass
from typing import Iterable, Optional, Sequence

try:  # pragma: no cover - imported only when demo is run
    from textual import events
    from textual.app import App, ComposeResult
    from textual.containers import Vertical
    from textual.widgets import Footer, Header, Static
except ModuleNotFoundError as exc:  # pragma: no cover - friendly error for missing dep
    raise RuntimeError(
        "Install the 'textual' package to use editor_memento.adapters.textual.app"
    ) from exc

from editor_memento.history import Editor, HistoryStats, Snapshot
from editor_memento.runtime import telemetry
from editor_memento.runtime.settings import HistorySettings, parse_capacity

from .controller import TextualEditorAdapter, TextualUIHooks


@dataclass
class UIState:
    document_text: str = ""
    status_text: str = ""
    history_text: str = ""


class EditorApp(App[None]):
    """Single-document editor whose every keystroke is undoable."""

    CSS = """
	Screen {
		layout: vertical;
	}

	#document-view {
		height: 1fr;
		border: round $accent;
		padding: 1 1;
		content-align: left top;
		overflow: auto;
	}

	#status-line {
		height: 1;
		background: $surface-darken-1;
		padding: 0 1;
	}

	#history-line {
		height: 1;
		background: $surface-darken-2;
		padding: 0 1;
	}
	"""

    BINDINGS = [
        ("ctrl+q", "quit", "Quit"),
    ]

    def __init__(self, *, settings: Optional[HistorySettings] = None) -> None:
        super().__init__()
        self._settings = settings or HistorySettings.from_env()
        self._state = UIState()
        self.editor: Editor | None = None
        self.adapter: TextualEditorAdapter | None = None
        self._document_widget: Static | None = None
        self._status_widget: Static | None = None
        self._history_widget: Static | None = None

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        with Vertical(id="document-area"):
            self._document_widget = Static("", id="document-view")
            yield self._document_widget
        self._status_widget = Static("", id="status-line")
        self._history_widget = Static("", id="history-line")
        yield self._status_widget
        yield self._history_widget
        yield Footer()

    def on_mount(self) -> None:
        self.editor = Editor.from_settings(
            self._settings, initial=Snapshot.document(title="untitled")
        )
        hooks = TextualUIHooks(
            update_document=self._update_document,
            update_status=self._update_status,
            update_history=self._update_history,
            log=self._log_line,
        )
        self.adapter = TextualEditorAdapter(self.editor, hooks)
        self._update_status("ctrl+z undo | ctrl+y redo | ctrl+r reset")

    def on_key(self, event: events.Key) -> None:
        if not self.adapter or event.key == "ctrl+q":
            return
        result = self.adapter.handle_textual_key(
            event.key, text=event.character, modifiers=_modifiers(event)
        )
        if result.consumed:
            event.stop()
            event.prevent_default()

    def _update_document(self, snapshot: Snapshot) -> None:
        self._state.document_text = str(snapshot.get("content", ""))
        if self._document_widget:
            self._document_widget.update(self._state.document_text)
        self.sub_title = str(snapshot.get("title", ""))

    def _update_status(self, status: str) -> None:
        self._state.status_text = status
        if self._status_widget:
            self._status_widget.update(status)

    def _update_history(self, stats: HistoryStats) -> None:
        capacity = "∞" if stats.capacity is None else str(stats.capacity)
        self._state.history_text = (
            f"undo {stats.past}/{capacity}  redo {stats.future}  "
            f"evicted {stats.evicted}"
        )
        if self._history_widget:
            self._history_widget.update(self._state.history_text)

    def _log_line(self, line: str) -> None:
        telemetry.record_event(
            "adapter.line",
            level="debug",
            data={"line": line},
            logger_name="editor_memento.adapters",
        )


def _modifiers(event: events.Key) -> Iterable[str]:
    # Textual folds modifiers into ``event.key`` ("ctrl+z"), so only report
    # the ones that are not already part of it.
    return tuple(
        mod
        for mod in ("ctrl", "shift", "alt")
        if getattr(event, mod, False) and f"{mod}+" not in event.key
    )


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Run the undoable editor Textual demo."
    )
    parser.add_argument(
        "--capacity",
        default=None,
        help="Undo depth (non-negative integer or 'unbounded'); "
        "defaults to EDITOR_MEMENTO_HISTORY_CAPACITY or 100",
    )
    parser.add_argument(
        "--preset",
        choices=telemetry.PRESETS,
        default=None,
        help="Telemetry preset to activate before starting",
    )
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = _parse_args(argv)
    settings = HistorySettings.from_env()
    if args.capacity is not None:
        settings = HistorySettings(
            capacity=parse_capacity(args.capacity),
            telemetry_preset=settings.telemetry_preset,
        )
    preset = args.preset or settings.telemetry_preset
    if preset:
        telemetry.configure(preset=preset)
    EditorApp(settings=settings).run()


if __name__ == "__main__":  # pragma: no cover - manual demo
    main()
