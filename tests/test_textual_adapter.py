from __future__ import annotations

from typing import List

from editor_memento.adapters.textual import TextualEditorAdapter, TextualUIHooks
from editor_memento.history import Editor, HistoryStats, HistoryStore, Snapshot


def make_adapter(
    *,
    capacity: int | None = 50,
    documents: List[str] | None = None,
    statuses: List[str] | None = None,
    history: List[HistoryStats] | None = None,
    logs: List[str] | None = None,
) -> TextualEditorAdapter:
    editor = Editor(
        Snapshot.document(title="scratch"), history=HistoryStore(capacity=capacity)
    )
    hooks = TextualUIHooks(
        update_document=lambda snapshot: (
            documents.append(snapshot["content"]) if documents is not None else None
        ),
        update_status=lambda status: (
            statuses.append(status) if statuses is not None else None
        ),
        update_history=lambda stats: (
            history.append(stats) if history is not None else None
        ),
        log=lambda line: logs.append(line) if logs is not None else None,
    )
    return TextualEditorAdapter(editor, hooks)


def type_text(adapter: TextualEditorAdapter, text: str) -> None:
    for char in text:
        adapter.handle_textual_key(char, text=char)


def test_adapter_pushes_initial_document() -> None:
    documents: List[str] = []
    make_adapter(documents=documents)

    assert documents == [""]


def test_typing_records_each_keystroke() -> None:
    documents: List[str] = []
    adapter = make_adapter(documents=documents)

    type_text(adapter, "hey")

    assert adapter.editor.content == "hey"
    assert documents[-3:] == ["h", "he", "hey"]
    assert adapter.editor.history.stats().past == 3


def test_ctrl_z_and_ctrl_y_step_through_history() -> None:
    adapter = make_adapter()
    type_text(adapter, "ab")

    undo = adapter.handle_textual_key("ctrl+z")
    assert undo.status == "undo"
    assert adapter.editor.content == "a"

    redo = adapter.handle_textual_key("y", modifiers=("CTRL",))
    assert redo.status == "redo"
    assert adapter.editor.content == "ab"


def test_empty_history_is_reported_not_raised() -> None:
    statuses: List[str] = []
    adapter = make_adapter(statuses=statuses)

    result = adapter.handle_textual_key("ctrl+z")

    assert result.consumed
    assert result.status == "undo:empty"
    assert statuses[-1] == "Nothing to undo"
    assert adapter.editor.content == ""

    redo = adapter.handle_textual_key("ctrl+y")
    assert redo.status == "redo:empty"
    assert statuses[-1] == "Nothing to redo"


def test_backspace_and_enter_edit_content() -> None:
    adapter = make_adapter()
    type_text(adapter, "ab")

    adapter.handle_textual_key("backspace")
    adapter.handle_textual_key("enter")

    assert adapter.editor.content == "a\n"


def test_backspace_on_empty_document_records_nothing() -> None:
    adapter = make_adapter()

    result = adapter.handle_textual_key("backspace")

    assert result.status == "noop"
    assert not adapter.editor.can_undo()


def test_ctrl_r_resets_history_and_keeps_text() -> None:
    history: List[HistoryStats] = []
    adapter = make_adapter(history=history)
    type_text(adapter, "abc")

    result = adapter.handle_textual_key("ctrl+r")

    assert result.status == "reset"
    assert adapter.editor.content == "abc"
    assert history[-1].past == 0
    assert history[-1].future == 0


def test_unknown_keys_are_not_consumed() -> None:
    adapter = make_adapter()

    result = adapter.handle_textual_key("f5")

    assert not result.consumed
    assert not adapter.editor.can_undo()


def test_history_hook_reflects_capacity() -> None:
    history: List[HistoryStats] = []
    adapter = make_adapter(capacity=2, history=history)

    type_text(adapter, "abcd")

    assert history[-1].capacity == 2
    assert history[-1].past == 2
    assert history[-1].evicted == 2


def test_adapter_initializes_blank_editor() -> None:
    documents: List[str] = []
    hooks = TextualUIHooks(update_document=lambda s: documents.append(s["content"]))

    adapter = TextualEditorAdapter(Editor(), hooks)

    assert adapter.editor.get_state() == Snapshot.document()
    assert documents == [""]


def test_adapter_emits_log_lines() -> None:
    logs: List[str] = []
    adapter = make_adapter(logs=logs)

    adapter.handle_textual_key("x", text="x")

    assert any(line.startswith("key ->") for line in logs)
    assert any("event='set_state'" in line for line in logs)
