from contextlib import nullcontext
from typing import Any, List, Tuple

import pytest

from editor_memento.runtime import telemetry
from editor_memento.runtime.settings import (
    DEFAULT_CAPACITY,
    HistorySettings,
    env_flag,
    parse_capacity,
)


class RecordingLogger:
    def __init__(self) -> None:
        self.errors: List[Tuple[str, List[Tuple[str, str]]]] = []
        self.context: dict[str, str] = {}

    def add_context(self, key: str, value: str) -> None:
        self.context[key] = value

    def remove_context(self, key: str) -> None:
        self.context.pop(key, None)

    def track_component(self, _name: str) -> Any:
        return nullcontext()

    def profile(self, _name: str) -> Any:
        return nullcontext()

    def error_with(self, message: str, pairs: List[Tuple[str, str]]) -> None:
        self.errors.append((message, pairs))


@pytest.fixture
def recording_logger(monkeypatch: pytest.MonkeyPatch) -> RecordingLogger:
    logger = RecordingLogger()
    monkeypatch.setattr(telemetry, "get_logger", lambda name=None: logger)
    return logger


def test_settings_default_when_env_missing() -> None:
    settings = HistorySettings.from_env({})

    assert settings.capacity == DEFAULT_CAPACITY
    assert settings.telemetry_preset is None


def test_settings_read_prefixed_env() -> None:
    settings = HistorySettings.from_env(
        {
            "EDITOR_MEMENTO_HISTORY_CAPACITY": "5",
            "EDITOR_MEMENTO_TELEMETRY_PRESET": "development",
        }
    )

    assert settings.capacity == 5
    assert settings.telemetry_preset == "development"


@pytest.mark.parametrize("raw", ["unbounded", "None", " inf "])
def test_unbounded_capacity_spellings(raw: str) -> None:
    assert parse_capacity(raw) is None


@pytest.mark.parametrize("raw", ["-1", "many", -3, True, 2.5, 2.0])
def test_invalid_capacity_rejected(raw: object) -> None:
    with pytest.raises(ValueError):
        parse_capacity(raw)  # type: ignore[arg-type]


def test_settings_validate_capacity() -> None:
    with pytest.raises(ValueError):
        HistorySettings(capacity=-2)
    with pytest.raises(ValueError):
        HistorySettings(capacity=1.5)  # type: ignore[arg-type]
    assert HistorySettings(capacity=0).capacity == 0


def test_env_flag_parsing() -> None:
    environ = {"EDITOR_MEMENTO_LOG_JSON": "yes", "EDITOR_MEMENTO_NO_COLOR": "0"}

    assert env_flag("LOG_JSON", False, environ=environ) is True
    assert env_flag("NO_COLOR", True, environ=environ) is False
    assert env_flag("MISSING", True, environ=environ) is True


def test_configure_rejects_unknown_preset() -> None:
    with pytest.raises(ValueError):
        telemetry.configure(preset="verbose")


def test_configure_rejects_config_and_preset_together() -> None:
    with pytest.raises(ValueError):
        telemetry.configure(config=object(), preset="development")


def test_get_logger_is_cached() -> None:
    assert telemetry.get_logger("editor_memento.tests") is telemetry.get_logger(
        "editor_memento.tests"
    )


def test_span_lets_expected_errors_through_quietly(
    recording_logger: RecordingLogger,
) -> None:
    with pytest.raises(KeyError):
        with telemetry.span(
            "editor::undo", metadata={"editor": "a"}, expected=(KeyError,)
        ):
            raise KeyError("empty")

    assert recording_logger.errors == []
    assert recording_logger.context == {}


def test_span_reports_unexpected_errors_before_reraising(
    recording_logger: RecordingLogger,
) -> None:
    with pytest.raises(RuntimeError, match="boom"):
        with telemetry.span(
            "editor::set_state",
            component="editor",
            metadata={"editor": "a"},
            expected=(KeyError,),
        ):
            raise RuntimeError("boom")

    assert len(recording_logger.errors) == 1
    message, pairs = recording_logger.errors[0]
    assert message == "span::fail"
    assert ("reason", "boom") in pairs
    assert ("span", "editor::set_state") in pairs
    assert ("component", "editor") in pairs
    assert recording_logger.context == {}
