"""Telemetry services for editing sessions, built directly on telelog.

The rest of the package only touches four names:

``configure(...)`` -- override or preset the telelog configuration
``get_logger(name)`` -- fetch (and cache) a configured logger
``record_event(name, ...)`` -- emit a structured event at a chosen level
``span(name, ...)`` -- profile a block and optionally track it as a component
"""

from __future__ import annotations

from contextlib import ExitStack, contextmanager
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, Mapping, MutableMapping, Optional, Tuple, cast

import telelog  # type: ignore[import]

from .settings import env, env_flag

tl = cast(Any, telelog)

DEFAULT_LOGGER_NAME = env("LOGGER", "editor_memento") or "editor_memento"
DEFAULT_LOG_FILE = env("LOG_FILE", "") or ""
_PRESET_OPTIONS: Dict[str, Dict[str, Any]] = {
    "development": {"level": "DEBUG", "console": True, "colored": True, "json": False},
    "production": {
        "level": "INFO",
        "console": False,
        "log_file": "editor_memento.log",
        "buffered": True,
    },
    "performance": {
        "level": "DEBUG",
        "console": False,
        "json": True,
        "log_file": "editor_memento-performance.log",
        "buffered": True,
    },
}
PRESETS = tuple(_PRESET_OPTIONS)

_LOGGER_CACHE: MutableMapping[str, Any] = {}
_ACTIVE_CONFIG: Optional[Any] = None


def _stringify(value: Any) -> str:
    if isinstance(value, str):
        return value
    return repr(value) if isinstance(value, (dict, list, tuple, set)) else str(value)


def _format_pairs(data: Dict[str, Any]) -> list[tuple[str, str]]:
    return [(str(key), _stringify(value)) for key, value in data.items()]


def _build_config(
    *,
    level: str,
    console: bool,
    colored: bool = False,
    json: bool = False,
    log_file: str = "",
    buffered: bool = False,
    buffer_size: Optional[int] = None,
) -> Any:
    config = tl.Config()
    config.with_min_level(level)
    config.with_console_output(console)
    if console:
        config.with_colored_output(colored)
    if json:
        config.with_json_format(True)
    target = DEFAULT_LOG_FILE or log_file
    if target:
        config.with_file_output(target)
    if buffered:
        config.with_buffering(True)
        if buffer_size is not None:
            config.with_buffer_size(buffer_size)
    config.with_profiling(True)
    return config


def _build_preset_config(preset: str) -> Any:
    options = _PRESET_OPTIONS.get(preset.lower())
    if options is None:
        raise ValueError(f"Unknown preset '{preset}'.")
    return _build_config(**options)


def _build_env_config() -> Any:
    buffered = env_flag("LOG_BUFFERED", False)
    return _build_config(
        level=(env("LOG_LEVEL") or "INFO").upper(),
        console=not env_flag("DISABLE_CONSOLE", False),
        colored=not env_flag("NO_COLOR", False),
        json=env_flag("LOG_JSON", False),
        buffered=buffered,
        buffer_size=int(env("LOG_BUFFER_SIZE") or "2048") if buffered else None,
    )


def configure(*, config: Optional[Any] = None, preset: Optional[str] = None) -> None:
    """Swap the active telelog configuration.

    Parameters
    ----------
    config:
        Explicit ``tl.Config`` instance to adopt.
    preset:
        One of ``"development"``, ``"production"`` or ``"performance"``.
        ``config`` and ``preset`` are mutually exclusive.
    """

    global _ACTIVE_CONFIG
    if config is not None and preset:
        raise ValueError("Provide either `config` or `preset`, not both.")

    if preset:
        config = _build_preset_config(preset)
    elif config is None:
        config = _build_env_config()
    else:
        config.with_profiling(True)
    _ACTIVE_CONFIG = config
    _LOGGER_CACHE.clear()


def _ensure_config() -> Any:
    if _ACTIVE_CONFIG is None:
        configure()
    return _ACTIVE_CONFIG


def get_logger(name: Optional[str] = None) -> Any:
    """Return a cached ``telelog.Logger`` bound to the active configuration."""

    logger_name = name or DEFAULT_LOGGER_NAME
    if logger_name not in _LOGGER_CACHE:
        _LOGGER_CACHE[logger_name] = tl.Logger.with_config(
            logger_name, _ensure_config()
        )
    return _LOGGER_CACHE[logger_name]


def _resolve_level_method(logger: Any, level: Any) -> Tuple[Any, bool]:
    name = str(level).lower()
    with_data = getattr(logger, f"{name}_with", None)
    if with_data is not None:
        return with_data, True
    attr = getattr(logger, name, None)
    if attr is None:
        raise ValueError(f"Unsupported log level '{level}'.")
    return attr, False


def _emit(logger: Any, level: str, message: str, payload: Dict[str, Any]) -> None:
    method, accepts_data = _resolve_level_method(logger, level)
    if accepts_data:
        method(message, _format_pairs(payload))
    else:
        method(f"{message} {payload}")


def record_event(
    name: str,
    *,
    level: str = "info",
    data: Optional[Dict[str, Any]] = None,
    logger_name: Optional[str] = None,
) -> None:
    """Emit ``event::<name>`` with ``data`` attached as key/value pairs."""

    payload = {"event": name, **(data or {})}
    _emit(get_logger(logger_name), level, f"event::{name}", payload)


@dataclass(frozen=True)
class SpanHandle:
    """Identity of an open span, used to report its failure."""

    logger: Any
    span_name: str
    component_name: Optional[str] = None
    metadata: Mapping[str, str] = field(default_factory=dict)

    def fail(self, reason: str) -> None:
        payload = {"span": self.span_name, **self.metadata, "reason": reason}
        if self.component_name:
            payload["component"] = self.component_name
        _emit(self.logger, "error", "span::fail", payload)


@contextmanager
def span(
    name: str,
    *,
    logger_name: Optional[str] = None,
    component: Optional[str | bool] = None,
    metadata: Optional[Dict[str, Any]] = None,
    expected: Tuple[type[BaseException], ...] = (),
) -> Iterator[SpanHandle]:
    """Profile a code block and (optionally) track it as a component.

    Exceptions listed in ``expected`` pass through without a ``span::fail``
    line; anything else is logged at error level and re-raised.
    """

    log = get_logger(logger_name)
    component_name = name if component is True else component or None

    serialized = {key: _stringify(value) for key, value in (metadata or {}).items()}
    for key, value in serialized.items():
        log.add_context(key, value)

    with ExitStack() as stack:
        if component_name:
            stack.enter_context(log.track_component(component_name))
        stack.enter_context(log.profile(name))
        handle = SpanHandle(
            logger=log,
            span_name=name,
            component_name=component_name,
            metadata=serialized,
        )
        try:
            yield handle
        except expected:
            raise
        except Exception as exc:
            handle.fail(str(exc))
            raise
        finally:
            for key in serialized:
                log.remove_context(key)


__all__ = [
    "PRESETS",
    "SpanHandle",
    "configure",
    "get_logger",
    "record_event",
    "span",
]
