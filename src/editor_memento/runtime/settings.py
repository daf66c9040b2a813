"""Environment-driven configuration for editing sessions."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

ENV_PREFIX = "EDITOR_MEMENTO_"
DEFAULT_CAPACITY = 100

_UNBOUNDED = {"unbounded", "none", "inf", "infinite"}


def env(
    name: str,
    default: Optional[str] = None,
    *,
    environ: Optional[Mapping[str, str]] = None,
) -> Optional[str]:
    source = os.environ if environ is None else environ
    return source.get(f"{ENV_PREFIX}{name}", default)


def env_flag(
    name: str, default: bool, *, environ: Optional[Mapping[str, str]] = None
) -> bool:
    raw = env(name, environ=environ)
    if raw is None:
        return default
    return raw.lower() in {"1", "true", "yes", "on"}


def parse_capacity(raw: str | int | None) -> Optional[int]:
    """Turn a capacity setting into ``None`` (unbounded) or a depth >= 0."""

    if raw is None:
        return None
    if isinstance(raw, bool):
        raise ValueError(f"Invalid history capacity {raw!r}.")
    if isinstance(raw, int):
        value = raw
    elif not isinstance(raw, str):
        raise ValueError(f"History capacity must be an integer, got {raw!r}.")
    else:
        text = raw.strip().lower()
        if text in _UNBOUNDED:
            return None
        try:
            value = int(text)
        except ValueError as exc:
            raise ValueError(f"Invalid history capacity {raw!r}.") from exc
    if value < 0:
        raise ValueError(f"History capacity must be >= 0, got {value}.")
    return value


@dataclass(frozen=True, slots=True)
class HistorySettings:
    """Knobs shared by every editing session in the process."""

    capacity: Optional[int] = DEFAULT_CAPACITY
    telemetry_preset: Optional[str] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "capacity", parse_capacity(self.capacity))

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "HistorySettings":
        raw_capacity = env("HISTORY_CAPACITY", environ=environ)
        capacity = (
            DEFAULT_CAPACITY if raw_capacity is None else parse_capacity(raw_capacity)
        )
        preset = env("TELEMETRY_PRESET", environ=environ) or None
        return cls(capacity=capacity, telemetry_preset=preset)


__all__ = [
    "DEFAULT_CAPACITY",
    "ENV_PREFIX",
    "HistorySettings",
    "env",
    "env_flag",
    "parse_capacity",
]
