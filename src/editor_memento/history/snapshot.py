"""Immutable state snapshots handed between an editor and its history."""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Iterator, Mapping, Tuple

DOCUMENT_FIELDS = ("content", "title", "font_name", "font_size")

_MISSING = object()


def _normalize_fields(fields: Mapping[str, Any]) -> Tuple[Tuple[str, Any], ...]:
    for name in fields:
        if not isinstance(name, str):
            raise TypeError(f"Snapshot field names must be strings, got {name!r}")
    return tuple(sorted(fields.items(), key=lambda item: item[0]))


@dataclass(frozen=True, slots=True)
class Snapshot:
    """Complete state of an editable entity at one instant.

    Fields are kept as a sorted tuple of ``(name, value)`` pairs so two
    snapshots compare equal whenever they hold the same named values,
    regardless of the order they were supplied in. There are no mutators;
    ``evolve`` hands back a new instance.
    """

    entries: Tuple[Tuple[str, Any], ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "entries", _normalize_fields(dict(self.entries)))

    @classmethod
    def create(cls, **fields: Any) -> "Snapshot":
        return cls(entries=tuple(fields.items()))

    @classmethod
    def document(
        cls,
        content: str = "",
        *,
        title: str = "",
        font_name: str = "",
        font_size: float = 12.0,
    ) -> "Snapshot":
        """Build the snapshot shape used by text documents."""

        return cls.create(
            content=content, title=title, font_name=font_name, font_size=font_size
        )

    @property
    def fields(self) -> Mapping[str, Any]:
        return MappingProxyType(dict(self.entries))

    def get(self, name: str, default: Any = None) -> Any:
        for key, value in self.entries:
            if key == name:
                return value
        return default

    def evolve(self, **changes: Any) -> "Snapshot":
        """Return a new snapshot with ``changes`` applied over these fields."""

        if not changes:
            return self
        merged = dict(self.entries)
        merged.update(changes)
        return Snapshot(entries=tuple(merged.items()))

    def __getitem__(self, name: str) -> Any:
        value = self.get(name, _MISSING)
        if value is _MISSING:
            raise KeyError(name)
        return value

    def __contains__(self, name: object) -> bool:
        return any(key == name for key, _ in self.entries)

    def __iter__(self) -> Iterator[str]:
        return (key for key, _ in self.entries)

    def __len__(self) -> int:
        return len(self.entries)

    def __repr__(self) -> str:
        body = ", ".join(f"{key}={value!r}" for key, value in self.entries)
        return f"Snapshot({body})"


__all__ = ["DOCUMENT_FIELDS", "Snapshot"]
