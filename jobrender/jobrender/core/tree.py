"""Read-only access to nested manifest properties."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from enum import Enum
from types import MappingProxyType
from typing import Any

_SCALAR_TYPES = (str, bool, int, float)


class ConfigTreeError(TypeError):
    """Raised when manifest properties do not have a renderable shape."""


class Presence(str, Enum):
    """Three-state presence of a property."""

    ABSENT = "absent"
    EMPTY = "empty"
    SET = "set"


class _Absent:
    """Marker returned for properties that are not defined."""

    _instance: _Absent | None = None

    def __new__(cls) -> _Absent:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "ABSENT"


ABSENT = _Absent()


def split_path(path: str | Sequence[str]) -> tuple[str, ...]:
    """Split a dotted property path into its keys."""
    if isinstance(path, str):
        keys = tuple(path.split("."))
    else:
        keys = tuple(path)
    if not keys or any(not isinstance(k, str) or not k for k in keys):
        raise ValueError(f"Invalid property path: {path!r}")
    return keys


def _freeze(value: Any, where: str) -> Any:
    if isinstance(value, Mapping):
        frozen: dict[str, Any] = {}
        for key, child in value.items():
            if not isinstance(key, str):
                raise ConfigTreeError(
                    f"Property keys must be strings, got {key!r} under {where or '<root>'}"
                )
            # A null leaf is an unset property.
            if child is None:
                continue
            frozen[key] = _freeze(child, f"{where}.{key}" if where else key)
        return MappingProxyType(frozen)
    if isinstance(value, (list, tuple)):
        return tuple(_freeze(item, f"{where}[{i}]") for i, item in enumerate(value))
    if isinstance(value, _SCALAR_TYPES):
        return value
    raise ConfigTreeError(
        f"Unsupported value of type {type(value).__name__} at {where or '<root>'}"
    )


def _classify(value: Any) -> Presence:
    if value is ABSENT:
        return Presence.ABSENT
    if value is False or value == "":
        return Presence.EMPTY
    if isinstance(value, (Mapping, tuple)) and len(value) == 0:
        return Presence.EMPTY
    return Presence.SET


class ConfigTree:
    """Immutable view over manifest properties.

    Lookups never raise for missing keys; they return :data:`ABSENT` and
    callers branch on :meth:`presence`.
    """

    __slots__ = ("_root",)

    def __init__(self, properties: Mapping[str, Any] | None = None) -> None:
        if properties is None:
            properties = {}
        if not isinstance(properties, Mapping):
            raise ConfigTreeError(
                f"Properties must be a mapping, got {type(properties).__name__}"
            )
        self._root: Mapping[str, Any] = _freeze(properties, "")

    def get(self, path: str | Sequence[str]) -> Any:
        """Return the value at *path*, or :data:`ABSENT`."""
        node: Any = self._root
        for key in split_path(path):
            if not isinstance(node, Mapping) or key not in node:
                return ABSENT
            node = node[key]
        return node

    def presence(self, path: str | Sequence[str]) -> Presence:
        return _classify(self.get(path))

    def is_set(self, path: str | Sequence[str]) -> bool:
        return self.presence(path) is Presence.SET

    def is_true(self, path: str | Sequence[str]) -> bool:
        """True only for a boolean ``True`` leaf."""
        return self.get(path) is True

    def to_dict(self) -> dict[str, Any]:
        """Return a mutable deep copy of the properties."""
        return thaw(self._root)

    def __contains__(self, path: object) -> bool:
        if not isinstance(path, (str, tuple, list)):
            return False
        return self.get(path) is not ABSENT

    def __repr__(self) -> str:
        return f"ConfigTree({sorted(self._root)!r})"


def thaw(value: Any) -> Any:
    """Convert frozen mappings and tuples back to dicts and lists."""
    if isinstance(value, Mapping):
        return {k: thaw(v) for k, v in value.items()}
    if isinstance(value, tuple):
        return [thaw(v) for v in value]
    return value
