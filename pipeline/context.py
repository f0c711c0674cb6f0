"""Mutable execution context — the single object shared by every step of a run."""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from types import MappingProxyType
from typing import Any, TypeVar

T = TypeVar("T")


class _Absent:
    """Marker written by a step that ran but produced nothing."""

    _instance: "_Absent | None" = None

    def __new__(cls) -> "_Absent":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "ABSENT"


ABSENT = _Absent()


def result_key(step_name: str) -> str:
    """Return the conventional key a step writes its primary result under."""
    return f"{step_name}_Result"


class ExecutionContext:
    """String-keyed store of loosely typed values shared across one run.

    Values are text, booleans, parsed records, or the ``ABSENT`` marker.
    Nothing is type-checked on write, so readers should go through the typed
    accessors (``get_text``, ``get_flag``, ``get_as``), which treat a
    missing key, an ``ABSENT`` marker and a value of the wrong type alike
    as "absent" and return ``None``.

    Keys are never removed during a run; later steps may overwrite earlier
    values. Steps run strictly one at a time, so there is no locking.
    """

    def __init__(self, initial: Mapping[str, Any] | None = None) -> None:
        self._values: dict[str, Any] = dict(initial or {})

    def set(self, key: str, value: Any) -> None:
        self._values[key] = value

    def get(self, key: str, default: Any = None) -> Any:
        """Return the raw stored value (possibly ``ABSENT``) or *default*."""
        return self._values.get(key, default)

    def get_as(self, key: str, type_: type[T]) -> T | None:
        """Return the value under *key* if it is an instance of *type_*."""
        value = self._values.get(key)
        if value is ABSENT or not isinstance(value, type_):
            return None
        return value

    def get_text(self, key: str) -> str | None:
        return self.get_as(key, str)

    def get_flag(self, key: str) -> bool | None:
        return self.get_as(key, bool)

    def is_absent(self, key: str) -> bool:
        """True when *key* was written with the ``ABSENT`` marker."""
        return key in self._values and self._values[key] is ABSENT

    def keys(self) -> list[str]:
        return list(self._values)

    def snapshot(self) -> MappingProxyType:
        """Read-only copy of the current values."""
        return MappingProxyType(dict(self._values))

    def __contains__(self, key: object) -> bool:
        return key in self._values

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._values))

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        return f"ExecutionContext({self._values!r})"
