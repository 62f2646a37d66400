"""
Immutable row records produced by row sources.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from typing import Any

CellValue = str | int | float | None

META_KEY = "__meta"


class Row(Mapping[str, Any]):
    """A read-only mapping from column name to cell value.

    Every row carries the position it had in its source table as
    ``default_sort_key``. It is also reachable as
    ``row["__meta"]["defaultSortKey"]`` so code that treats rows as plain
    records sees the same shape as the CSV export.

    Example:
        >>> row = Row({"id": "putit", "LV": 1}, default_sort_key=0)
        >>> row["id"], row.get("race")
        ('putit', None)
        >>> row.with_sort_key(0.01).default_sort_key
        0.01
    """

    __slots__ = ("_data", "_default_sort_key")

    def __init__(self, data: Mapping[str, CellValue], default_sort_key: float = 0):
        self._data = {k: v for k, v in data.items() if k != META_KEY}
        self._default_sort_key = default_sort_key

    @property
    def default_sort_key(self) -> float:
        return self._default_sort_key

    @property
    def id(self) -> str:
        return str(self._data.get("id", ""))

    def with_sort_key(self, default_sort_key: float) -> "Row":
        """Return a copy of this row with another sort key."""
        return Row(self._data, default_sort_key)

    def text(self, column: str) -> str | None:
        """Return a cell as a string, or None when blank."""
        value = self._data.get(column)
        if value is None or value == "":
            return None
        return str(value)

    def number(self, column: str, default: float = 0) -> float:
        """Return a cell as a number, or ``default`` when blank or non-numeric."""
        value = self._data.get(column)
        if isinstance(value, bool):
            return int(value)
        if isinstance(value, (int, float)):
            return value
        if value is None or value == "":
            return default
        try:
            parsed = float(value)
        except (TypeError, ValueError):
            return default
        return int(parsed) if parsed.is_integer() else parsed

    def to_dict(self) -> dict[str, Any]:
        """Convert to a plain dict including the ``__meta`` block."""
        result: dict[str, Any] = dict(self._data)
        result[META_KEY] = {"defaultSortKey": self._default_sort_key}
        return result

    def __getitem__(self, key: str) -> Any:
        if key == META_KEY:
            return {"defaultSortKey": self._default_sort_key}
        return self._data[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __contains__(self, key: object) -> bool:
        return key == META_KEY or key in self._data

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Row):
            return self._data == other._data and self._default_sort_key == other._default_sort_key
        return NotImplemented

    def __hash__(self) -> int:
        return hash((self.id, self._default_sort_key))

    def __repr__(self) -> str:
        return f"Row(id={self.id!r}, default_sort_key={self._default_sort_key!r})"
