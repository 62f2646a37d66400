"""
Row sources: where table rows come from.

The rest of the codex only relies on ``RowSource.all(version, table)``.
``CsvDirectorySource`` reads the CSV snapshots shipped with each game
version, ``InMemorySource`` serves rows built in code (tests, embedding).
Both validate every row against the table's row model.
"""

from __future__ import annotations

import csv
import logging
from abc import ABC, abstractmethod
from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from ..exceptions import RowSourceError
from .rows import META_KEY, Row
from .schemas import TableName, TableRow, row_model_for

logger = logging.getLogger("elin-codex")


class RowSource(ABC):
    """Abstract provider of validated, order-preserving table rows."""

    @abstractmethod
    def all(self, version: str, table: TableName | str) -> list[Row]:
        """Return every row of ``table`` for ``version`` in file order.

        Each row carries its zero-based file position as ``default_sort_key``.

        Raises:
            RowSourceError: If the table cannot be read
        """

    def versions(self) -> list[str]:
        """Version tags this source can serve, if it knows them."""
        return []


def parse_row(raw: Mapping[str, Any], table: TableName | str) -> TableRow:
    """Validate one raw row against its table's row model.

    Raises:
        ValidationError: If a required column is missing
    """
    # csv.DictReader collects surplus cells under None
    data = {key: value for key, value in raw.items() if key is not None and key != META_KEY}
    return row_model_for(table).model_validate(data)


def load_rows(
    raws: Iterable[Mapping[str, Any]],
    table: TableName,
    version: str,
) -> list[Row]:
    """Validate raw rows and number them from zero in input order.

    Raises:
        RowSourceError: If a row does not match the table's row model
    """
    rows = []
    for index, raw in enumerate(raws):
        try:
            model = parse_row(raw, table)
        except ValidationError as e:
            raise RowSourceError(
                f"Invalid row {index} in table '{table.value}': {e}",
                table=table.value,
                version=version,
            ) from e
        rows.append(Row(model.cells(), default_sort_key=index))
    return rows


class InMemorySource(RowSource):
    """Row source backed by plain dicts, keyed by version and table.

    Example:
        >>> source = InMemorySource({"v1": {"races": [{"id": "norland", ...}]}})
        >>> source.all("v1", "races")[0].id
        'norland'
    """

    def __init__(
        self,
        tables: Mapping[str, Mapping[str, Iterable[Mapping[str, Any]]]] | None = None,
    ):
        self._tables: dict[str, dict[TableName, list[Row]]] = {}
        for version, by_table in (tables or {}).items():
            self._tables.setdefault(version, {})
            for table, rows in by_table.items():
                self.add_table(version, table, rows)

    def add_table(
        self,
        version: str,
        table: TableName | str,
        rows: Iterable[Mapping[str, Any]],
    ) -> None:
        """Register (or replace) the rows of a table.

        Raises:
            RowSourceError: If a row does not match the table's row model
        """
        table = TableName(table)
        self._tables.setdefault(version, {})[table] = load_rows(rows, table, version)

    def all(self, version: str, table: TableName | str) -> list[Row]:
        table = TableName(table)
        try:
            return list(self._tables[version][table])
        except KeyError:
            raise RowSourceError(
                f"No rows registered for table '{table.value}' in version '{version}'",
                table=table.value,
                version=version,
            ) from None

    def versions(self) -> list[str]:
        return list(self._tables)


class CsvDirectorySource(RowSource):
    """Row source reading ``<data_dir>/<version>/<table>.csv``.

    The first CSV line is the header. Rows are validated with the table's row
    model and numbered from zero in file order.
    """

    def __init__(self, data_dir: Path | str, encoding: str = "utf-8-sig"):
        self.data_dir = Path(data_dir)
        self.encoding = encoding

    def table_path(self, version: str, table: TableName | str) -> Path:
        return self.data_dir / version / f"{TableName(table).value}.csv"

    def all(self, version: str, table: TableName | str) -> list[Row]:
        table = TableName(table)
        path = self.table_path(version, table)
        if not path.exists():
            raise RowSourceError(
                f"Table file not found: {path}", table=table.value, version=version
            )

        try:
            with open(path, "r", encoding=self.encoding, newline="") as f:
                rows = load_rows(csv.DictReader(f), table, version)
        except (OSError, csv.Error, UnicodeDecodeError) as e:
            raise RowSourceError(
                f"Failed to read {path}: {e}", table=table.value, version=version
            ) from e

        logger.debug(f"Loaded {len(rows)} rows from {path}")
        return rows

    def versions(self) -> list[str]:
        if not self.data_dir.is_dir():
            return []
        return sorted(p.name for p in self.data_dir.iterdir() if p.is_dir())
