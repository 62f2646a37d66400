"""
RecordStore - caches table rows and catalogs per data version.

This module provides the entry point for loading game data: it reads every
table of a version once from a RowSource and keeps the resulting GameCatalog
for the lifetime of the process.
"""

from __future__ import annotations

import logging
from threading import RLock

from .models.catalog import GameCatalog
from .data.rows import Row
from .data.schemas import TableName
from .data.sources import RowSource

logger = logging.getLogger("elin-codex")


class RecordStore:
    """Version-keyed cache of rows and catalogs over a RowSource.

    Catalogs are built eagerly (all lookups precomputed) under a lock, so each
    version is built exactly once even when first requested from several
    threads. After that, reads are lock-free on immutable data.

    Example:
        >>> store = RecordStore(CsvDirectorySource("db"))
        >>> catalog = store.catalog("EA 23.173")
        >>> catalog is store.catalog("EA 23.173")
        True
    """

    def __init__(self, source: RowSource):
        self.source = source
        self._rows: dict[tuple[str, TableName], list[Row]] = {}
        self._catalogs: dict[str, GameCatalog] = {}
        self._lock = RLock()

    def rows(self, version: str, table: TableName | str) -> list[Row]:
        """All rows of a table, read from the source on first access.

        Raises:
            RowSourceError: If the source cannot provide the table
        """
        key = (version, TableName(table))
        with self._lock:
            if key not in self._rows:
                self._rows[key] = self.source.all(version, key[1])
            return list(self._rows[key])

    def catalog(self, version: str) -> GameCatalog:
        """The GameCatalog for ``version``, built on first request."""
        cached = self._catalogs.get(version)
        if cached is not None:
            return cached

        with self._lock:
            if version not in self._catalogs:
                logger.info(f"Building catalog for version '{version}'")
                self._catalogs[version] = GameCatalog(
                    version,
                    elements=self.rows(version, TableName.ELEMENTS),
                    races=self.rows(version, TableName.RACES),
                    jobs=self.rows(version, TableName.JOBS),
                    tactics=self.rows(version, TableName.TACTICS),
                    charas=self.rows(version, TableName.CHARAS),
                )
            return self._catalogs[version]

    def preload(self, *versions: str) -> None:
        """Build catalogs up front, e.g. at startup."""
        for version in versions:
            self.catalog(version)

    def loaded_versions(self) -> list[str]:
        with self._lock:
            return list(self._catalogs)

    def __repr__(self) -> str:
        return f"RecordStore(source={self.source!r}, versions={self.loaded_versions()})"
