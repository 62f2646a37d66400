"""
Jobs: class-like roles contributing speed and bonus elements.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from ..data.rows import Row
from ..exceptions import UnsupportedLocaleError
from .element import (
    ElementWithPower,
    filter_feats,
    filter_negations,
    filter_others,
    filter_skills,
    parse_elements,
)
from .memo import memoized
from .race import attribute_elements

if TYPE_CHECKING:
    from .catalog import GameCatalog

DEFAULT_JOB_ID = "none"


class Job:
    def __init__(self, row: Row, catalog: "GameCatalog"):
        self.row = row
        self._catalog = catalog
        self._memo: dict = {}

    @property
    def id(self) -> str:
        return self.row.id

    @property
    def default_sort_key(self) -> float:
        return self.row.default_sort_key

    def name(self, locale: str) -> str:
        if locale == "ja":
            return self.row.text("name_JP") or ""
        if locale == "en":
            return self.row.text("name") or ""
        raise UnsupportedLocaleError(locale)

    @property
    def speed_delta(self) -> float:
        return self.row.number("SPD")

    @property
    def mag(self) -> float:
        return self.row.number("MAG")

    @memoized
    def elements(self) -> tuple[ElementWithPower, ...]:
        """Parsed element list followed by the job's non-zero primary attributes."""
        return (
            *parse_elements(self._catalog, self.row.text("elements")),
            *attribute_elements(self._catalog, self.row),
        )

    def feats(self) -> list[ElementWithPower]:
        return filter_feats(self.elements())

    def negations(self) -> list[ElementWithPower]:
        return filter_negations(self.elements())

    def skills(self) -> list[ElementWithPower]:
        return filter_skills(self.elements())

    def others(self) -> list[ElementWithPower]:
        return filter_others(self.elements())

    def __repr__(self) -> str:
        return f"Job(id={self.id!r})"
