"""
Races: base stats, innate elements and body layout.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from ..data.rows import Row
from ..exceptions import MissingReferenceError, UnsupportedLocaleError
from .element import (
    PRIMARY_ATTRIBUTE_ALIASES,
    ElementWithPower,
    filter_feats,
    filter_negations,
    filter_others,
    filter_resistances,
    filter_skills,
    parse_elements,
)
from .memo import memoized

if TYPE_CHECKING:
    from .catalog import GameCatalog

DEFAULT_RACE_ID = "norland"

# Skill element ids every race starts with at power 1.
COMMON_RACE_SKILL_IDS = (
    "261", "225", "255", "220", "250", "101", "102", "103", "107", "106", "110",
    "111", "104", "109", "108", "123", "122", "120", "150", "301", "306",
)

FIGURE_SLOTS = {
    "手": "hand",
    "頭": "head",
    "体": "torso",
    "背": "back",
    "腰": "waist",
    "腕": "arm",
    "足": "foot",
    "首": "neck",
    "指": "finger",
}

BODY_PARTS = tuple(FIGURE_SLOTS.values())


def attribute_elements(catalog: "GameCatalog", row: Row) -> list[ElementWithPower]:
    """Non-zero primary attribute columns of a race or job row, as elements.

    Raises:
        MissingReferenceError: If an attribute element is absent from the catalog
    """
    result = []
    for alias in PRIMARY_ATTRIBUTE_ALIASES:
        value = row.number(alias)
        if value == 0:
            continue
        element = catalog.element_by_alias(alias)
        if element is None:
            raise MissingReferenceError("element", alias)
        result.append(ElementWithPower(element, value))
    return result


class Race:
    """Wrapper over a races row.

    Base stats are direct passthroughs of the row. ``elements()`` holds what
    the race adds on top of them: its element list, the common race skills and
    its primary attributes. Stat columns (life, DV, SPD, ...) are not repeated
    as elements, so a character's stat is ``race base + element power`` with
    nothing counted twice.
    """

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
    def life(self) -> float:
        return self.row.number("life")

    @property
    def mana(self) -> float:
        return self.row.number("mana")

    @property
    def speed(self) -> float:
        return self.row.number("SPD")

    @property
    def vigor(self) -> float:
        return self.row.number("vigor")

    @property
    def dv(self) -> float:
        return self.row.number("DV")

    @property
    def pv(self) -> float:
        return self.row.number("PV")

    @property
    def pdr(self) -> float:
        return self.row.number("PDR")

    @property
    def edr(self) -> float:
        return self.row.number("EDR")

    @property
    def ep(self) -> float:
        return self.row.number("EP")

    @property
    def gene_slot(self) -> float:
        return self.row.number("geneCap")

    def _common_skill_elements(self) -> list[ElementWithPower]:
        result = []
        for element_id in COMMON_RACE_SKILL_IDS:
            element = self._catalog.element_by_id(element_id)
            if element is not None:
                result.append(ElementWithPower(element, 1))
        return result

    @memoized
    def elements(self) -> tuple[ElementWithPower, ...]:
        return (
            *parse_elements(self._catalog, self.row.text("elements")),
            *self._common_skill_elements(),
            *attribute_elements(self._catalog, self.row),
        )

    def feats(self) -> list[ElementWithPower]:
        return filter_feats(self.elements())

    def negations(self) -> list[ElementWithPower]:
        return filter_negations(self.elements())

    def skills(self) -> list[ElementWithPower]:
        return filter_skills(self.elements())

    def resistances(self) -> list[ElementWithPower]:
        return filter_resistances(self.elements())

    def others(self) -> list[ElementWithPower]:
        return filter_others(self.elements())

    def figures(self) -> dict[str, int]:
        """Count of each body slot, parsed from the ``|``-separated figure glyphs."""
        figures = dict.fromkeys(BODY_PARTS, 0)
        for part in (self.row.text("figure") or "").split("|"):
            slot = FIGURE_SLOTS.get(part.strip())
            if slot:
                figures[slot] += 1
        return figures

    def total_body_parts(self) -> int:
        return sum(self.figures().values())

    def __repr__(self) -> str:
        return f"Race(id={self.id!r})"
