"""
Feats: element rows whose type is ``Feat``.
"""

from __future__ import annotations

from .element import Element, parse_power


class Feat:
    """A feat (passive trait) backed by an elements-table row."""

    def __init__(self, element: Element):
        self.element = element
        self.row = element.row

    @property
    def id(self) -> str:
        return self.element.id

    @property
    def alias(self) -> str:
        return self.element.alias

    @property
    def default_sort_key(self) -> float:
        return self.element.default_sort_key

    def name(self, locale: str) -> str:
        return self.element.name(locale)

    def text_extra(self, locale: str) -> str:
        return self.element.text_extra(locale)

    def gene_slot(self) -> float:
        return self.row.number("geneSlot")

    def max_level(self) -> float:
        return self.row.number("max")

    def costs(self) -> list[int]:
        raw = self.row.text("cost")
        if not raw:
            return []
        return [parse_power(c.strip(), default=0) for c in raw.split(",")]

    def can_drop_as_gene(self) -> bool:
        """A feat can appear on a gene when its first cost is positive and it fits a gene slot."""
        costs = self.costs()
        return len(costs) > 0 and costs[0] > 0 and self.gene_slot() >= 0

    def __repr__(self) -> str:
        return f"Feat(alias={self.alias!r})"
