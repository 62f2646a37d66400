"""
Tactics: AI behaviour weights attached to characters.
"""

from __future__ import annotations

from ..data.rows import Row
from ..exceptions import UnsupportedLocaleError

DEFAULT_TACTICS_ID = "predator"


class Tactics:
    """Wrapper over a tactics row."""

    def __init__(self, row: Row):
        self.row = row

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
    def distance(self) -> float:
        return self.row.number("dist")

    @property
    def move_frequency(self) -> float:
        return self.row.number("move")

    @property
    def party(self) -> float:
        return self.row.number("party")

    @property
    def taunt(self) -> float:
        return self.row.number("taunt")

    @property
    def melee(self) -> float:
        return self.row.number("melee")

    @property
    def range(self) -> float:
        return self.row.number("range")

    @property
    def spell(self) -> float:
        return self.row.number("spell")

    @property
    def heal(self) -> float:
        return self.row.number("heal")

    @property
    def summon(self) -> float:
        return self.row.number("summon")

    @property
    def buff(self) -> float:
        return self.row.number("buff")

    @property
    def debuff(self) -> float:
        return self.row.number("debuff")

    def tags(self) -> list[str]:
        raw = self.row.text("tag")
        if not raw:
            return []
        return [t.strip() for t in raw.split(",") if t.strip()]

    def uses_party_buff(self) -> bool:
        return "pt" in self.tags()

    def __repr__(self) -> str:
        return f"Tactics(id={self.id!r})"
