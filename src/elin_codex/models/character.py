"""
Characters: derived stats composed from a chara row, its race, job and tactics.

A character's element list is the concatenation, in this order, of

1. the elements parsed from its own row, plus the sub-elements of its main
   element applied at that element's power,
2. its race's elements,
3. its job's elements.

Every stat is a sum over that list, so each derived value is memoized per
instance. Characters whose ``mainElement`` lists several elements expand into
one variant per element (``<id>---<alias>``).
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from typing import TYPE_CHECKING

from ..data.rows import Row
from ..exceptions import MissingReferenceError, UnsupportedLocaleError
from .element import (
    PRIMARY_ATTRIBUTE_ALIASES,
    Element,
    ElementWithPower,
    expand_element,
    filter_feats,
    filter_negations,
    filter_others,
    filter_skills,
    parse_elements,
    sum_power,
)
from .job import DEFAULT_JOB_ID, Job
from .memo import memoized
from .race import DEFAULT_RACE_ID, Race
from .tactics import DEFAULT_TACTICS_ID, Tactics

if TYPE_CHECKING:
    from .catalog import GameCatalog

VARIANT_SEPARATOR = "---"

BLANK_NAME = "*r"

# Characters with this id roll a random attack element, so they get one
# variant per attack element in the game rather than per declared element.
RANDOM_ELEMENT_CHARA_ID = "bit"

ADVENTURER_TRAITS = frozenset({"Adventurer", "AdventurerBacker"})

_ELEMENT_PLACEHOLDER = re.compile(r"#ele(\d)?")


@dataclass(frozen=True)
class Ability:
    """One entry of a character's combat action list."""
    name: str
    chance: int
    party: bool
    element: str | None


class Character:
    """A character row resolved against a catalog.

    Args:
        row: The chara row
        catalog: Lookups for the row's data version
        variant_alias: Main element alias this instance is a variant for

    Raises:
        MissingReferenceError: If the race or the variant element is unknown
    """

    def __init__(self, row: Row, catalog: "GameCatalog", variant_alias: str | None = None):
        self.row = row
        self._catalog = catalog
        self._memo: dict = {}

        race_id = row.text("race") or DEFAULT_RACE_ID
        race = catalog.race_by_id(race_id)
        if race is None:
            raise MissingReferenceError("race", race_id, row.id)
        self.race = race

        self.main_element: Element | None
        if variant_alias:
            element = catalog.element_by_alias(variant_alias)
            if element is None:
                raise MissingReferenceError("element", variant_alias, row.id)
            self.main_element = element
            self.is_variant = True
        else:
            self.main_element = self._declared_main_element()
            self.is_variant = False

    def _declared_main_element(self) -> Element | None:
        aliases = self.declared_main_elements()
        if not aliases:
            return None
        return self._catalog.element_by_alias(aliases[0])

    @staticmethod
    def is_ignored_chara_id(chara_id: str) -> bool:
        """Hook for hiding specific chara rows from listings. Nothing is hidden today."""
        return False

    # =========================================================================
    # Identity
    # =========================================================================

    @property
    def id(self) -> str:
        if self.is_variant and self.main_element is not None:
            return f"{self.row.id}{VARIANT_SEPARATOR}{self.main_element.alias}"
        return self.row.id

    @property
    def base_id(self) -> str:
        return self.row.id

    @property
    def default_sort_key(self) -> float:
        return self.row.default_sort_key

    def declared_main_elements(self) -> list[str]:
        """Aliases from the ``mainElement`` column, prefixed with ``ele``."""
        raw = self.row.text("mainElement")
        if not raw:
            return []
        return ["ele" + token.strip() for token in raw.split(",") if token.strip()]

    # =========================================================================
    # References
    # =========================================================================

    @memoized
    def job(self) -> Job:
        """The character's job, resolved on first access.

        Raises:
            MissingReferenceError: If the job id is unknown
        """
        job_id = self.row.text("job") or DEFAULT_JOB_ID
        job = self._catalog.job_by_id(job_id)
        if job is None:
            raise MissingReferenceError("job", job_id, self.row.id)
        return job

    @memoized
    def tactics(self) -> Tactics:
        """Tactics from the first id that resolves: row tactics, chara id, job id, predator.

        Raises:
            MissingReferenceError: If none of the candidates exists
        """
        candidates = [self.row.text("tactics"), self.row.id, self.job().id, DEFAULT_TACTICS_ID]
        for tactics_id in candidates:
            if not tactics_id:
                continue
            tactics = self._catalog.tactics_by_id(tactics_id)
            if tactics is not None:
                return tactics
        raise MissingReferenceError("tactics", DEFAULT_TACTICS_ID, self.row.id)

    def _ai_param(self, index: int) -> float | None:
        raw = self.row.text("aiParam")
        if not raw:
            return None
        parts = raw.split(",")
        if index >= len(parts):
            return None
        try:
            return float(parts[index])
        except ValueError:
            return None

    def tactics_distance(self) -> float:
        override = self._ai_param(0)
        return override if override is not None else self.tactics().distance

    def tactics_move_frequency(self) -> float:
        override = self._ai_param(1)
        return override if override is not None else self.tactics().move_frequency

    # =========================================================================
    # Elements
    # =========================================================================

    def _own_elements(self) -> list[ElementWithPower]:
        own = parse_elements(self._catalog, self.row.text("elements"))
        if self.main_element is not None:
            # Only the sub-elements: the main element itself is not a stat.
            own.extend(expand_element(self.main_element, self.main_element.element_power)[1:])
        return own

    @memoized
    def elements(self) -> tuple[ElementWithPower, ...]:
        return (
            *self._own_elements(),
            *self.race.elements(),
            *self.job().elements(),
        )

    @memoized
    def get_element_power(self, alias: str) -> float:
        return sum_power(self.elements(), alias)

    def feats(self) -> list[ElementWithPower]:
        return filter_feats(self.elements())

    def negations(self) -> list[ElementWithPower]:
        return filter_negations(self.elements())

    def skills(self) -> list[ElementWithPower]:
        return filter_skills(self.elements())

    def others(self) -> list[ElementWithPower]:
        return filter_others(self.elements())

    def primary_attributes(self) -> list[ElementWithPower]:
        """Total power of each of the eight primary attributes, in fixed order."""
        result = []
        for alias in PRIMARY_ATTRIBUTE_ALIASES:
            element = self._catalog.element_by_alias(alias) or Element.unresolved(alias)
            result.append(ElementWithPower(element, self.get_element_power(alias)))
        return result

    def resistances(self) -> list[ElementWithPower]:
        return [
            ElementWithPower(element, self.get_element_power(element.alias))
            for element in self._catalog.resistance_elements()
        ]

    # =========================================================================
    # Derived stats
    # =========================================================================

    @memoized
    def life(self) -> float:
        return self.race.life + self.get_element_power("life")

    @memoized
    def mana(self) -> float:
        return self.race.mana + self.get_element_power("mana")

    @memoized
    def speed(self) -> float:
        return self.race.speed + self.get_element_power("SPD") + self.job().speed_delta

    @memoized
    def vigor(self) -> float:
        return self.race.vigor + self.get_element_power("vigor")

    @memoized
    def dv(self) -> float:
        return self.race.dv + self.get_element_power("DV")

    @memoized
    def pv(self) -> float:
        return self.race.pv + self.get_element_power("PV")

    @memoized
    def pdr(self) -> float:
        return self.race.pdr + self.get_element_power("PDR")

    @memoized
    def edr(self) -> float:
        return self.race.edr + self.get_element_power("EDR")

    @memoized
    def ep(self) -> float:
        return self.race.ep + self.get_element_power("evasionPerfect")

    @memoized
    def level(self) -> float:
        lv = self.row.number("LV", 1)
        if self.is_variant and self.main_element is not None:
            return math.floor(lv * self.main_element.element_power / 100)
        return lv

    @memoized
    def gene_slot(self) -> tuple[float, float]:
        """``(actual, original)`` gene slot count.

        featRoran costs two slots per power, featGeneSlot adds one per power.
        """
        original = self.race.gene_slot
        actual = (
            original
            - 2 * self.get_element_power("featRoran")
            + self.get_element_power("featGeneSlot")
        )
        return actual, original

    def body_parts(self) -> dict[str, int]:
        return self.race.figures()

    def total_body_parts(self) -> int:
        return self.race.total_body_parts()

    # =========================================================================
    # Variants
    # =========================================================================

    def variants(self) -> list["Character"]:
        """One character per main element, or an empty list if there is nothing to split.

        Each variant sorts right after its base character.
        """
        if self.is_variant:
            return []

        if self.row.id == RANDOM_ELEMENT_CHARA_ID:
            aliases = [e.alias for e in self._catalog.attack_elements()]
        else:
            aliases = self.declared_main_elements()
            if len(aliases) < 2:
                return []

        base_key = self.row.default_sort_key
        return [
            Character(self.row.with_sort_key(base_key + (index + 1) * 0.01), self._catalog, alias)
            for index, alias in enumerate(aliases)
        ]

    # =========================================================================
    # Names and abilities
    # =========================================================================

    def normalized_name(self, locale: str) -> str:
        """Display name in ``locale`` with quality brackets and element substitution.

        Raises:
            UnsupportedLocaleError: If locale is not ja or en
        """
        if locale == "ja":
            name = self._normalized_name_ja()
        elif locale == "en":
            name = self._normalized_name_en()
        else:
            raise UnsupportedLocaleError(locale)

        if name == "":
            return BLANK_NAME

        element = self.main_element
        if element is None:
            return name

        if _ELEMENT_PLACEHOLDER.search(name):
            return _ELEMENT_PLACEHOLDER.sub(
                lambda m: element.alt_name(int(m.group(1)) if m.group(1) else -1, locale),
                name,
            )
        if self.is_variant:
            return f"{name} ({element.alt_name(-1, locale)})"
        return name

    def _normalized_name_ja(self) -> str:
        aka = _unblank(self.row.text("aka_JP"))
        prefix = aka + " " if aka else ""
        return prefix + self._bracket(_unblank(self.row.text("name_JP")))

    def _normalized_name_en(self) -> str:
        aka = _unblank(self.row.text("aka"))
        name = _unblank(self.row.text("name"))
        return (aka + " " + self._bracket(name)).strip()

    def _bracket(self, name: str) -> str:
        if not name:
            return name
        quality = self.row.number("quality")
        if quality == 4:
            return f"『{name}』"
        if quality == 3:
            return f"《{name}》"
        trait = (self.row.text("trait") or "").split(",")[0].strip()
        if trait in ADVENTURER_TRAITS:
            return f"「{name}」"
        return name

    def abilities(self) -> list[Ability]:
        """Parse ``actCombat`` (``name[/chance[/party]]``, comma separated).

        ``name_suffix`` names an element (``ele`` + suffix); a bare trailing
        underscore means the character's main element.
        """
        raw = self.row.text("actCombat")
        if not raw:
            return []

        abilities = []
        for entry in raw.split(","):
            parts = entry.strip().split("/")
            raw_name = parts[0]
            chance = _leading_int(parts[1]) if len(parts) > 1 and parts[1] else None
            party = len(parts) > 2 and parts[2] != ""

            element: str | None = None
            name = raw_name
            if "_" in raw_name:
                cut = raw_name.rindex("_")
                name = raw_name[: cut + 1]
                suffix = raw_name[cut + 1:]
                if suffix:
                    element = "ele" + suffix
                elif self.main_element is not None:
                    element = self.main_element.alias

            abilities.append(
                Ability(name=name, chance=100 if chance is None else chance, party=party, element=element)
            )
        return abilities

    def __repr__(self) -> str:
        return f"Character(id={self.id!r})"


def _unblank(value: str | None) -> str:
    if not value or value == BLANK_NAME:
        return ""
    return value


def _leading_int(text: str) -> int | None:
    match = re.match(r"\s*([+-]?\d+)", text)
    return int(match.group(1)) if match else None
