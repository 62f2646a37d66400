"""
Elements: the unit every stat, resistance, feat and skill is expressed in.

An element list field on a row ("elements", a job's bonus list, ...) reads
``alias[/power],alias[/power],...``. Parsing it yields ``ElementWithPower``
entries; elements that declare sub-elements also grant
``floor(power * coefficient)`` of each of them.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from typing import TYPE_CHECKING, Iterable

from ..exceptions import DataIntegrityError, MissingReferenceError, UnsupportedLocaleError
from ..data.rows import Row

if TYPE_CHECKING:
    from .catalog import GameCatalog


DEFAULT_ELEMENT_POWER = 100

PRIMARY_ATTRIBUTE_ALIASES = ("STR", "END", "DEX", "PER", "LER", "WIL", "MAG", "CHA")

# Status effects a character can be immune to.
NEGATION_ALIASES = frozenset({
    "negPoison",
    "negSleep",
    "negParalyze",
    "negBlind",
    "negConfuse",
    "negFear",
    "negDim",
    "negCurse",
})

ATTACK_ELEMENT_ALIASES = (
    "eleFire",
    "eleCold",
    "eleLightning",
    "eleDarkness",
    "eleMind",
    "elePoison",
    "eleNether",
    "eleSound",
    "eleNerve",
    "eleHoly",
    "eleChaos",
    "eleMagic",
    "eleEther",
    "eleAcid",
    "eleCut",
    "eleImpact",
    "eleVoid",
)

# Stat key exposed to search -> element alias that adds to it.
STAT_ELEMENT_ALIASES = {
    "life": "life",
    "mana": "mana",
    "speed": "SPD",
    "vigor": "vigor",
    "dv": "DV",
    "pv": "PV",
    "pdr": "PDR",
    "edr": "EDR",
    "ep": "evasionPerfect",
}

STATS_KEYS = tuple(STAT_ELEMENT_ALIASES)

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


def parse_power(text: str | None, default: int = 1) -> int:
    """Parse a power token the way a leading-integer parse would.

    ``"3"`` -> 3, ``"-2x"`` -> -2, ``""``/``None``/``"abc"`` -> ``default``.
    """
    if not text:
        return default
    match = _LEADING_INT.match(text)
    if not match:
        return default
    return int(match.group(1))


def _locale_column(column: str, locale: str) -> str:
    if locale == "ja":
        return f"{column}_JP"
    if locale == "en":
        return column
    raise UnsupportedLocaleError(locale)


class Element:
    """A row of the elements table.

    Attributes of interest are ``alias`` (semantic key such as ``eleFire``,
    ``resFire`` or ``featRoran``), ``element_power`` (``eleP``, 100 when
    blank) and the declared sub-elements.
    """

    def __init__(self, row: Row, catalog: "GameCatalog | None" = None, placeholder: bool = False):
        self.row = row
        self._catalog = catalog
        self.placeholder = placeholder
        self._sub_elements: tuple[SubElement, ...] | None = None

    @classmethod
    def unresolved(cls, alias: str) -> "Element":
        """An element known only by alias (not present in the elements table)."""
        return cls(Row({"id": "", "alias": alias, "name": alias, "name_JP": alias}), placeholder=True)

    @property
    def id(self) -> str:
        return self.row.id

    @property
    def alias(self) -> str:
        return str(self.row.get("alias", ""))

    @property
    def default_sort_key(self) -> float:
        return self.row.default_sort_key

    @property
    def element_power(self) -> float:
        value = self.row.get("eleP")
        if value is None or value == "":
            return DEFAULT_ELEMENT_POWER
        return self.row.number("eleP", DEFAULT_ELEMENT_POWER)

    @property
    def type(self) -> str | None:
        return self.row.text("type")

    @property
    def category(self) -> str | None:
        return self.row.text("category")

    @property
    def group(self) -> str | None:
        return self.row.text("group")

    def name(self, locale: str) -> str:
        return self.row.text(_locale_column("name", locale)) or ""

    def detail(self, locale: str) -> str:
        return self.row.text(_locale_column("detail", locale)) or ""

    def text_extra(self, locale: str) -> str:
        return self.row.text(_locale_column("textExtra", locale)) or ""

    def alt_name(self, n: int, locale: str) -> str:
        """Return alternative name ``n`` (numbered from 2), or the name for ``n < 0``.

        Raises:
            DataIntegrityError: If the element has no such alt name
        """
        if n < 0:
            return self.name(locale)

        raw = self.row.text(_locale_column("altname", locale))
        if not raw:
            raise DataIntegrityError(
                f"No alt names found for element '{self.alias}'",
                details={"alias": self.alias, "locale": locale},
            )
        names = raw.split(",")
        index = n - 2
        if index < 0 or index >= len(names):
            raise DataIntegrityError(
                f"Element '{self.alias}' has no alt name #{n}",
                details={"alias": self.alias, "locale": locale, "available": len(names)},
            )
        return names[index]

    def ability_name(self, element: "Element | None", locale: str) -> str:
        """Display name of an ability, qualified by an element if it has one."""
        if element is None:
            return self.name(locale)
        element_name = element.alt_name(2, locale)
        if locale == "ja":
            return f"{element_name}の{self.name(locale)}"
        return f"{element_name} {self.name(locale)}"

    def sub_elements(self) -> tuple["SubElement", ...]:
        """Declared sub-elements in declaration order (empty if none).

        Read from the ``subElements`` column as ``alias/coefficient,...``.

        Raises:
            MissingReferenceError: If a declared sub-element alias is unknown
        """
        if self._sub_elements is not None:
            return self._sub_elements

        raw = self.row.text("subElements")
        if not raw or self._catalog is None:
            self._sub_elements = ()
            return self._sub_elements

        result = []
        for token in raw.split(","):
            token = token.strip()
            if not token:
                continue
            alias, _, coefficient = token.partition("/")
            element = self._catalog.element_by_alias(alias)
            if element is None:
                raise MissingReferenceError("element", alias, details={"parent": self.alias})
            result.append(SubElement(element, float(coefficient) if coefficient else 1.0))
        self._sub_elements = tuple(result)
        return self._sub_elements

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Element):
            return self.alias == other.alias and self.id == other.id
        return NotImplemented

    def __hash__(self) -> int:
        return hash((self.alias, self.id))

    def __repr__(self) -> str:
        return f"Element(alias={self.alias!r}, id={self.id!r})"


@dataclass(frozen=True)
class SubElement:
    element: Element
    coefficient: float

    def power_for(self, parent_power: float) -> int:
        """Power granted when the parent is applied at ``parent_power``."""
        return math.floor(parent_power * self.coefficient)


@dataclass(frozen=True)
class ElementWithPower:
    element: Element
    power: float

    @property
    def alias(self) -> str:
        return self.element.alias


def expand_element(element: Element, power: float) -> list[ElementWithPower]:
    """Return the element at ``power`` followed by its sub-elements.

    Expansion is one level deep. A sub-element that points back at its parent
    is skipped.
    """
    result = [ElementWithPower(element, power)]
    visited = {element.alias}
    for sub in element.sub_elements():
        if sub.element.alias in visited:
            continue
        visited.add(sub.element.alias)
        result.append(ElementWithPower(sub.element, sub.power_for(power)))
    return result


def parse_elements(catalog: "GameCatalog", text: str | None) -> list[ElementWithPower]:
    """Parse an ``alias[/power],...`` field into elements with power.

    Unknown aliases are kept as unresolved elements, since prefixes such as
    ``feat``/``res``/``ele`` carry meaning on their own.

    Example:
        >>> [(e.alias, e.power) for e in parse_elements(catalog, "eleFire/10,featRoran")]
        [('eleFire', 10), ('resFire', 5), ('featRoran', 1)]
    """
    if not text:
        return []

    result: list[ElementWithPower] = []
    for token in text.split(","):
        token = token.strip()
        if not token:
            continue
        alias, _, power_text = token.partition("/")
        power = parse_power(power_text)
        element = catalog.element_by_alias(alias)
        if element is None:
            result.append(ElementWithPower(Element.unresolved(alias), power))
        else:
            result.extend(expand_element(element, power))
    return result


def is_feat(ewp: ElementWithPower) -> bool:
    return ewp.alias.startswith("feat")


def is_negation(ewp: ElementWithPower) -> bool:
    return ewp.alias in NEGATION_ALIASES


def is_skill(ewp: ElementWithPower) -> bool:
    return ewp.element.category == "skill"


def is_attribute(ewp: ElementWithPower) -> bool:
    alias = ewp.alias
    return (
        alias in PRIMARY_ATTRIBUTE_ALIASES
        or alias == "SPD"
        or ewp.element.category == "attribute"
    )


def is_resistance(ewp: ElementWithPower) -> bool:
    return ewp.alias.startswith("res")


def filter_feats(elements: Iterable[ElementWithPower]) -> list[ElementWithPower]:
    return [e for e in elements if is_feat(e)]


def filter_negations(elements: Iterable[ElementWithPower]) -> list[ElementWithPower]:
    return [e for e in elements if is_negation(e)]


def filter_skills(elements: Iterable[ElementWithPower]) -> list[ElementWithPower]:
    return [e for e in elements if is_skill(e)]


def filter_resistances(elements: Iterable[ElementWithPower]) -> list[ElementWithPower]:
    return [e for e in elements if is_resistance(e)]


def filter_others(elements: Iterable[ElementWithPower]) -> list[ElementWithPower]:
    """Everything that is not a feat, negation, attack/resistance, skill or attribute."""
    return [
        e for e in elements
        if not is_feat(e)
        and not is_negation(e)
        and not e.alias.startswith(("ele", "res"))
        and not is_skill(e)
        and not is_attribute(e)
    ]


def sum_power(elements: Iterable[ElementWithPower], alias: str) -> float:
    """Total power of every entry whose alias matches."""
    return sum(e.power for e in elements if e.alias == alias)
