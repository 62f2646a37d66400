"""
Entity models for characters, races, jobs, tactics and elements.
"""

from .catalog import GameCatalog, resistance_alias
from .character import Ability, Character
from .element import (
    ATTACK_ELEMENT_ALIASES,
    NEGATION_ALIASES,
    PRIMARY_ATTRIBUTE_ALIASES,
    STAT_ELEMENT_ALIASES,
    STATS_KEYS,
    Element,
    ElementWithPower,
    SubElement,
    parse_elements,
)
from .feat import Feat
from .job import Job
from .race import Race
from .tactics import Tactics

__all__ = [
    "GameCatalog",
    "resistance_alias",
    "Ability",
    "Character",
    "ATTACK_ELEMENT_ALIASES",
    "NEGATION_ALIASES",
    "PRIMARY_ATTRIBUTE_ALIASES",
    "STAT_ELEMENT_ALIASES",
    "STATS_KEYS",
    "Element",
    "ElementWithPower",
    "SubElement",
    "parse_elements",
    "Feat",
    "Job",
    "Race",
    "Tactics",
]
