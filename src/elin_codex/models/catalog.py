"""
GameCatalog - the immutable lookup tables of one data version.

A catalog is built once per version from the rows of every table and then
only read. Building is eager: element, race, job and tactics maps and the
feat reverse indexes all exist once the constructor returns.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from ..data.rows import Row
from .element import ATTACK_ELEMENT_ALIASES, Element
from .feat import Feat
from .job import Job
from .race import Race
from .tactics import Tactics

logger = logging.getLogger("elin-codex")


def resistance_alias(attack_alias: str) -> str:
    """``eleFire`` -> ``resFire``; other aliases are returned unchanged."""
    if attack_alias.startswith("ele"):
        return "res" + attack_alias[3:]
    return attack_alias


class GameCatalog:
    """Alias/id lookups and reverse indexes for one data version.

    Example:
        >>> catalog = GameCatalog("EA 23.173", elements=..., races=..., jobs=..., tactics=..., charas=...)
        >>> catalog.element_by_alias("eleFire").name("en")
        'Fire'
        >>> [race.id for race in catalog.races_by_feat("featRoran")]
        ['roran']
    """

    def __init__(
        self,
        version: str,
        elements: Sequence[Row],
        races: Sequence[Row],
        jobs: Sequence[Row],
        tactics: Sequence[Row],
        charas: Sequence[Row] = (),
    ):
        self.version = version

        self._elements: list[Element] = [Element(row, self) for row in elements]
        self._element_by_alias: dict[str, Element] = {e.alias: e for e in self._elements}
        self._element_by_id: dict[str, Element] = {e.id: e for e in self._elements}

        self._races: dict[str, Race] = {row.id: Race(row, self) for row in races}
        self._jobs: dict[str, Job] = {row.id: Job(row, self) for row in jobs}
        self._tactics: dict[str, Tactics] = {row.id: Tactics(row) for row in tactics}
        self._chara_rows: list[Row] = list(charas)
        self._chara_row_by_id: dict[str, Row] = {row.id: row for row in self._chara_rows}

        self._races_by_feat = self._index_by_feat(self._races.values())
        self._jobs_by_feat = self._index_by_feat(self._jobs.values())

        logger.info(
            f"Built catalog '{version}': {len(self._elements)} elements, "
            f"{len(self._races)} races, {len(self._jobs)} jobs, "
            f"{len(self._tactics)} tactics, {len(self._chara_rows)} charas"
        )

    @staticmethod
    def _index_by_feat(entities) -> dict[str, list]:
        index: dict[str, list] = {}
        for entity in entities:
            seen: set[str] = set()
            for feat in entity.feats():
                if feat.alias in seen:
                    continue
                seen.add(feat.alias)
                index.setdefault(feat.alias, []).append(entity)
        return index

    # =========================================================================
    # Elements
    # =========================================================================

    def element_by_alias(self, alias: str) -> Element | None:
        return self._element_by_alias.get(alias)

    def element_by_id(self, element_id: str) -> Element | None:
        return self._element_by_id.get(element_id)

    def elements(self) -> list[Element]:
        return list(self._elements)

    def attack_elements(self) -> list[Element]:
        """The attack elements present in this version, in canonical order."""
        return [
            self._element_by_alias[alias]
            for alias in ATTACK_ELEMENT_ALIASES
            if alias in self._element_by_alias
        ]

    def resistance_elements(self) -> list[Element]:
        """Resistance counterparts of the attack elements, in the same order."""
        result = []
        for alias in ATTACK_ELEMENT_ALIASES:
            element = self._element_by_alias.get(resistance_alias(alias))
            if element is not None:
                result.append(element)
        return result

    def skill_elements(self) -> list[Element]:
        return [e for e in self._elements if e.category == "skill"]

    def all_feats(self) -> list[Feat]:
        return [Feat(e) for e in self._elements if e.type == "Feat"]

    # =========================================================================
    # Races, jobs, tactics, charas
    # =========================================================================

    def race_by_id(self, race_id: str) -> Race | None:
        return self._races.get(race_id)

    def job_by_id(self, job_id: str) -> Job | None:
        return self._jobs.get(job_id)

    def tactics_by_id(self, tactics_id: str) -> Tactics | None:
        return self._tactics.get(tactics_id)

    def races(self) -> list[Race]:
        return list(self._races.values())

    def jobs(self) -> list[Job]:
        return list(self._jobs.values())

    def races_by_feat(self, feat_alias: str) -> list[Race]:
        return list(self._races_by_feat.get(feat_alias, []))

    def jobs_by_feat(self, feat_alias: str) -> list[Job]:
        return list(self._jobs_by_feat.get(feat_alias, []))

    def chara_rows(self) -> list[Row]:
        return list(self._chara_rows)

    def chara_row_by_id(self, chara_id: str) -> Row | None:
        return self._chara_row_by_id.get(chara_id)

    def __repr__(self) -> str:
        return f"GameCatalog(version={self.version!r})"
