"""
CharaBrowser - the query surface a presentation layer talks to.

Ties a RecordStore, one data version and a label table together: it lists
characters (variants expanded), resolves character ids, describes the
searchable fields and runs searches.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from .config import CodexConfig
from .data.labels import LabelResolver
from .data.sources import CsvDirectorySource
from .models.catalog import GameCatalog
from .models.character import VARIANT_SEPARATOR, Character
from .models.feat import Feat
from .models.job import Job
from .models.race import Race
from .search.codec import deserialize_search
from .search.evaluator import evaluate_search
from .search.fields import get_field_info_list, raw_fields_info
from .search.models import FieldInfo, SearchState
from .store import RecordStore

logger = logging.getLogger("elin-codex")


@dataclass
class FeatHolders:
    """Races and jobs that grant a feat."""
    feat_alias: str
    races: list[Race] = field(default_factory=list)
    jobs: list[Job] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "feat_alias": self.feat_alias,
            "races": [race.id for race in self.races],
            "jobs": [job.id for job in self.jobs],
        }


class CharaBrowser:
    """Character listing and search over one data version.

    Example:
        >>> browser = CharaBrowser.from_config(load_config())
        >>> [c.id for c in browser.characters()][:3]
        ['putit', 'yeek', 'bit---eleFire']
        >>> token = serialize_search(state)
        >>> len(browser.search_token(token))
        12
    """

    def __init__(
        self,
        store: RecordStore,
        version: str,
        labels: LabelResolver | None = None,
        locale: str = "ja",
        include_raw_fields: bool = True,
    ):
        self.store = store
        self.version = version
        self.labels = labels or LabelResolver.default()
        self.locale = locale
        self.include_raw_fields = include_raw_fields
        self._characters: list[Character] | None = None

    @classmethod
    def from_config(cls, config: CodexConfig, version: str | None = None) -> "CharaBrowser":
        """Build a browser reading CSV snapshots from ``config.data_dir``."""
        store = RecordStore(CsvDirectorySource(config.data_dir))
        return cls(
            store,
            version or config.default_version,
            locale=config.default_locale,
            include_raw_fields=config.include_raw_fields,
        )

    @property
    def catalog(self) -> GameCatalog:
        return self.store.catalog(self.version)

    def characters(self) -> list[Character]:
        """Every listed character in display order, variants in place of their base."""
        if self._characters is None:
            listed: list[Character] = []
            for row in self.catalog.chara_rows():
                if Character.is_ignored_chara_id(row.id):
                    continue
                chara = Character(row, self.catalog)
                listed.extend(chara.variants() or [chara])
            listed.sort(key=lambda c: c.default_sort_key)
            self._characters = listed
            logger.debug(f"Listed {len(listed)} characters for version '{self.version}'")
        return list(self._characters)

    def character(self, chara_id: str) -> Character | None:
        """Look up a character by id; ``base---eleX`` resolves a variant.

        Raises:
            MissingReferenceError: If the row exists but references unknown data
        """
        base_id, _, variant_alias = chara_id.partition(VARIANT_SEPARATOR)
        row = self.catalog.chara_row_by_id(base_id)
        if row is None:
            return None
        return Character(row, self.catalog, variant_alias or None)

    def field_infos(self, locale: str | None = None) -> list[FieldInfo]:
        return get_field_info_list(
            locale or self.locale,
            self.catalog,
            self.characters(),
            self.labels,
            raw_fields_info() if self.include_raw_fields else None,
        )

    def search(self, state: SearchState | None, locale: str | None = None) -> list[Character]:
        """Characters matching ``state``; None or a disabled state matches all."""
        locale = locale or self.locale
        return [
            chara for chara in self.characters()
            if evaluate_search(chara, chara.row, state, locale, self.labels)
        ]

    def search_token(self, token: str | None, locale: str | None = None) -> list[Character]:
        """Like ``search`` but from a URL token. Malformed tokens filter nothing."""
        return self.search(deserialize_search(token), locale)

    def feats(self) -> list[Feat]:
        return self.catalog.all_feats()

    def feat_holders(self, feat_alias: str) -> FeatHolders:
        return FeatHolders(
            feat_alias=feat_alias,
            races=self.catalog.races_by_feat(feat_alias),
            jobs=self.catalog.jobs_by_feat(feat_alias),
        )
