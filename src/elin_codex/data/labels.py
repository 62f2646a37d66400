"""
Locale-indexed label table with O(1) lookup.
"""

from pathlib import Path

import yaml
from pydantic import BaseModel, Field

from ..config import SUPPORTED_LOCALES
from ..exceptions import UnsupportedLocaleError

DEFAULT_LABELS_PATH = Path(__file__).parent / "labels.yaml"


class LabelEntry(BaseModel):
    """One UI string in every supported locale."""
    ja: str = Field(..., description="Japanese label")
    en: str = Field(..., description="English label")

    def for_locale(self, locale: str) -> str:
        return self.ja if locale == "ja" else self.en


class LabelResolver:
    """Resolves ``(namespace, key, locale)`` to a display string.

    Unknown keys resolve to the key itself so a missing translation shows up
    as its identifier instead of failing a build.

    Expected YAML format:
        common:
          life: {ja: 生命力, en: Life}
        advancedSearch:
          categoryStats: {ja: ステータス, en: Stats}

    Example:
        >>> labels = LabelResolver.default()
        >>> labels.label("life", "en")
        'Life'
        >>> labels.label("categoryStats", "ja", namespace="advancedSearch")
        'ステータス'
    """

    def __init__(self) -> None:
        self._lookup: dict[str, dict[str, LabelEntry]] = {}

    @classmethod
    def default(cls) -> "LabelResolver":
        """Create a resolver loaded with the labels shipped with the package."""
        resolver = cls()
        resolver.load_yaml(DEFAULT_LABELS_PATH)
        return resolver

    def load_yaml(self, path: Path) -> None:
        """Load (and merge) a label table from a YAML file.

        Raises:
            FileNotFoundError: If the YAML file doesn't exist
            yaml.YAMLError: If the YAML is malformed
            ValueError: If the top level is not a mapping of namespaces
        """
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
        self.load_dict(data)

    def load_dict(self, data: object) -> None:
        if not isinstance(data, dict):
            raise ValueError("Label file must map namespaces to label entries")

        for namespace, entries in data.items():
            if not isinstance(entries, dict):
                raise ValueError(f"Namespace '{namespace}' must be a mapping")
            bucket = self._lookup.setdefault(str(namespace), {})
            for key, value in entries.items():
                bucket[str(key)] = LabelEntry(**value)

    def label(self, key: str, locale: str, namespace: str = "common") -> str:
        """Return the label for ``key`` in ``locale``, or the key if unknown.

        Raises:
            UnsupportedLocaleError: If ``locale`` is not ja or en
        """
        if locale not in SUPPORTED_LOCALES:
            raise UnsupportedLocaleError(locale)
        entry = self._lookup.get(namespace, {}).get(key)
        if entry is None:
            return key
        return entry.for_locale(locale)

    def has(self, key: str, namespace: str = "common") -> bool:
        return key in self._lookup.get(namespace, {})

    def namespaces(self) -> list[str]:
        return list(self._lookup)
