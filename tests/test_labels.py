"""
Unit tests for the locale label table.
"""

from pathlib import Path

import pytest
import yaml
from pydantic import ValidationError

from elin_codex.data.labels import LabelEntry, LabelResolver
from elin_codex.exceptions import UnsupportedLocaleError


TEST_LABELS = {
    "common": {
        "life": {"ja": "生命力", "en": "Life"},
        "yes": {"ja": "はい", "en": "Yes"},
    },
    "advancedSearch": {
        "categoryStats": {"ja": "ステータス", "en": "Stats"},
    },
}


@pytest.fixture
def labels_file(tmp_path: Path) -> Path:
    path = tmp_path / "labels.yaml"
    with open(path, "w", encoding="utf-8") as f:
        yaml.dump(TEST_LABELS, f, allow_unicode=True)
    return path


class TestLabelEntry:
    def test_for_locale(self) -> None:
        entry = LabelEntry(ja="生命力", en="Life")
        assert entry.for_locale("ja") == "生命力"
        assert entry.for_locale("en") == "Life"

    def test_both_locales_required(self) -> None:
        with pytest.raises(ValidationError):
            LabelEntry(ja="生命力")


class TestLabelResolver:
    """Test loading and lookup."""

    def test_load_yaml(self, labels_file: Path) -> None:
        resolver = LabelResolver()
        resolver.load_yaml(labels_file)
        assert resolver.label("life", "en") == "Life"
        assert resolver.label("categoryStats", "ja", namespace="advancedSearch") == "ステータス"
        assert sorted(resolver.namespaces()) == ["advancedSearch", "common"]

    def test_missing_key_returns_key(self) -> None:
        resolver = LabelResolver()
        resolver.load_dict(TEST_LABELS)
        assert resolver.label("mana", "en") == "mana"
        assert resolver.label("life", "en", namespace="other") == "life"

    def test_unsupported_locale(self) -> None:
        resolver = LabelResolver()
        with pytest.raises(UnsupportedLocaleError):
            resolver.label("life", "fr")

    def test_later_loads_merge(self) -> None:
        resolver = LabelResolver()
        resolver.load_dict(TEST_LABELS)
        resolver.load_dict({"common": {"mana": {"ja": "マナ", "en": "Mana"}}})
        assert resolver.has("life")
        assert resolver.label("mana", "en") == "Mana"

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            LabelResolver().load_yaml(tmp_path / "absent.yaml")

    def test_bad_structure(self) -> None:
        with pytest.raises(ValueError):
            LabelResolver().load_dict(["not", "a", "mapping"])
        with pytest.raises(ValueError):
            LabelResolver().load_dict({"common": "flat"})


class TestPackagedLabels:
    """Test the labels shipped with the package."""

    def test_field_labels(self, labels: LabelResolver) -> None:
        assert labels.label("speed", "en") == "Speed"
        assert labels.label("ep", "ja") == "完全回避"

    def test_yes_no_are_strings(self, labels: LabelResolver) -> None:
        assert labels.label("yes", "en") == "Yes"
        assert labels.label("no", "ja") == "いいえ"

    def test_every_category_is_labelled(self, labels: LabelResolver) -> None:
        for key in (
            "categoryKeyInfo", "categoryStats", "categoryAttributes", "categorySkills",
            "categoryResistances", "categoryTactics", "categoryRaw",
        ):
            assert labels.has(key, namespace="advancedSearch")
