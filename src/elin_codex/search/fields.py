"""
Field catalog: what can be searched, and how to read a field off a character.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any

from ..data.labels import LabelResolver
from ..data.schemas import TableName, row_model_for
from ..models.catalog import GameCatalog
from ..models.character import Character
from ..models.element import PRIMARY_ATTRIBUTE_ALIASES, STATS_KEYS
from .models import FieldCategory, FieldInfo, FieldOption, ValueType

FieldValue = str | int | float | None

TACTICS_FIELDS = (
    "tacticsName",
    "tacticsDistance",
    "tacticsMoveFrequency",
    "tacticsParty",
    "tacticsTaunt",
    "tacticsMelee",
    "tacticsRange",
    "tacticsSpell",
    "tacticsHeal",
    "tacticsSummon",
    "tacticsBuff",
    "tacticsDebuff",
    "tacticsPartyBuff",
)

TACTICS_TEXT_FIELDS = frozenset({"tacticsName", "tacticsPartyBuff"})

RAW_PREFIXES = ("chara", "race", "job", "tactics")

_PREFIX_TABLES = {
    "chara": TableName.CHARAS,
    "race": TableName.RACES,
    "job": TableName.JOBS,
    "tactics": TableName.TACTICS,
}


@dataclass(frozen=True)
class RawTableFields:
    fields: tuple[str, ...]
    numeric_fields: frozenset[str] = field(default_factory=frozenset)


@dataclass(frozen=True)
class RawFieldsInfo:
    """Raw passthrough columns per row prefix, with which of them are numeric."""
    tables: Mapping[str, RawTableFields]

    def fields(self, prefix: str) -> tuple[str, ...]:
        return self.tables[prefix].fields if prefix in self.tables else ()

    def is_numeric(self, prefix: str, column: str) -> bool:
        return prefix in self.tables and column in self.tables[prefix].numeric_fields


def raw_fields_info() -> RawFieldsInfo:
    """Raw field layout taken from the table row models."""
    tables = {}
    for prefix, table in _PREFIX_TABLES.items():
        model = row_model_for(table)
        tables[prefix] = RawTableFields(
            fields=tuple(model.column_names()),
            numeric_fields=frozenset(model.numeric_columns()),
        )
    return RawFieldsInfo(tables)


def _labelled(key: str, locale: str, labels: LabelResolver) -> dict[str, str]:
    return {
        "display_name": labels.label(key, locale),
        "name_ja": labels.label(key, "ja"),
        "name_en": labels.label(key, "en"),
    }


def _unique_options(
    characters: Iterable[Character],
    locale: str,
    names: Callable[[Character, str], str | None],
) -> list[FieldOption]:
    options: dict[str, FieldOption] = {}
    for chara in characters:
        display = names(chara, locale)
        if not display or display in options:
            continue
        options[display] = FieldOption(
            key=display,
            display_name=display,
            name_ja=names(chara, "ja") or "",
            name_en=names(chara, "en") or "",
        )
    return sorted(options.values(), key=lambda o: o.display_name)


def _race_name(chara: Character, locale: str) -> str:
    return chara.race.name(locale)


def _job_name(chara: Character, locale: str) -> str:
    return chara.job().name(locale)


def _main_element_name(chara: Character, locale: str) -> str | None:
    return chara.main_element.name(locale) if chara.main_element else None


def get_field_info_list(
    locale: str,
    catalog: GameCatalog,
    characters: list[Character],
    labels: LabelResolver,
    raw_fields: RawFieldsInfo | None = None,
) -> list[FieldInfo]:
    """List every searchable field in display order.

    Order: key info, stats, primary attributes, skills, resistances, tactics,
    then raw ``chara.``/``race.``/``job.``/``tactics.`` columns when
    ``raw_fields`` is given. Race, job and main element carry option lists
    built from ``characters``.

    Args:
        locale: Display locale (ja or en)
        catalog: Catalog of the data version being searched
        characters: Every character the search will run over
        labels: Label table for field display names
        raw_fields: Raw column layout, or None to leave raw fields out

    Returns:
        Ordered list of FieldInfo
    """
    fields: list[FieldInfo] = []

    key_info: list[tuple[str, ValueType, Callable[[], list[FieldOption]] | None]] = [
        ("name", ValueType.TEXT, None),
        ("race", ValueType.TEXT, lambda: _unique_options(characters, locale, _race_name)),
        ("job", ValueType.TEXT, lambda: _unique_options(characters, locale, _job_name)),
        ("mainElement", ValueType.TEXT, lambda: _unique_options(characters, locale, _main_element_name)),
        ("level", ValueType.NUMBER, None),
        ("geneSlot", ValueType.NUMBER, None),
        ("bodyParts", ValueType.NUMBER, None),
    ]
    for key, value_type, options in key_info:
        fields.append(FieldInfo(
            key=key,
            value_type=value_type,
            category=FieldCategory.KEY_INFO,
            options=options() if options else None,
            **_labelled(key, locale, labels),
        ))

    for key in STATS_KEYS:
        fields.append(FieldInfo(
            key=key,
            value_type=ValueType.NUMBER,
            category=FieldCategory.STATS,
            **_labelled(key, locale, labels),
        ))

    for alias in PRIMARY_ATTRIBUTE_ALIASES:
        element = catalog.element_by_alias(alias)
        fields.append(FieldInfo(
            key=alias,
            display_name=(element.name(locale) if element else "") or alias,
            name_ja=(element.name("ja") if element else "") or alias,
            name_en=(element.name("en") if element else "") or alias,
            value_type=ValueType.NUMBER,
            category=FieldCategory.ATTRIBUTES,
        ))

    for category, elements in (
        (FieldCategory.SKILLS, catalog.skill_elements()),
        (FieldCategory.RESISTANCES, catalog.resistance_elements()),
    ):
        for element in elements:
            fields.append(FieldInfo(
                key=element.alias,
                display_name=element.name(locale),
                name_ja=element.name("ja"),
                name_en=element.name("en"),
                value_type=ValueType.NUMBER,
                category=category,
            ))

    for key in TACTICS_FIELDS:
        fields.append(FieldInfo(
            key=key,
            value_type=ValueType.TEXT if key in TACTICS_TEXT_FIELDS else ValueType.NUMBER,
            category=FieldCategory.TACTICS,
            **_labelled(key, locale, labels),
        ))

    if raw_fields is not None:
        for prefix in RAW_PREFIXES:
            for column in raw_fields.fields(prefix):
                key = f"{prefix}.{column}"
                fields.append(FieldInfo(
                    key=key,
                    display_name=key,
                    name_ja=key,
                    name_en=key,
                    value_type=ValueType.NUMBER if raw_fields.is_numeric(prefix, column) else ValueType.TEXT,
                    category=FieldCategory.RAW,
                ))

    return fields


FieldAccessor = Callable[[Character, str, LabelResolver], Any]


def _party_buff(c: Character, locale: str, labels: LabelResolver) -> str:
    return labels.label("yes" if c.tactics().uses_party_buff() else "no", locale)


FIELD_ACCESSORS: dict[str, FieldAccessor] = {
    "name": lambda c, locale, labels: c.normalized_name(locale),
    "race": lambda c, locale, labels: c.race.name(locale),
    "job": lambda c, locale, labels: c.job().name(locale),
    "mainElement": lambda c, locale, labels: c.main_element.name(locale) if c.main_element else None,
    "level": lambda c, locale, labels: round(c.level(), 2),
    "geneSlot": lambda c, locale, labels: c.gene_slot()[0],
    "bodyParts": lambda c, locale, labels: c.total_body_parts(),
    "life": lambda c, locale, labels: c.life(),
    "mana": lambda c, locale, labels: c.mana(),
    "speed": lambda c, locale, labels: c.speed(),
    "vigor": lambda c, locale, labels: c.vigor(),
    "dv": lambda c, locale, labels: c.dv(),
    "pv": lambda c, locale, labels: c.pv(),
    "pdr": lambda c, locale, labels: c.pdr(),
    "edr": lambda c, locale, labels: c.edr(),
    "ep": lambda c, locale, labels: c.ep(),
    "tacticsName": lambda c, locale, labels: c.tactics().name(locale),
    "tacticsDistance": lambda c, locale, labels: c.tactics_distance(),
    "tacticsMoveFrequency": lambda c, locale, labels: c.tactics_move_frequency(),
    "tacticsParty": lambda c, locale, labels: c.tactics().party,
    "tacticsTaunt": lambda c, locale, labels: c.tactics().taunt,
    "tacticsMelee": lambda c, locale, labels: c.tactics().melee,
    "tacticsRange": lambda c, locale, labels: c.tactics().range,
    "tacticsSpell": lambda c, locale, labels: c.tactics().spell,
    "tacticsHeal": lambda c, locale, labels: c.tactics().heal,
    "tacticsSummon": lambda c, locale, labels: c.tactics().summon,
    "tacticsBuff": lambda c, locale, labels: c.tactics().buff,
    "tacticsDebuff": lambda c, locale, labels: c.tactics().debuff,
    "tacticsPartyBuff": _party_buff,
}


def _raw_lookup(character: Character, raw_row: Mapping[str, Any], field_key: str) -> tuple[bool, Any]:
    prefix, dot, column = field_key.partition(".")
    if not dot or prefix not in _PREFIX_TABLES:
        return False, None
    if prefix == "chara":
        row = raw_row
    elif prefix == "race":
        row = character.race.row
    elif prefix == "job":
        row = character.job().row
    else:
        row = character.tactics().row
    return True, row.get(column)


def _normalize(value: Any) -> FieldValue:
    if value is None or value == "":
        return None
    return value


def get_field_value(
    character: Character,
    raw_row: Mapping[str, Any] | None,
    field_key: str,
    locale: str,
    labels: LabelResolver,
) -> FieldValue:
    """Read ``field_key`` off a character.

    Modeled keys (name, stats, tactics, ...) come first, then
    ``chara.``/``race.``/``job.``/``tactics.`` raw columns, and anything
    else is treated as an element alias and summed with
    ``get_element_power``. Blank values come back as None.
    """
    accessor = FIELD_ACCESSORS.get(field_key)
    if accessor is not None:
        return _normalize(accessor(character, locale, labels))

    matched, value = _raw_lookup(character, raw_row if raw_row is not None else character.row, field_key)
    if matched:
        return _normalize(value)

    return _normalize(character.get_element_power(field_key))
