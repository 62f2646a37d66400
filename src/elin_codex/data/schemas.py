"""
Row models for the game data tables.

One pydantic model per table declares its columns in file order. Numeric
columns accept the text cells of a CSV export: a blank cell becomes 0 when the
column is required and None otherwise, and text that is not a number becomes
0. Columns a model does not declare are kept as they are.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Any, ClassVar, Optional, Union, get_args

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator
from pydantic.fields import FieldInfo

logger = logging.getLogger("elin-codex")

Number = Union[int, float]


class TableName(str, Enum):
    """Tables in a data version."""
    CHARAS = "charas"
    RACES = "races"
    JOBS = "jobs"
    ELEMENTS = "elements"
    TACTICS = "tactics"


def _is_numeric(field: FieldInfo) -> bool:
    return float in (get_args(field.annotation) or (field.annotation,))


def _coerce_number(value: Any, required: bool, where: str) -> Any:
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, (int, float)):
        return value
    text = "" if value is None else str(value).strip()
    if text == "":
        return 0 if required else None
    try:
        parsed = float(text)
    except ValueError:
        logger.debug(f"Non-numeric value {text!r} in {where}, using 0")
        return 0
    return int(parsed) if parsed.is_integer() else parsed


class TableRow(BaseModel):
    """Base for table row models."""
    model_config = ConfigDict(extra="allow")

    table: ClassVar[TableName]

    @field_validator("*", mode="before")
    @classmethod
    def coerce_cell(cls, value: Any, info: ValidationInfo) -> Any:
        """Turn raw cells into the declared column type."""
        field = cls.model_fields[info.field_name]
        if _is_numeric(field):
            return _coerce_number(value, field.is_required(), f"{cls.table.value}.{info.field_name}")
        if value is None or value == "":
            return "" if field.is_required() else None
        return str(value)

    @field_validator("id", check_fields=False)
    @classmethod
    def drop_stray_space(cls, value: str) -> str:
        # Some ids contain one stray space ("fish_ piranha"); it would leak into URLs.
        return value.replace(" ", "", 1)

    @classmethod
    def column_names(cls) -> list[str]:
        """Declared column names in file order."""
        return [field.alias or name for name, field in cls.model_fields.items()]

    @classmethod
    def numeric_columns(cls) -> set[str]:
        return {field.alias or name for name, field in cls.model_fields.items() if _is_numeric(field)}

    def cells(self) -> dict[str, Any]:
        """Column name to cell value, undeclared columns included."""
        return self.model_dump(by_alias=True)


class CharaRow(TableRow):
    table: ClassVar[TableName] = TableName.CHARAS

    id: str
    id_number: Number = Field(alias="_id")
    name_JP: str
    name: str
    aka_JP: Optional[str] = None
    aka: Optional[str] = None
    idActor: Optional[str] = None
    sort: Number
    size: Optional[str] = None
    id_render_data: str = Field(alias="_idRenderData")
    tiles: str
    tiles_snow: Optional[str] = None
    colorMod: Optional[str] = None
    components: Optional[str] = None
    defMat: Optional[str] = None
    LV: Optional[Number] = None
    chance: Optional[Number] = None
    quality: Number
    hostility: Optional[str] = None
    biome: Optional[str] = None
    tag: Optional[str] = None
    trait: Optional[str] = None
    race: Optional[str] = None
    job: Optional[str] = None
    tactics: Optional[str] = None
    aiIdle: Optional[str] = None
    aiParam: Optional[str] = None
    actCombat: Optional[str] = None
    mainElement: Optional[str] = None
    elements: Optional[str] = None
    equip: Optional[str] = None
    loot: Optional[str] = None
    category: Optional[str] = None
    filter: Optional[str] = None
    gachaFilter: Optional[str] = None
    tone: Optional[str] = None
    actIdle: Optional[str] = None
    lightData: Optional[str] = None
    idExtra: Optional[str] = None
    bio: Optional[str] = None
    faith: Optional[str] = None
    works: Optional[str] = None
    hobbies: Optional[str] = None
    idText: Optional[str] = None
    moveAnime: Optional[str] = None
    factory: Optional[str] = None
    detail_JP: Optional[str] = None
    detail: Optional[str] = None


class RaceRow(TableRow):
    table: ClassVar[TableName] = TableName.RACES

    id: str
    name_JP: str
    name: str
    playable: Number
    tag: Optional[str] = None
    life: Number
    mana: Number
    vigor: Number
    DV: Number
    PV: Number
    PDR: Number
    EDR: Number
    EP: Number
    STR: Number
    END: Number
    DEX: Number
    PER: Number
    LER: Number
    WIL: Number
    MAG: Number
    CHA: Number
    SPD: Number
    stars: Optional[str] = Field(default=None, alias="***")
    INT: Number
    martial: Number
    pen: Number
    elements: Optional[str] = None
    skill: Optional[str] = None
    figure: str
    geneCap: Number
    material: str
    corpse: str
    loot: Optional[str] = None
    blood: Number
    meleeStyle: Optional[str] = None
    castStyle: Optional[str] = None
    EQ: Optional[str] = None
    sex: Number
    age: str
    height: Number
    breeder: Number
    food: Number
    fur: Optional[str] = None
    detail_JP: str
    detail: str


class JobRow(TableRow):
    table: ClassVar[TableName] = TableName.JOBS

    id: str
    name_JP: str
    name: str
    playable: Number
    STR: Number
    END: Number
    DEX: Number
    PER: Number
    LER: Number
    WIL: Number
    MAG: Number
    CHA: Number
    SPD: Number
    stars: Optional[str] = Field(default=None, alias="***")
    elements: Optional[str] = None
    weapon: Optional[str] = None
    equip: Optional[str] = None
    domain: Optional[str] = None
    detail_JP: str
    detail: str


class ElementRow(TableRow):
    """Element row; ``eleP`` stays optional so elements without it fall back to the default power."""
    table: ClassVar[TableName] = TableName.ELEMENTS

    id: str
    alias: str
    name_JP: str
    name: str
    altname_JP: Optional[str] = None
    altname: Optional[str] = None
    aliasParent: Optional[str] = None
    aliasRef: Optional[str] = None
    aliasMtp: Optional[str] = None
    parentFactor: Number
    lvFactor: Number
    encFactor: Number
    encSlot: Optional[str] = None
    mtp: Number
    LV: Number
    chance: Number
    value: Number
    cost: Optional[str] = None
    geneSlot: Number
    sort: Number
    target: Optional[str] = None
    proc: Optional[str] = None
    type: Optional[str] = None
    group: Optional[str] = None
    category: Optional[str] = None
    categorySub: Optional[str] = None
    abilityType: Optional[str] = None
    tag: Optional[str] = None
    thing: Optional[str] = None
    eleP: Optional[Number] = None
    cooldown: Number
    charge: Number
    radius: Number
    max: Number
    req: Optional[str] = None
    idTrainer: Optional[str] = None
    partySkill: Number
    tagTrainer: Optional[str] = None
    levelBonus_JP: Optional[str] = None
    levelBonus: Optional[str] = None
    foodEffect: Optional[str] = None
    stars: Optional[str] = Field(default=None, alias="***")
    langAct: Optional[str] = None
    detail_JP: Optional[str] = None
    detail: Optional[str] = None
    textPhase_JP: Optional[str] = None
    textPhase: Optional[str] = None
    textExtra_JP: Optional[str] = None
    textExtra: Optional[str] = None
    textInc_JP: Optional[str] = None
    textInc: Optional[str] = None
    textDec_JP: Optional[str] = None
    textDec: Optional[str] = None
    textAlt_JP: Optional[str] = None
    textAlt: Optional[str] = None
    adjective_JP: Optional[str] = None
    adjective: Optional[str] = None
    subElements: Optional[str] = None


class TacticsRow(TableRow):
    table: ClassVar[TableName] = TableName.TACTICS

    id: str
    name_JP: str
    name: str
    stars: Optional[str] = Field(default=None, alias="***")
    dist: Number
    move: Number
    movePC: Number
    party: Number
    taunt: Number
    melee: Number
    range: Number
    spell: Number
    heal: Number
    summon: Number
    buff: Number
    debuff: Number
    tag: Optional[str] = None
    detail_JP: Optional[str] = None
    detail: Optional[str] = None


ROW_MODELS: dict[TableName, type[TableRow]] = {
    TableName.CHARAS: CharaRow,
    TableName.RACES: RaceRow,
    TableName.JOBS: JobRow,
    TableName.ELEMENTS: ElementRow,
    TableName.TACTICS: TacticsRow,
}


def row_model_for(table: TableName | str) -> type[TableRow]:
    """Look up the row model of a table by enum or name."""
    return ROW_MODELS[TableName(table)]
