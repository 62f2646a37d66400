"""
Pytest configuration and fixtures for elin-codex tests.

The ``dataset`` fixture is a small synthetic game version. Numbers are
chosen so expected stats can be worked out by hand:

- norland: life 100, SPD 70, STR 4, END 3, geneCap 3, 11 body parts
- roran: life 80, SPD 90, MAG 5, geneCap 5, feats featRoran, resCold/10
- eleFire (eleP 100) grants resFire at 0.5, eleCold (eleP 50) resCold at 0.5
- every race gets weaponSword/1 and evasion/1 (common race skills 101, 150)
"""

import sys
from pathlib import Path

import pytest

# Add src directory to Python path to allow importing elin_codex
src_path = Path(__file__).parent.parent / "src"
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))

from elin_codex.browser import CharaBrowser  # noqa: E402
from elin_codex.data.labels import LabelResolver  # noqa: E402
from elin_codex.data.sources import InMemorySource  # noqa: E402
from elin_codex.store import RecordStore  # noqa: E402

VERSION = "test"

# Blank cells for the numeric columns every element row carries; they read as 0.
ELEMENT_NUMBER_COLUMNS = (
    "parentFactor", "lvFactor", "encFactor", "mtp", "LV", "chance", "value",
    "geneSlot", "sort", "cooldown", "charge", "radius", "max", "partySkill",
)

RACE_DEFAULTS = {
    "playable": 0, "life": 0, "mana": 0, "vigor": 0, "DV": 0, "PV": 0,
    "PDR": 0, "EDR": 0, "EP": 0, "STR": 0, "END": 0, "DEX": 0, "PER": 0,
    "LER": 0, "WIL": 0, "MAG": 0, "CHA": 0, "SPD": 0, "INT": 0, "martial": 0,
    "pen": 0, "figure": "", "geneCap": 0, "material": "", "corpse": "",
    "blood": 0, "sex": 0, "age": "", "height": 0, "breeder": 0, "food": 0,
    "detail_JP": "", "detail": "",
}

JOB_DEFAULTS = {
    "playable": 0, "STR": 0, "END": 0, "DEX": 0, "PER": 0, "LER": 0,
    "WIL": 0, "MAG": 0, "CHA": 0, "SPD": 0, "detail_JP": "", "detail": "",
}

TACTICS_DEFAULTS = {
    "dist": 0, "move": 0, "movePC": 0, "party": 0, "taunt": 0, "melee": 0,
    "range": 0, "spell": 0, "heal": 0, "summon": 0, "buff": 0, "debuff": 0,
}


def element_row(id: str, alias: str, name: str, name_JP: str, **overrides) -> dict:
    row = dict.fromkeys(ELEMENT_NUMBER_COLUMNS, "")
    row.update({"id": id, "alias": alias, "name": name, "name_JP": name_JP})
    row.update(overrides)
    return row


def race_row(**fields) -> dict:
    return {**RACE_DEFAULTS, **fields}


def job_row(**fields) -> dict:
    return {**JOB_DEFAULTS, **fields}


def tactics_row(**fields) -> dict:
    return {**TACTICS_DEFAULTS, **fields}


def make_elements() -> list[dict]:
    attributes = [
        ("70", "STR", "Strength", "筋力"),
        ("71", "END", "Endurance", "耐久"),
        ("72", "DEX", "Dexterity", "器用"),
        ("73", "PER", "Perception", "感覚"),
        ("74", "LER", "Learning", "学習"),
        ("75", "WIL", "Will", "意思"),
        ("76", "MAG", "Magic", "魔力"),
        ("77", "CHA", "Charisma", "魅力"),
        ("79", "SPD", "Speed", "速度"),
    ]
    stats = [
        ("60", "life", "Life", "生命力"),
        ("61", "mana", "Mana", "マナ"),
        ("62", "vigor", "Vigor", "活力"),
        ("64", "DV", "DV", "回避"),
        ("65", "PV", "PV", "防御"),
        ("55", "PDR", "PDR", "物理軽減"),
        ("56", "EDR", "EDR", "属性軽減"),
        ("57", "evasionPerfect", "Perfect Evasion", "完全回避"),
    ]
    rows = [element_row(*a, category="attribute") for a in attributes]
    rows += [element_row(*s, category="stat") for s in stats]
    rows += [
        element_row("101", "weaponSword", "Long Sword", "長剣", category="skill"),
        element_row("150", "evasion", "Evasion", "回避術", category="skill"),
        element_row(
            "910", "eleFire", "Fire", "火炎", category="attack", eleP="100",
            altname="Burning,Flaming", altname_JP="燃える,灼熱の", subElements="resFire/0.5",
        ),
        element_row(
            "911", "eleCold", "Cold", "冷気", category="attack", eleP="50",
            altname="Icy,Freezing", altname_JP="凍える,極寒の", subElements="resCold/0.5",
        ),
        element_row(
            "912", "eleLightning", "Lightning", "電撃", category="attack",
            altname="Shocking,Thunder", altname_JP="痺れる,雷鳴の",
        ),
        element_row("950", "resFire", "Resist Fire", "火炎耐性", category="resist"),
        element_row("951", "resCold", "Resist Cold", "冷気耐性", category="resist"),
        element_row("952", "resLightning", "Resist Lightning", "電撃耐性", category="resist"),
        element_row("1407", "featRoran", "Roran", "ロラン", type="Feat", cost="5", geneSlot="2"),
        element_row("1408", "featGeneSlot", "Gene Slot", "遺伝子スロット", type="Feat", cost="0"),
        element_row("421", "negPoison", "Poison Immunity", "毒無効", category="ability"),
        element_row("415", "seeInvisible", "See Invisible", "透明視", category="ability"),
    ]
    return rows


def make_races() -> list[dict]:
    return [
        race_row(
            id="norland", name="Norland", name_JP="ノーランド",
            life=100, mana=90, vigor=80, DV=10, PV=5, STR=4, END=3, SPD=70,
            geneCap=3, figure="手|手|頭|体|背|腰|腕|足|首|指|指", elements="",
        ),
        race_row(
            id="roran", name="Roran", name_JP="ロラン族",
            life=80, mana=120, vigor=60, DV=12, PV=4, PDR=3, EDR=2, EP=1, MAG=5, SPD=90,
            geneCap=5, figure="手|頭|体",
            elements="featRoran/1,resCold/10,negPoison/1,seeInvisible/1",
        ),
    ]


def make_jobs() -> list[dict]:
    return [
        job_row(id="none", name="None", name_JP="なし"),
        job_row(
            id="warrior", name="Warrior", name_JP="戦士",
            SPD=5, STR=3, elements="featGeneSlot/1,weaponSword/2",
        ),
        job_row(id="mage", name="Mage", name_JP="魔法使い", MAG=4, elements="resFire/5"),
    ]


def make_tactics() -> list[dict]:
    return [
        tactics_row(id="predator", name="Predator", name_JP="捕食者", dist=1, move=50, melee=60),
        tactics_row(
            id="warrior", name="Warrior", name_JP="戦士", dist=2, move=40,
            party=30, taunt=20, melee=80, tag="pt,melee",
        ),
        tactics_row(id="putit", name="Putit", name_JP="プチ", dist=4, move=90, spell=10),
    ]


def make_chara_def(**overrides) -> dict:
    """Factory for a chara row with sensible defaults."""
    row = {
        "id": "test_chara",
        "_id": 1,
        "name": "test",
        "name_JP": "テスト",
        "sort": 0,
        "_idRenderData": "@chara",
        "tiles": "100",
        "quality": 0,
        "LV": 1,
    }
    row.update(overrides)
    return row


def make_charas() -> list[dict]:
    return [
        make_chara_def(id="putit", name="putit", name_JP="プチ", LV=3, elements="life/10,eleFire/4"),
        make_chara_def(
            id="bob", name="Bob", name_JP="ボブ", aka="*r", aka_JP="*r", quality=4, LV=20,
            race="roran", job="warrior", tactics="duelist", aiParam="5,25",
        ),
        make_chara_def(
            id="spirit", name="#ele spirit", name_JP="#eleの精霊", LV=10,
            mainElement="Fire,Cold", job="mage",
            actCombat="ActBolt_/40,SpBreath_Cold/30/pt,ActMelee",
        ),
        make_chara_def(id="bit", name="bit", name_JP="ビット", LV=6, mainElement="Fire"),
        make_chara_def(
            id="adv_lily", name="Lily", name_JP="リリィ", aka="wandering", aka_JP="放浪の",
            trait="Adventurer",
        ),
        make_chara_def(id="nameless", name="*r", name_JP="*r", quality=4),
        make_chara_def(id="kaze", name="Kaze", name_JP="カゼ", quality=3),
    ]


def make_dataset() -> dict:
    return {
        "elements": make_elements(),
        "races": make_races(),
        "jobs": make_jobs(),
        "tactics": make_tactics(),
        "charas": make_charas(),
    }


@pytest.fixture
def dataset() -> dict:
    return make_dataset()


@pytest.fixture
def source(dataset: dict) -> InMemorySource:
    return InMemorySource({VERSION: dataset})


@pytest.fixture
def store(source: InMemorySource) -> RecordStore:
    return RecordStore(source)


@pytest.fixture
def catalog(store: RecordStore):
    return store.catalog(VERSION)


@pytest.fixture
def labels() -> LabelResolver:
    return LabelResolver.default()


@pytest.fixture
def browser(store: RecordStore, labels: LabelResolver) -> CharaBrowser:
    return CharaBrowser(store, VERSION, labels=labels, locale="en")


@pytest.fixture
def chara(catalog):
    """Build a Character from a chara id in the dataset, optionally as a variant."""
    from elin_codex.models.character import Character

    def _make(chara_id: str, variant: str | None = None) -> Character:
        row = catalog.chara_row_by_id(chara_id)
        assert row is not None, f"unknown chara {chara_id}"
        return Character(row, catalog, variant)

    return _make
