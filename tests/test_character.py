"""
Unit tests for Character stat derivation.
"""

import pytest

from elin_codex.data.rows import Row
from elin_codex.exceptions import MissingReferenceError
from elin_codex.models.catalog import GameCatalog
from elin_codex.models.character import Ability, Character

from conftest import make_chara_def


def build(catalog: GameCatalog, **overrides) -> Character:
    return Character(Row(make_chara_def(**overrides)), catalog)


class TestDefaults:
    """Test fallbacks for race, job and tactics."""

    def test_default_race_and_job(self, chara) -> None:
        putit = chara("putit")
        assert putit.race.id == "norland"
        assert putit.job().id == "none"

    def test_unknown_race_raises(self, catalog: GameCatalog) -> None:
        with pytest.raises(MissingReferenceError) as exc_info:
            build(catalog, race="elf")
        assert exc_info.value.kind == "race"
        assert exc_info.value.ref_id == "elf"

    def test_unknown_job_raises_on_access(self, catalog: GameCatalog) -> None:
        character = build(catalog, job="paladin")
        with pytest.raises(MissingReferenceError, match="paladin"):
            character.job()


class TestTactics:
    """Test the tactics resolution chain and overrides."""

    def test_falls_back_to_chara_id(self, chara) -> None:
        assert chara("putit").tactics().id == "putit"

    def test_falls_back_to_job_id(self, chara) -> None:
        bob = chara("bob")
        assert bob.tactics().id == "warrior"
        assert bob.tactics().uses_party_buff()

    def test_falls_back_to_predator(self, chara) -> None:
        assert chara("kaze").tactics().id == "predator"

    def test_row_tactics_wins(self, catalog: GameCatalog) -> None:
        character = build(catalog, id="putit", tactics="warrior")
        assert character.tactics().id == "warrior"

    def test_ai_param_overrides(self, chara) -> None:
        bob = chara("bob")
        assert bob.tactics_distance() == 5
        assert bob.tactics_move_frequency() == 25

    def test_without_ai_param_uses_tactics(self, chara) -> None:
        putit = chara("putit")
        assert putit.tactics_distance() == 4
        assert putit.tactics_move_frequency() == 90


class TestStats:
    """Test stats summed from race base values and elements."""

    def test_putit(self, chara) -> None:
        putit = chara("putit")
        assert putit.life() == 110
        assert putit.mana() == 90
        assert putit.speed() == 70
        assert putit.get_element_power("resFire") == 2
        assert putit.level() == 3

    def test_bob_speed_includes_job_delta(self, chara) -> None:
        assert chara("bob").speed() == 95

    def test_bob_defensive_stats(self, chara) -> None:
        bob = chara("bob")
        assert bob.life() == 80
        assert bob.dv() == 12
        assert bob.pv() == 4
        assert bob.pdr() == 3
        assert bob.edr() == 2
        assert bob.ep() == 1

    def test_ep_counts_perfect_evasion_elements(self, catalog: GameCatalog) -> None:
        character = build(catalog, elements="evasionPerfect/4,DV/3")
        assert character.ep() == 4
        assert character.dv() == 13

    def test_skills_sum_race_and_job(self, chara) -> None:
        bob = chara("bob")
        assert bob.get_element_power("weaponSword") == 3
        assert [s.alias for s in bob.skills()] == ["weaponSword", "evasion", "weaponSword"]

    def test_primary_attributes(self, chara) -> None:
        bob = chara("bob")
        attributes = {a.alias: a.power for a in bob.primary_attributes()}
        assert list(attributes) == ["STR", "END", "DEX", "PER", "LER", "WIL", "MAG", "CHA"]
        assert attributes["STR"] == 3
        assert attributes["MAG"] == 5
        assert attributes["END"] == 0

    def test_resistances_cover_every_attack_element(self, chara) -> None:
        bob = chara("bob")
        resistances = [(r.alias, r.power) for r in bob.resistances()]
        assert resistances == [("resFire", 0), ("resCold", 10), ("resLightning", 0)]

    def test_feats_negations_others(self, chara) -> None:
        bob = chara("bob")
        assert [f.alias for f in bob.feats()] == ["featRoran", "featGeneSlot"]
        assert [n.alias for n in bob.negations()] == ["negPoison"]
        assert [o.alias for o in bob.others()] == ["seeInvisible"]

    def test_gene_slot(self, chara) -> None:
        assert chara("bob").gene_slot() == (4, 5)
        assert chara("putit").gene_slot() == (3, 3)

    def test_element_order_is_own_then_race_then_job(self, chara) -> None:
        aliases = [e.alias for e in chara("bob").elements()]
        assert aliases.index("featRoran") < aliases.index("featGeneSlot")
        assert aliases[-1] == "STR"

    def test_power_lookup_is_stable(self, chara) -> None:
        spirit = chara("spirit")
        first = spirit.get_element_power("resFire")
        assert spirit.get_element_power("resFire") == first
        assert spirit.life() == spirit.life()

    def test_body_parts(self, chara) -> None:
        bob = chara("bob")
        assert bob.body_parts()["hand"] == 1
        assert bob.total_body_parts() == 3
        assert chara("putit").total_body_parts() == 11


class TestAbilities:
    """Test actCombat parsing."""

    def test_spirit_abilities(self, chara) -> None:
        abilities = chara("spirit", "eleFire").abilities()
        assert abilities == [
            Ability(name="ActBolt_", chance=40, party=False, element="eleFire"),
            Ability(name="SpBreath_", chance=30, party=True, element="eleCold"),
            Ability(name="ActMelee", chance=100, party=False, element=None),
        ]

    def test_bare_suffix_follows_variant_element(self, chara) -> None:
        abilities = chara("spirit", "eleCold").abilities()
        assert abilities[0].element == "eleCold"

    def test_no_actions(self, chara) -> None:
        assert chara("putit").abilities() == []
