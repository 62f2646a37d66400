"""
Unit tests for the curve and resistance formulas.
"""

import pytest

from elin_codex.numeric import (
    AttackModifiers,
    CurveParams,
    calculate_curve_range,
    calculate_effective_resistance,
    compact_resistance,
    curve,
    curve_with_params,
    curve_with_steps,
    resistance_label_key,
)


class TestCurve:
    """Test the stepwise damping curve."""

    def test_below_start_is_unchanged(self) -> None:
        assert curve(8, 10, 10, 75) == 8
        assert curve(10, 10, 10, 75) == 10

    def test_damped_value(self) -> None:
        assert curve(50, 10, 10, 75) == 33

    def test_params_wrapper(self) -> None:
        assert curve_with_params(50, CurveParams(start=10, step=10, rate=75)) == 33

    def test_steps_are_recorded(self) -> None:
        result = curve_with_steps(50, CurveParams(10, 10, 75))
        assert result.output == 33
        assert result.reduction == 17
        assert [s.applied for s in result.steps] == [True, True, True, False]
        assert [s.output_value for s in result.steps] == [40, 35, 33, 33]

    def test_steps_below_start(self) -> None:
        result = curve_with_steps(5, CurveParams(10, 10, 75))
        assert result.output == 5
        assert result.steps == []
        assert result.to_dict()["reduction"] == 0

    def test_range(self) -> None:
        rows = calculate_curve_range(CurveParams(10, 10, 75), 9, 12)
        assert [r["output"] for r in rows] == [9, 10, 10, 11]
        assert rows[-1] == {"input": 12, "output": 11, "reduction": 1}


class TestResistance:
    """Test resistance levels, penetration and labels."""

    @pytest.mark.parametrize("base,penetration,expected", [
        (15, 0, 3),
        (15, 2, 1),
        (25, 0, 4),
        (4, 0, 0),
        (5, 3, 0),
        (-7, 2, -2),
    ])
    def test_effective_resistance(self, base, penetration, expected) -> None:
        assert calculate_effective_resistance(base, penetration) == expected

    def test_penetration_level(self) -> None:
        assert AttackModifiers().penetration_level == 0
        assert AttackModifiers(is_sword=True, is_feat_elder=True).penetration_level == 3
        assert AttackModifiers(is_feat_elder=True, is_feat_zodiac=True).penetration_level == 2

    @pytest.mark.parametrize("value,key", [
        (-12, "resistanceDefect"),
        (-5, "resistanceWeakness"),
        (-3, "resistanceNone"),
        (0, "resistanceNone"),
        (5, "resistanceNormal"),
        (12, "resistanceStrong"),
        (15, "resistanceSuperb"),
        (30, "resistanceImmunity"),
    ])
    def test_label_key(self, value, key) -> None:
        assert resistance_label_key(value) == key

    def test_label_keys_exist(self, labels) -> None:
        for value in (-12, -5, 0, 5, 12, 15, 30):
            assert labels.has(resistance_label_key(value))

    def test_compact_resistance(self) -> None:
        assert compact_resistance(5) == "+5"
        assert compact_resistance(-3) == "-3"
        assert compact_resistance(0) == "0"
        assert compact_resistance(2.5) == "+2.5"
