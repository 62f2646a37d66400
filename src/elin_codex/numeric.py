"""
Closed-form game formulas: the diminishing-returns curve and resistance levels.
"""

from __future__ import annotations

import math
from dataclasses import asdict, dataclass, field

CURVE_MAX_STEPS = 10

RESISTANCE_LEVEL_SIZE = 5
RESISTANCE_CAP = 20

SWORD_PENETRATION = 2
ELDER_PENETRATION = 1
ZODIAC_PENETRATION = 1


@dataclass(frozen=True)
class CurveParams:
    """Parameters of the curve: where damping starts, step width, rate in percent."""
    start: float
    step: float
    rate: float


@dataclass(frozen=True)
class CurveStep:
    step_number: int
    threshold: float
    input_value: float
    output_value: float
    applied: bool


@dataclass
class CurveResult:
    input: float
    output: float
    reduction: float
    steps: list[CurveStep] = field(default_factory=list)

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return asdict(self)


def curve(a: float, start: float, step: float, rate: float) -> float:
    """Damp ``a`` above ``start`` in up to ten steps of width ``step``.

    At step i the threshold is ``start + i * step``; while ``a`` exceeds it,
    ``a`` becomes ``floor(threshold + (a - threshold) * rate / 100)``.

    Example:
        >>> curve(50, 10, 10, 75)
        33
        >>> curve(8, 10, 10, 75)
        8
    """
    if a <= start:
        return a

    for i in range(CURVE_MAX_STEPS):
        threshold = start + i * step
        if a > threshold:
            a = math.floor(threshold + (a - threshold) * rate / 100)
            continue
        return a
    return a


def curve_with_params(a: float, params: CurveParams) -> float:
    return curve(a, params.start, params.step, params.rate)


def curve_with_steps(a: float, params: CurveParams) -> CurveResult:
    """Run the curve and record every step, including the final non-applied one."""
    if a <= params.start:
        return CurveResult(input=a, output=a, reduction=0)

    steps: list[CurveStep] = []
    current = a
    for i in range(CURVE_MAX_STEPS):
        threshold = params.start + i * params.step
        if current > threshold:
            new_value = math.floor(threshold + (current - threshold) * params.rate / 100)
            steps.append(CurveStep(i, threshold, current, new_value, True))
            current = new_value
        else:
            steps.append(CurveStep(i, threshold, current, current, False))
            break

    return CurveResult(input=a, output=current, reduction=a - current, steps=steps)


def calculate_curve_range(params: CurveParams, range_start: int, range_end: int) -> list[dict]:
    """Apply the curve to every integer in ``[range_start, range_end]``."""
    results = []
    for value in range(range_start, range_end + 1):
        output = curve_with_params(value, params)
        results.append({"input": value, "output": output, "reduction": value - output})
    return results


@dataclass(frozen=True)
class AttackModifiers:
    """Attacker-side sources of resistance penetration."""
    is_sword: bool = False
    is_feat_elder: bool = False
    is_feat_zodiac: bool = False

    @property
    def penetration_level(self) -> int:
        level = 0
        if self.is_sword:
            level += SWORD_PENETRATION
        if self.is_feat_elder:
            level += ELDER_PENETRATION
        if self.is_feat_zodiac:
            level += ZODIAC_PENETRATION
        return level


def calculate_effective_resistance(base_resistance: float, penetration_level: int = 0) -> int:
    """Resistance level after penetration.

    Resistance is counted in levels of 5 points, capped at 20 (level 4).
    Penetration lowers the level but not below 0. Negative resistance
    (a weakness) is returned as its raw level and ignores penetration.

    Example:
        >>> calculate_effective_resistance(15, penetration_level=2)
        1
        >>> calculate_effective_resistance(-7, penetration_level=2)
        -2
    """
    level = math.floor(min(base_resistance, RESISTANCE_CAP) / RESISTANCE_LEVEL_SIZE)
    if base_resistance < 0:
        return level
    return max(0, level - penetration_level)


def resistance_label_key(value: float) -> str:
    """Label key (common namespace) describing a resistance value."""
    if value <= -10:
        return "resistanceDefect"
    if value <= -5:
        return "resistanceWeakness"
    if value == 0:
        return "resistanceNone"
    if value >= 20:
        return "resistanceImmunity"
    if value >= 15:
        return "resistanceSuperb"
    if value >= 10:
        return "resistanceStrong"
    if value >= 5:
        return "resistanceNormal"
    return "resistanceNone"


def compact_resistance(value: float) -> str:
    """Signed resistance for table cells: ``+5``, ``-3``, ``0``."""
    if value > 0:
        return f"+{value:g}"
    if value < 0:
        return f"{value:g}"
    return "0"
