"""
Evaluates search conditions and condition trees against characters.
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from typing import Any

from ..data.labels import LabelResolver
from ..models.character import Character
from .fields import FieldValue, get_field_value
from .models import (
    ConditionGroup,
    ConditionNode,
    Logic,
    SearchCondition,
    SearchOperator,
    SearchState,
)

_HIRAGANA_START = 0x3041
_HIRAGANA_END = 0x3096
_KATAKANA_OFFSET = 0x60

_EMPTY_OPERATORS = (SearchOperator.EMPTY, SearchOperator.NOT_EMPTY)

_COMPARISON_OPERATORS = frozenset({
    SearchOperator.GTE,
    SearchOperator.LTE,
    SearchOperator.EQ,
    SearchOperator.NEQ,
    SearchOperator.GT,
    SearchOperator.LT,
    SearchOperator.BETWEEN,
})


def normalize_for_search(text: str) -> str:
    """Lowercase and fold Hiragana into Katakana.

    Example:
        >>> normalize_for_search("かぜ") == normalize_for_search("カゼ")
        True
    """
    return "".join(
        chr(ord(ch) + _KATAKANA_OFFSET) if _HIRAGANA_START <= ord(ch) <= _HIRAGANA_END else ch
        for ch in text.lower()
    )


def is_condition_complete(condition: SearchCondition) -> bool:
    """Whether a condition is filled in enough to filter anything.

    Incomplete conditions (no field, no value, or a between range left at
    ``[0, 0]``) match every character.
    """
    if not condition.field:
        return False

    if condition.operator in _EMPTY_OPERATORS:
        return True

    if condition.operator == SearchOperator.BETWEEN:
        value = condition.value
        return (
            isinstance(value, (tuple, list))
            and len(value) == 2
            and not (value[0] == 0 and value[1] == 0)
        )

    return condition.value is not None and condition.value != ""


def _is_empty(value: FieldValue) -> bool:
    # A stat of 0 reads as "none" in game terms.
    return value is None or value == "" or value == 0


def _to_number(value: Any) -> float:
    if isinstance(value, bool):
        return float(value)
    if isinstance(value, (int, float)):
        return float(value)
    try:
        return float(str(value).strip())
    except (TypeError, ValueError):
        return math.nan


def _compare(value: FieldValue, operator: SearchOperator, target: Any) -> bool:
    if value is None:
        number = 0.0
    elif isinstance(value, (int, float)):
        number = float(value)
    else:
        number = _to_number(value)

    if operator == SearchOperator.BETWEEN:
        if isinstance(target, (tuple, list)) and len(target) == 2:
            low, high = _to_number(target[0]), _to_number(target[1])
            return low <= number <= high
        return False

    target_number = _to_number(target)
    if math.isnan(target_number):
        return False

    if operator == SearchOperator.GTE:
        return number >= target_number
    if operator == SearchOperator.LTE:
        return number <= target_number
    if operator == SearchOperator.EQ:
        return number == target_number
    if operator == SearchOperator.NEQ:
        return number != target_number
    if operator == SearchOperator.GT:
        return number > target_number
    if operator == SearchOperator.LT:
        return number < target_number
    return False


def _match_text(value: str, operator: SearchOperator, target: Any) -> bool:
    haystack = normalize_for_search(value)
    needle = normalize_for_search(str(target))

    if operator == SearchOperator.CONTAINS:
        return needle in haystack
    if operator == SearchOperator.NOT_CONTAINS:
        return needle not in haystack
    if operator == SearchOperator.EQUALS:
        return haystack == needle
    if operator == SearchOperator.NOT_EQUALS:
        return haystack != needle
    if operator == SearchOperator.STARTS_WITH:
        return haystack.startswith(needle)
    if operator == SearchOperator.ENDS_WITH:
        return haystack.endswith(needle)
    return False


def evaluate_value(value: FieldValue, condition: SearchCondition) -> bool:
    """Test an already-read field value against a condition."""
    if not is_condition_complete(condition):
        return True

    operator = condition.operator
    if operator == SearchOperator.EMPTY:
        return _is_empty(value)
    if operator == SearchOperator.NOT_EMPTY:
        return not _is_empty(value)

    if operator in _COMPARISON_OPERATORS:
        return _compare(value, operator, condition.value)

    if isinstance(value, str):
        return _match_text(value, operator, condition.value)
    return False


def evaluate_condition(
    character: Character,
    raw_row: Mapping[str, Any] | None,
    condition: SearchCondition,
    locale: str,
    labels: LabelResolver,
) -> bool:
    """Evaluate one condition against one character."""
    if not is_condition_complete(condition):
        return True
    value = get_field_value(character, raw_row, condition.field, locale, labels)
    return evaluate_value(value, condition)


def evaluate(
    character: Character,
    raw_row: Mapping[str, Any] | None,
    node: ConditionNode,
    locale: str,
    labels: LabelResolver,
) -> bool:
    """Evaluate a condition or a group, recursively.

    An empty group is true; otherwise AND needs every child, OR any child.
    """
    if isinstance(node, ConditionGroup):
        if not node.conditions:
            return True
        results = (evaluate(character, raw_row, child, locale, labels) for child in node.conditions)
        if node.logic == Logic.AND:
            return all(results)
        return any(results)
    return evaluate_condition(character, raw_row, node, locale, labels)


def evaluate_search(
    character: Character,
    raw_row: Mapping[str, Any] | None,
    state: SearchState | None,
    locale: str,
    labels: LabelResolver,
) -> bool:
    """Evaluate a whole search. A missing, disabled or empty search matches everything."""
    if state is None or not state.enabled or not state.conditions:
        return True
    return evaluate(character, raw_row, state.root, locale, labels)
