"""
Advanced search: field catalog, condition trees, evaluation and URL tokens.
"""

from .codec import deserialize_search, serialize_search
from .evaluator import (
    evaluate,
    evaluate_condition,
    evaluate_search,
    evaluate_value,
    is_condition_complete,
    normalize_for_search,
)
from .fields import (
    TACTICS_FIELDS,
    RawFieldsInfo,
    get_field_info_list,
    get_field_value,
    raw_fields_info,
)
from .models import (
    NUMERIC_OPERATORS,
    TEXT_OPERATORS,
    ConditionGroup,
    FieldCategory,
    FieldInfo,
    FieldOption,
    Logic,
    SearchCondition,
    SearchOperator,
    SearchState,
    ValueType,
    create_empty_search_state,
    create_new_condition,
    create_new_group,
    extract_selected_fields,
    operators_for,
)

__all__ = [
    "deserialize_search",
    "serialize_search",
    "evaluate",
    "evaluate_condition",
    "evaluate_search",
    "evaluate_value",
    "is_condition_complete",
    "normalize_for_search",
    "TACTICS_FIELDS",
    "RawFieldsInfo",
    "get_field_info_list",
    "get_field_value",
    "raw_fields_info",
    "NUMERIC_OPERATORS",
    "TEXT_OPERATORS",
    "ConditionGroup",
    "FieldCategory",
    "FieldInfo",
    "FieldOption",
    "Logic",
    "SearchCondition",
    "SearchOperator",
    "SearchState",
    "ValueType",
    "create_empty_search_state",
    "create_new_condition",
    "create_new_group",
    "extract_selected_fields",
    "operators_for",
]
