"""
Data models for advanced search: conditions, groups and field descriptions.

A search is a tree: a ``ConditionGroup`` holds conditions and nested groups,
combined with AND or OR. Nodes are told apart by their ``type`` tag.
"""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field
from shortuuid import random

NODE_ID_LENGTH = 9


def new_node_id() -> str:
    return random(length=NODE_ID_LENGTH)


class SearchOperator(str, Enum):
    """Comparison operators. Which ones apply depends on the field's value type."""
    GTE = ">="
    LTE = "<="
    EQ = "="
    NEQ = "!="
    GT = ">"
    LT = "<"
    BETWEEN = "between"
    CONTAINS = "contains"
    NOT_CONTAINS = "not_contains"
    EQUALS = "equals"
    NOT_EQUALS = "not_equals"
    STARTS_WITH = "starts_with"
    ENDS_WITH = "ends_with"
    EMPTY = "empty"
    NOT_EMPTY = "not_empty"


class Logic(str, Enum):
    AND = "AND"
    OR = "OR"


class ValueType(str, Enum):
    NUMBER = "number"
    TEXT = "string"


class FieldCategory(str, Enum):
    KEY_INFO = "keyInfo"
    STATS = "stats"
    ATTRIBUTES = "attributes"
    SKILLS = "skills"
    RESISTANCES = "resistances"
    TACTICS = "tactics"
    RAW = "raw"


NUMERIC_OPERATORS: tuple[SearchOperator, ...] = (
    SearchOperator.GTE,
    SearchOperator.LTE,
    SearchOperator.EQ,
    SearchOperator.NEQ,
    SearchOperator.GT,
    SearchOperator.LT,
    SearchOperator.BETWEEN,
    SearchOperator.EMPTY,
    SearchOperator.NOT_EMPTY,
)

TEXT_OPERATORS: tuple[SearchOperator, ...] = (
    SearchOperator.CONTAINS,
    SearchOperator.NOT_CONTAINS,
    SearchOperator.EQUALS,
    SearchOperator.NOT_EQUALS,
    SearchOperator.STARTS_WITH,
    SearchOperator.ENDS_WITH,
    SearchOperator.EMPTY,
    SearchOperator.NOT_EMPTY,
)


def operators_for(value_type: ValueType) -> tuple[SearchOperator, ...]:
    """Operators a field of ``value_type`` accepts."""
    return NUMERIC_OPERATORS if value_type == ValueType.NUMBER else TEXT_OPERATORS


ConditionValue = Union[int, float, str, tuple[float, float], None]


class SearchCondition(BaseModel):
    """A single ``field operator value`` comparison."""
    type: Literal["condition"] = "condition"
    id: str = Field(default_factory=new_node_id)
    field: str = Field(default="", description="Field key from the field catalog")
    operator: SearchOperator = Field(default=SearchOperator.EQ)
    value: ConditionValue = Field(default="", description="Scalar, or [low, high] for between")


class ConditionGroup(BaseModel):
    """Conditions and nested groups joined with AND or OR."""
    type: Literal["group"] = "group"
    id: str = Field(default_factory=new_node_id)
    logic: Logic = Logic.AND
    conditions: list[ConditionNode] = Field(default_factory=list)


ConditionNode = Annotated[
    Union[SearchCondition, ConditionGroup],
    Field(discriminator="type"),
]

ConditionGroup.model_rebuild()


class SearchState(BaseModel):
    """The whole advanced search: a root group plus an on/off switch."""
    enabled: bool = False
    root: ConditionGroup = Field(default_factory=ConditionGroup)

    @property
    def logic(self) -> Logic:
        return self.root.logic

    @property
    def conditions(self) -> list[ConditionNode]:
        return self.root.conditions


class FieldOption(BaseModel):
    key: str
    display_name: str
    name_ja: str
    name_en: str


class FieldInfo(BaseModel):
    """A searchable field as offered to the UI."""
    key: str
    display_name: str
    name_ja: str
    name_en: str
    value_type: ValueType
    category: FieldCategory
    options: list[FieldOption] | None = None

    @property
    def operators(self) -> tuple[SearchOperator, ...]:
        return operators_for(self.value_type)


def create_new_condition(
    field: str = "",
    operator: SearchOperator = SearchOperator.EQ,
    value: ConditionValue = "",
) -> SearchCondition:
    return SearchCondition(field=field, operator=operator, value=value)


def create_new_group(logic: Logic = Logic.AND) -> ConditionGroup:
    return ConditionGroup(logic=logic)


def create_empty_search_state() -> SearchState:
    return SearchState(enabled=False, root=ConditionGroup(logic=Logic.AND))


def extract_selected_fields(state: SearchState) -> set[str]:
    """Every field key used by a condition anywhere in the tree."""
    fields: set[str] = set()

    def walk(nodes: list[ConditionNode]) -> None:
        for node in nodes:
            if isinstance(node, ConditionGroup):
                walk(node.conditions)
            elif node.field:
                fields.add(node.field)

    walk(state.conditions)
    return fields
