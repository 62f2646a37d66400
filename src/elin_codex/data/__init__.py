"""
Game data loading: rows, table row models, row sources and UI labels.
"""

from .labels import LabelEntry, LabelResolver
from .rows import Row
from .schemas import (
    ROW_MODELS,
    CharaRow,
    ElementRow,
    JobRow,
    RaceRow,
    TableName,
    TableRow,
    TacticsRow,
    row_model_for,
)
from .sources import CsvDirectorySource, InMemorySource, RowSource, load_rows, parse_row

__all__ = [
    "LabelEntry",
    "LabelResolver",
    "Row",
    "ROW_MODELS",
    "CharaRow",
    "ElementRow",
    "JobRow",
    "RaceRow",
    "TableName",
    "TableRow",
    "TacticsRow",
    "row_model_for",
    "CsvDirectorySource",
    "InMemorySource",
    "RowSource",
    "load_rows",
    "parse_row",
]
