"""
elin-codex - derived character stats and advanced search for the Elin game database.
"""

from .browser import CharaBrowser, FeatHolders
from .config import CodexConfig, configure_logging, load_config
from .exceptions import (
    CodexError,
    DataIntegrityError,
    MissingReferenceError,
    RowSourceError,
    UnsupportedLocaleError,
)
from .store import RecordStore

__version__ = "0.1.0"

__all__ = [
    "CharaBrowser",
    "FeatHolders",
    "CodexConfig",
    "configure_logging",
    "load_config",
    "CodexError",
    "DataIntegrityError",
    "MissingReferenceError",
    "RowSourceError",
    "UnsupportedLocaleError",
    "RecordStore",
]
