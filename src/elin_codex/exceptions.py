"""
Exception hierarchy for the codex.

Reference failures are fatal: they mean the loaded dataset is internally
inconsistent and the current build should stop. Soft failures (bad search
tokens, non-numeric cells) never raise and are not represented here.
"""

from __future__ import annotations

from typing import Any


class CodexError(Exception):
    """Base exception for all codex errors.

    Attributes:
        message: Human-readable error message
        details: Optional dictionary of additional error context
    """

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class MissingReferenceError(CodexError):
    """A row references a race, job, element or tactics that does not exist.

    Attributes:
        kind: What was being resolved ("race", "job", "element", "tactics")
        ref_id: The id or alias that failed to resolve
        chara_id: The character row that holds the reference, if any
    """

    def __init__(
        self,
        kind: str,
        ref_id: str,
        chara_id: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        message = f"{kind.capitalize()} not found: {ref_id}"
        if chara_id:
            message += f" (referenced by chara '{chara_id}')"
        super().__init__(message, details)
        self.kind = kind
        self.ref_id = ref_id
        self.chara_id = chara_id


class UnsupportedLocaleError(CodexError):
    """A locale other than the supported ones was requested."""

    def __init__(self, locale: str, details: dict[str, Any] | None = None):
        super().__init__(f"Unsupported locale: {locale}", details)
        self.locale = locale


class DataIntegrityError(CodexError):
    """Required data is present but malformed (e.g. an element without alt names)."""
    pass


class RowSourceError(CodexError):
    """A table could not be read, or one of its rows is missing required columns.

    Attributes:
        table: Name of the table being read
        version: Data version tag
    """

    def __init__(
        self,
        message: str,
        table: str,
        version: str,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message, details)
        self.table = table
        self.version = version
