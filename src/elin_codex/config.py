"""
Configuration model and environment loading for the codex.
"""

import logging
import os
from pathlib import Path

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

logger = logging.getLogger("elin-codex")

SUPPORTED_LOCALES = ("ja", "en")

ENV_PREFIX = "ELIN_CODEX_"


class CodexConfig(BaseModel):
    """Settings for loading game data and building characters.

    Controls where CSV snapshots live, which data version and locale are used
    when the caller does not pass one, and whether raw passthrough columns are
    offered as searchable fields.
    """

    data_dir: Path = Field(
        default=Path("db"),
        description="Directory containing one sub-directory of CSV tables per data version"
    )
    default_version: str = Field(
        default="latest",
        description="Data version tag used when none is given"
    )
    default_locale: str = Field(
        default="ja",
        description="Locale used for display names: ja or en"
    )
    include_raw_fields: bool = Field(
        default=True,
        description="Whether chara./race./job./tactics. raw columns are searchable"
    )
    log_level: str = Field(
        default="INFO",
        description="Logging level name for the elin-codex logger"
    )

    @field_validator("default_locale")
    @classmethod
    def validate_locale(cls, v: str) -> str:
        """Ensure the default locale is one the name functions support."""
        normalized = v.strip().lower()
        if normalized not in SUPPORTED_LOCALES:
            raise ValueError(
                f"default_locale must be one of: {', '.join(SUPPORTED_LOCALES)}"
            )
        return normalized

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Ensure log_level names a standard logging level."""
        normalized = v.strip().upper()
        if not isinstance(logging.getLevelName(normalized), int):
            raise ValueError(f"Unknown log level: {v}")
        return normalized

    @field_validator("default_version")
    @classmethod
    def validate_version(cls, v: str) -> str:
        """Version tags name a directory, so they cannot be blank."""
        if not v.strip():
            raise ValueError("default_version cannot be empty")
        return v.strip()


def load_config(env_file: Path | str | None = None) -> CodexConfig:
    """Build a CodexConfig from a .env file and ELIN_CODEX_* variables.

    Args:
        env_file: Optional path to a .env file. Defaults to dotenv's lookup.

    Returns:
        CodexConfig populated from the environment, defaults for the rest
    """
    if not load_dotenv(env_file):
        logger.debug("No .env file loaded, using process environment only")

    values: dict[str, str] = {}
    for field_name in CodexConfig.model_fields:
        raw = os.getenv(ENV_PREFIX + field_name.upper())
        if raw is not None and raw != "":
            values[field_name] = raw

    config = CodexConfig(**values)
    logger.debug(f"Loaded config: data_dir={config.data_dir}, version={config.default_version}")
    return config


def configure_logging(level: str | int = "INFO") -> logging.Logger:
    """Configure root logging and return the codex logger."""
    logging.basicConfig(level=level)
    codex_logger = logging.getLogger("elin-codex")
    codex_logger.setLevel(level)
    return codex_logger
