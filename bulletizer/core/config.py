"""
Configuration management for the Transcript Bulletizer.

This module holds the fixed pipeline constants (``BulletizerSettings``) and the
environment-driven runtime options. Environment files are loaded explicitly via
python-dotenv; no implicit loading occurs at import time.
"""

import os
from functools import lru_cache
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, ValidationError


class ConfigError(Exception):
    """Raised when configuration is invalid or missing."""

    pass


class BulletizerSettings(BaseModel):
    """
    Numeric constants shared by the pipeline stages.

    Every stage receives these explicitly; the defaults reproduce the tuned
    thresholds and must stay fixed for output parity.
    """

    model_config = ConfigDict(frozen=True)

    min_clause_words: int = Field(default=4, ge=1, description="Minimum words for a sentence or clause to be kept")
    min_cleaned_chars: int = Field(default=12, ge=0, description="Cleaned text shorter than this takes the single-bullet path")
    max_sentence_words: int = Field(default=3000, ge=1, description="Words considered for sentence segmentation")
    max_bullet_words: int = Field(default=18, ge=2, description="Hard cap on words per bullet")
    max_bullets: int = Field(default=15, ge=1, description="Upper bound on the adaptive bullet count")
    min_clause_score: float = Field(default=-2.0, description="Score a clause needs to be a selection candidate")
    ellipsis: str = Field(default="…", description="Marker appended to truncated bullets")


DEFAULT_SETTINGS = BulletizerSettings()

ENV_FILE_ENV_VAR = "BZ_ENV_FILE"


@lru_cache(maxsize=32)
def load_config(env_path: Optional[str] = None, override: bool = False) -> None:
    """Explicitly load environment variables from the given .env file path.

    Notes:
    - This function does NOT perform implicit loading when env_path is None.
    - Callers pass the path from ``--env-file`` or ``BZ_ENV_FILE``.
    """
    if env_path:
        load_dotenv(dotenv_path=env_path, override=override)


def load_env_file(env_path: Optional[str] = None, override: bool = False) -> Optional[str]:
    """
    Load an environment file given explicitly or through BZ_ENV_FILE.

    Args:
        env_path: Explicit path; takes precedence over BZ_ENV_FILE
        override: Whether values in the file override the current environment

    Returns:
        The path that was loaded, or None if nothing was loaded

    Raises:
        ConfigError: If an explicitly requested file does not exist
    """
    path = env_path or os.getenv(ENV_FILE_ENV_VAR)
    if not path:
        return None
    if not os.path.isfile(path):
        raise ConfigError(f"Environment file not found: {path}")
    load_config(path, override=override)
    return path


class Config:
    """Runtime configuration read from the environment."""

    @property
    def debug(self) -> bool:
        """Whether debug diagnostics are enabled (BZ_DEBUG=1)."""
        return os.getenv("BZ_DEBUG") == "1"

    @property
    def log_level(self) -> str:
        """Get the log level for the CLI (default: WARNING)."""
        return os.getenv("BZ_LOG_LEVEL", "WARNING").upper()

    def settings(self) -> BulletizerSettings:
        """
        Build pipeline settings, applying supported environment overrides.

        Recognised variables: BZ_MAX_BULLET_WORDS, BZ_MAX_BULLETS, BZ_MIN_CLAUSE_SCORE.

        Raises:
            ConfigError: If an override is not a valid value
        """
        overrides = {}
        for var, field in (
            ("BZ_MAX_BULLET_WORDS", "max_bullet_words"),
            ("BZ_MAX_BULLETS", "max_bullets"),
            ("BZ_MIN_CLAUSE_SCORE", "min_clause_score"),
        ):
            value = os.getenv(var)
            if value is not None and value.strip():
                overrides[field] = value.strip()

        if not overrides:
            return DEFAULT_SETTINGS

        try:
            return BulletizerSettings(**{**DEFAULT_SETTINGS.model_dump(), **overrides})
        except ValidationError as e:
            raise ConfigError(f"Invalid bulletizer settings in environment: {e}")


# Global config instance
config = Config()
