"""Runtime configuration for urlquery.

Settings are read from environment variables once and cached. Call
``reset_settings()`` after changing the environment (mostly useful in tests).

Environment Variables:
    URLQUERY_ARRAY_DELIMITER: Separator used by the array converters (default: ";")
    URLQUERY_STRICT_URL_PARSING: Reject URLs without a host (default: "false")
    URLQUERY_LOG_LEVEL: Level applied by ``configure_logging`` (default: "WARNING")
"""

import logging
import os
from typing import Optional

from pydantic import BaseModel, Field, field_validator

logger = logging.getLogger(__name__)


class UrlQuerySettings(BaseModel):
    """Configuration model for urlquery.

    Attributes:
        array_delimiter: Separator joining array values in a single parameter
        strict_url_parsing: Raise ``UrlParseError`` for URLs with no host
        log_level: Name of the level for the ``urlquery`` logger
    """

    array_delimiter: str = Field(default=";", min_length=1)
    strict_url_parsing: bool = False
    log_level: str = "WARNING"

    @field_validator("log_level")
    @classmethod
    def _normalize_level(cls, value: str) -> str:
        name = value.strip().upper()
        if not isinstance(logging.getLevelName(name), int):
            raise ValueError(f"Invalid log level: {value}")
        return name


_settings: Optional[UrlQuerySettings] = None


def get_settings() -> UrlQuerySettings:
    """Get the process-wide settings, reading the environment on first use.

    Returns:
        Cached UrlQuerySettings instance
    """
    global _settings
    if _settings is None:
        _settings = UrlQuerySettings(
            array_delimiter=os.getenv("URLQUERY_ARRAY_DELIMITER", ";"),
            strict_url_parsing=os.getenv(
                "URLQUERY_STRICT_URL_PARSING", "false"
            ).lower()
            == "true",
            log_level=os.getenv("URLQUERY_LOG_LEVEL", "WARNING"),
        )
        logger.debug(f"Loaded urlquery settings: {_settings.model_dump()}")
    return _settings


def reset_settings() -> None:
    """Drop the cached settings so the next access re-reads the environment."""
    global _settings
    _settings = None


def configure_logging(level: Optional[str] = None) -> None:
    """Apply a log level to the ``urlquery`` logger hierarchy.

    Args:
        level: Level name; defaults to the configured ``log_level``
    """
    level_name = (level or get_settings().log_level).upper()
    logging.getLogger("urlquery").setLevel(level_name)


__all__ = [
    "UrlQuerySettings",
    "get_settings",
    "reset_settings",
    "configure_logging",
]
