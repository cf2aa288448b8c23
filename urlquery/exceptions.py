"""Exception hierarchy for urlquery.

Conversion failures are not wrapped: a non-numeric value handed to
``IntConverter`` surfaces as the ``ValueError`` raised by ``int()``.
"""

from typing import Optional


class UrlQueryError(Exception):
    """Base for all urlquery-specific errors."""


class ConfigurationError(UrlQueryError):
    """Raised when a query parameter is registered without a converter.

    Args:
        message: Human readable description
        url_key: URL key of the offending registration
    """

    def __init__(self, message: str, url_key: Optional[str] = None):
        self.url_key = url_key
        super().__init__(message)


class UrlParseError(UrlQueryError, ValueError):
    """Raised by strict URL parsing when the input is not a usable URL."""

    def __init__(self, message: str, url: str = ""):
        self.url = url
        super().__init__(message)


__all__ = ["UrlQueryError", "ConfigurationError", "UrlParseError"]
