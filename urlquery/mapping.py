"""Serialization of registered objects to and from query strings.

Examples:
    >>> class Page:
    ...     number: int = query_param(IntConverter, default=1, url_key="p")
    ...     title: str = query_param(StringConverter)
    >>> to_query_string(Page())
    'p=1'
    >>> from_query_string("p=3&title=home", Page).number
    3
"""

import logging
from typing import Any, Dict, Mapping, Type, TypeVar

from urlquery.registry import get_query_params
from urlquery.url import dict_to_query_string, query_string_to_dict

logger = logging.getLogger(__name__)

T = TypeVar("T")


def to_query_mapping(query: Any) -> Dict[str, Any]:
    """Convert a registered object to a plain dictionary.

    Read-only parameters are never included. Each converter decides whether
    its key appears at all.

    Args:
        query: Object to serialize

    Returns:
        New dictionary keyed by URL key, in registration order
    """
    result: Dict[str, Any] = {}
    for param in get_query_params(query):
        if param.read_only:
            continue
        if param.converter is None:
            logger.warning(f"Skipping query param '{param.url_key}' without converter")
            continue
        param.converter.to_query(query, result, param)
    return result


def to_query_string(query: Any) -> str:
    """Convert a registered object to a query string (not percent-encoded)."""
    return dict_to_query_string(to_query_mapping(query))


def from_query_mapping(query: Mapping[str, Any], result_type: Type[T]) -> T:
    """Create an object of ``result_type`` from a parsed query.

    ``result_type`` is instantiated without arguments. Fields whose key is
    missing keep their default value.

    Args:
        query: Parameters from the URL
        result_type: Class to instantiate

    Returns:
        New instance populated from ``query``

    Raises:
        ValueError: If a present value cannot be converted
    """
    result = result_type()
    for param in get_query_params(result_type):
        if param.converter is None:
            logger.warning(f"Skipping query param '{param.url_key}' without converter")
            continue
        param.converter.from_query(query, result, param)
    return result


def from_query_string(query: str, result_type: Type[T]) -> T:
    """Create an object of ``result_type`` from a raw query string."""
    logger.debug(f"Reading {result_type.__name__} from query {query!r}")
    return from_query_mapping(query_string_to_dict(query), result_type)


__all__ = [
    "to_query_mapping",
    "to_query_string",
    "from_query_mapping",
    "from_query_string",
]
