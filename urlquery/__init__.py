"""
urlquery - Typed objects to and from URL query strings.

Mark attributes of a class as query parameters, each with a converter, and
read or write whole objects from or to a query string.

Main Exports:
    Registration:
        - query_param: Declare a query parameter in a class body
        - register_query_param: Register a field explicitly
        - QueryParamConfig: Optional url_key / read_only settings
        - UrlQueryMixin: Adds to_/from_query_string methods

    Converters:
        - StringConverter, IntConverter, BoolConverter, IsoDateConverter
        - IntArrayConverter, StringArrayConverter

    Mapping:
        - to_query_mapping / to_query_string
        - from_query_mapping / from_query_string

    URLs:
        - Url: URL decomposition
        - query_string_to_dict / dict_to_query_string

Example:
    >>> from urlquery import IntConverter, query_param, to_query_string
    >>>
    >>> class Page:
    ...     number: int = query_param(IntConverter, default=1, url_key="p")
    >>>
    >>> to_query_string(Page())
    'p=1'
"""

__version__ = "0.1.0"

from .array_util import are_equal, primitive_comparison
from .config import UrlQuerySettings, configure_logging, get_settings
from .converters import (
    BoolConverter,
    IntArrayConverter,
    IntConverter,
    IsoDateConverter,
    StringArrayConverter,
    StringConverter,
    UrlConverter,
)
from .exceptions import ConfigurationError, UrlParseError, UrlQueryError
from .file_reader import AsyncFileReader, FileReaderResult
from .mapping import (
    from_query_mapping,
    from_query_string,
    to_query_mapping,
    to_query_string,
)
from .mixins import UrlQueryMixin
from .registry import (
    QueryParam,
    QueryParamConfig,
    QueryParamMetadata,
    get_query_params,
    query_param,
    register_query_param,
)
from .url import (
    Url,
    decode_query_string,
    dict_to_query_string,
    parse_url,
    query_string_to_dict,
)

__all__ = [
    # Registration
    "QueryParam",
    "QueryParamConfig",
    "QueryParamMetadata",
    "UrlQueryMixin",
    "get_query_params",
    "query_param",
    "register_query_param",
    # Converters
    "UrlConverter",
    "StringConverter",
    "IntConverter",
    "BoolConverter",
    "IsoDateConverter",
    "IntArrayConverter",
    "StringArrayConverter",
    # Mapping
    "to_query_mapping",
    "to_query_string",
    "from_query_mapping",
    "from_query_string",
    # URLs
    "Url",
    "parse_url",
    "decode_query_string",
    "query_string_to_dict",
    "dict_to_query_string",
    # Collaborators
    "are_equal",
    "primitive_comparison",
    "AsyncFileReader",
    "FileReaderResult",
    # Configuration and errors
    "UrlQuerySettings",
    "get_settings",
    "configure_logging",
    "UrlQueryError",
    "ConfigurationError",
    "UrlParseError",
]
