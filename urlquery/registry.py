"""Registry of query parameter fields per class.

Fields are registered once, normally while the class body is executed, and
looked up by class afterwards:

    class SearchQuery:
        # urlKey defaults to the attribute name
        page_number: int = query_param(IntConverter, default=1)

        # Written as stTm, never emitted back
        start_time: datetime = query_param(IsoDateConverter, url_key="stTm", read_only=True)

        tags: list = query_param(StringArrayConverter, default_factory=list)

Classes that cannot carry descriptors (for example Pydantic models) register
their fields explicitly:

    register_query_param(SearchModel, "title", StringConverter)

The registry is a plain module-level dictionary. Registration is not
synchronized; do it during import/startup. Lookups are read-only.
"""

import logging
from typing import Any, Callable, Dict, List, Optional, Type, Union

from pydantic import BaseModel, ConfigDict

from urlquery.converters import CONVERTERS, UrlConverter
from urlquery.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

ConverterFactory = Union[Callable[[], UrlConverter], str]


class QueryParamConfig(BaseModel):
    """Optional configuration for a query parameter.

    Attributes:
        url_key: Parameter key in the URL (defaults to the field name)
        read_only: Read from the URL but never written back
    """

    model_config = ConfigDict(extra="forbid")

    url_key: Optional[str] = None
    read_only: bool = False


class QueryParamMetadata:
    """Registered mapping rule for one field."""

    __slots__ = ("url_key", "read_only", "field_name", "converter")

    def __init__(
        self,
        url_key: str,
        read_only: bool,
        field_name: str,
        converter: Optional[UrlConverter],
    ):
        self.url_key = url_key
        self.read_only = read_only
        self.field_name = field_name
        self.converter = converter

    def __repr__(self) -> str:
        converter = type(self.converter).__name__ if self.converter else None
        return (
            f"QueryParamMetadata(url_key={self.url_key!r}, read_only={self.read_only}, "
            f"field_name={self.field_name!r}, converter={converter})"
        )


# Global registry of query parameters per class, in registration order
_QUERY_PARAMS: Dict[Type, List[QueryParamMetadata]] = {}


def _create_converter(converter_factory: ConverterFactory, url_key: str) -> UrlConverter:
    if isinstance(converter_factory, str):
        try:
            converter_factory = CONVERTERS[converter_factory]
        except KeyError:
            raise ConfigurationError(
                f"Unknown converter '{converter_factory}' for url_key '{url_key}'",
                url_key=url_key,
            ) from None
    return converter_factory()


def register_query_param(
    target_type: Type,
    field_name: str,
    converter_factory: Optional[ConverterFactory],
    config: Optional[Union[QueryParamConfig, Dict[str, Any]]] = None,
    *,
    url_key: Optional[str] = None,
    read_only: Optional[bool] = None,
) -> QueryParamMetadata:
    """Register a field of ``target_type`` as a query parameter.

    Args:
        target_type: Class owning the field
        field_name: Attribute name on instances
        converter_factory: Converter class (or a name from ``CONVERTERS``)
        config: Optional QueryParamConfig or equivalent dict
        url_key: Overrides ``config.url_key``
        read_only: Overrides ``config.read_only``

    Returns:
        The registered metadata

    Raises:
        ConfigurationError: If no converter factory is given
    """
    if config is None:
        config = QueryParamConfig()
    elif not isinstance(config, QueryParamConfig):
        config = QueryParamConfig.model_validate(config)

    resolved_key = url_key or config.url_key or field_name
    resolved_read_only = config.read_only if read_only is None else read_only

    if converter_factory is None:
        raise ConfigurationError(
            f"converter_factory is undefined for url_key '{resolved_key}'",
            url_key=resolved_key,
        )

    param = QueryParamMetadata(
        resolved_key,
        resolved_read_only,
        field_name,
        _create_converter(converter_factory, resolved_key),
    )
    _QUERY_PARAMS.setdefault(target_type, []).append(param)
    logger.debug(f"Registered query param {target_type.__name__}.{field_name}: {param!r}")
    return param


def get_query_params(target: Any) -> List[QueryParamMetadata]:
    """Get the query parameters of a class (or of an instance's class).

    Parameters registered on base classes come first. Every entry a class
    registers is kept, including several for one field. When a subclass
    registers a field it inherited, its entries take the place of the
    inherited ones.

    Args:
        target: Class or instance

    Returns:
        Ordered list of metadata, empty if nothing was registered
    """
    cls = target if isinstance(target, type) else type(target)

    merged: List[QueryParamMetadata] = []
    for klass in reversed(cls.__mro__):
        own = _QUERY_PARAMS.get(klass)
        if not own:
            continue

        by_field: Dict[str, List[QueryParamMetadata]] = {}
        for param in own:
            by_field.setdefault(param.field_name, []).append(param)

        placed = set()
        result: List[QueryParamMetadata] = []
        for param in merged:
            name = param.field_name
            if name not in by_field:
                result.append(param)
            elif name not in placed:
                result.extend(by_field[name])
                placed.add(name)
        result.extend(param for param in own if param.field_name not in placed)
        merged = result
    return merged


def clear_query_params(target_type: Optional[Type] = None) -> None:
    """Remove registrations for one class, or for all classes.

    Args:
        target_type: Class to clear; clears everything when None
    """
    if target_type is None:
        _QUERY_PARAMS.clear()
    else:
        _QUERY_PARAMS.pop(target_type, None)


class QueryParam:
    """Descriptor declaring a query parameter in a class body.

    Registers itself when the owning class is created. Values live in the
    instance ``__dict__``; unset attributes read as the default.
    """

    def __init__(
        self,
        converter_factory: Optional[ConverterFactory],
        default: Any = None,
        *,
        default_factory: Optional[Callable[[], Any]] = None,
        url_key: Optional[str] = None,
        read_only: bool = False,
    ):
        if converter_factory is None:
            # __set_name__ errors are wrapped in RuntimeError before Python 3.12
            if url_key is None:
                raise ConfigurationError("converter_factory is undefined for query_param()")
            raise ConfigurationError(
                f"converter_factory is undefined for url_key '{url_key}'",
                url_key=url_key,
            )
        self.converter_factory = converter_factory
        self.default = default
        self.default_factory = default_factory
        self.url_key = url_key
        self.read_only = read_only
        self.name = ""

    def __set_name__(self, owner: Type, name: str) -> None:
        self.name = name
        register_query_param(
            owner,
            name,
            self.converter_factory,
            url_key=self.url_key,
            read_only=self.read_only,
        )

    def __get__(self, instance: Any, owner: Optional[Type] = None) -> Any:
        if instance is None:
            return self
        try:
            return instance.__dict__[self.name]
        except KeyError:
            if self.default_factory is None:
                return self.default
            value = self.default_factory()
            instance.__dict__[self.name] = value
            return value

    def __set__(self, instance: Any, value: Any) -> None:
        instance.__dict__[self.name] = value

    def __delete__(self, instance: Any) -> None:
        instance.__dict__.pop(self.name, None)


def query_param(
    converter_factory: Optional[ConverterFactory],
    default: Any = None,
    *,
    default_factory: Optional[Callable[[], Any]] = None,
    url_key: Optional[str] = None,
    read_only: bool = False,
) -> Any:
    """Declare a query parameter field.

    Args:
        converter_factory: Converter class (or a name from ``CONVERTERS``)
        default: Value of the attribute until it is assigned
        default_factory: Callable producing a fresh default per instance
        url_key: Parameter key in the URL (defaults to the attribute name)
        read_only: Read from the URL but never written back

    Returns:
        QueryParam descriptor

    Examples:
        page: int = query_param(IntConverter, default=1, url_key="p")
        ids: list = query_param(IntArrayConverter, default_factory=list)
    """
    return QueryParam(
        converter_factory,
        default,
        default_factory=default_factory,
        url_key=url_key,
        read_only=read_only,
    )


__all__ = [
    "QueryParam",
    "QueryParamConfig",
    "QueryParamMetadata",
    "clear_query_params",
    "get_query_params",
    "query_param",
    "register_query_param",
]
