"""Converters between object attributes and query-string values.

Each converter handles one field. ``to_query`` copies the attribute of the
source object into the outgoing dictionary (or leaves the key out), and
``from_query`` copies a value from the incoming mapping onto the target
object (or leaves the attribute untouched when the key is absent).

Converters hold no per-instance state; one instance is created for every
registered field.

Conversion errors are not caught. ``IntConverter`` handed ``"abc"`` raises
the ``ValueError`` from ``int()``.
"""

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, Dict, List, Mapping, Optional

from urlquery.config import get_settings
from urlquery.serialization import deserialize_iso_datetime, serialize_iso_datetime

if TYPE_CHECKING:
    from urlquery.registry import QueryParamMetadata

_MISSING = object()
TRUE_LITERALS = ("True", "true", "t")


def _source_value(source: Any, param: "QueryParamMetadata") -> Any:
    """Read the attribute for ``param`` from an object, ``None`` if unset."""
    return getattr(source, param.field_name, None)


def _query_value(query: Mapping[str, Any], param: "QueryParamMetadata") -> Any:
    """Read the value for ``param`` from a query mapping, ``_MISSING`` if absent."""
    return query.get(param.url_key, _MISSING)


def _as_text(value: Any) -> str:
    # A bare key (``?tags``) is parsed as True; text converters see ""
    if value is True:
        return ""
    return str(value)


class UrlConverter(ABC):
    """Interface implemented by all query parameter converters."""

    @abstractmethod
    def to_query(
        self, source: Any, target: Dict[str, Any], param: "QueryParamMetadata"
    ) -> None:
        """Write the attribute of ``source`` into the ``target`` dictionary.

        Args:
            source: Object being serialized
            target: Dictionary receiving ``param.url_key``
            param: Registered metadata for the field
        """

    @abstractmethod
    def from_query(
        self, source: Mapping[str, Any], target: Any, param: "QueryParamMetadata"
    ) -> None:
        """Assign the value under ``param.url_key`` onto ``target``.

        Args:
            source: Parsed query mapping
            target: Object being populated
            param: Registered metadata for the field
        """


class StringConverter(UrlConverter):
    """Plain string values. Empty strings are neither written nor read."""

    def to_query(self, source, target, param):
        value = _source_value(source, param)
        if value:
            target[param.url_key] = value

    def from_query(self, source, target, param):
        value = _query_value(source, param)
        if value is _MISSING:
            return
        text = _as_text(value)
        if text:
            setattr(target, param.field_name, text)


class IntConverter(UrlConverter):
    """Base 10 integers. Zero is written like any other value."""

    def to_query(self, source, target, param):
        value = _source_value(source, param)
        if value is None:
            return
        target[param.url_key] = str(int(value))

    def from_query(self, source, target, param):
        value = _query_value(source, param)
        if value is _MISSING:
            return
        setattr(target, param.field_name, int(_as_text(value), 10))


class BoolConverter(UrlConverter):
    """Flags written as ``t`` when true and left out otherwise."""

    def to_query(self, source, target, param):
        if _source_value(source, param) is True:
            target[param.url_key] = "t"

    def from_query(self, source, target, param):
        value = _query_value(source, param)
        if value is _MISSING:
            return
        setattr(
            target,
            param.field_name,
            isinstance(value, str) and value in TRUE_LITERALS,
        )


class IsoDateConverter(UrlConverter):
    """``datetime``/``date`` values as ISO-8601 text."""

    def to_query(self, source, target, param):
        value = _source_value(source, param)
        if value is None:
            return
        target[param.url_key] = serialize_iso_datetime(value)

    def from_query(self, source, target, param):
        value = _query_value(source, param)
        if value is _MISSING:
            return
        setattr(target, param.field_name, deserialize_iso_datetime(_as_text(value)))


class _DelimitedArrayConverter(UrlConverter):
    """Sequences joined into a single delimited parameter.

    ``delimiter`` falls back to the ``array_delimiter`` setting (``;``).
    """

    delimiter: Optional[str] = None

    def _delimiter(self) -> str:
        return self.delimiter or get_settings().array_delimiter

    def _convert_item(self, item: str) -> Any:
        return item

    def to_query(self, source, target, param):
        value = _source_value(source, param)
        if not isinstance(value, (list, tuple)) or len(value) == 0:
            return
        target[param.url_key] = self._delimiter().join(str(item) for item in value)

    def from_query(self, source, target, param):
        value = _query_value(source, param)
        if value is _MISSING:
            return
        text = _as_text(value)
        items: List[Any] = []
        if text:
            items = [self._convert_item(item) for item in text.split(self._delimiter())]
        setattr(target, param.field_name, items)


class IntArrayConverter(_DelimitedArrayConverter):
    """Lists of integers, e.g. ``ids=1;2;3``."""

    def _convert_item(self, item: str) -> int:
        return int(item, 10)


class StringArrayConverter(_DelimitedArrayConverter):
    """Lists of strings, e.g. ``tags=red;blue``."""


# Named lookup for configuration-driven registration
CONVERTERS: Dict[str, type] = {
    "str": StringConverter,
    "int": IntConverter,
    "bool": BoolConverter,
    "iso_date": IsoDateConverter,
    "int_array": IntArrayConverter,
    "str_array": StringArrayConverter,
}


__all__ = [
    "UrlConverter",
    "StringConverter",
    "IntConverter",
    "BoolConverter",
    "IsoDateConverter",
    "IntArrayConverter",
    "StringArrayConverter",
    "CONVERTERS",
    "TRUE_LITERALS",
]
