"""Convenience methods for classes with registered query parameters."""

from typing import Any, Dict, Mapping, Optional, Type, TypeVar

from urlquery import mapping
from urlquery.url import Url

T = TypeVar("T", bound="UrlQueryMixin")


class UrlQueryMixin:
    """Mixin exposing the mapping functions as methods.

    Example:
        class SearchQuery(UrlQueryMixin):
            term: str = query_param(StringConverter, url_key="q")

        query = SearchQuery.from_url("https://example.com/search?q=owls")
        query.to_query_string()  # "q=owls"
    """

    def to_query_mapping(self) -> Dict[str, Any]:
        return mapping.to_query_mapping(self)

    def to_query_string(self) -> str:
        return mapping.to_query_string(self)

    @classmethod
    def from_query_mapping(cls: Type[T], query: Mapping[str, Any]) -> T:
        return mapping.from_query_mapping(query, cls)

    @classmethod
    def from_query_string(cls: Type[T], query: str) -> T:
        return mapping.from_query_string(query, cls)

    @classmethod
    def from_url(cls: Type[T], url: str, strict: Optional[bool] = None) -> T:
        """Build an instance from the decoded query of a full URL.

        Args:
            url: URL such as ``https://host/path?a=1``
            strict: Passed to ``Url.parse``

        Returns:
            New instance
        """
        return mapping.from_query_string(Url.parse(url, strict=strict).query, cls)


__all__ = ["UrlQueryMixin"]
