"""URL decomposition and raw query-string handling.

A URL is split into its components with a single regular expression match.
The pattern is anchored at the start and every group may be empty, so in the
default (permissive) mode any input produces a ``Url``; malformed input just
yields empty components. Strict mode rejects input without a host or with
trailing text the grammar could not consume.

``query_string_to_dict`` and ``dict_to_query_string`` never escape or
unescape anything: a value that contains ``&`` or ``=`` does not survive a
round trip. ``Url.query`` is percent-decoded as a whole, and
``decode_query_string`` decodes an encoded query after splitting it.

Examples:
    >>> url = Url.parse("http://address.com:1923/the/123/path?a=1&b=2#24")
    >>> url.host, url.port, url.path_parts()
    ('address.com', 1923, ['the', '123', 'path'])
    >>> query_string_to_dict(url.query)
    {'a': '1', 'b': '2'}
"""

import logging
import re
from typing import Any, Dict, List, Mapping, Optional, Union
from urllib.parse import unquote, unquote_plus

from pydantic import BaseModel, ConfigDict

from urlquery.config import get_settings
from urlquery.exceptions import UrlParseError

logger = logging.getLogger(__name__)

QueryValue = Union[str, bool]

# protocol, ://, host, :, port, path, ?, query, #, hash
URL_PATTERN = re.compile(
    r"^(\w*)(://)?([^\s/?#:]*)(:?)(\d*)([^\s?#]*)(\??)([^\s#]*)(#?)(\S*)"
)


def query_string_to_dict(query: str) -> Dict[str, QueryValue]:
    """Convert a raw query string into a flat dictionary.

    Each ``&`` separated token is split once on ``=``. A token without ``=``
    maps to ``True``. Values are kept verbatim and a repeated key keeps the
    last value.

    Args:
        query: Query string without the leading ``?``

    Returns:
        Dictionary in token order
    """
    result: Dict[str, QueryValue] = {}
    for token in query.split("&"):
        if not token:
            continue
        parts = token.split("=", 1)
        result[parts[0]] = True if len(parts) == 1 else parts[1]
    return result


def dict_to_query_string(query: Mapping[str, Any]) -> str:
    """Render a mapping as ``key=value`` pairs joined by ``&``."""
    return "&".join(f"{key}={value}" for key, value in query.items())


def decode_query_string(query: str) -> Dict[str, QueryValue]:
    """Convert a percent-encoded query string into a decoded dictionary.

    The string is split first and each key and value decoded afterwards, so
    an encoded ``&`` or ``=`` stays inside its value. ``+`` becomes a space.

    Args:
        query: Encoded query string, e.g. ``request.url.query``

    Returns:
        Dictionary in token order, bare keys mapped to ``True``
    """
    return {
        unquote_plus(key): value if value is True else unquote_plus(value)
        for key, value in query_string_to_dict(query).items()
    }


class Url(BaseModel):
    """Immutable decomposition of a URL.

    Attributes:
        protocol: Scheme, e.g. ``http`` (empty if absent)
        host: Host name
        port: Port number, ``None`` when no digits were given
        path: Path including the leading slash
        query: Percent-decoded query string without ``?``
        hash: Fragment without ``#``
    """

    model_config = ConfigDict(frozen=True)

    protocol: str = ""
    host: str = ""
    port: Optional[int] = None
    path: str = ""
    query: str = ""
    hash: str = ""

    query_string_to_dict = staticmethod(query_string_to_dict)
    dict_to_query_string = staticmethod(dict_to_query_string)

    @classmethod
    def parse(cls, url: str, strict: Optional[bool] = None) -> "Url":
        """Decompose a URL string.

        Args:
            url: URL to parse; surrounding whitespace is ignored
            strict: Override the ``strict_url_parsing`` setting

        Returns:
            Parsed Url

        Raises:
            UrlParseError: In strict mode, if the host is empty or the
                input contains text the grammar does not accept
        """
        if strict is None:
            strict = get_settings().strict_url_parsing

        raw = url.strip()
        matched = URL_PATTERN.match(raw)
        if matched is None:
            # Unreachable with the current pattern, every group can be empty
            raise UrlParseError(f"Unable to parse url '{url}'", url=url)

        if strict:
            if not matched.group(3):
                raise UrlParseError(f"Url '{url}' has no host", url=url)
            if matched.end() != len(raw):
                raise UrlParseError(
                    f"Unexpected text in url '{url}' at position {matched.end()}",
                    url=url,
                )

        port = matched.group(5)
        parsed = cls(
            protocol=matched.group(1),
            host=matched.group(3),
            port=int(port) if port else None,
            path=matched.group(6),
            query=unquote(matched.group(8)),
            hash=matched.group(10),
        )
        logger.debug(f"Parsed url {raw!r}: {parsed!r}")
        return parsed

    def path_parts(self) -> List[str]:
        """Return the non-empty ``/`` separated segments of the path."""
        return [part for part in self.path.split("/") if part]

    def query_dict(self) -> Dict[str, QueryValue]:
        """Return the decoded query as a dictionary."""
        return query_string_to_dict(self.query)

    def geturl(self) -> str:
        """Reassemble the URL from its components."""
        parts = []
        if self.protocol:
            parts.append(f"{self.protocol}://")
        parts.append(self.host)
        if self.port is not None:
            parts.append(f":{self.port}")
        parts.append(self.path)
        if self.query:
            parts.append(f"?{self.query}")
        if self.hash:
            parts.append(f"#{self.hash}")
        return "".join(parts)

    def __str__(self) -> str:
        return self.geturl()


def parse_url(url: str, strict: Optional[bool] = None) -> Url:
    """Shortcut for ``Url.parse``."""
    return Url.parse(url, strict=strict)


__all__ = [
    "URL_PATTERN",
    "Url",
    "parse_url",
    "decode_query_string",
    "query_string_to_dict",
    "dict_to_query_string",
]
