"""Test suite for serializing objects to and from query strings."""

from datetime import datetime, timezone

import pytest
from pydantic import BaseModel

from urlquery.converters import (
    BoolConverter,
    IntArrayConverter,
    IntConverter,
    IsoDateConverter,
    StringArrayConverter,
    StringConverter,
)
from urlquery.mapping import (
    from_query_mapping,
    from_query_string,
    to_query_mapping,
    to_query_string,
)
from urlquery.mixins import UrlQueryMixin
from urlquery.registry import QueryParamMetadata, _QUERY_PARAMS, query_param, register_query_param


class ReportQuery:
    """Query object using every converter variant."""

    start_time = query_param(IsoDateConverter, url_key="stTm")
    page_number = query_param(IntConverter, default=1)
    title = query_param(StringConverter, default="")
    archived = query_param(BoolConverter, default=False)
    ids = query_param(IntArrayConverter, default_factory=list)
    tags = query_param(StringArrayConverter, default_factory=list)


class SessionQuery:
    """Query object with a read-only parameter."""

    token = query_param(StringConverter, read_only=True)
    page = query_param(IntConverter, default=0, url_key="p")


class SearchQuery(UrlQueryMixin):
    """Query object using the mixin."""

    term = query_param(StringConverter, url_key="q")
    limit = query_param(IntConverter, default=10)


class TestToQuery:
    """Test object to query conversion."""

    def test_to_query_mapping(self):
        """Test conversion of a fully populated object."""
        query = ReportQuery()
        query.start_time = datetime(2024, 1, 2, 3, 4, 5, tzinfo=timezone.utc)
        query.page_number = 3
        query.title = "sales"
        query.archived = True
        query.ids = [1, 2]
        query.tags = ["a", "b"]

        assert to_query_mapping(query) == {
            "stTm": "2024-01-02T03:04:05Z",
            "page_number": "3",
            "title": "sales",
            "archived": "t",
            "ids": "1;2",
            "tags": "a;b",
        }

    def test_defaults_omitted(self):
        """Test that converters omit empty values."""
        assert to_query_mapping(ReportQuery()) == {"page_number": "1"}

    def test_output_follows_registration_order(self):
        """Test key order."""
        query = ReportQuery()
        query.title = "x"
        query.archived = True
        assert to_query_string(query) == "page_number=1&title=x&archived=t"

    def test_read_only_never_written(self):
        """Test that read-only params are skipped regardless of value."""
        query = SessionQuery()
        query.token = "secret"
        query.page = 2
        assert to_query_mapping(query) == {"p": "2"}

    def test_result_is_fresh(self):
        """Test that each call returns a new dict."""
        query = ReportQuery()
        first = to_query_mapping(query)
        first["extra"] = "x"
        assert "extra" not in to_query_mapping(query)

    def test_field_written_under_every_url_key(self):
        """Test a field registered twice under different url keys."""

        class AliasedQuery:
            pass

        register_query_param(AliasedQuery, "x", StringConverter, url_key="a")
        register_query_param(AliasedQuery, "x", StringConverter, url_key="b")
        query = AliasedQuery()
        query.x = "v"

        assert to_query_mapping(query) == {"a": "v", "b": "v"}
        assert from_query_string("b=w", AliasedQuery).x == "w"

    def test_unregistered_object(self):
        """Test that an unregistered object serializes to nothing."""

        class Plain:
            value = 1

        assert to_query_mapping(Plain()) == {}
        assert to_query_string(Plain()) == ""


class TestFromQuery:
    """Test query to object conversion."""

    def test_from_query_string(self):
        """Test reading every variant."""
        query = from_query_string(
            "stTm=2024-01-02T03:04:05.000Z&page_number=7&title=sales"
            "&archived=true&ids=1;2;3&tags=x;y",
            ReportQuery,
        )

        assert isinstance(query, ReportQuery)
        assert query.start_time == datetime(2024, 1, 2, 3, 4, 5, tzinfo=timezone.utc)
        assert query.page_number == 7
        assert query.title == "sales"
        assert query.archived is True
        assert query.ids == [1, 2, 3]
        assert query.tags == ["x", "y"]

    def test_missing_keys_keep_defaults(self):
        """Test that absent keys never fail and leave defaults."""
        query = from_query_mapping({}, ReportQuery)
        assert query.start_time is None
        assert query.page_number == 1
        assert query.title == ""
        assert query.archived is False
        assert query.ids == []

    def test_read_only_is_read(self):
        """Test that read-only params are populated from the query."""
        query = from_query_string("token=abc&p=4", SessionQuery)
        assert query.token == "abc"
        assert query.page == 4

    def test_unknown_keys_ignored(self):
        """Test that keys without a registered param are ignored."""
        query = from_query_string("other=1&page_number=2", ReportQuery)
        assert query.page_number == 2
        assert not hasattr(query, "other")

    def test_conversion_error_propagates(self):
        """Test that invalid values fail fast."""
        with pytest.raises(ValueError):
            from_query_string("page_number=two", ReportQuery)

    def test_bare_bool_key_reads_false(self):
        """Test that a bare key is not one of the true literals."""
        query = from_query_string("archived", ReportQuery)
        assert query.archived is False

    def test_pydantic_model_target(self):
        """Test populating a Pydantic model registered explicitly."""

        class Filter(BaseModel):
            name: str = ""
            size: int = 0

        register_query_param(Filter, "name", StringConverter, url_key="n")
        register_query_param(Filter, "size", IntConverter)

        result = from_query_string("n=box&size=3", Filter)
        assert result == Filter(name="box", size=3)
        assert to_query_string(result) == "n=box&size=3"


class TestRoundTrip:
    """Test that objects survive a round trip."""

    def test_round_trip_all_variants(self):
        """Test every converter variant through a mapping round trip."""
        query = ReportQuery()
        query.start_time = datetime(2022, 6, 30, 8, 15, 0, 500000, tzinfo=timezone.utc)
        query.page_number = 0
        query.title = "quarterly"
        query.archived = True
        query.ids = [5, 3, 9]
        query.tags = ["z", "a"]

        restored = from_query_mapping(to_query_mapping(query), ReportQuery)

        assert restored.start_time == query.start_time
        assert restored.page_number == 0
        assert restored.title == "quarterly"
        assert restored.archived is True
        assert restored.ids == [5, 3, 9]
        assert restored.tags == ["z", "a"]

    def test_round_trip_through_string(self):
        """Test a round trip through the query string."""
        query = ReportQuery()
        query.page_number = 12
        query.tags = ["one"]

        restored = from_query_string(to_query_string(query), ReportQuery)
        assert restored.page_number == 12
        assert restored.tags == ["one"]


class TestMissingConverter:
    """Test hand-built descriptors without a converter."""

    def test_skipped_in_both_directions(self):
        """Test that descriptors without converter are skipped."""

        class Manual:
            name = "default"

        _QUERY_PARAMS[Manual] = [QueryParamMetadata("name", False, "name", None)]
        try:
            assert to_query_mapping(Manual()) == {}
            assert from_query_string("name=x", Manual).name == "default"
        finally:
            del _QUERY_PARAMS[Manual]


class TestUrlQueryMixin:
    """Test the mixin convenience methods."""

    def test_to_query_string(self):
        """Test serialization through the mixin."""
        query = SearchQuery()
        query.term = "owls"
        assert query.to_query_string() == "q=owls&limit=10"
        assert query.to_query_mapping() == {"q": "owls", "limit": "10"}

    def test_from_query_string(self):
        """Test deserialization through the mixin."""
        query = SearchQuery.from_query_string("q=owls&limit=5")
        assert query.term == "owls"
        assert query.limit == 5

    def test_from_query_mapping(self):
        """Test deserialization from a mapping."""
        query = SearchQuery.from_query_mapping({"limit": "3"})
        assert query.term is None
        assert query.limit == 3

    def test_from_url(self):
        """Test reading the decoded query of a full URL."""
        query = SearchQuery.from_url("https://example.com/search?q=snowy%20owls#top")
        assert query.term == "snowy owls"
        assert query.limit == 10
