"""
Tests for shared node helpers.
"""

from datetime import date, datetime, timedelta, timezone

import pytest

from schema_graph_engine.core.node_resolver.models import MergeStrategy
from schema_graph_engine.core.node_resolver.utils import (
    as_list,
    call_as_partial,
    includes_type,
    resolve_date_to_iso,
    resolve_type,
    trim_length,
)


class TestResolveDateToIso:
    """Test cases for date normalization."""

    def test_date_string(self):
        assert resolve_date_to_iso("2022-01-05") == "2022-01-05T00:00:00.000Z"

    def test_zulu_string(self):
        assert resolve_date_to_iso("2022-01-05T10:20:30.123Z") == "2022-01-05T10:20:30.123Z"

    def test_offset_converted_to_utc(self):
        assert resolve_date_to_iso("2022-01-05T10:00:00+02:00") == "2022-01-05T08:00:00.000Z"

    def test_date_object(self):
        assert resolve_date_to_iso(date(2022, 1, 5)) == "2022-01-05T00:00:00.000Z"

    def test_aware_datetime(self):
        value = datetime(2022, 1, 5, 1, 0, tzinfo=timezone(timedelta(hours=-3)))
        assert resolve_date_to_iso(value) == "2022-01-05T04:00:00.000Z"

    def test_invalid_string(self):
        with pytest.raises(ValueError):
            resolve_date_to_iso("not a date")


class TestTypeHelpers:
    """Test cases for @type helpers."""

    def test_includes_type(self):
        assert includes_type({"@type": "Article"}, "Article")
        assert includes_type({"@type": ["Article", "BlogPosting"]}, "BlogPosting")
        assert not includes_type({"@type": "Article"}, "WebPage")
        assert not includes_type({}, "Article")

    def test_resolve_type_same(self):
        assert resolve_type("Article", "Article") == "Article"

    def test_resolve_type_union(self):
        assert resolve_type("BlogPosting", "Article") == ["Article", "BlogPosting"]
        assert resolve_type(["Article", "NewsArticle"], "Article") == ["Article", "NewsArticle"]

    def test_resolve_type_single_after_dedup(self):
        assert resolve_type(["Article"], "Article") == ["Article"]

    def test_as_list(self):
        assert as_list(None) == []
        assert as_list("a") == ["a"]
        assert as_list(["a", "b"]) == ["a", "b"]
        assert as_list(("a", "b")) == ["a", "b"]


class TestTrimLength:
    """Test cases for trim_length."""

    def test_short_value_untouched(self):
        assert trim_length("Hello world", 50) == "Hello world"

    def test_trims_to_word_boundary(self):
        assert trim_length("The quick brown fox jumps", 12) == "The quick"

    def test_single_long_word(self):
        assert trim_length("Supercalifragilistic", 5) == "Super"


class TestCallAsPartial:
    """Test cases for call_as_partial."""

    def test_passes_patch_strategy(self):
        calls = []

        def factory(data, options):
            calls.append((data, options))
            return "node"

        assert call_as_partial(factory, None) == "node"
        assert calls[0][0] == {}
        assert calls[0][1].strategy == MergeStrategy.PATCH
