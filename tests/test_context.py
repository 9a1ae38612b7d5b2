"""
Tests for the resolution context and configuration.
"""

import logging
import threading

import pytest
from unittest.mock import patch

from schema_graph_engine.core.node_resolver.config import ResolverSettings, configure_logging, load_settings
from schema_graph_engine.core.node_resolver.context import (
    ResolutionContext,
    active_context,
    get_active_context,
    inject_context,
    reset_active_context,
    set_active_context,
)
from schema_graph_engine.core.node_resolver.errors import MissingContextError
from schema_graph_engine.core.node_resolver.models import MergeStrategy


class TestActiveContext:
    """Test cases for scoped context activation."""

    def test_no_context_by_default(self):
        assert get_active_context() is None
        with pytest.raises(MissingContextError, match="No active resolution context"):
            inject_context()

    def test_explicit_context_wins(self):
        explicit = ResolutionContext(canonical_host="https://a.com")
        with active_context(ResolutionContext(canonical_host="https://b.com")):
            assert inject_context(explicit) is explicit

    def test_scope_is_restored(self):
        outer = ResolutionContext(canonical_host="https://outer.com")
        inner = ResolutionContext(canonical_host="https://inner.com")
        with active_context(outer):
            with active_context(inner):
                assert inject_context() is inner
            assert inject_context() is outer
        assert get_active_context() is None

    def test_set_and_reset(self):
        context = ResolutionContext()
        token = set_active_context(context)
        try:
            assert get_active_context() is context
        finally:
            reset_active_context(token)
        assert get_active_context() is None

    def test_other_threads_do_not_see_scope(self):
        seen = []
        with active_context(ResolutionContext()):
            thread = threading.Thread(target=lambda: seen.append(get_active_context()))
            thread.start()
            thread.join()
        assert seen == [None]


class TestResolutionContext:
    """Test cases for ResolutionContext."""

    def test_canonical_url_defaults_to_host(self):
        context = ResolutionContext(canonical_host="https://example.com")
        assert context.canonical_url == "https://example.com"

    def test_add_node_appends(self):
        context = ResolutionContext()
        context.add_node({"@id": "#a"})
        context.add_node({"@id": "#b"})
        assert [node["@id"] for node in context.nodes] == ["#a", "#b"]

    def test_add_node_replace(self):
        context = ResolutionContext()
        context.add_node({"@id": "#a", "name": "Old", "url": "/"})
        context.add_node({"@id": "#b"})
        context.add_node({"@id": "#a", "name": "New"})
        assert context.nodes == [{"@id": "#a", "name": "New"}, {"@id": "#b"}]

    def test_add_node_patch(self):
        context = ResolutionContext()
        context.add_node({"@id": "#a", "name": "Old", "url": "/"})
        stored = context.add_node({"@id": "#a", "name": "New"}, MergeStrategy.PATCH)
        assert stored == {"@id": "#a", "name": "New", "url": "/"}
        assert context.find_node("#a") is stored

    def test_add_node_patch_updates_existing_object(self):
        context = ResolutionContext()
        existing = context.add_node({"@id": "#a", "name": "Old"})
        stored = context.add_node({"@id": "#a", "url": "/"}, MergeStrategy.PATCH)
        assert stored is existing
        assert existing == {"@id": "#a", "name": "Old", "url": "/"}

    def test_find_node_missing(self):
        assert ResolutionContext().find_node("#missing") is None


class TestConfig:
    """Test cases for settings loading."""

    def test_settings_from_env(self):
        env = {
            "SCHEMA_GRAPH_CANONICAL_HOST": "https://example.com",
            "SCHEMA_GRAPH_CANONICAL_URL": "https://example.com/blog",
            "SCHEMA_GRAPH_DEFAULT_LANGUAGE": "fr-FR",
            "SCHEMA_GRAPH_LOG_LEVEL": "debug",
        }
        with patch.dict('os.environ', env):
            settings = ResolverSettings.from_env()
        assert settings.canonical_host == "https://example.com"
        assert settings.canonical_url == "https://example.com/blog"
        assert settings.default_language == "fr-FR"
        assert settings.log_level == "DEBUG"

    def test_defaults_when_unset(self):
        with patch.dict('os.environ', {}, clear=True):
            settings = ResolverSettings.from_env()
        assert settings == ResolverSettings()

    def test_load_settings_reads_env_file(self, tmp_path):
        env_file = tmp_path / ".env"
        env_file.write_text("SCHEMA_GRAPH_CANONICAL_HOST=https://from-file.com\n")
        with patch.dict('os.environ', {}, clear=True):
            settings = load_settings(env_file)
        assert settings.canonical_host == "https://from-file.com"

    def test_context_from_env(self):
        with patch.dict('os.environ', {"SCHEMA_GRAPH_CANONICAL_HOST": "https://example.com"}, clear=True):
            with patch('schema_graph_engine.core.node_resolver.config.load_dotenv') as mock_load:
                context = ResolutionContext.from_env()
        assert mock_load.call_count == 2
        assert context.canonical_host == "https://example.com"
        assert context.canonical_url == "https://example.com"

    def test_configure_logging(self):
        with patch('schema_graph_engine.core.node_resolver.config.logging.basicConfig') as mock_basic:
            configure_logging("debug")
        mock_basic.assert_called_once()
        assert mock_basic.call_args.kwargs["level"] == logging.DEBUG
