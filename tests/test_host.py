# tests/test_host.py
"""Tests for the in-memory host."""

import pytest

from assetloader.host import ENQUEUED, REGISTERED, MemoryHost


@pytest.fixture
def host():
    return MemoryHost()


class TestMemoryHost:
    """Test MemoryHost queue behaviour."""

    def test_status_queries(self, host):
        host.register_script("reg", "https://x/reg.js")
        host.enqueue_style("style", "https://x/s.css", [], "1", "all")

        assert host.script_is("reg", REGISTERED)
        assert not host.script_is("reg", ENQUEUED)
        assert host.style_is("style", ENQUEUED)
        assert not host.script_is("style", REGISTERED)

    def test_is_taken(self, host):
        """Test a handle is taken if known in either queue."""
        host.register_style("a", "https://x/a.css")
        host.enqueue_script("b", "https://x/b.js", [], "1", True)
        assert host.is_taken("a")
        assert host.is_taken("b")
        assert not host.is_taken("c")

    def test_enqueue_registered(self, host):
        """Test enqueueing a registered handle keeps its original data."""
        host.register_script("app", "https://x/app.js", version="1")
        host.enqueue_script("app", "https://y/app.js", [], "2", True)
        assert host.scripts["app"].url == "https://x/app.js"
        assert host.script_is("app", ENQUEUED)

    def test_localize(self, host):
        assert host.localize_script("app", "cfg", {}) is False

        host.enqueue_script("app", "https://x/app.js", [], "1", True)
        assert host.localize_script("app", "cfg", {"a": 1}) is True
        assert host.has_localized_data("app", "cfg")
        assert not host.has_localized_data("app", "other")

    def test_render_tags(self, host):
        host.enqueue_style("s", "https://x/s.css", [], "3", "print")
        host.enqueue_script("head", "https://x/h.js?x=1", [], "1", False)
        host.enqueue_script("foot", "https://x/f.js", [], None, True)
        host.localize_script("foot", "cfg", {"a": 1})
        host.register_script("unused", "https://x/u.js")

        tags = host.render_tags()
        assert "<link rel='stylesheet' id='s-css' href='https://x/s.css?ver=3' media='print' />" in tags
        assert "https://x/h.js?x=1&amp;ver=1" in tags
        assert "var cfg = {\"a\": 1};" in tags
        assert "u.js" not in tags

        footer = host.render_tags(footer=True)
        assert "f.js" in footer
        assert "h.js" not in footer
        assert "s.css" not in footer

        header = host.render_tags(footer=False)
        assert "s.css" in header
        assert "h.js" in header
        assert "f.js" not in header
