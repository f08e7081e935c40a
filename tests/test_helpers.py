# tests/test_helpers.py
"""Tests for the functional helper API."""

import tempfile
from pathlib import Path

import pytest

from assetloader import (
    AssetLoader,
    MemoryHost,
    clear_library_assets,
    enqueue_library_script,
    enqueue_library_script_with_namespace,
    enqueue_library_style,
    enqueue_library_style_with_namespace,
    get_default_loader,
    get_library_asset_path,
    get_library_asset_url,
    get_library_debug_info,
    localize_library_script,
    register_library_assets,
    register_library_assets_with_config,
    reset_default_loader,
    set_default_loader,
)


@pytest.fixture
def assets_dir():
    with tempfile.TemporaryDirectory() as tmpdir:
        assets = Path(tmpdir).resolve() / "assets"
        (assets / "css").mkdir(parents=True)
        (assets / "js").mkdir()
        (assets / "css" / "admin.css").write_text("body {}")
        (assets / "js" / "admin.js").write_text("void 0;")
        yield assets


def enqueue_admin_style():
    """Enqueue without naming a namespace; attributed to this module."""
    return enqueue_library_style("css/admin.css")


class TestHelpers:
    """Test helpers operating on the default loader."""

    def setup_method(self):
        """Fresh default loader before each test."""
        self.host = MemoryHost()
        reset_default_loader(self.host)

    def teardown_method(self):
        reset_default_loader()

    def test_default_loader_is_shared(self):
        assert get_default_loader() is get_default_loader()

    def test_set_default_loader(self):
        loader = AssetLoader()
        assert set_default_loader(loader) is get_default_loader()

    def test_register_and_enqueue(self, assets_dir):
        assert register_library_assets("Acme\\Admin", assets_dir, "https://example.com/assets") is True

        handle = enqueue_library_style("css/admin.css", namespace="Acme\\Admin")
        assert handle == "acme-admin-admin"
        assert handle in self.host.styles

        script = enqueue_library_script("js/admin.js", deps=[], namespace="Acme\\Admin")
        assert localize_library_script(script, "acmeAdmin", {"nonce": "abc"}) is True

    def test_with_config(self, assets_dir):
        """Test path and URL are taken out of the config mapping."""
        assert register_library_assets_with_config("Acme", {
            "assets_path": str(assets_dir),
            "assets_url": "https://example.com/assets",
            "handle_prefix": "acme-ui",
            "cache_busting": False,
        }) is True

        handle = enqueue_library_style_with_namespace("css/admin.css", "Acme")
        assert handle == "acme-ui-admin"
        assert self.host.styles[handle].version == "1.0.0"

    def test_script_with_namespace(self, assets_dir):
        register_library_assets("Acme", assets_dir, "https://example.com/assets")
        handle = enqueue_library_script_with_namespace("js/admin.js", "Acme")
        assert self.host.scripts[handle].deps == ["jquery"]
        assert self.host.scripts[handle].in_footer is True

    def test_caller_namespace(self, assets_dir):
        """Test helpers attribute calls to the calling module."""
        register_library_assets(__name__, assets_dir, "https://example.com/assets")
        assert enqueue_admin_style()

    def test_lookups(self, assets_dir):
        register_library_assets("Acme", assets_dir, "https://example.com/assets")
        assert get_library_asset_url("css/admin.css", "Acme") == "https://example.com/assets/css/admin.css"
        assert get_library_asset_path("css/admin.css", "Acme") == assets_dir / "css" / "admin.css"
        assert get_library_asset_path("css/nope.css", "Acme") is None

    def test_debug_info_and_clear(self, assets_dir):
        register_library_assets("Acme", assets_dir, "https://example.com/assets")
        register_library_assets("Other", assets_dir, "https://example.com/assets")
        assert set(get_library_debug_info()["registrations"]) == {"Acme", "Other"}

        clear_library_assets("Acme")
        assert set(get_library_debug_info()["registrations"]) == {"Other"}

        clear_library_assets()
        assert get_library_debug_info()["registrations"] == {}
