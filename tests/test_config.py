# tests/test_config.py
"""Tests for settings and manifests."""

import tempfile
from pathlib import Path

import pytest

from assetloader import AssetLoader, MemoryHost
from assetloader.config import ConfigError, LoaderSettings, Manifest, load_settings
from assetloader.registry import VersionStrategy

MANIFEST = """
content_dir: {root}/wp-content
content_url: https://example.com/wp-content
abspath: {root}
home_url: https://example.com
default_version: "2.0.0"

namespaces:
  - namespace: Acme\\Widget
    assets_path: wp-content/plugins/acme/assets
    config:
      version_strategy: static
      static_version: "3.1.4"
  - namespace: Vendor.Lib
    assets_path: {root}/vendor/assets
    assets_url: https://cdn.example.com/vendor
"""


@pytest.fixture
def temp_dir():
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir).resolve()


@pytest.fixture
def manifest_file(temp_dir):
    (temp_dir / "wp-content" / "plugins" / "acme" / "assets").mkdir(parents=True)
    (temp_dir / "vendor" / "assets").mkdir(parents=True)
    path = temp_dir / "assets.yaml"
    path.write_text(MANIFEST.format(root=temp_dir))
    return path


class TestLoaderSettings:
    """Test LoaderSettings."""

    def test_defaults(self):
        settings = LoaderSettings()
        assert settings.content_dir is None
        assert settings.default_version == "1.0.0"
        assert settings.log_level == "WARNING"

    def test_from_dict_ignores_unknown(self):
        settings = LoaderSettings.from_dict({"home_url": "https://x", "namespaces": []})
        assert settings.home_url == "https://x"

    def test_env_overrides(self):
        """Test ASSETLOADER_* variables override file values."""
        settings = LoaderSettings(home_url="https://file.example.com")
        overridden = settings.with_env({
            "ASSETLOADER_HOME_URL": "https://env.example.com",
            "ASSETLOADER_DEFAULT_VERSION": "7",
        })
        assert overridden.home_url == "https://env.example.com"
        assert overridden.default_version == "7"
        assert settings.home_url == "https://file.example.com"

    def test_load_settings_without_file(self):
        settings = load_settings(environ={"ASSETLOADER_CONTENT_URL": "https://c"})
        assert settings.content_url == "https://c"

    def test_load_settings_from_file(self, manifest_file):
        settings = load_settings(manifest_file, environ={})
        assert settings.default_version == "2.0.0"
        assert settings.home_url == "https://example.com"


class TestManifest:
    """Test manifest parsing."""

    def test_from_file(self, manifest_file, temp_dir):
        manifest = Manifest.from_file(manifest_file)
        assert [e.namespace for e in manifest.entries] == ["Acme\\Widget", "Vendor.Lib"]

        acme = manifest.entries[0]
        assert acme.assets_path == str(temp_dir / "wp-content" / "plugins" / "acme" / "assets")
        assert acme.config.version_strategy is VersionStrategy.STATIC
        assert acme.config.static_version == "3.1.4"

    def test_empty_manifest(self):
        manifest = Manifest.from_yaml("")
        assert manifest.entries == []
        assert manifest.settings == LoaderSettings()

    def test_missing_file(self, temp_dir):
        with pytest.raises(ConfigError):
            Manifest.from_file(temp_dir / "nope.yaml")

    @pytest.mark.parametrize("content", [
        "namespaces: {}",
        "namespaces:\n  - assets_path: /x",
        "namespaces:\n  - just-a-string",
        "namespaces:\n  - namespace: A\n    config: [1, 2]",
        "- not a mapping",
        "key: [unclosed",
    ])
    def test_invalid(self, content):
        with pytest.raises(ConfigError):
            Manifest.from_yaml(content)

    def test_entry_requires_assets_path(self):
        """Test a namespace entry without assets_path is rejected."""
        with pytest.raises(ConfigError, match="Acme.*assets_path"):
            Manifest.from_yaml("namespaces:\n  - namespace: Acme\\Widget\n")

    def test_loader_from_manifest(self, manifest_file, temp_dir):
        """Test a loader registers every manifest namespace."""
        loader = AssetLoader.from_manifest(manifest_file, host=MemoryHost())
        registered = loader.get_registered()

        assert registered["Acme\\Widget"].assets_url == (
            "https://example.com/wp-content/plugins/acme/assets"
        )
        assert registered["Vendor.Lib"].assets_url == "https://cdn.example.com/vendor"
        assert loader.settings.default_version == "2.0.0"
