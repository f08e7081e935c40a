# assetloader/config.py
"""
Loader settings and asset manifests.

Settings describe the host's served roots (content, install, plugin) and
defaults. They come from a YAML file, overridden by ASSETLOADER_*
environment variables.

A manifest is a settings file with a list of namespaces to register:

    content_dir: /srv/site/wp-content
    content_url: https://example.com/wp-content
    abspath: /srv/site
    home_url: https://example.com
    default_version: "1.0.0"

    namespaces:
      - namespace: Acme\\Widget
        assets_path: /srv/site/wp-content/plugins/acme/assets
        config:
          version_strategy: static
          static_version: "2.3.1"
"""

import logging
import os
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

import yaml

from .registry import AssetConfig, DEFAULT_STATIC_VERSION

logger = logging.getLogger(__name__)

ENV_PREFIX = "ASSETLOADER_"


class ConfigError(ValueError):
    """Raised when a settings file or manifest is malformed."""


@dataclass
class LoaderSettings:
    """
    Loader settings.

    Attributes:
        content_dir / content_url: Content root and its URL
        abspath / home_url: Install root and the site URL
        plugin_dir / plugin_url: Plugin root and its URL
        default_version: Version used when cache busting is disabled
        log_level: Level name used by the CLI
    """
    content_dir: Optional[str] = None
    content_url: Optional[str] = None
    abspath: Optional[str] = None
    home_url: Optional[str] = None
    plugin_dir: Optional[str] = None
    plugin_url: Optional[str] = None
    default_version: str = DEFAULT_STATIC_VERSION
    log_level: str = "WARNING"

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "LoaderSettings":
        known = {f.name for f in fields(cls)}
        values = {}
        for key, value in data.items():
            if key not in known:
                continue
            values[key] = None if value is None else str(value)
        if values.get("default_version") is None:
            values.pop("default_version", None)
        if values.get("log_level") is None:
            values.pop("log_level", None)
        return cls(**values)

    def with_env(self, environ: Optional[Mapping[str, str]] = None) -> "LoaderSettings":
        """Copy of these settings with ASSETLOADER_* environment overrides applied."""
        environ = os.environ if environ is None else environ
        data = self.to_dict()
        for name in data:
            value = environ.get(ENV_PREFIX + name.upper())
            if value:
                data[name] = value
        return LoaderSettings.from_dict(data)

    def to_dict(self) -> Dict[str, Any]:
        return {f.name: getattr(self, f.name) for f in fields(self)}


@dataclass
class ManifestEntry:
    """A namespace registration declared in a manifest."""
    namespace: str
    assets_path: str
    assets_url: Optional[str] = None
    config: AssetConfig = field(default_factory=AssetConfig)

    @classmethod
    def from_dict(cls, data: Any, base_dir: Optional[Path] = None) -> "ManifestEntry":
        if not isinstance(data, dict):
            raise ConfigError(f"Namespace entry must be a mapping, got {type(data).__name__}")
        namespace = data.get("namespace")
        if not namespace or not isinstance(namespace, str):
            raise ConfigError("Namespace entry is missing 'namespace'")

        # No calling library to derive a path from
        assets_path = data.get("assets_path")
        if not assets_path or not isinstance(assets_path, str):
            raise ConfigError(f"Namespace entry {namespace} is missing 'assets_path'")
        if base_dir is not None and not Path(assets_path).is_absolute():
            assets_path = str(base_dir / assets_path)

        config = data.get("config") or {}
        if not isinstance(config, dict):
            raise ConfigError(f"Config for {namespace} must be a mapping")

        return cls(
            namespace=namespace,
            assets_path=assets_path,
            assets_url=data.get("assets_url"),
            config=AssetConfig.from_dict(config),
        )


@dataclass
class Manifest:
    """Settings plus the namespaces to register."""
    settings: LoaderSettings
    entries: List[ManifestEntry] = field(default_factory=list)

    @classmethod
    def from_yaml(cls, yaml_content: str, base_dir: Optional[Path] = None) -> "Manifest":
        """Parse a manifest from a YAML string."""
        try:
            data = yaml.safe_load(yaml_content)
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid manifest YAML: {e}") from e

        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ConfigError("Manifest must be a mapping")

        namespaces = data.get("namespaces")
        if namespaces is None:
            namespaces = []
        if not isinstance(namespaces, list):
            raise ConfigError("'namespaces' must be a list")

        return cls(
            settings=LoaderSettings.from_dict(data),
            entries=[ManifestEntry.from_dict(item, base_dir) for item in namespaces],
        )

    @classmethod
    def from_file(cls, path: Path | str) -> "Manifest":
        """Load a manifest from a YAML file. Relative asset paths resolve against its directory."""
        path = Path(path)
        if not path.exists():
            raise ConfigError(f"Manifest not found: {path}")
        with open(path, "r") as f:
            return cls.from_yaml(f.read(), base_dir=path.resolve().parent)


def load_settings(
    path: Optional[Path | str] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> LoaderSettings:
    """
    Load settings from an optional YAML file plus environment overrides.

    Args:
        path: Settings or manifest file. None uses environment and defaults only.
        environ: Environment mapping (defaults to os.environ)
    """
    settings = LoaderSettings()
    if path is not None:
        settings = Manifest.from_file(path).settings
        logger.debug(f"Loaded settings from {path}")
    return settings.with_env(environ)
