# assetloader/registry/registry.py
"""
Namespace registry for library assets.

The registry maps a library namespace to the location of its assets:
- A local assets directory (where files are checked for existence)
- A public base URL (where the host serves those files)
- Per-namespace configuration (versioning, cache busting, handle prefix)

Registrations live for the lifetime of the owning loader. Registering the
same namespace again replaces the previous entry.
"""

import logging
import time
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path, PurePosixPath
from typing import Any, Dict, Iterator, List, Optional

logger = logging.getLogger(__name__)

DEFAULT_STATIC_VERSION = "1.0.0"


def normalize_file(file: str) -> str:
    """
    Canonical relative form of an asset path.

    "./css//x.css", "/css/x.css" and "css\\x.css" all become "css/x.css".
    """
    return PurePosixPath(file.replace("\\", "/")).as_posix().lstrip("/")


class VersionStrategy(Enum):
    """How the cache-busting version of an asset is derived."""
    FILEMTIME = "filemtime"  # File modification timestamp
    STATIC = "static"        # Fixed version from config

    @classmethod
    def parse(cls, value: "VersionStrategy | str") -> "VersionStrategy":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).lower())
        except ValueError:
            logger.warning(f"Unknown version strategy {value!r}, using filemtime")
            return cls.FILEMTIME


@dataclass
class AssetConfig:
    """
    Per-namespace asset configuration.

    Attributes:
        version_strategy: filemtime or static
        cache_busting: If False, every asset gets the loader's default version
        handle_prefix: Prefix for generated handles ("" derives it from the namespace)
        static_version: Version used by the static strategy
    """
    version_strategy: VersionStrategy = VersionStrategy.FILEMTIME
    cache_busting: bool = True
    handle_prefix: str = ""
    static_version: str = DEFAULT_STATIC_VERSION

    def to_dict(self) -> Dict[str, Any]:
        return {
            "version_strategy": self.version_strategy.value,
            "cache_busting": self.cache_busting,
            "handle_prefix": self.handle_prefix,
            "static_version": self.static_version,
        }

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "AssetConfig":
        data = dict(data or {})
        known = {"version_strategy", "cache_busting", "handle_prefix", "static_version"}
        unknown = sorted(set(data) - known)
        if unknown:
            logger.warning(f"Ignoring unknown asset config keys: {', '.join(unknown)}")
        return cls(
            version_strategy=VersionStrategy.parse(data.get("version_strategy", "filemtime")),
            cache_busting=bool(data.get("cache_busting", True)),
            handle_prefix=str(data.get("handle_prefix") or ""),
            static_version=str(data.get("static_version") or DEFAULT_STATIC_VERSION),
        )


@dataclass
class Registration:
    """
    A namespace registered with the loader.

    Attributes:
        namespace: Library namespace (unique key)
        assets_path: Absolute path of the assets directory
        assets_url: Public URL of the assets directory, without trailing slash.
            None when no URL root matched at registration time.
        config: Asset configuration
        registered_at: Timestamp of registration
    """
    namespace: str
    assets_path: Path
    assets_url: Optional[str] = None
    config: AssetConfig = field(default_factory=AssetConfig)
    registered_at: float = field(default_factory=time.time)

    def file_path(self, file: str) -> Path:
        """Absolute path of a file relative to the assets directory."""
        return self.assets_path / normalize_file(file)

    def file_url(self, file: str) -> Optional[str]:
        """Public URL of a file relative to the assets directory."""
        if self.assets_url is None:
            return None
        return f"{self.assets_url}/{normalize_file(file)}"


class NamespaceRegistry:
    """
    In-memory namespace → Registration mapping.

    Usage:
        registry = NamespaceRegistry()
        registry.add(Registration("Acme\\Widget", Path("/pkg/assets")))
        registry.get("Acme\\Widget").assets_path
    """

    def __init__(self):
        self._registrations: Dict[str, Registration] = {}

    def add(self, registration: Registration) -> Registration:
        """Add a registration, replacing any previous one for the namespace."""
        if registration.namespace in self._registrations:
            logger.debug(f"Re-registering namespace {registration.namespace}")
        self._registrations[registration.namespace] = registration
        return registration

    def get(self, namespace: str) -> Optional[Registration]:
        """Get a registration by namespace."""
        return self._registrations.get(namespace)

    def remove(self, namespace: str) -> bool:
        """Remove a namespace from the registry."""
        if namespace not in self._registrations:
            return False
        del self._registrations[namespace]
        return True

    def clear(self):
        """Remove all registrations."""
        self._registrations.clear()

    def namespaces(self) -> List[str]:
        """List registered namespaces in registration order."""
        return list(self._registrations.keys())

    def as_dict(self) -> Dict[str, Registration]:
        return dict(self._registrations)

    def __contains__(self, namespace: str) -> bool:
        return namespace in self._registrations

    def __len__(self) -> int:
        return len(self._registrations)

    def __iter__(self) -> Iterator[Registration]:
        return iter(self._registrations.values())
