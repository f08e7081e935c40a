# assetloader/registry/__init__.py
"""
Asset Loader Registry.

The registry maps library namespaces to their assets directory, public URL
and configuration. Enqueue calls look up the caller's namespace here.

Example:
    registry = NamespaceRegistry()
    registry.add(Registration("Acme\\Widget", Path("/pkg/assets"), "https://example.com/pkg/assets"))

    registry.get("Acme\\Widget").file_url("css/admin.css")
    # -> "https://example.com/pkg/assets/css/admin.css"
"""

from .registry import (
    AssetConfig,
    DEFAULT_STATIC_VERSION,
    NamespaceRegistry,
    Registration,
    VersionStrategy,
    normalize_file,
)

__all__ = [
    "AssetConfig",
    "DEFAULT_STATIC_VERSION",
    "NamespaceRegistry",
    "Registration",
    "VersionStrategy",
    "normalize_file",
]
