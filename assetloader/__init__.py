# assetloader - Namespace-based asset registration for plugin libraries
#
# Libraries register a namespace mapped to their assets directory and URL,
# then enqueue scripts and styles by path relative to that directory.
# Handles are generated and deduplicated, and versions are derived from
# file modification times for cache busting.
#
# Core concepts:
# - Registration: A namespace with its assets path, URL and config
# - AssetLoader: Registers namespaces and enqueues their assets
# - AssetHost: The host platform queue that emits enqueued assets
# - Resolver: Attributes calls without a namespace to the caller's namespace

from .registry import AssetConfig, NamespaceRegistry, Registration, VersionStrategy
from .config import ConfigError, LoaderSettings, Manifest, ManifestEntry, load_settings
from .handles import AssetKind, EnqueuedAsset, EnqueueTracker, HandleGenerator
from .host import AssetHost, MemoryHost
from .loader import AssetLoader, BoundAssets
from .urls import PathTranslator, UrlRoot
from .versioning import resolve_version
from .helpers import (
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

__all__ = [
    # Core
    "AssetLoader",
    "BoundAssets",
    "AssetConfig",
    "NamespaceRegistry",
    "Registration",
    "VersionStrategy",
    "AssetKind",
    "EnqueuedAsset",
    "EnqueueTracker",
    "HandleGenerator",
    "AssetHost",
    "MemoryHost",
    "PathTranslator",
    "UrlRoot",
    "resolve_version",
    # Config
    "ConfigError",
    "LoaderSettings",
    "Manifest",
    "ManifestEntry",
    "load_settings",
    # Helpers
    "clear_library_assets",
    "enqueue_library_script",
    "enqueue_library_script_with_namespace",
    "enqueue_library_style",
    "enqueue_library_style_with_namespace",
    "get_default_loader",
    "get_library_asset_path",
    "get_library_asset_url",
    "get_library_debug_info",
    "localize_library_script",
    "register_library_assets",
    "register_library_assets_with_config",
    "reset_default_loader",
    "set_default_loader",
]

__version__ = "0.1.0"
