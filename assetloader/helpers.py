# assetloader/helpers.py
"""
Functional helpers over a process-wide default loader.

Libraries that do not want to carry a loader object around can use these
functions. They all operate on the default loader, which can be replaced
with set_default_loader() (e.g. to attach a real host) or reset between
tests with reset_default_loader().
"""

from pathlib import Path
from typing import Any, Dict, Optional, Sequence

from .host import AssetHost
from .loader import DEFAULT_SCRIPT_DEPS, AssetLoader

# Process-wide default loader
_DEFAULT_LOADER: Optional[AssetLoader] = None


def get_default_loader() -> AssetLoader:
    global _DEFAULT_LOADER
    if _DEFAULT_LOADER is None:
        _DEFAULT_LOADER = AssetLoader()
    return _DEFAULT_LOADER


def set_default_loader(loader: AssetLoader) -> AssetLoader:
    global _DEFAULT_LOADER
    _DEFAULT_LOADER = loader
    return loader


def reset_default_loader(host: Optional[AssetHost] = None) -> AssetLoader:
    """Replace the default loader with a fresh one (for testing)."""
    return set_default_loader(AssetLoader(host=host))


def register_library_assets(
    namespace: str,
    assets_path: Optional[Path | str] = None,
    assets_url: Optional[str] = None,
    config: Optional[Dict[str, Any]] = None,
) -> bool:
    return get_default_loader().register(namespace, assets_path, assets_url, config)


def register_library_assets_with_config(namespace: str, config: Optional[Dict[str, Any]] = None) -> bool:
    """
    Register a namespace from a single config mapping.

    The mapping may carry 'assets_path' and 'assets_url' alongside the
    asset config keys (version_strategy, cache_busting, handle_prefix,
    static_version).
    """
    config = dict(config or {})
    assets_path = config.pop("assets_path", None)
    assets_url = config.pop("assets_url", None)
    return get_default_loader().register(namespace, assets_path, assets_url, config)


def enqueue_library_style(
    file: str,
    deps: Optional[Sequence[str]] = None,
    version: Optional[str] = None,
    media: str = "all",
    handle: str = "",
    namespace: Optional[str] = None,
) -> str | bool:
    return get_default_loader().enqueue_style(file, deps, version, media, handle, namespace)


def enqueue_library_script(
    file: str,
    deps: Optional[Sequence[str]] = DEFAULT_SCRIPT_DEPS,
    version: Optional[str] = None,
    in_footer: bool = True,
    handle: str = "",
    namespace: Optional[str] = None,
) -> str | bool:
    return get_default_loader().enqueue_script(file, deps, version, in_footer, handle, namespace)


def enqueue_library_style_with_namespace(
    file: str,
    namespace: str,
    deps: Optional[Sequence[str]] = None,
    handle: str = "",
) -> str | bool:
    return get_default_loader().enqueue_style(file, deps, None, "all", handle, namespace)


def enqueue_library_script_with_namespace(
    file: str,
    namespace: str,
    deps: Optional[Sequence[str]] = DEFAULT_SCRIPT_DEPS,
    handle: str = "",
) -> str | bool:
    return get_default_loader().enqueue_script(file, deps, None, True, handle, namespace)


def get_library_asset_url(file: str, namespace: Optional[str] = None) -> Optional[str]:
    return get_default_loader().get_asset_url(file, namespace)


def get_library_asset_path(file: str, namespace: Optional[str] = None) -> Optional[Path]:
    return get_default_loader().get_asset_path(file, namespace)


def localize_library_script(handle: str, object_name: str, data: Dict[str, Any]) -> bool:
    return get_default_loader().localize_script(handle, object_name, data)


def get_library_debug_info() -> Dict[str, Any]:
    return get_default_loader().get_debug_info()


def clear_library_assets(namespace: Optional[str] = None):
    get_default_loader().clear(namespace)
