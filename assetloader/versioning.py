# assetloader/versioning.py
"""
Cache-busting version resolution.

An explicit version always wins. Otherwise the namespace config decides:
no cache busting gives the default version, the filemtime strategy gives
the file's modification timestamp and the static strategy gives the
configured static version.
"""

import logging
from pathlib import Path
from typing import Optional

from .registry import AssetConfig, DEFAULT_STATIC_VERSION, VersionStrategy

logger = logging.getLogger(__name__)


def file_mtime_version(path: Path | str) -> Optional[str]:
    """Modification time of a file as a whole-second timestamp string."""
    try:
        return str(int(Path(path).stat().st_mtime))
    except OSError as e:
        logger.warning(f"Cannot read modification time of {path}: {e}")
        return None


def resolve_version(
    file_path: Path | str,
    config: AssetConfig,
    explicit: Optional[str] = None,
    default: str = DEFAULT_STATIC_VERSION,
) -> str:
    """
    Resolve the version string for an asset.

    Args:
        file_path: Absolute path of the asset
        config: Namespace configuration
        explicit: Caller-supplied version, used verbatim when given
        default: Version used when cache busting is disabled

    Returns:
        Version string
    """
    if explicit:
        return explicit

    if not config.cache_busting:
        return default

    if config.version_strategy is VersionStrategy.STATIC:
        return config.static_version

    return file_mtime_version(file_path) or default
