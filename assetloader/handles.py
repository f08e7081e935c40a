# assetloader/handles.py
"""
Handle generation and duplicate tracking.

Generated handles look like: <prefix>-<name>
where prefix is the namespace lower-cased with separators turned into
dashes. A handle the host already knows is never reused: a numeric suffix
is appended until the handle is free.
"""

import logging
import re
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, List, Optional, Tuple

from .registry import normalize_file

logger = logging.getLogger(__name__)

_UNSAFE_KEY_CHARS = re.compile(r"[^a-z0-9_\-]")
_NAMESPACE_SEPARATORS = re.compile(r"[\\./]+")


class AssetKind(Enum):
    """Kinds of enqueueable assets."""
    SCRIPT = "script"
    STYLE = "style"

    @property
    def extension(self) -> str:
        return ".js" if self is AssetKind.SCRIPT else ".css"


def sanitize_key(value: str) -> str:
    """Lower-case and strip everything but a-z, 0-9, underscore and dash."""
    return _UNSAFE_KEY_CHARS.sub("", value.lower())


def namespace_prefix(namespace: str) -> str:
    """
    Default handle prefix for a namespace.

    "Acme\\Widget" -> "acme-widget"
    """
    dashed = _NAMESPACE_SEPARATORS.sub("-", namespace.strip("\\./"))
    return sanitize_key(dashed)


def asset_name(file: str, kind: AssetKind) -> str:
    """Base name of an asset file without its kind's extension."""
    name = file.replace("\\", "/").rstrip("/").rsplit("/", 1)[-1]
    if name.endswith(kind.extension):
        name = name[: -len(kind.extension)]
    return name


class HandleGenerator:
    """
    Produces collision-free handles.

    Args:
        is_taken: Callable reporting whether the host already uses a handle
    """

    def __init__(self, is_taken: Callable[[str], bool]):
        self._is_taken = is_taken

    def base_handle(self, namespace: str, name: str, prefix: str = "") -> str:
        prefix = sanitize_key(prefix) if prefix else namespace_prefix(namespace)
        return sanitize_key(f"{prefix}-{name}")

    def generate(self, namespace: str, name: str, prefix: str = "") -> str:
        """Generate a handle that the host does not report as taken."""
        base = self.base_handle(namespace, name, prefix)
        handle = base
        counter = 1
        while self._is_taken(handle):
            handle = f"{base}-{counter}"
            counter += 1
        if handle != base:
            logger.debug(f"Handle {base} taken, using {handle}")
        return handle


@dataclass(frozen=True)
class EnqueuedAsset:
    """An asset that has been handed to the host."""
    namespace: str
    kind: AssetKind
    file: str
    handle: str

    def to_dict(self) -> Dict[str, str]:
        return {
            "namespace": self.namespace,
            "kind": self.kind.value,
            "file": self.file,
            "handle": self.handle,
        }


AssetKey = Tuple[str, AssetKind, str]


class EnqueueTracker:
    """Remembers the handle issued for each (namespace, kind, file)."""

    def __init__(self):
        self._assets: Dict[AssetKey, EnqueuedAsset] = {}

    @staticmethod
    def key(namespace: str, kind: AssetKind, file: str) -> AssetKey:
        return (namespace, kind, normalize_file(file))

    def get(self, namespace: str, kind: AssetKind, file: str) -> Optional[str]:
        asset = self._assets.get(self.key(namespace, kind, file))
        return asset.handle if asset else None

    def add(self, namespace: str, kind: AssetKind, file: str, handle: str) -> EnqueuedAsset:
        key = self.key(namespace, kind, file)
        asset = EnqueuedAsset(namespace=key[0], kind=kind, file=key[2], handle=handle)
        self._assets[key] = asset
        return asset

    def clear(self, namespace: Optional[str] = None) -> int:
        """
        Forget tracked assets.

        Returns the number of entries removed.
        """
        if namespace is None:
            removed = len(self._assets)
            self._assets.clear()
            return removed

        keys = [k for k in self._assets if k[0] == namespace]
        for k in keys:
            del self._assets[k]
        return len(keys)

    def items(self) -> List[EnqueuedAsset]:
        return list(self._assets.values())

    def __len__(self) -> int:
        return len(self._assets)
