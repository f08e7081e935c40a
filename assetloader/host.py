# assetloader/host.py
"""
Host platform boundary.

The loader never emits assets itself. It hands scripts and styles to an
AssetHost, which records them for the page being rendered and answers
questions about handles it already knows.

MemoryHost is a self-contained implementation used by the CLI and tests.
"""

import html
import json
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence
from urllib.parse import urlencode

logger = logging.getLogger(__name__)

ENQUEUED = "enqueued"
REGISTERED = "registered"


class AssetHost(ABC):
    """
    Base class for host platform asset queues.

    Subclasses record enqueued assets and attached script data.
    """

    @abstractmethod
    def enqueue_script(
        self,
        handle: str,
        url: str,
        deps: Sequence[str],
        version: str,
        in_footer: bool,
    ) -> None:
        pass

    @abstractmethod
    def enqueue_style(
        self,
        handle: str,
        url: str,
        deps: Sequence[str],
        version: str,
        media: str,
    ) -> None:
        pass

    @abstractmethod
    def script_is(self, handle: str, status: str = ENQUEUED) -> bool:
        pass

    @abstractmethod
    def style_is(self, handle: str, status: str = ENQUEUED) -> bool:
        pass

    @abstractmethod
    def localize_script(self, handle: str, object_name: str, data: Dict[str, Any]) -> bool:
        """Attach a data object to a script. Returns False if the script is unknown."""
        pass

    @abstractmethod
    def has_localized_data(self, handle: str, object_name: str) -> bool:
        pass

    def is_taken(self, handle: str) -> bool:
        """True if the handle is in use as a script or a style, enqueued or registered."""
        return any(
            check(handle, status)
            for check in (self.script_is, self.style_is)
            for status in (ENQUEUED, REGISTERED)
        )


@dataclass
class EnqueuedItem:
    """A script or style held by the MemoryHost."""
    handle: str
    url: str
    kind: str  # "script" or "style"
    deps: List[str] = field(default_factory=list)
    version: Optional[str] = None
    media: str = "all"
    in_footer: bool = True
    enqueued: bool = True
    data: Dict[str, Dict[str, Any]] = field(default_factory=dict)

    @property
    def versioned_url(self) -> str:
        if not self.version:
            return self.url
        sep = "&" if "?" in self.url else "?"
        return f"{self.url}{sep}{urlencode({'ver': self.version})}"


class MemoryHost(AssetHost):
    """
    In-memory asset queue.

    Usage:
        host = MemoryHost()
        host.enqueue_style("acme-admin", "https://example.com/admin.css", [], "1", "all")
        print(host.render_tags())
    """

    def __init__(self):
        self.scripts: Dict[str, EnqueuedItem] = {}
        self.styles: Dict[str, EnqueuedItem] = {}

    def register_script(self, handle: str, url: str, deps: Sequence[str] = (),
                        version: Optional[str] = None, in_footer: bool = True) -> None:
        """Register a script without enqueueing it."""
        self.scripts[handle] = EnqueuedItem(
            handle=handle, url=url, kind="script", deps=list(deps),
            version=version, in_footer=in_footer, enqueued=False,
        )

    def register_style(self, handle: str, url: str, deps: Sequence[str] = (),
                       version: Optional[str] = None, media: str = "all") -> None:
        """Register a style without enqueueing it."""
        self.styles[handle] = EnqueuedItem(
            handle=handle, url=url, kind="style", deps=list(deps),
            version=version, media=media, enqueued=False,
        )

    def enqueue_script(self, handle, url, deps, version, in_footer):
        existing = self.scripts.get(handle)
        if existing is not None:
            existing.enqueued = True
            return
        self.scripts[handle] = EnqueuedItem(
            handle=handle, url=url, kind="script", deps=list(deps),
            version=version, in_footer=in_footer,
        )
        logger.debug(f"Enqueued script {handle}: {url}")

    def enqueue_style(self, handle, url, deps, version, media):
        existing = self.styles.get(handle)
        if existing is not None:
            existing.enqueued = True
            return
        self.styles[handle] = EnqueuedItem(
            handle=handle, url=url, kind="style", deps=list(deps),
            version=version, media=media,
        )
        logger.debug(f"Enqueued style {handle}: {url}")

    @staticmethod
    def _status(items: Dict[str, EnqueuedItem], handle: str, status: str) -> bool:
        item = items.get(handle)
        if item is None:
            return False
        if status == ENQUEUED:
            return item.enqueued
        return True

    def script_is(self, handle, status=ENQUEUED):
        return self._status(self.scripts, handle, status)

    def style_is(self, handle, status=ENQUEUED):
        return self._status(self.styles, handle, status)

    def localize_script(self, handle, object_name, data):
        item = self.scripts.get(handle)
        if item is None:
            logger.warning(f"Cannot localize unknown script {handle}")
            return False
        item.data[object_name] = dict(data)
        return True

    def has_localized_data(self, handle, object_name):
        item = self.scripts.get(handle)
        return item is not None and object_name in item.data

    def enqueued(self) -> List[EnqueuedItem]:
        """All enqueued items, styles first, in enqueue order."""
        return [
            item
            for item in list(self.styles.values()) + list(self.scripts.values())
            if item.enqueued
        ]

    def render_tags(self, footer: Optional[bool] = None) -> str:
        """
        Render enqueued items as HTML tags.

        Args:
            footer: None renders everything, True only footer scripts,
                False styles and header scripts.
        """
        lines = []
        for item in self.enqueued():
            if item.kind == "style":
                if footer:
                    continue
                lines.append(
                    f"<link rel='stylesheet' id='{html.escape(item.handle)}-css' "
                    f"href='{html.escape(item.versioned_url)}' "
                    f"media='{html.escape(item.media)}' />"
                )
                continue

            if footer is not None and item.in_footer != footer:
                continue
            for object_name, data in item.data.items():
                lines.append(
                    f"<script id='{html.escape(item.handle)}-js-extra'>"
                    f"var {object_name} = {json.dumps(data)};</script>"
                )
            lines.append(
                f"<script src='{html.escape(item.versioned_url)}' "
                f"id='{html.escape(item.handle)}-js'></script>"
            )
        return "\n".join(lines)
