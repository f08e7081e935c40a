# assetloader/urls.py
"""
Filesystem path to public URL translation.

The host serves a few known root directories (content root, install root,
plugin root) under base URLs. A local path is mapped to a URL by swapping
the matching root prefix for its base URL. When roots nest, the most
specific (longest) root wins.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Iterable, List, Optional

if TYPE_CHECKING:
    from .config import LoaderSettings

logger = logging.getLogger(__name__)


def normalize_path(path: Path | str) -> Path:
    """Absolute path with backslashes treated as separators."""
    return Path(str(path).replace("\\", "/")).expanduser().resolve()


@dataclass(frozen=True)
class UrlRoot:
    """A served root directory and its base URL."""
    path: Path
    url: str
    name: str = ""

    @classmethod
    def create(cls, path: Path | str, url: str, name: str = "") -> "UrlRoot":
        return cls(path=normalize_path(path), url=url.rstrip("/"), name=name)


class PathTranslator:
    """
    Maps local paths to public URLs.

    Usage:
        translator = PathTranslator([
            UrlRoot.create("/srv/site/wp-content", "https://example.com/wp-content", "content"),
            UrlRoot.create("/srv/site", "https://example.com", "install"),
        ])
        translator.to_url("/srv/site/wp-content/plugins/acme/assets/app.js")
        # -> "https://example.com/wp-content/plugins/acme/assets/app.js"
    """

    def __init__(self, roots: Iterable[UrlRoot] = ()):
        self._roots: List[UrlRoot] = list(roots)

    @classmethod
    def from_settings(cls, settings: "LoaderSettings") -> "PathTranslator":
        """Build a translator from the configured content, install and plugin roots."""
        candidates = [
            ("content", settings.content_dir, settings.content_url),
            ("install", settings.abspath, settings.home_url),
            ("plugin", settings.plugin_dir, settings.plugin_url),
        ]
        roots = [
            UrlRoot.create(path, url, name)
            for name, path, url in candidates
            if path and url
        ]
        return cls(roots)

    @property
    def roots(self) -> List[UrlRoot]:
        return list(self._roots)

    def add_root(self, path: Path | str, url: str, name: str = "") -> UrlRoot:
        root = UrlRoot.create(path, url, name)
        self._roots.append(root)
        return root

    def match(self, path: Path | str) -> Optional[UrlRoot]:
        """Return the most specific root containing path, or None."""
        target = normalize_path(path)
        best: Optional[UrlRoot] = None
        for root in self._roots:
            if not target.is_relative_to(root.path):
                continue
            # Earlier roots win ties
            if best is None or len(root.path.parts) > len(best.path.parts):
                best = root
        return best

    def to_url(self, path: Path | str) -> Optional[str]:
        """
        Convert a local path to a public URL.

        Returns None if the path lies outside every known root.
        """
        root = self.match(path)
        if root is None:
            logger.debug(f"No URL root matches {path}")
            return None

        relative = normalize_path(path).relative_to(root.path).as_posix()
        if relative == ".":
            return root.url
        return f"{root.url}/{relative}"
