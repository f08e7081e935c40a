# assetloader/resolver.py
"""
Caller namespace resolution.

When a library calls the loader without naming its namespace, the loader
walks the call stack to find out who is asking:

1. Take the first frame outside this package.
2. Its declared namespace is the `__asset_namespace__` attribute of the
   method's class or module, falling back to the module name.
3. Try that namespace and each shorter parent against the registered
   namespaces. First match wins.
4. Otherwise scan the source files of the remaining frames for a
   `__asset_namespace__ = "..."` marker naming a registered namespace.

Namespaces are compared with `\\`, `/` and `.` treated as the same
separator, so "Acme\\Widget" matches a caller in module "Acme.Widget".
This is a heuristic: siblings sharing a parent namespace can be
misattributed when only the parent is registered. Pass the namespace
explicitly (or use AssetLoader.bind) when attribution matters.
"""

import functools
import inspect
import logging
import re
from dataclasses import dataclass
from pathlib import Path
from types import FrameType
from typing import Dict, Iterable, List, Optional, Tuple

logger = logging.getLogger(__name__)

MARKER = "__asset_namespace__"

# Frames inside this package are never the caller
PACKAGE_DIR = Path(__file__).resolve().parent

MAX_FRAMES = 12

_MARKER_RE = re.compile(
    r"^\s*" + MARKER + r"\s*(?::\s*str\s*)?=\s*['\"]([^'\"]+)['\"]",
    re.MULTILINE,
)
_SEPARATORS = re.compile(r"[\\./]+")


def normalize_namespace(namespace: str) -> str:
    """Canonical dotted form of a namespace."""
    return ".".join(part for part in _SEPARATORS.split(namespace) if part)


def parent_namespaces(namespace: str) -> List[str]:
    """
    The namespace followed by each shorter parent.

    "acme.widget.admin" -> ["acme.widget.admin", "acme.widget", "acme"]
    """
    parts = normalize_namespace(namespace).split(".")
    return [".".join(parts[:i]) for i in range(len(parts), 0, -1) if parts[0]]


def extract_namespace_from_file(path: Path | str) -> Optional[str]:
    """Read the `__asset_namespace__` marker declared in a source file."""
    try:
        content = Path(path).read_text(encoding="utf-8", errors="replace")
    except OSError:
        return None
    match = _MARKER_RE.search(content)
    return match.group(1) if match else None


@dataclass(frozen=True)
class CallerFrame:
    """A stack frame outside the loader package."""
    filename: str
    lineno: int
    function: str
    namespace: Optional[str]

    @property
    def has_source(self) -> bool:
        return not self.filename.startswith("<") and Path(self.filename).is_file()


def declared_namespace(frame: FrameType) -> Optional[str]:
    """Namespace declared by the code running in a frame."""
    code = frame.f_code
    if code.co_argcount and code.co_varnames[0] in ("self", "cls"):
        owner = frame.f_locals.get(code.co_varnames[0])
        if owner is not None:
            owner_cls = owner if isinstance(owner, type) else type(owner)
            declared = getattr(owner_cls, MARKER, None)
            if isinstance(declared, str) and declared:
                return declared
            module = inspect.getmodule(owner_cls)
            if module is not None:
                declared = getattr(module, MARKER, None)
                if isinstance(declared, str) and declared:
                    return declared
            return owner_cls.__module__

    declared = frame.f_globals.get(MARKER)
    if isinstance(declared, str) and declared:
        return declared
    return frame.f_globals.get("__name__")


@functools.lru_cache(maxsize=None)
def _is_internal(filename: str) -> bool:
    try:
        return Path(filename).resolve().is_relative_to(PACKAGE_DIR)
    except (OSError, ValueError):
        return False


def caller_frames(limit: int = MAX_FRAMES) -> List[CallerFrame]:
    """Frames outside this package, innermost first."""
    frames: List[CallerFrame] = []
    frame = inspect.currentframe()
    try:
        while frame is not None and len(frames) < limit:
            filename = frame.f_code.co_filename
            if not _is_internal(filename):
                frames.append(CallerFrame(
                    filename=filename,
                    lineno=frame.f_lineno,
                    function=frame.f_code.co_name,
                    namespace=declared_namespace(frame),
                ))
            frame = frame.f_back
    finally:
        del frame
    return frames


def match_namespace(namespace: str, registered: Iterable[str]) -> Optional[str]:
    """Return the registered key matching namespace or its closest parent."""
    by_normalized: Dict[str, str] = {}
    for key in registered:
        by_normalized.setdefault(normalize_namespace(key), key)

    for candidate in parent_namespaces(namespace):
        if candidate in by_normalized:
            return by_normalized[candidate]
    return None


class NamespaceResolver:
    """
    Resolves the registered namespace of the calling code.

    Results are memoised per (registry generation, call-stack shape). The
    memo is never evicted; AssetLoader.clear() empties it.
    """

    def __init__(self):
        self._cache: Dict[Tuple, Optional[str]] = {}

    def __len__(self) -> int:
        return len(self._cache)

    def clear(self):
        self._cache.clear()

    def resolve(self, registered: Iterable[str], generation: int = 0) -> Optional[str]:
        """
        Find the registered namespace of the caller.

        Args:
            registered: Registered namespace keys
            generation: Registry change counter, part of the memo key

        Returns:
            The matching registered namespace, or None
        """
        frames = caller_frames()
        if not frames:
            return None

        fingerprint = (generation,) + tuple(
            (f.filename, f.lineno, f.namespace) for f in frames
        )
        if fingerprint in self._cache:
            return self._cache[fingerprint]

        registered = list(registered)
        namespace = self._resolve_frames(frames, registered)
        self._cache[fingerprint] = namespace
        if namespace is None:
            logger.debug(f"No registered namespace for caller {frames[0].filename}:{frames[0].lineno}")
        return namespace

    @staticmethod
    def _resolve_frames(frames: List[CallerFrame], registered: List[str]) -> Optional[str]:
        caller = frames[0]
        if caller.namespace:
            match = match_namespace(caller.namespace, registered)
            if match is not None:
                return match

        for frame in frames:
            if not frame.has_source:
                continue
            marker = extract_namespace_from_file(frame.filename)
            if marker:
                match = match_namespace(marker, registered)
                if match is not None:
                    return match
        return None


def caller_file(namespace: str) -> Optional[Path]:
    """
    Source file of the code registering a namespace.

    Prefers the first frame whose declared namespace (or file marker) is
    the namespace being registered, else the first frame with a source file.
    """
    target = normalize_namespace(namespace)
    frames = [f for f in caller_frames() if f.has_source]

    for frame in frames:
        if frame.namespace and normalize_namespace(frame.namespace) == target:
            return Path(frame.filename)
        marker = extract_namespace_from_file(frame.filename)
        if marker and normalize_namespace(marker) == target:
            return Path(frame.filename)

    return Path(frames[0].filename) if frames else None


def derive_assets_path(source_file: Path | str) -> Path:
    """
    Guess the assets directory of a library from one of its source files.

    A file in a `src/` directory looks for `assets/` beside `src/`;
    any other file looks for `assets/` in its own directory. When the
    primary guess does not exist, the first existing alternative is used.
    """
    caller_dir = Path(source_file).resolve().parent

    if caller_dir.name == "src":
        primary = caller_dir.parent / "assets"
    else:
        primary = caller_dir / "assets"

    if primary.is_dir():
        return primary

    for alternative in (caller_dir / "assets", caller_dir.parent / "assets"):
        if alternative.is_dir():
            return alternative
    return primary
