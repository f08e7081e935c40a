# assetloader/loader.py
"""
The asset loader.

Ties together the namespace registry, the caller resolver, the URL
translator, handle generation and version resolution, and hands the
result to the host's asset queue.

Every lookup fails quietly: a missing namespace, a missing file or an
untranslatable path gives False/None and a log line, never an exception,
so a broken library degrades to "asset not loaded" instead of breaking
the page.
"""

import logging
from pathlib import Path
from typing import Any, Dict, Iterable, Optional, Sequence

from .config import LoaderSettings, Manifest, ManifestEntry
from .handles import AssetKind, EnqueueTracker, HandleGenerator, asset_name
from .host import AssetHost, MemoryHost
from .registry import AssetConfig, NamespaceRegistry, Registration, normalize_file
from .resolver import (
    NamespaceResolver,
    caller_file,
    derive_assets_path,
    normalize_namespace,
)
from .urls import PathTranslator, normalize_path
from .versioning import resolve_version

logger = logging.getLogger(__name__)

DEFAULT_SCRIPT_DEPS = ("jquery",)


class AssetLoader:
    """
    Registers library asset locations and enqueues their scripts and styles.

    Usage:
        loader = AssetLoader(host=MemoryHost(), settings=settings)
        loader.register("Acme\\Widget", "/srv/site/wp-content/plugins/acme/assets")
        handle = loader.enqueue_style("css/admin.css", namespace="Acme\\Widget")

    Calls made without a namespace are attributed to the caller's namespace
    (see assetloader.resolver). bind() gives a view with a fixed namespace.
    """

    def __init__(
        self,
        host: Optional[AssetHost] = None,
        settings: Optional[LoaderSettings] = None,
        translator: Optional[PathTranslator] = None,
    ):
        self.settings = settings or LoaderSettings()
        self.host = host if host is not None else MemoryHost()
        self.translator = translator or PathTranslator.from_settings(self.settings)
        self.registry = NamespaceRegistry()
        self.tracker = EnqueueTracker()
        self.resolver = NamespaceResolver()
        self.handles = HandleGenerator(self.host.is_taken)
        self._generation = 0

    @classmethod
    def from_manifest(cls, manifest: Manifest | Path | str,
                      host: Optional[AssetHost] = None) -> "AssetLoader":
        """Create a loader from a manifest and register its namespaces."""
        if not isinstance(manifest, Manifest):
            manifest = Manifest.from_file(manifest)
        loader = cls(host=host, settings=manifest.settings.with_env())
        loader.register_many(manifest.entries)
        return loader

    # Registration

    def register(
        self,
        namespace: str,
        assets_path: Optional[Path | str] = None,
        assets_url: Optional[str] = None,
        config: Optional[AssetConfig | Dict[str, Any]] = None,
    ) -> bool:
        """
        Register the assets location of a namespace.

        Args:
            namespace: Library namespace
            assets_path: Assets directory. Derived from the caller's source
                file when omitted.
            assets_url: Public URL of the assets directory. Derived from the
                configured URL roots when omitted. If neither is available
                registration still succeeds, but URL lookups and enqueues
                for the namespace return None/False.
            config: AssetConfig or dict of config keys

        Returns:
            True on success, False if no assets path could be determined
        """
        if not namespace:
            logger.warning("Cannot register assets for an empty namespace")
            return False

        if assets_path is None:
            source = caller_file(namespace)
            if source is None:
                logger.warning(f"Cannot determine assets path for {namespace}")
                return False
            path = derive_assets_path(source)
        else:
            path = normalize_path(assets_path)

        if not path.is_dir():
            logger.debug(f"Assets directory for {namespace} does not exist yet: {path}")

        if assets_url is None:
            url = self.translator.to_url(path)
            if url is None:
                logger.debug(f"No URL root for {path}; URLs for {namespace} will be translated per file")
        else:
            url = assets_url.rstrip("/")

        if not isinstance(config, AssetConfig):
            config = AssetConfig.from_dict(config)

        self.registry.add(Registration(
            namespace=namespace,
            assets_path=path,
            assets_url=url,
            config=config,
        ))
        self._generation += 1
        logger.debug(f"Registered {namespace}: {path} -> {url}")
        return True

    def register_many(self, entries: Iterable[ManifestEntry]) -> Dict[str, bool]:
        """Register manifest entries. Returns success per namespace."""
        results = {}
        for entry in entries:
            results[entry.namespace] = self.register(
                entry.namespace,
                assets_path=entry.assets_path,
                assets_url=entry.assets_url,
                config=entry.config,
            )
        return results

    def clear(self, namespace: Optional[str] = None):
        """
        Forget registrations.

        With a namespace, removes its registration and tracked assets only.
        Without, empties registrations, tracked assets and the namespace cache.
        """
        if namespace:
            namespace = self._lookup(namespace) or namespace
            self.registry.remove(namespace)
            removed = self.tracker.clear(namespace)
            self._generation += 1
            logger.debug(f"Cleared {namespace} ({removed} tracked assets)")
            return

        self.registry.clear()
        self.tracker.clear()
        self.resolver.clear()
        self._generation += 1

    def get_registered(self) -> Dict[str, Registration]:
        """Registered namespaces and their registrations."""
        return self.registry.as_dict()

    def get_debug_info(self) -> Dict[str, Any]:
        return {
            "registrations": {
                reg.namespace: {
                    "assets_path": str(reg.assets_path),
                    "assets_url": reg.assets_url,
                    "config": reg.config.to_dict(),
                }
                for reg in self.registry
            },
            "enqueued": [asset.to_dict() for asset in self.tracker.items()],
            "namespace_cache_size": len(self.resolver),
        }

    # Namespace resolution

    def _lookup(self, namespace: str) -> Optional[str]:
        """Registered key for an explicit namespace, tolerating separator style."""
        if namespace in self.registry:
            return namespace
        wanted = normalize_namespace(namespace)
        for key in self.registry.namespaces():
            if normalize_namespace(key) == wanted:
                return key
        return None

    def _registration(self, namespace: Optional[str]) -> Optional[Registration]:
        if namespace:
            key = self._lookup(namespace)
        else:
            key = self.resolver.resolve(self.registry.namespaces(), self._generation)
        if key is None:
            logger.debug(f"No registered namespace for {namespace or 'caller'}")
            return None
        return self.registry.get(key)

    def get_calling_namespace(self) -> Optional[str]:
        """Registered namespace of the calling code, or None."""
        return self.resolver.resolve(self.registry.namespaces(), self._generation)

    def bind(self, namespace: str) -> "BoundAssets":
        """View of this loader whose calls always use the given namespace."""
        return BoundAssets(self, namespace)

    # Lookups

    def _file_url(self, registration: Registration, file: str, file_path: Path) -> Optional[str]:
        return registration.file_url(file) or self.translator.to_url(file_path)

    def get_asset_path(self, file: str, namespace: Optional[str] = None) -> Optional[Path]:
        """Absolute path of an asset, or None if unregistered or missing."""
        registration = self._registration(namespace)
        if registration is None:
            return None
        file_path = registration.file_path(file)
        if not file_path.is_file():
            return None
        return file_path

    def get_asset_url(self, file: str, namespace: Optional[str] = None) -> Optional[str]:
        """Public URL of an asset, or None if unregistered, missing or untranslatable."""
        registration = self._registration(namespace)
        if registration is None:
            return None
        file_path = registration.file_path(file)
        if not file_path.is_file():
            return None
        return self._file_url(registration, file, file_path)

    # Enqueueing

    def _enqueue(
        self,
        kind: AssetKind,
        file: str,
        deps: Sequence[str],
        version: Optional[str],
        handle: str,
        namespace: Optional[str],
        placement: Any,
    ) -> str | bool:
        registration = self._registration(namespace)
        if registration is None:
            logger.warning(f"Cannot enqueue {kind.value} {file}: namespace not registered")
            return False
        ns = registration.namespace
        file = normalize_file(file)

        issued = self.tracker.get(ns, kind, file)
        if issued is not None:
            logger.debug(f"{kind.value} {file} already enqueued for {ns} as {issued}")
            return issued

        file_path = registration.file_path(file)
        if not file_path.is_file():
            logger.warning(f"Cannot enqueue {kind.value} for {ns}: {file_path} not found")
            return False

        url = self._file_url(registration, file, file_path)
        if not url:
            logger.warning(f"Cannot enqueue {kind.value} for {ns}: no URL for {file_path}")
            return False

        handle = handle or self.handles.generate(
            ns, asset_name(file, kind), registration.config.handle_prefix,
        )
        version = resolve_version(
            file_path, registration.config, version, self.settings.default_version,
        )

        if kind is AssetKind.SCRIPT:
            self.host.enqueue_script(handle, url, list(deps), version, placement)
        else:
            self.host.enqueue_style(handle, url, list(deps), version, placement)

        self.tracker.add(ns, kind, file, handle)
        logger.debug(f"Enqueued {kind.value} {handle} ({url}, ver {version})")
        return handle

    def enqueue_style(
        self,
        file: str,
        deps: Optional[Sequence[str]] = None,
        version: Optional[str] = None,
        media: str = "all",
        handle: str = "",
        namespace: Optional[str] = None,
    ) -> str | bool:
        """
        Enqueue a stylesheet from a namespace's assets directory.

        Args:
            file: Path relative to the assets directory
            deps: Style handles to load first
            version: Explicit version (otherwise resolved from config)
            media: Media the stylesheet applies to
            handle: Custom handle (otherwise generated)
            namespace: Namespace to use (otherwise the caller's)

        Returns:
            The style handle, or False on failure
        """
        return self._enqueue(
            AssetKind.STYLE, file, deps or [], version, handle, namespace, media,
        )

    def enqueue_script(
        self,
        file: str,
        deps: Optional[Sequence[str]] = DEFAULT_SCRIPT_DEPS,
        version: Optional[str] = None,
        in_footer: bool = True,
        handle: str = "",
        namespace: Optional[str] = None,
    ) -> str | bool:
        """
        Enqueue a script from a namespace's assets directory.

        Args:
            file: Path relative to the assets directory
            deps: Script handles to load first (default: jquery)
            version: Explicit version (otherwise resolved from config)
            in_footer: Emit in the page footer
            handle: Custom handle (otherwise generated)
            namespace: Namespace to use (otherwise the caller's)

        Returns:
            The script handle, or False on failure
        """
        return self._enqueue(
            AssetKind.SCRIPT, file, deps or [], version, handle, namespace, in_footer,
        )

    def localize_script(self, handle: str, object_name: str, data: Dict[str, Any]) -> bool:
        """Attach a data object to an enqueued script."""
        if self.host.has_localized_data(handle, object_name):
            logger.debug(f"{object_name} already attached to {handle}")
            return False
        return self.host.localize_script(handle, object_name, data)


class BoundAssets:
    """
    Loader calls bound to one namespace.

    Usage:
        assets = loader.bind("Acme\\Widget")
        assets.register("/srv/site/wp-content/plugins/acme/assets")
        assets.enqueue_script("js/admin.js")
    """

    def __init__(self, loader: AssetLoader, namespace: str):
        self.loader = loader
        self.namespace = namespace

    def register(self, assets_path: Optional[Path | str] = None, assets_url: Optional[str] = None,
                 config: Optional[AssetConfig | Dict[str, Any]] = None) -> bool:
        return self.loader.register(self.namespace, assets_path, assets_url, config)

    def enqueue_style(self, file: str, deps: Optional[Sequence[str]] = None,
                      version: Optional[str] = None, media: str = "all",
                      handle: str = "") -> str | bool:
        return self.loader.enqueue_style(file, deps, version, media, handle, self.namespace)

    def enqueue_script(self, file: str, deps: Optional[Sequence[str]] = DEFAULT_SCRIPT_DEPS,
                       version: Optional[str] = None, in_footer: bool = True,
                       handle: str = "") -> str | bool:
        return self.loader.enqueue_script(file, deps, version, in_footer, handle, self.namespace)

    def get_asset_url(self, file: str) -> Optional[str]:
        return self.loader.get_asset_url(file, self.namespace)

    def get_asset_path(self, file: str) -> Optional[Path]:
        return self.loader.get_asset_path(file, self.namespace)

    def localize_script(self, handle: str, object_name: str, data: Dict[str, Any]) -> bool:
        return self.loader.localize_script(handle, object_name, data)

    def clear(self):
        self.loader.clear(self.namespace)
