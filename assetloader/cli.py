#!/usr/bin/env python3
"""
Asset Loader CLI

Inspect an asset manifest without a running host:
  assetloader list - Show registered namespaces
  assetloader url - Public URL of an asset
  assetloader path - Local path of an asset
  assetloader render - Enqueue assets and print the resulting tags

Usage:
  assetloader list <manifest.yaml>
  assetloader url <manifest.yaml> <namespace> <file>
  assetloader path <manifest.yaml> <namespace> <file>
  assetloader render <manifest.yaml> <namespace> <file>... [--version <v>]
"""

import argparse
import logging
import sys
from typing import List, Optional

from .config import ConfigError
from .host import MemoryHost
from .loader import AssetLoader


def load(args) -> AssetLoader:
    loader = AssetLoader.from_manifest(args.manifest, host=MemoryHost())
    level = logging.getLevelName(loader.settings.log_level.upper())
    if not isinstance(level, int):
        raise ConfigError(f"Unknown log level: {loader.settings.log_level}")
    if not args.verbose:
        logging.getLogger().setLevel(level)
    return loader


def cmd_list(args) -> int:
    """Show registered namespaces."""
    loader = load(args)
    registrations = loader.get_registered()
    if not registrations:
        print("No namespaces registered")
        return 0

    for namespace, reg in registrations.items():
        print(namespace)
        print(f"  path: {reg.assets_path}")
        print(f"  url:  {reg.assets_url or '(per-file translation)'}")
        config = reg.config
        print(f"  version: {config.version_strategy.value}"
              f"{'' if config.cache_busting else ' (cache busting off)'}")
        if config.handle_prefix:
            print(f"  handle prefix: {config.handle_prefix}")
    return 0


def cmd_url(args) -> int:
    """Print the public URL of an asset."""
    url = load(args).get_asset_url(args.file, namespace=args.namespace)
    if url is None:
        print(f"ERROR: no URL for {args.file} in {args.namespace}", file=sys.stderr)
        return 1
    print(url)
    return 0


def cmd_path(args) -> int:
    """Print the local path of an asset."""
    path = load(args).get_asset_path(args.file, namespace=args.namespace)
    if path is None:
        print(f"ERROR: {args.file} not found in {args.namespace}", file=sys.stderr)
        return 1
    print(path)
    return 0


def cmd_render(args) -> int:
    """Enqueue assets and print the tags the host would emit."""
    loader = load(args)
    failed = 0
    for file in args.files:
        if file.endswith(".css"):
            handle = loader.enqueue_style(file, version=args.version, namespace=args.namespace)
        else:
            handle = loader.enqueue_script(file, deps=[], version=args.version,
                                           namespace=args.namespace)
        if not handle:
            print(f"ERROR: could not enqueue {file}", file=sys.stderr)
            failed += 1

    print(loader.host.render_tags())
    return 1 if failed else 0


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        prog="assetloader",
        description="Asset Loader - namespace-based asset registration",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Verbose logging")
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    list_parser = subparsers.add_parser("list", help="Show registered namespaces")
    list_parser.add_argument("manifest", help="Manifest YAML file")

    url_parser = subparsers.add_parser("url", help="Public URL of an asset")
    url_parser.add_argument("manifest", help="Manifest YAML file")
    url_parser.add_argument("namespace", help="Registered namespace")
    url_parser.add_argument("file", help="Path relative to the assets directory")

    path_parser = subparsers.add_parser("path", help="Local path of an asset")
    path_parser.add_argument("manifest", help="Manifest YAML file")
    path_parser.add_argument("namespace", help="Registered namespace")
    path_parser.add_argument("file", help="Path relative to the assets directory")

    render_parser = subparsers.add_parser("render", help="Enqueue assets and print tags")
    render_parser.add_argument("manifest", help="Manifest YAML file")
    render_parser.add_argument("namespace", help="Registered namespace")
    render_parser.add_argument("files", nargs="+", help="Assets (.css as styles, others as scripts)")
    render_parser.add_argument("--version", help="Explicit version for all assets")

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    commands = {
        "list": cmd_list,
        "url": cmd_url,
        "path": cmd_path,
        "render": cmd_render,
    }
    command = commands.get(args.command)
    if command is None:
        parser.print_help()
        return 1

    try:
        return command(args)
    except ConfigError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
