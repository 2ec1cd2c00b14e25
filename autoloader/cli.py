"""Command line tool to show where symbols resolve to.

Reads an autoloader YAML configuration and prints the file each given
symbol maps to. With ``--load`` the file is also executed and the tool
reports whether it defined the symbol.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from autoloader.build_resolver import build_resolver
from autoloader.cached_resolver import CachedResolver
from autoloader.errors import AutoloadError
from autoloader.load_config import load_config
from autoloader.module_host import ModuleHost

logger = logging.getLogger(__name__)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse CLI arguments for the resolver tool."""
    ap = argparse.ArgumentParser(
        description="Resolve fully qualified symbol names to the files defining them.",
    )
    ap.add_argument(
        "symbols",
        nargs="+",
        help="Fully qualified symbol names, e.g. 'Vendor\\Lib\\Thing'",
    )
    ap.add_argument(
        "--config",
        type=Path,
        help="Path to the autoloader YAML configuration",
    )
    ap.add_argument(
        "--load",
        action="store_true",
        help="Include the resolved files and check that they define the symbols",
    )
    ap.add_argument(
        "--cache",
        type=Path,
        help="Path to a symbol cache file (overrides cache.path in the config)",
    )
    ap.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: WARNING)",
    )
    return ap.parse_args(argv)


def run(args: argparse.Namespace) -> int:
    """Resolve every requested symbol and print the outcome."""
    config = load_config(args.config)
    if args.cache is not None:
        config["cache"] = {**(config.get("cache") or {}), "path": str(args.cache)}
    # Errors are reported per symbol below.
    config["verbose"] = True

    base_dir = args.config.parent if args.config else None
    host = ModuleHost()
    resolver = build_resolver(config, host, base_dir=base_dir)
    resolver.register(host.registry)

    missing = 0
    try:
        for symbol in args.symbols:
            if not args.load:
                path = resolver.find_file(symbol)
                print(f"{symbol} -> {path if path else 'not found'}")
                if path is None:
                    missing += 1
                continue
            try:
                result = resolver.resolve(symbol)
            except AutoloadError as e:
                print(f"{symbol} -> error: {e}")
                missing += 1
                continue
            if result is None:
                print(f"{symbol} -> not found")
                missing += 1
            else:
                print(f"{symbol} -> {result.path} (loaded via {result.strategy})")
    finally:
        if isinstance(resolver, CachedResolver):
            resolver.close()

    return 1 if missing else 0


def main(argv: list[str] | None = None) -> int:
    """Run the resolver tool."""
    args = parse_args(argv)
    logging.basicConfig(level=args.log_level, format="%(levelname)s %(name)s: %(message)s")
    try:
        return run(args)
    except AutoloadError as e:
        logger.error("%s", e)
        return 2


if __name__ == "__main__":
    sys.exit(main())
