"""Command-line interface for game discovery.

This module provides the `game-library` entry point, which prints the
catalog of installed games as JSON.
"""

import argparse
import json
import logging
import sys
from pathlib import Path

from .core.platform import PlatformFacts
from .core.types import CatalogEntry
from .core.validator import validate_catalog_with_error_details
from .pipeline import CatalogResult, discover_installed_games
from .registry import SourceRegistry


def build_catalog(
    steam_root: Path | None = None,
    epic_manifest_dir: Path | None = None,
    sources: list[str] | None = None,
) -> tuple[CatalogResult, list[CatalogEntry]]:
    """Discover games and render them as catalog entries.

    Args:
        steam_root: Explicit Steam root
        epic_manifest_dir: Explicit Epic manifest directory
        sources: Source names to run (all when None)

    Returns:
        Tuple of (discovery result, rendered entries)
    """
    result = discover_installed_games(
        PlatformFacts.from_environment(),
        steam_root=steam_root.expanduser().resolve() if steam_root else None,
        epic_manifest_dir=epic_manifest_dir.expanduser().resolve() if epic_manifest_dir else None,
        sources=sources,
    )

    for name in result.missing_sources:
        print(f"{name}: client not installed", file=sys.stderr)
    for failure in result.errors:
        print(f"Error: {failure.source}: {failure.message}", file=sys.stderr)

    print(f"Found {len(result.games)} installed games", file=sys.stderr)
    return result, result.to_entries()


def main(argv: list[str] | None = None) -> None:
    """Main entry point for the discovery command."""
    SourceRegistry.discover_platforms()

    parser = argparse.ArgumentParser(
        description="List games installed through local game clients as JSON",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Every supported client at its default location
  game-library

  # A specific Steam installation only
  game-library --source steam --steam-root ~/.local/share/Steam

  # Pipe to file
  game-library > catalog.json
        """,
    )

    parser.add_argument("--steam-root", type=Path, help="Steam installation root")

    parser.add_argument(
        "--epic-manifests",
        type=Path,
        help="Epic Games Launcher manifest directory (Data/Manifests)",
    )

    parser.add_argument(
        "--source",
        action="append",
        choices=SourceRegistry.list_sources(),
        help="Client to scan (repeatable, default: all)",
    )

    parser.add_argument("--verbose", "-v", action="store_true", help="Log discovery details")

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    try:
        result, entries = build_catalog(
            steam_root=args.steam_root,
            epic_manifest_dir=args.epic_manifests,
            sources=args.source,
        )

        # Validate against JSON schema
        is_valid, error_msg = validate_catalog_with_error_details(entries)
        if not is_valid:
            print("Error: Catalog validation failed:", file=sys.stderr)
            print(error_msg, file=sys.stderr)
            sys.exit(1)

        json.dump(entries, sys.stdout, indent=2)
        print()

    except Exception as e:
        print(f"Error: Failed to discover games: {e}", file=sys.stderr)
        sys.exit(1)

    if not result.ok:
        sys.exit(1)


if __name__ == "__main__":
    main()
