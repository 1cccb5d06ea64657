"""Game Library Discovery.

This package finds the games installed through local game clients (Steam,
including non-Steam shortcuts, and the Epic Games Launcher) by decoding
each client's on-disk manifests, and returns one normalized, deduplicated
catalog.
"""

# Core library interface
from .pipeline import CatalogPipeline, CatalogResult, SourceFailure, discover_installed_games
from .registry import SourceRegistry
from .sources.base import Source
from .transformers.base import Transformer

# Core utilities
from .core import (
    CatalogEntry,
    DiscoveryError,
    InstalledGame,
    LibraryIndexError,
    PlatformFacts,
    SourceNotFoundError,
    resolve_epic_manifest_dir,
    resolve_steam_root,
    validate_catalog,
    validate_catalog_with_error_details,
)

__version__ = "0.1.0"

# Auto-discover and register all platforms
SourceRegistry.discover_platforms()

__all__ = [
    # Primary library interface
    "discover_installed_games",
    "CatalogPipeline",
    "CatalogResult",
    "SourceFailure",
    "SourceRegistry",
    "Source",
    "Transformer",
    # Core utilities
    "CatalogEntry",
    "InstalledGame",
    "PlatformFacts",
    "resolve_steam_root",
    "resolve_epic_manifest_dir",
    "validate_catalog",
    "validate_catalog_with_error_details",
    # Errors
    "DiscoveryError",
    "SourceNotFoundError",
    "LibraryIndexError",
]
