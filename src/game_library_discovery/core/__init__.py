"""Core definitions shared by every client platform.

This package contains the normalized record type, the exception
hierarchy, default install-location resolution and schema validation.
"""

from .errors import DiscoveryError, LibraryIndexError, SourceNotFoundError
from .platform import PlatformFacts, resolve_epic_manifest_dir, resolve_steam_root
from .types import CatalogEntry, InstalledGame
from .validator import validate_catalog, validate_catalog_with_error_details

__all__ = [
    "CatalogEntry",
    "DiscoveryError",
    "InstalledGame",
    "LibraryIndexError",
    "PlatformFacts",
    "SourceNotFoundError",
    "resolve_epic_manifest_dir",
    "resolve_steam_root",
    "validate_catalog",
    "validate_catalog_with_error_details",
]
