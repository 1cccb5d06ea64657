"""Epic Games Launcher platform for catalog discovery.

This platform reads the launcher's per-item JSON manifests. The launcher
only exists on macOS and Windows; elsewhere the source reports that the
client is not installed unless a manifest directory is given explicitly.
"""

from pathlib import Path

from ...core.platform import PlatformFacts, resolve_epic_manifest_dir
from .source import (
    EpicSource,
    find_cover_image,
    parse_item_manifest,
    parse_item_manifest_file,
    scan_item_manifests,
)
from .transformer import EpicTransformer

# Auto-register with the registry
from ...registry import SourceRegistry


def _create_epic_source(
    facts: PlatformFacts | None = None,
    epic_manifest_dir: Path | None = None,
    **kwargs,
) -> EpicSource:
    """Factory function for creating Epic sources.

    Args:
        facts: Platform facts used to resolve the default manifest directory
        epic_manifest_dir: Explicit manifest directory, bypasses resolution
        **kwargs: Additional parameters (ignored)

    Returns:
        EpicSource instance
    """
    if epic_manifest_dir is None:
        resolved = resolve_epic_manifest_dir(facts or PlatformFacts.from_environment())
        epic_manifest_dir = Path(resolved) if resolved is not None else None
    return EpicSource(epic_manifest_dir)


# Auto-register at module import
SourceRegistry.register_factory('epic', _create_epic_source)

__all__ = [
    "EpicSource",
    "EpicTransformer",
    "find_cover_image",
    "parse_item_manifest",
    "parse_item_manifest_file",
    "scan_item_manifests",
]
