"""Steam platform for catalog discovery.

This platform reads a local Steam installation: libraryfolders.vdf,
appmanifest_*.acf files, and the binary shortcuts.vdf of every profile.

Usage:
    >>> from game_library_discovery import SourceRegistry
    >>> source = SourceRegistry.create_source('steam', steam_root=Path('/opt/steam'))
    >>> games = source.discover()
"""

from pathlib import Path

from ...core.platform import PlatformFacts, resolve_steam_root
from .app_manifest import parse_app_manifest, parse_app_manifest_file, read_games_from_library
from .library_index import parse_library_folders, read_library_folders
from .shortcuts import Field, Shortcut, decode_shortcuts, read_next_field, read_shortcut_games
from .source import SteamSource
from .transformer import SteamTransformer

# Auto-register with the registry
from ...registry import SourceRegistry


def _create_steam_source(
    facts: PlatformFacts | None = None,
    steam_root: Path | None = None,
    include_shortcuts: bool = True,
    **kwargs,
) -> SteamSource:
    """Factory function for creating Steam sources.

    Args:
        facts: Platform facts used to resolve the default root
        steam_root: Explicit root, bypasses resolution
        include_shortcuts: Whether to decode non-Steam shortcuts
        **kwargs: Additional parameters (ignored)

    Returns:
        SteamSource instance
    """
    if steam_root is None:
        resolved = resolve_steam_root(facts or PlatformFacts.from_environment())
        steam_root = Path(resolved) if resolved is not None else None
    return SteamSource(steam_root, include_shortcuts=include_shortcuts)


# Auto-register at module import
SourceRegistry.register_factory('steam', _create_steam_source)

__all__ = [
    "Field",
    "Shortcut",
    "SteamSource",
    "SteamTransformer",
    "decode_shortcuts",
    "parse_app_manifest",
    "parse_app_manifest_file",
    "parse_library_folders",
    "read_games_from_library",
    "read_library_folders",
    "read_next_field",
    "read_shortcut_games",
]
