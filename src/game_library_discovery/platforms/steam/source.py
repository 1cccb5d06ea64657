"""Steam source adapter.

This module provides a Source implementation that walks a Steam
installation: the library index, every library's app manifests, and the
per-profile shortcut files.
"""

import dataclasses
import logging
from pathlib import Path

from ...core.errors import SourceNotFoundError
from ...core.types import InstalledGame
from ...sources.base import Source
from ...transformers.base import Transformer
from .app_manifest import read_games_from_library
from .library_index import read_library_folders
from .shortcuts import read_shortcut_games

logger = logging.getLogger(__name__)

# Artwork Steam caches locally for the library view
LIBRARY_CACHE_DIR = Path("appcache") / "librarycache"
COVER_FILENAME = "library_600x900.jpg"


def find_cached_cover(steam_root: Path, app_id: int) -> Path | None:
    """Look up the locally cached library artwork for an app.

    Older clients store `<appid>_library_600x900.jpg` flat in the cache,
    newer ones use a per-app subdirectory.
    """
    cache = Path(steam_root) / LIBRARY_CACHE_DIR
    for candidate in (
        cache / f"{app_id}_{COVER_FILENAME}",
        cache / str(app_id) / COVER_FILENAME,
    ):
        try:
            if candidate.is_file():
                return candidate
        except OSError:
            continue
    return None


class SteamSource(Source):
    """Source adapter for a Steam installation.

    Example:
        >>> source = SteamSource(Path.home() / '.local/share/Steam')
        >>> games = source.discover()
    """

    source_type = "steam"

    def __init__(self, root: Path | None, include_shortcuts: bool = True):
        """Initialize Steam source.

        Args:
            root: Steam installation root, or None when no default exists
                for this platform
            include_shortcuts: Whether to decode non-Steam shortcuts
        """
        self.root = Path(root) if root is not None else None
        self.include_shortcuts = include_shortcuts

        from .transformer import SteamTransformer
        self._transformer = SteamTransformer()

    def _require_root(self) -> Path:
        if self.root is None or not self.root.is_dir():
            raise SourceNotFoundError(f"Steam installation not found: {self.root}", self.root)
        return self.root

    def library_dirs(self) -> list[Path]:
        """Return every steamapps directory listed by the library index.

        Raises:
            SourceNotFoundError: If the Steam root does not exist
            LibraryIndexError: If the index is missing or malformed
        """
        return read_library_folders(self._require_root())

    def discover(self) -> list[InstalledGame]:
        """Discover installed Steam games, then shortcuts.

        Native games come in library-index order and file-name order within
        each library; shortcuts follow in profile order.

        Returns:
            Records in discovery order, possibly with duplicate app ids
        """
        root = self._require_root()
        libraries = read_library_folders(root)

        games: list[InstalledGame] = []
        for library in libraries:
            for game in read_games_from_library(library):
                cover = find_cached_cover(root, int(game.app_id))
                if cover is not None:
                    game = dataclasses.replace(game, cover_image=cover)
                games.append(game)

        native_count = len(games)
        if self.include_shortcuts:
            games.extend(read_shortcut_games(root))

        logger.info(
            "Steam discovery: %d app manifest(s) and %d shortcut(s) across %d librar%s",
            native_count,
            len(games) - native_count,
            len(libraries),
            "y" if len(libraries) == 1 else "ies",
        )
        return games

    def get_transformer(self) -> Transformer:
        return self._transformer
