"""Epic Games Launcher source adapter.

The launcher writes one JSON manifest per installed item into its
Data/Manifests directory, named <hash>.item. Only a few fields matter:

    {
        "AppName": "Fortnite",
        "DisplayName": "Fortnite",
        "InstallLocation": "C:/Program Files/Epic Games/Fortnite",
        "CatalogNamespace": "fn",
        "CatalogItemId": "4fe75bbc5a674f4f9b356b5c90567da5",
        "bIsApplication": true,
        "bIsExecutable": true,
        "bIsIncompleteInstall": false
    }
"""

import dataclasses
import json
import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from jsonschema import Draft7Validator

from ...core.errors import SourceNotFoundError
from ...core.types import InstalledGame
from ...sources.base import Source
from ...transformers.base import Transformer

logger = logging.getLogger(__name__)

ITEM_EXTENSION = ".item"
COVER_EXTENSIONS = {".png", ".jpg", ".jpeg"}

IS_APPLICATION_FLAG = "bIsApplication"
IS_EXECUTABLE_FLAG = "bIsExecutable"
IS_INCOMPLETE_FLAG = "bIsIncompleteInstall"

# Identity fields are looked up with their exact case
ITEM_IDENTITY_SCHEMA: dict[str, Any] = {
    "type": "object",
    "required": ["AppName", "DisplayName", "InstallLocation"],
    "properties": {
        "AppName": {"type": "string", "minLength": 1},
        "DisplayName": {"type": "string", "minLength": 1},
        "InstallLocation": {"type": "string", "minLength": 1},
    },
}

_identity_validator = Draft7Validator(ITEM_IDENTITY_SCHEMA)


def read_flag(manifest: Mapping[str, Any], name: str) -> bool:
    """Read a boolean flag, matching its key case-insensitively.

    Missing flags are False. String values count as true only when they
    spell "true".
    """
    wanted = name.lower()
    for key, value in manifest.items():
        if isinstance(key, str) and key.lower() == wanted:
            if isinstance(value, str):
                return value.strip().lower() == "true"
            return bool(value)
    return False


def item_app_id(manifest: Mapping[str, Any]) -> str:
    """Build the record id: "<namespace>:<catalog item>" or the AppName."""
    namespace = str(manifest.get("CatalogNamespace") or "")
    item_id = str(manifest.get("CatalogItemId") or "")
    if namespace and item_id:
        return f"{namespace}:{item_id}"
    return str(manifest["AppName"])


def parse_item_manifest(manifest: Any) -> InstalledGame | None:
    """Turn a decoded .item manifest into a record.

    Args:
        manifest: Decoded JSON value

    Returns:
        InstalledGame, or None when the item is not an installed,
        executable application or lacks its identity fields
    """
    if not isinstance(manifest, Mapping):
        return None

    if not (
        read_flag(manifest, IS_APPLICATION_FLAG)
        and read_flag(manifest, IS_EXECUTABLE_FLAG)
        and not read_flag(manifest, IS_INCOMPLETE_FLAG)
    ):
        return None

    if not _identity_validator.is_valid(manifest):
        return None

    return InstalledGame(
        app_id=item_app_id(manifest),
        display_name=manifest["DisplayName"],
        install_path=Path(manifest["InstallLocation"]),
        source="epic",
        launch_descriptor={
            "app_name": manifest["AppName"],
            "catalog_namespace": str(manifest.get("CatalogNamespace") or ""),
            "catalog_item_id": str(manifest.get("CatalogItemId") or ""),
        },
    )


def find_cover_image(install_dir: Path) -> Path | None:
    """Return the first image directly inside the install directory.

    Files are checked in name order; subdirectories are not searched.
    An install location that can't be listed has no cover.
    """
    try:
        entries = sorted(Path(install_dir).iterdir(), key=lambda p: p.name)
    except (OSError, ValueError) as e:
        logger.debug("No cover scan for %s: %s", install_dir, e)
        return None

    for entry in entries:
        if entry.suffix.lower() not in COVER_EXTENSIONS:
            continue
        try:
            if entry.is_file():
                return entry
        except OSError:
            continue
    return None


def parse_item_manifest_file(path: Path) -> InstalledGame | None:
    """Parse one .item file, skipping it if it can't be read or decoded."""
    try:
        manifest = json.loads(path.read_text(encoding="utf-8-sig"))
    except (OSError, ValueError) as e:
        logger.debug("Skipping unreadable Epic manifest %s: %s", path, e)
        return None

    game = parse_item_manifest(manifest)
    if game is None:
        logger.debug("Skipping filtered or incomplete Epic manifest %s", path)
        return None

    cover = find_cover_image(game.install_path)
    if cover is not None:
        game = dataclasses.replace(game, cover_image=cover)
    return game


def scan_item_manifests(manifest_dir: Path) -> list[InstalledGame]:
    """Parse every .item manifest in a directory, in file-name order.

    A missing directory yields an empty list.
    """
    try:
        entries = sorted(Path(manifest_dir).iterdir(), key=lambda p: p.name)
    except (OSError, ValueError) as e:
        logger.debug("Skipping Epic manifest directory %s: %s", manifest_dir, e)
        return []

    games: list[InstalledGame] = []
    for entry in entries:
        if entry.suffix != ITEM_EXTENSION:
            continue
        game = parse_item_manifest_file(entry)
        if game is not None:
            games.append(game)
    return games


class EpicSource(Source):
    """Source adapter for the Epic Games Launcher.

    Example:
        >>> source = EpicSource(Path(r'C:\\ProgramData\\Epic\\EpicGamesLauncher\\Data\\Manifests'))
        >>> games = source.discover()
    """

    source_type = "epic"

    def __init__(self, manifest_dir: Path | None):
        """Initialize Epic source.

        Args:
            manifest_dir: Launcher manifest directory, or None when the
                launcher is not available on this platform
        """
        self.manifest_dir = Path(manifest_dir) if manifest_dir is not None else None

        from .transformer import EpicTransformer
        self._transformer = EpicTransformer()

    def discover(self) -> list[InstalledGame]:
        """Discover installed Epic games.

        Raises:
            SourceNotFoundError: If the manifest directory does not exist
        """
        if self.manifest_dir is None or not self.manifest_dir.is_dir():
            raise SourceNotFoundError(
                f"Epic Games Launcher not found: {self.manifest_dir}", self.manifest_dir
            )

        games = scan_item_manifests(self.manifest_dir)
        logger.info("Epic discovery: %d game(s) in %s", len(games), self.manifest_dir)
        return games

    def get_transformer(self) -> Transformer:
        return self._transformer
