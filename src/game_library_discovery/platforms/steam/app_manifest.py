"""Steam per-app manifest (appmanifest_<id>.acf) parsing."""

import logging
from pathlib import Path

from ...core.types import InstalledGame
from .keyvalues import find_value

logger = logging.getLogger(__name__)

MANIFEST_PREFIX = "appmanifest_"
MANIFEST_SUFFIX = ".acf"
COMMON_DIR = "common"

APP_ID_KEY = "appid"
NAME_KEY = "name"
INSTALL_DIR_KEY = "installdir"


def is_app_manifest_name(filename: str) -> bool:
    return filename.startswith(MANIFEST_PREFIX) and filename.endswith(MANIFEST_SUFFIX)


def parse_app_manifest(contents: str, steamapps_dir: Path) -> InstalledGame | None:
    """Parse the text of an app manifest into a record.

    Args:
        contents: Text of the .acf file
        steamapps_dir: Directory the manifest was found in

    Returns:
        InstalledGame, or None when appid, name or installdir is missing
        or the appid is not numeric
    """
    app_id = find_value(contents, APP_ID_KEY)
    if not app_id or not (app_id.isascii() and app_id.isdigit()):
        return None

    name = find_value(contents, NAME_KEY)
    if not name:
        return None

    install_dir = find_value(contents, INSTALL_DIR_KEY)
    if not install_dir:
        return None

    return InstalledGame(
        app_id=int(app_id),
        display_name=name,
        install_path=Path(steamapps_dir).absolute() / COMMON_DIR / install_dir,
        source="steam",
        launch_descriptor={"app_id": app_id},
    )


def parse_app_manifest_file(path: Path) -> InstalledGame | None:
    """Parse a single manifest file, skipping it if it can't be read."""
    try:
        contents = path.read_text(encoding="utf-8", errors="replace")
    except OSError as e:
        logger.debug("Skipping unreadable app manifest %s: %s", path, e)
        return None

    game = parse_app_manifest(contents, path.parent)
    if game is None:
        logger.debug("Skipping incomplete app manifest %s", path)
    return game


def read_games_from_library(steamapps_dir: Path) -> list[InstalledGame]:
    """Read every app manifest directly inside a steamapps directory.

    Manifests are visited in file-name order. A missing directory yields
    an empty list.

    Args:
        steamapps_dir: A library's steamapps directory

    Returns:
        Records for every manifest that parsed
    """
    try:
        names = sorted(entry.name for entry in Path(steamapps_dir).iterdir())
    except (OSError, ValueError) as e:
        logger.debug("Skipping library %s: %s", steamapps_dir, e)
        return []

    games: list[InstalledGame] = []
    for name in names:
        if not is_app_manifest_name(name):
            continue

        manifest_path = Path(steamapps_dir) / name
        try:
            if not manifest_path.is_file():
                continue
        except OSError as e:
            logger.debug("Skipping app manifest %s: %s", manifest_path, e)
            continue

        game = parse_app_manifest_file(manifest_path)
        if game is not None:
            games.append(game)

    return games
