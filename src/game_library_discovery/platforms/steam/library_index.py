"""Steam library-folder index parsing.

steamapps/libraryfolders.vdf lists every additional drive or directory
Steam installs games into. Each entry looks like:

    "libraryfolders"
    {
        "1"
        {
            "path"      "/mnt/games/SteamLibrary"
            "apps"      { ... }
        }
    }
"""

import logging
from pathlib import Path

from ...core.errors import LibraryIndexError
from .keyvalues import extract_quoted_value, has_balanced_braces

logger = logging.getLogger(__name__)

STEAMAPPS_DIR = "steamapps"
LIBRARY_INDEX_FILE = "libraryfolders.vdf"
PATH_KEY = '"path"'


def parse_library_folders(contents: str, steam_root: Path) -> list[Path]:
    """Parse library directories from the contents of libraryfolders.vdf.

    The root's own steamapps directory is always first, whether or not
    the index repeats it. Later duplicates are dropped, and so are values
    that can't name a directory.

    Args:
        contents: Text of the index file
        steam_root: Steam installation root

    Returns:
        Ordered, duplicate-free list of steamapps directories
    """
    paths: list[Path] = [Path(steam_root) / STEAMAPPS_DIR]

    for line in contents.splitlines():
        trimmed = line.strip()
        if not trimmed.startswith(PATH_KEY):
            continue

        value = extract_quoted_value(trimmed, 1)
        if not value:
            continue
        if "\x00" in value:
            logger.debug("Ignoring library path with a NUL byte: %r", value)
            continue

        library = Path(value) / STEAMAPPS_DIR
        if library not in paths:
            paths.append(library)

    return paths


def library_index_path(steam_root: Path) -> Path:
    return Path(steam_root) / STEAMAPPS_DIR / LIBRARY_INDEX_FILE


def read_library_folders(steam_root: Path) -> list[Path]:
    """Read and parse the library index of a Steam installation.

    Args:
        steam_root: Steam installation root

    Returns:
        Ordered list of steamapps directories

    Raises:
        LibraryIndexError: If the index is missing, unreadable, or present
            and non-empty but not a key/value document
    """
    index_path = library_index_path(steam_root)

    try:
        contents = index_path.read_text(encoding="utf-8")
    except FileNotFoundError as e:
        raise LibraryIndexError(f"Library index not found: {index_path}", index_path) from e
    except (OSError, UnicodeDecodeError) as e:
        raise LibraryIndexError(f"Cannot read library index {index_path}: {e}", index_path) from e

    if contents.strip() and not has_balanced_braces(contents):
        raise LibraryIndexError(f"Library index is malformed: {index_path}", index_path)

    paths = parse_library_folders(contents, steam_root)
    logger.debug("Steam library folders from %s: %s", index_path, paths)
    return paths
