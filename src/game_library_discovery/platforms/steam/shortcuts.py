"""Decoder for Steam's binary shortcuts.vdf.

Non-Steam games added through "Add a Non-Steam Game" live in
userdata/<profile>/config/shortcuts.vdf, a typed binary tree with no
length prefixes. Every field is

    <tag:1 byte> <name:NUL-terminated> <payload:depends on tag>

and a map is closed by a bare 0x08 tag. A typical file is

    00 "shortcuts"
        00 "0"
            02 "appid" <u32>
            01 "AppName" "Half-Life"
            01 "Exe" "\"/games/hl\""
            ...
            00 "tags" 01 "0" "Favorite" 08
        08
    08 08

The format has no checksum, so a corrupt file can decode into partial or
wrong entries. Unknown tags are assumed to carry a one-byte payload; a
future tag with a wider payload desynchronizes the rest of its entry.
"""

import logging
import struct
from dataclasses import dataclass
from pathlib import Path

from ...core.types import InstalledGame

logger = logging.getLogger(__name__)

TYPE_MAP = 0x00
TYPE_STRING = 0x01
TYPE_INT32 = 0x02
TYPE_BYTE = 0x03
TYPE_COLOR = 0x04
TYPE_UINT64 = 0x05
TYPE_MAP_END = 0x08

# Fixed payload widths for the non-string scalar tags
PAYLOAD_WIDTHS = {
    TYPE_INT32: 4,
    TYPE_BYTE: 1,
    TYPE_COLOR: 4,
    TYPE_UINT64: 8,
}
UNKNOWN_PAYLOAD_WIDTH = 1

USERDATA_DIR = "userdata"
SHORTCUTS_RELPATH = Path("config") / "shortcuts.vdf"

# Lowercased field names we keep
APP_ID_FIELD = "appid"
APP_NAME_FIELD = "appname"
EXE_FIELD = "exe"
START_DIR_FIELD = "startdir"
LAUNCH_OPTIONS_FIELD = "launchoptions"
ICON_FIELD = "icon"

# Added to the shifted shortcut id to form the 64-bit game id Steam launches
SHORTCUT_GAME_ID_FLAG = 0x02000000


@dataclass(frozen=True)
class Field:
    """One decoded field.

    value is None for map start and map end, a str for strings, an int for
    int32/byte/uint64 fields and raw bytes for colors and unknown tags.
    """

    tag: int
    name: str
    value: str | int | bytes | None = None

    @property
    def is_map_start(self) -> bool:
        return self.tag == TYPE_MAP

    @property
    def is_map_end(self) -> bool:
        return self.tag == TYPE_MAP_END


@dataclass(frozen=True)
class Shortcut:
    """A non-Steam game entry from shortcuts.vdf."""

    app_id: int
    app_name: str
    exe: str
    start_dir: str = ""
    launch_options: str = ""
    icon: str = ""

    def to_installed_game(self) -> InstalledGame:
        """Convert to a record whose install path is the quoted-stripped exe.

        Steam stores exe exactly as the user typed it, so the path is not
        made absolute. An entry without an exe keeps an empty path, which
        pathlib renders as ".", and still keeps its launch URI.
        """
        exe_path = self.exe.strip().strip('"')
        return InstalledGame(
            app_id=self.app_id,
            display_name=self.app_name,
            install_path=Path(exe_path),
            source="steam",
            is_shortcut=True,
            cover_image=Path(self.icon) if self.icon else None,
            launch_descriptor={
                "app_id": str(self.app_id),
                "exe": self.exe,
                "start_dir": self.start_dir,
                "launch_options": self.launch_options,
            },
        )


def shortcut_game_id(app_id: int) -> int:
    """Return the 64-bit game id used in steam://rungameid/ URIs."""
    return ((app_id & 0xFFFFFFFF) << 32) | SHORTCUT_GAME_ID_FLAG


def read_cstring(buffer: bytes, offset: int) -> tuple[str, int]:
    """Read a NUL-terminated string starting at offset.

    A missing terminator consumes the rest of the buffer.

    Returns:
        Tuple of (decoded string, offset after the terminator)
    """
    end = buffer.find(b"\x00", offset)
    if end < 0:
        return buffer[offset:].decode("utf-8", errors="replace"), len(buffer)
    return buffer[offset:end].decode("utf-8", errors="replace"), end + 1


def read_next_field(buffer: bytes, offset: int) -> tuple[Field | None, int]:
    """Read the field that starts at offset.

    Args:
        buffer: Whole shortcuts.vdf contents
        offset: Position of the field's tag byte

    Returns:
        Tuple of (field, offset of the following field). The field is None
        when the buffer ends before a complete field could be read.
    """
    if offset >= len(buffer):
        return None, len(buffer)

    tag = buffer[offset]
    offset += 1

    if tag == TYPE_MAP_END:
        return Field(tag=tag, name=""), offset

    name, offset = read_cstring(buffer, offset)

    if tag == TYPE_MAP:
        return Field(tag=tag, name=name), offset

    if tag == TYPE_STRING:
        if offset >= len(buffer):
            return None, len(buffer)
        value, offset = read_cstring(buffer, offset)
        return Field(tag=tag, name=name, value=value), offset

    width = PAYLOAD_WIDTHS.get(tag, UNKNOWN_PAYLOAD_WIDTH)
    if offset + width > len(buffer):
        return None, len(buffer)

    payload = buffer[offset:offset + width]
    offset += width

    if tag == TYPE_INT32:
        return Field(tag=tag, name=name, value=struct.unpack("<I", payload)[0]), offset
    if tag == TYPE_UINT64:
        return Field(tag=tag, name=name, value=struct.unpack("<Q", payload)[0]), offset
    if tag == TYPE_BYTE:
        return Field(tag=tag, name=name, value=payload[0]), offset

    # Colors and unrecognized tags keep their raw bytes
    return Field(tag=tag, name=name, value=payload), offset


def skip_map(buffer: bytes, offset: int) -> int:
    """Skip the body of a map whose start field has already been read.

    Returns:
        Offset just past the matching map end (or the end of the buffer)
    """
    depth = 1
    while depth:
        field, offset = read_next_field(buffer, offset)
        if field is None:
            break
        if field.is_map_start:
            depth += 1
        elif field.is_map_end:
            depth -= 1
    return offset


def _read_entry(buffer: bytes, offset: int) -> tuple[Shortcut | None, int]:
    """Read the fields of one per-app map up to its map end."""
    values: dict[str, str | int] = {}

    while True:
        field, offset = read_next_field(buffer, offset)
        if field is None or field.is_map_end:
            break

        if field.is_map_start:
            offset = skip_map(buffer, offset)
            continue

        key = field.name.lower()
        if field.tag == TYPE_INT32 and key == APP_ID_FIELD:
            values[key] = field.value  # type: ignore[assignment]
        elif field.tag == TYPE_STRING and key in (
            APP_NAME_FIELD, EXE_FIELD, START_DIR_FIELD, LAUNCH_OPTIONS_FIELD, ICON_FIELD
        ):
            values[key] = field.value  # type: ignore[assignment]

    app_name = values.get(APP_NAME_FIELD, "")
    if not app_name:
        return None, offset

    return Shortcut(
        app_id=int(values.get(APP_ID_FIELD, 0)),
        app_name=str(app_name),
        exe=str(values.get(EXE_FIELD, "")),
        start_dir=str(values.get(START_DIR_FIELD, "")),
        launch_options=str(values.get(LAUNCH_OPTIONS_FIELD, "")),
        icon=str(values.get(ICON_FIELD, "")),
    ), offset


def decode_shortcuts(buffer: bytes) -> list[Shortcut]:
    """Decode every shortcut entry in a shortcuts.vdf buffer.

    Top-level bytes that do not start a map are skipped one at a time, so
    the outer "shortcuts" wrapper and trailing end markers are stepped
    over. Maps whose key starts with an ASCII digit are shortcut entries;
    entries without an AppName are dropped. This never raises on
    malformed input.

    Args:
        buffer: Raw file contents

    Returns:
        Decoded shortcuts in file order
    """
    shortcuts: list[Shortcut] = []
    offset = 0

    while offset < len(buffer):
        if buffer[offset] != TYPE_MAP:
            offset += 1
            continue

        key, offset = read_cstring(buffer, offset + 1)
        if not (key[:1].isascii() and key[:1].isdigit()):
            continue

        shortcut, offset = _read_entry(buffer, offset)
        if shortcut is not None:
            shortcuts.append(shortcut)

    return shortcuts


def find_shortcut_files(steam_root: Path) -> list[Path]:
    """Find shortcuts.vdf for every user profile, in profile-name order."""
    userdata = Path(steam_root) / USERDATA_DIR
    try:
        profiles = sorted(userdata.iterdir(), key=lambda p: p.name)
    except OSError:
        return []

    files: list[Path] = []
    for profile in profiles:
        path = profile / SHORTCUTS_RELPATH
        try:
            if path.is_file():
                files.append(path)
        except OSError as e:
            logger.debug("Skipping profile %s: %s", profile.name, e)
    return files


def read_shortcut_games(steam_root: Path) -> list[InstalledGame]:
    """Decode the shortcuts of every user profile under a Steam root.

    Unreadable files are skipped.
    """
    games: list[InstalledGame] = []
    for path in find_shortcut_files(steam_root):
        try:
            buffer = path.read_bytes()
        except OSError as e:
            logger.debug("Skipping unreadable shortcuts file %s: %s", path, e)
            continue

        shortcuts = decode_shortcuts(buffer)
        logger.debug("Decoded %d shortcut(s) from %s", len(shortcuts), path)
        games.extend(shortcut.to_installed_game() for shortcut in shortcuts)

    return games
