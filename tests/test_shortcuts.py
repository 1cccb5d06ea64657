"""Tests for the binary shortcuts.vdf decoder.

The format has no checksum or length prefixes, so these tests document
the decoder's best-effort behaviour on malformed input rather than prove
it correct. Unknown tags are assumed to carry one byte; a tag with a wider
payload would desynchronize the rest of its entry.
"""

from pathlib import Path

import pytest

from game_library_discovery.platforms.steam.shortcuts import (
    TYPE_INT32,
    TYPE_MAP,
    TYPE_MAP_END,
    TYPE_STRING,
    Shortcut,
    decode_shortcuts,
    find_shortcut_files,
    read_next_field,
    read_shortcut_games,
    shortcut_game_id,
)


class TestReadNextField:
    """Test single-field decoding."""

    def test_reads_string_field(self, vdf) -> None:
        buffer = vdf.string("AppName", "Half-Life")
        field, offset = read_next_field(buffer, 0)
        assert field is not None
        assert (field.tag, field.name, field.value) == (TYPE_STRING, "AppName", "Half-Life")
        assert offset == len(buffer)

    def test_reads_int32_little_endian(self, vdf) -> None:
        field, _ = read_next_field(vdf.int32("appid", 0xDEADBEEF), 0)
        assert field is not None
        assert field.tag == TYPE_INT32
        assert field.value == 0xDEADBEEF

    def test_reads_scalar_widths(self, vdf) -> None:
        """Test that each scalar tag advances by its payload width."""
        buffer = (
            vdf.byte("IsHidden", 1)
            + vdf.color("Color")
            + vdf.uint64("LastPlayTime", 2**40)
            + vdf.string("after", "ok")
        )
        values = []
        offset = 0
        while offset < len(buffer):
            field, offset = read_next_field(buffer, offset)
            assert field is not None
            values.append(field.value)
        assert values == [1, b"\x01\x02\x03\x04", 2**40, "ok"]

    def test_map_start_and_end(self, vdf) -> None:
        buffer = vdf.map("tags")
        start, offset = read_next_field(buffer, 0)
        end, offset = read_next_field(buffer, offset)
        assert start is not None and start.is_map_start and start.name == "tags"
        assert end is not None and end.is_map_end and end.tag == TYPE_MAP_END
        assert offset == len(buffer)

    def test_unknown_tag_consumes_one_byte(self, vdf) -> None:
        buffer = vdf.raw(0x07, "future", b"\x2a") + vdf.string("next", "value")
        field, offset = read_next_field(buffer, 0)
        assert field is not None
        assert field.value == b"\x2a"
        following, _ = read_next_field(buffer, offset)
        assert following is not None and following.name == "next"

    def test_end_of_buffer(self) -> None:
        assert read_next_field(b"", 0) == (None, 0)

    @pytest.mark.parametrize(
        "buffer",
        [b"\x02appid\x00\x01\x02", b"\x05t\x00\x01", b"\x01AppName\x00"],
    )
    def test_truncated_payload_is_end_of_buffer(self, buffer: bytes) -> None:
        field, offset = read_next_field(buffer, 0)
        assert field is None
        assert offset == len(buffer)


class TestDecodeShortcuts:
    """Test whole-file decoding."""

    def test_decodes_single_entry(self, vdf) -> None:
        buffer = vdf.shortcuts_file(vdf.entry(0, 440, "Half-Life", "/games/hl"))

        shortcuts = decode_shortcuts(buffer)

        assert shortcuts == [Shortcut(app_id=440, app_name="Half-Life", exe="/games/hl")]

    @pytest.mark.parametrize(
        "names",
        [
            ("appid", "AppName", "exe"),
            ("AppID", "appname", "Exe"),
            ("APPID", "APPNAME", "EXE"),
        ],
    )
    def test_field_names_are_case_insensitive(self, vdf, names) -> None:
        appid, appname, exe = names
        buffer = vdf.shortcuts_file(
            vdf.map(
                "0",
                vdf.int32(appid, 440),
                vdf.string(appname, "Half-Life"),
                vdf.string(exe, "/games/hl"),
            )
        )

        shortcuts = decode_shortcuts(buffer)

        assert len(shortcuts) == 1
        assert (shortcuts[0].app_id, shortcuts[0].app_name, shortcuts[0].exe) == (
            440,
            "Half-Life",
            "/games/hl",
        )

    def test_entry_without_app_name_is_dropped(self, vdf) -> None:
        buffer = vdf.shortcuts_file(
            vdf.map("0", vdf.int32("appid", 1), vdf.string("exe", "/games/x"))
        )
        assert decode_shortcuts(buffer) == []

    def test_entry_with_empty_app_name_is_dropped(self, vdf) -> None:
        buffer = vdf.shortcuts_file(vdf.entry(0, 1, "", "/games/x"))
        assert decode_shortcuts(buffer) == []

    def test_missing_appid_defaults_to_zero(self, vdf) -> None:
        buffer = vdf.shortcuts_file(vdf.map("0", vdf.string("AppName", "Emulator")))
        assert decode_shortcuts(buffer)[0].app_id == 0

    def test_appid_must_be_int32(self, vdf) -> None:
        """Test that a string field named appid is not used as the id."""
        buffer = vdf.shortcuts_file(
            vdf.map("0", vdf.string("appid", "99"), vdf.string("AppName", "Game"))
        )
        assert decode_shortcuts(buffer)[0].app_id == 0

    def test_skips_realistic_extra_fields(self, vdf) -> None:
        """Test an entry shaped like the ones Steam writes."""
        entry = vdf.entry(
            0,
            3141592653,
            "RetroArch",
            '"/usr/bin/retroarch"',
            vdf.string("StartDir", '"/usr/bin/"'),
            vdf.string("icon", "/icons/retroarch.png"),
            vdf.string("ShortcutPath", ""),
            vdf.string("LaunchOptions", "-f"),
            vdf.int32("IsHidden", 0),
            vdf.int32("AllowDesktopConfig", 1),
            vdf.byte("OpenVR", 0),
            vdf.int32("LastPlayTime", 1700000000),
            vdf.uint64("SortAs", 7),
            vdf.map("tags", vdf.string("0", "Favorite"), vdf.string("1", "Emulators")),
        )
        second = vdf.entry(1, 42, "Second", "/games/second")

        shortcuts = decode_shortcuts(vdf.shortcuts_file(entry, second))

        assert [s.app_name for s in shortcuts] == ["RetroArch", "Second"]
        first = shortcuts[0]
        assert first.app_id == 3141592653
        assert first.exe == '"/usr/bin/retroarch"'
        assert first.start_dir == '"/usr/bin/"'
        assert first.launch_options == "-f"
        assert first.icon == "/icons/retroarch.png"

    def test_unknown_tag_does_not_break_next_entry(self, vdf) -> None:
        """Test that an unknown one-byte tag keeps the cursor in sync."""
        first = vdf.entry(0, 10, "First", "/games/first", vdf.raw(0x07, "FutureFlag", b"\x01"))
        second = vdf.entry(1, 20, "Second", "/games/second")

        shortcuts = decode_shortcuts(vdf.shortcuts_file(first, second))

        assert [(s.app_id, s.app_name) for s in shortcuts] == [(10, "First"), (20, "Second")]

    def test_skips_leading_and_trailing_wrapper_bytes(self, vdf) -> None:
        buffer = b"\x08\xff\x07" + vdf.shortcuts_file(vdf.entry(0, 5, "Game", "/g")) + b"\x08\x08"
        assert [s.app_name for s in decode_shortcuts(buffer)] == ["Game"]

    def test_ignores_non_numeric_top_level_maps(self, vdf) -> None:
        buffer = vdf.map("settings", vdf.string("AppName", "Not A Game")) + vdf.shortcuts_file()
        assert decode_shortcuts(buffer) == []

    def test_empty_file(self, vdf) -> None:
        assert decode_shortcuts(b"") == []
        assert decode_shortcuts(vdf.shortcuts_file()) == []

    def test_truncated_entry_never_raises(self, vdf) -> None:
        """Test that cutting a valid file at every offset never raises."""
        buffer = vdf.shortcuts_file(
            vdf.entry(0, 440, "Half-Life", "/games/hl", vdf.map("tags", vdf.string("0", "FPS")))
        )
        for cut in range(len(buffer)):
            decode_shortcuts(buffer[:cut])

    def test_entry_cut_before_map_end_is_kept(self, vdf) -> None:
        """Test that a complete AppName survives a missing map end."""
        buffer = b"\x00shortcuts\x00" + b"\x000\x00" + vdf.string("AppName", "Partial")
        assert [s.app_name for s in decode_shortcuts(buffer)] == ["Partial"]

    def test_garbage_never_raises(self) -> None:
        garbage = bytes(range(256)) * 4 + bytes([TYPE_MAP]) + b"1\x00\x02appid\x00"
        assert isinstance(decode_shortcuts(garbage), list)


class TestShortcutRecords:
    """Test conversion of shortcuts into catalog records."""

    def test_to_installed_game(self) -> None:
        shortcut = Shortcut(
            app_id=440,
            app_name="Half-Life",
            exe='"/games/hl"',
            start_dir='"/games/"',
            launch_options="-dev",
            icon="/games/hl.png",
        )

        game = shortcut.to_installed_game()

        assert game.app_id == 440
        assert game.display_name == "Half-Life"
        assert game.install_path == Path("/games/hl")
        assert game.is_shortcut is True
        assert game.source == "steam"
        assert game.cover_image == Path("/games/hl.png")
        assert game.launch_descriptor == {
            "app_id": "440",
            "exe": '"/games/hl"',
            "start_dir": '"/games/"',
            "launch_options": "-dev",
        }

    def test_missing_exe_keeps_empty_install_path(self) -> None:
        """Test that an entry without an exe is kept with an empty path."""
        game = Shortcut(app_id=5, app_name="Launcher Only", exe="").to_installed_game()
        assert game.install_path == Path("")
        assert str(game.install_path) == "."
        assert game.launch_descriptor["exe"] == ""

    def test_no_icon_means_no_cover(self) -> None:
        game = Shortcut(app_id=0, app_name="Game", exe="/g").to_installed_game()
        assert game.cover_image is None

    def test_shortcut_game_id(self) -> None:
        assert shortcut_game_id(1) == (1 << 32) | 0x02000000
        assert shortcut_game_id(0xFFFFFFFF) == (0xFFFFFFFF << 32) | 0x02000000


class TestShortcutFiles:
    """Test locating and reading per-profile shortcut files."""

    def _write(self, steam_root: Path, profile: str, data: bytes) -> Path:
        path = steam_root / "userdata" / profile / "config" / "shortcuts.vdf"
        path.parent.mkdir(parents=True)
        path.write_bytes(data)
        return path

    def test_finds_files_in_profile_order(self, tmp_path: Path, vdf) -> None:
        second = self._write(tmp_path, "222", vdf.shortcuts_file())
        first = self._write(tmp_path, "111", vdf.shortcuts_file())
        (tmp_path / "userdata" / "333" / "config").mkdir(parents=True)

        assert find_shortcut_files(tmp_path) == [first, second]

    def test_unreadable_profile_is_skipped(
        self, tmp_path: Path, vdf, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Test that a profile Steam can't stat does not hide the others."""
        self._write(tmp_path, "locked", vdf.shortcuts_file())
        open_file = self._write(tmp_path, "open", vdf.shortcuts_file())
        real_is_file = Path.is_file

        def is_file(path: Path) -> bool:
            if "locked" in path.parts:
                raise PermissionError(13, "Permission denied", str(path))
            return real_is_file(path)

        monkeypatch.setattr(Path, "is_file", is_file)

        assert find_shortcut_files(tmp_path) == [open_file]

    def test_no_userdata(self, tmp_path: Path) -> None:
        assert find_shortcut_files(tmp_path) == []
        assert read_shortcut_games(tmp_path) == []

    def test_reads_games_from_every_profile(self, tmp_path: Path, vdf) -> None:
        self._write(tmp_path, "111", vdf.shortcuts_file(vdf.entry(0, 1, "One", "/one")))
        self._write(tmp_path, "222", vdf.shortcuts_file(vdf.entry(0, 2, "Two", "/two")))

        games = read_shortcut_games(tmp_path)

        assert [(g.app_id, g.display_name, g.is_shortcut) for g in games] == [
            (1, "One", True),
            (2, "Two", True),
        ]
