"""Shared fixtures for building fake client installations on disk."""

import json
import struct
from pathlib import Path
from typing import Any, Callable

import pytest


class VdfBuilder:
    """Builds binary shortcuts.vdf fragments byte by byte."""

    @staticmethod
    def string(name: str, value: str) -> bytes:
        return b"\x01" + name.encode() + b"\x00" + value.encode() + b"\x00"

    @staticmethod
    def int32(name: str, value: int) -> bytes:
        return b"\x02" + name.encode() + b"\x00" + struct.pack("<I", value)

    @staticmethod
    def byte(name: str, value: int) -> bytes:
        return b"\x03" + name.encode() + b"\x00" + bytes([value])

    @staticmethod
    def color(name: str, value: bytes = b"\x01\x02\x03\x04") -> bytes:
        return b"\x04" + name.encode() + b"\x00" + value

    @staticmethod
    def uint64(name: str, value: int) -> bytes:
        return b"\x05" + name.encode() + b"\x00" + struct.pack("<Q", value)

    @staticmethod
    def raw(tag: int, name: str, payload: bytes) -> bytes:
        return bytes([tag]) + name.encode() + b"\x00" + payload

    @staticmethod
    def map(name: str, *fields: bytes) -> bytes:
        return b"\x00" + name.encode() + b"\x00" + b"".join(fields) + b"\x08"

    @classmethod
    def shortcuts_file(cls, *entries: bytes) -> bytes:
        return cls.map("shortcuts", *entries) + b"\x08"

    @classmethod
    def entry(
        cls,
        index: int,
        app_id: int,
        app_name: str,
        exe: str,
        *extra: bytes,
    ) -> bytes:
        return cls.map(
            str(index),
            cls.int32("appid", app_id),
            cls.string("AppName", app_name),
            cls.string("Exe", exe),
            *extra,
        )


@pytest.fixture
def vdf() -> type[VdfBuilder]:
    """Binary shortcuts.vdf builder."""
    return VdfBuilder


def _acf(app_id: str, name: str, install_dir: str) -> str:
    return (
        '"AppState"\n'
        "{\n"
        f'\t"appid"\t\t"{app_id}"\n'
        '\t"Universe"\t\t"1"\n'
        f'\t"name"\t\t"{name}"\n'
        '\t"StateFlags"\t\t"4"\n'
        f'\t"installdir"\t\t"{install_dir}"\n'
        '\t"UserConfig"\n'
        "\t{\n"
        '\t\t"language"\t\t"english"\n'
        "\t}\n"
        "}\n"
    )


@pytest.fixture
def acf_text() -> Callable[[str, str, str], str]:
    """Render the text of an appmanifest_<id>.acf file."""
    return _acf


@pytest.fixture
def write_app_manifest() -> Callable[..., Path]:
    """Write an appmanifest_<id>.acf into a steamapps directory."""

    def _write(steamapps: Path, app_id: int | str, name: str, install_dir: str) -> Path:
        steamapps.mkdir(parents=True, exist_ok=True)
        path = steamapps / f"appmanifest_{app_id}.acf"
        path.write_text(_acf(str(app_id), name, install_dir), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def write_library_index() -> Callable[..., Path]:
    """Write steamapps/libraryfolders.vdf listing the given library roots."""

    def _write(steam_root: Path, *library_roots: Path) -> Path:
        steamapps = steam_root / "steamapps"
        steamapps.mkdir(parents=True, exist_ok=True)

        blocks = []
        for index, library in enumerate([steam_root, *library_roots]):
            blocks.append(
                f'\t"{index}"\n'
                "\t{\n"
                f'\t\t"path"\t\t"{library}"\n'
                '\t\t"label"\t\t""\n'
                '\t\t"apps"\n'
                "\t\t{\n"
                '\t\t\t"228980"\t\t"368151648"\n'
                "\t\t}\n"
                "\t}\n"
            )

        path = steamapps / "libraryfolders.vdf"
        path.write_text('"libraryfolders"\n{\n' + "".join(blocks) + "}\n", encoding="utf-8")
        return path

    return _write


@pytest.fixture
def steam_root(tmp_path: Path, write_library_index) -> Path:
    """An empty Steam installation with a library index."""
    root = tmp_path / "Steam"
    write_library_index(root)
    return root


@pytest.fixture
def write_item() -> Callable[..., Path]:
    """Write an Epic .item manifest."""

    def _write(manifest_dir: Path, filename: str, **fields: Any) -> Path:
        manifest_dir.mkdir(parents=True, exist_ok=True)
        app_name = Path(filename).stem
        manifest = {
            "FormatVersion": 0,
            "AppName": app_name,
            "DisplayName": f"{app_name} Display",
            "InstallLocation": str(manifest_dir.parent / "install" / app_name),
            "CatalogNamespace": f"ns-{app_name}",
            "CatalogItemId": f"id-{app_name}",
            "bIsApplication": True,
            "bIsExecutable": True,
            "bIsIncompleteInstall": False,
        }
        # Ellipsis removes a field entirely
        for key, value in fields.items():
            if value is ...:
                manifest.pop(key, None)
            else:
                manifest[key] = value

        path = manifest_dir / filename
        path.write_text(json.dumps(manifest, indent=4), encoding="utf-8")
        return path

    return _write
