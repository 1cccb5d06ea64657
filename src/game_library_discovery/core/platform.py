"""Default install locations for each supported client.

The resolvers here are pure functions of a PlatformFacts value. They never
touch the filesystem; checking that a returned path exists is up to the
source that uses it.
"""

import os
import platform
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import PurePath, PurePosixPath, PureWindowsPath

# Environment variables that override resolved defaults
STEAM_ROOT_ENV = "GAME_LIBRARY_STEAM_ROOT"
EPIC_MANIFESTS_ENV = "GAME_LIBRARY_EPIC_MANIFESTS"

DEFAULT_PROGRAM_FILES_X86 = r"C:\Program Files (x86)"
DEFAULT_PROGRAM_DATA = r"C:\ProgramData"


@dataclass(frozen=True)
class PlatformFacts:
    """Operating system identity plus the environment the resolvers read.

    Attributes:
        system: Lowercase OS tag ("linux", "darwin", "windows", ...)
        home: User home directory
        local_app_data: XDG_DATA_HOME on Linux, LOCALAPPDATA on Windows
        program_files_x86: Windows "Program Files (x86)" directory
        program_data: Windows "ProgramData" directory
        steam_root_override: Explicit Steam root, bypasses resolution
        epic_manifest_override: Explicit Epic manifest directory
    """

    system: str
    home: str | None = None
    local_app_data: str | None = None
    program_files_x86: str | None = None
    program_data: str | None = None
    steam_root_override: str | None = None
    epic_manifest_override: str | None = None

    @classmethod
    def from_environment(
        cls,
        environ: Mapping[str, str] | None = None,
        system: str | None = None,
    ) -> "PlatformFacts":
        """Collect facts for the running interpreter.

        Args:
            environ: Environment mapping (defaults to os.environ)
            system: OS name as returned by platform.system()

        Returns:
            PlatformFacts for the current host
        """
        env = os.environ if environ is None else environ
        tag = (system or platform.system()).lower()

        if tag == "windows":
            home = env.get("USERPROFILE") or env.get("HOME")
            local_app_data = env.get("LOCALAPPDATA")
        else:
            home = env.get("HOME")
            local_app_data = env.get("XDG_DATA_HOME") if tag == "linux" else None

        return cls(
            system=tag,
            home=home or None,
            local_app_data=local_app_data or None,
            program_files_x86=env.get("ProgramFiles(x86)") or None,
            program_data=env.get("ProgramData") or None,
            steam_root_override=env.get(STEAM_ROOT_ENV) or None,
            epic_manifest_override=env.get(EPIC_MANIFESTS_ENV) or None,
        )


def _path_type(facts: PlatformFacts) -> type[PurePath]:
    return PureWindowsPath if facts.system == "windows" else PurePosixPath


def resolve_steam_root(facts: PlatformFacts) -> PurePath | None:
    """Return the default Steam root for the given platform.

    Args:
        facts: Platform description

    Returns:
        Candidate Steam root, or None when the platform is unsupported or
        the environment lacks the directory it is derived from
    """
    path = _path_type(facts)

    if facts.steam_root_override:
        return path(facts.steam_root_override)

    if facts.system == "linux":
        if facts.local_app_data:
            return path(facts.local_app_data) / "Steam"
        if facts.home:
            return path(facts.home) / ".local" / "share" / "Steam"
        return None

    if facts.system == "darwin":
        if not facts.home:
            return None
        return path(facts.home) / "Library" / "Application Support" / "Steam"

    if facts.system == "windows":
        return path(facts.program_files_x86 or DEFAULT_PROGRAM_FILES_X86) / "Steam"

    return None


def resolve_epic_manifest_dir(facts: PlatformFacts) -> PurePath | None:
    """Return the Epic Games Launcher manifest directory for the platform.

    The launcher ships for macOS and Windows only.
    """
    path = _path_type(facts)

    if facts.epic_manifest_override:
        return path(facts.epic_manifest_override)

    if facts.system == "darwin":
        if not facts.home:
            return None
        return (
            path(facts.home) / "Library" / "Application Support"
            / "Epic" / "EpicGamesLauncher" / "Data" / "Manifests"
        )

    if facts.system == "windows":
        return (
            path(facts.program_data or DEFAULT_PROGRAM_DATA)
            / "Epic" / "EpicGamesLauncher" / "Data" / "Manifests"
        )

    return None
