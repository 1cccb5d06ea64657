"""Type definitions for discovered game records.

This module defines the normalized record every client adapter produces
and the TypedDict that mirrors the JSON schema in schemas/catalog.schema.json.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import TypedDict

SHORTCUT_NAMESPACE = "steam-shortcut"


@dataclass(frozen=True)
class InstalledGame:
    """A single installed game, normalized across clients.

    Records are value objects: they are built fresh on every discovery
    call and keep no reference to the manifest they were parsed from.

    Attributes:
        app_id: Source-scoped identifier. Numeric for Steam apps and
            shortcuts, a composite string for Epic items.
        display_name: Human-readable title (never empty)
        install_path: Absolute install location; existence is not checked
        source: Client tag ("steam", "epic")
        is_shortcut: True only for non-Steam games added to Steam
        cover_image: Optional local artwork path (best-effort)
        launch_descriptor: Client-specific data needed to build a launch URI
    """

    app_id: int | str
    display_name: str
    install_path: Path
    source: str
    is_shortcut: bool = False
    cover_image: Path | None = None
    launch_descriptor: dict[str, str] = field(default_factory=dict, hash=False)

    @property
    def namespace(self) -> str:
        """Identifier namespace used for deduplication."""
        return SHORTCUT_NAMESPACE if self.is_shortcut else self.source

    @property
    def dedup_key(self) -> tuple[str, str]:
        return (self.namespace, str(self.app_id))


class CatalogEntry(TypedDict):
    """JSON form of an InstalledGame as handed to the command layer."""

    app_id: str  # Stringified so composite Epic ids and Steam ids share a type
    display_name: str
    install_path: str
    is_shortcut: bool
    cover_image: str | None
    source: str  # "steam" or "epic"
    launch_uri: str  # steam://... or com.epicgames.launcher://...
    launch_descriptor: dict[str, str]
