"""Base transformer class for rendering catalog entries.

This module defines the interface for transformers that turn a normalized
InstalledGame into the JSON-ready CatalogEntry handed to the command layer.
"""

from abc import ABC, abstractmethod

from ..core.types import CatalogEntry, InstalledGame


class Transformer(ABC):
    """Abstract base class for record transformers.

    Each client knows how its games are launched, so each client ships a
    transformer that fills in the launch URI.
    """

    @abstractmethod
    def launch_uri(self, game: InstalledGame) -> str:
        """Build the URI that asks the client to start the game.

        Args:
            game: Record produced by the same client's source

        Returns:
            Launch URI string
        """
        pass

    def transform(self, game: InstalledGame) -> CatalogEntry:
        """Render a record as a catalog entry.

        Args:
            game: Record to render

        Returns:
            CatalogEntry conforming to the catalog JSON schema
        """
        return {
            "app_id": str(game.app_id),
            "display_name": game.display_name,
            "install_path": str(game.install_path),
            "is_shortcut": game.is_shortcut,
            "cover_image": str(game.cover_image) if game.cover_image else None,
            "source": game.source,
            "launch_uri": self.launch_uri(game),
            "launch_descriptor": dict(game.launch_descriptor),
        }
