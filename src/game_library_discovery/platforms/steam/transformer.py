"""Steam transformer for catalog entries."""

from ...core.types import InstalledGame
from ...transformers.base import Transformer
from .shortcuts import shortcut_game_id


class SteamTransformer(Transformer):
    """Transformer for Steam games and non-Steam shortcuts.

    Steam apps launch through steam://run/<appid>. Shortcuts have no store
    id, so they launch through steam://rungameid/ with the 64-bit game id
    derived from their local id.
    """

    def launch_uri(self, game: InstalledGame) -> str:
        if game.is_shortcut:
            return f"steam://rungameid/{shortcut_game_id(int(game.app_id))}"
        return f"steam://run/{game.app_id}"
