"""Epic Games Launcher transformer for catalog entries."""

from urllib.parse import quote

from ...core.types import InstalledGame
from ...transformers.base import Transformer

LAUNCH_URI_TEMPLATE = "com.epicgames.launcher://apps/{target}?action=launch&silent=true"


class EpicTransformer(Transformer):
    """Transformer for Epic items.

    The launcher expects namespace, catalog item and app name joined by
    URL-encoded colons.
    """

    def launch_uri(self, game: InstalledGame) -> str:
        descriptor = game.launch_descriptor
        target = ":".join(
            [
                descriptor.get("catalog_namespace", ""),
                descriptor.get("catalog_item_id", ""),
                descriptor.get("app_name", ""),
            ]
        )
        return LAUNCH_URI_TEMPLATE.format(target=quote(target, safe=""))
