"""Catalog assembly across game clients.

This module runs every configured source, merges their records, removes
duplicates and collects per-source failures. It is the interface the
command layer calls; it never raises because one client is missing or
broken.
"""

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path

from .core.errors import DiscoveryError, SourceNotFoundError
from .core.platform import PlatformFacts
from .core.types import CatalogEntry, InstalledGame
from .sources.base import Source
from .transformers.base import Transformer

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SourceFailure:
    """A client that is installed but could not be scanned (broken index or unexpected error)."""

    source: str
    message: str
    path: Path | None = None


@dataclass
class CatalogResult:
    """Outcome of one discovery call.

    Attributes:
        games: Deduplicated records in discovery order
        errors: Sources that failed structurally
        missing_sources: Sources whose client is not installed
    """

    games: list[InstalledGame] = field(default_factory=list)
    errors: list[SourceFailure] = field(default_factory=list)
    missing_sources: list[str] = field(default_factory=list)
    transformers: dict[str, Transformer] = field(default_factory=dict, repr=False)

    @property
    def ok(self) -> bool:
        return not self.errors

    def to_entries(self) -> list[CatalogEntry]:
        """Render every game with its source's transformer."""
        return [self.transformers[game.source].transform(game) for game in self.games]


def deduplicate(games: Iterable[InstalledGame]) -> list[InstalledGame]:
    """Drop records whose (namespace, app id) was already seen.

    The first occurrence wins. Steam apps, Steam shortcuts and Epic items
    live in separate namespaces and never collide with each other.
    """
    seen: set[tuple[str, str]] = set()
    unique: list[InstalledGame] = []
    for game in games:
        if game.dedup_key in seen:
            logger.debug("Dropping duplicate %s record %s", game.namespace, game.app_id)
            continue
        seen.add(game.dedup_key)
        unique.append(game)
    return unique


class CatalogPipeline:
    """Main interface for catalog discovery.

    This class is client-agnostic. It works with any Source implementation
    and runs the sources one after another, in the order given.

    Example:
        >>> # Via registry (recommended)
        >>> from game_library_discovery import SourceRegistry
        >>> pipeline = SourceRegistry.create_pipeline('steam', steam_root=Path('/opt/steam'))
        >>>
        >>> # Direct instantiation (advanced)
        >>> from game_library_discovery.platforms.steam import SteamSource
        >>> pipeline = CatalogPipeline([SteamSource(Path('/opt/steam'))])
        >>> result = pipeline.discover()
    """

    def __init__(self, sources: list[Source]):
        """Initialize the pipeline.

        Args:
            sources: Sources to run, in output order
        """
        self.sources = list(sources)

    def discover(self) -> CatalogResult:
        """Run every source and assemble the catalog.

        A source that raises anything other than SourceNotFoundError is
        recorded as a SourceFailure; the remaining sources still run.

        Returns:
            CatalogResult with deduplicated games and per-source outcomes
        """
        result = CatalogResult()
        collected: list[InstalledGame] = []

        for source in self.sources:
            name = source.source_type
            result.transformers[name] = source.get_transformer()

            try:
                games = source.discover()
            except SourceNotFoundError as e:
                logger.info("%s: client not installed (%s)", name, e)
                result.missing_sources.append(name)
                continue
            except DiscoveryError as e:
                logger.warning("%s discovery failed: %s", name, e)
                result.errors.append(SourceFailure(source=name, message=str(e), path=e.path))
                continue
            except Exception as e:
                # Any other failure stays confined to this source
                logger.error("%s discovery crashed: %s", name, e, exc_info=True)
                result.errors.append(
                    SourceFailure(source=name, message=f"Unexpected error: {e}")
                )
                continue

            collected.extend(games)

        result.games = deduplicate(collected)
        logger.info(
            "Catalog discovery: %d game(s), %d missing source(s), %d failure(s)",
            len(result.games),
            len(result.missing_sources),
            len(result.errors),
        )
        return result


def discover_installed_games(
    facts: PlatformFacts | None = None,
    *,
    steam_root: Path | None = None,
    epic_manifest_dir: Path | None = None,
    sources: Iterable[str] | None = None,
) -> CatalogResult:
    """Discover installed games from every supported client.

    Args:
        facts: Platform facts (defaults to the running host)
        steam_root: Explicit Steam root
        epic_manifest_dir: Explicit Epic manifest directory
        sources: Source names to run (defaults to all registered sources)

    Returns:
        CatalogResult for this call
    """
    from .registry import SourceRegistry

    SourceRegistry.discover_platforms()
    pipeline = SourceRegistry.create_pipeline(
        *(sources or ()),
        facts=facts or PlatformFacts.from_environment(),
        steam_root=steam_root,
        epic_manifest_dir=epic_manifest_dir,
    )
    return pipeline.discover()
