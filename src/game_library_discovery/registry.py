"""Source registry for factory-based pipeline creation.

This module provides a central registry for source factories,
enabling client-agnostic pipeline creation and automatic
platform discovery.
"""

import importlib
import logging
from pathlib import Path
from typing import TYPE_CHECKING, Callable

if TYPE_CHECKING:
    from .pipeline import CatalogPipeline
    from .sources.base import Source

logger = logging.getLogger(__name__)


class SourceRegistry:
    """Central registry for source factories.

    Platforms register a factory when imported, and the registry can
    automatically discover every platform shipped in platforms/.

    Factories receive every keyword argument given to create_source or
    create_pipeline and pick out the ones they understand, so a single
    call can configure several clients at once.
    """

    _factories: dict[str, Callable[..., "Source"]] = {}

    @classmethod
    def register_factory(cls, name: str, factory: Callable[..., "Source"]) -> None:
        """Register a factory function for creating sources.

        Args:
            name: Name of the source (e.g., 'steam', 'epic')
            factory: Callable that creates a Source instance

        Example:
            >>> def create_steam_source(steam_root=None, **kwargs) -> SteamSource:
            ...     return SteamSource(steam_root)
            >>> SourceRegistry.register_factory('steam', create_steam_source)
        """
        cls._factories[name] = factory

    @classmethod
    def create_source(cls, source_name: str, **kwargs) -> "Source":
        """Create a single source by name.

        Args:
            source_name: Name of the registered source
            **kwargs: Arguments passed to the source factory

        Returns:
            Source instance

        Raises:
            ValueError: If source_name is not registered
        """
        if source_name not in cls._factories:
            available = ', '.join(cls._factories.keys()) or 'none'
            raise ValueError(
                f"Unknown source: '{source_name}'. Available sources: {available}"
            )
        return cls._factories[source_name](**kwargs)

    @classmethod
    def create_pipeline(cls, *source_names: str, **kwargs) -> "CatalogPipeline":
        """Create a pipeline over one or more registered sources.

        Args:
            *source_names: Sources to include, in run order. All registered
                sources are used when none are given.
            **kwargs: Arguments passed to every source factory
                (e.g. facts, steam_root, epic_manifest_dir)

        Returns:
            CatalogPipeline configured with the requested sources

        Raises:
            ValueError: If a source name is not registered

        Example:
            >>> pipeline = SourceRegistry.create_pipeline(
            ...     'steam',
            ...     steam_root=Path('/home/me/.local/share/Steam'),
            ... )
        """
        # Import here to avoid circular dependency
        from .pipeline import CatalogPipeline

        names = source_names or tuple(cls.list_sources())
        sources = [cls.create_source(name, **kwargs) for name in names]
        return CatalogPipeline(sources)

    @classmethod
    def list_sources(cls) -> list[str]:
        """List all registered source names.

        Returns:
            List of registered source names in registration order

        Example:
            >>> SourceRegistry.list_sources()
            ['epic', 'steam']
        """
        return list(cls._factories.keys())

    @classmethod
    def discover_platforms(cls) -> None:
        """Auto-discover and import all platforms.

        Platform packages are imported in name order so that registration
        order, and therefore default source order, is stable. Platforms
        with missing dependencies are skipped.

        Platforms automatically register themselves when imported
        via their __init__.py files.
        """
        platforms_dir = Path(__file__).parent / 'platforms'

        if not platforms_dir.exists():
            return

        for platform_path in sorted(platforms_dir.iterdir(), key=lambda p: p.name):
            if not platform_path.is_dir():
                continue

            if not (platform_path / '__init__.py').exists():
                continue

            platform_name = platform_path.name

            try:
                # This triggers auto-registration via the platform's __init__.py
                importlib.import_module(
                    f'.platforms.{platform_name}',
                    package='game_library_discovery'
                )
            except ImportError as e:
                logger.debug("Skipping platform %s: %s", platform_name, e)
