"""Base abstractions for client sources.

This module defines the interface every game client adapter implements
to take part in catalog assembly.
"""

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

from ..core.types import InstalledGame

if TYPE_CHECKING:
    from ..transformers.base import Transformer


class Source(ABC):
    """Abstract base class for all game clients.

    Implementations locate a client's manifests on disk and decode them
    into InstalledGame records, while adhering to this common interface.

    This enables the pipeline to work with any client without knowing how
    its manifests are stored.
    """

    #: Short client tag stamped on every record ("steam", "epic")
    source_type: str = ""

    @abstractmethod
    def discover(self) -> list[InstalledGame]:
        """Discover every installed game this client knows about.

        Returns:
            Records in a deterministic discovery order. Duplicates are
            allowed here; the pipeline removes them.

        Raises:
            SourceNotFoundError: If the client is not installed
            LibraryIndexError: If a top-level index cannot be interpreted
        """
        pass

    @abstractmethod
    def get_transformer(self) -> "Transformer":
        """Get the transformer that renders this client's records.

        Returns:
            Transformer instance
        """
        pass
