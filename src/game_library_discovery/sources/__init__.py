"""Source adapters for catalog assembly.

This package contains the base interface for client sources.
Client-specific implementations live in the platforms/ directory.
"""

from .base import Source

__all__ = ["Source"]
