"""Transformers that render discovered games as catalog entries.

Client-specific transformers live alongside their sources in platforms/.
"""

from .base import Transformer

__all__ = ["Transformer"]
