"""Utility functions for the registry blob client."""

from .config import decode_config
from .digest import calculate_digest, calculate_file_digest

__all__ = ["calculate_digest", "calculate_file_digest", "decode_config"]
