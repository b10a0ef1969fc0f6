"""Common utilities for TinyLink."""

from .validators import URLValidator, normalize_url, is_valid_hostname
from .url_builder import build_base_url, build_short_url
from .logging_config import setup_logging

__all__ = [
    "URLValidator",
    "normalize_url",
    "is_valid_hostname",
    "build_base_url",
    "build_short_url",
    "setup_logging",
]
