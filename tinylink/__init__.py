"""Core business logic for TinyLink."""

from .shortcode import ShortCodeGenerator
from .service import LinkService

__all__ = ["ShortCodeGenerator", "LinkService"]
