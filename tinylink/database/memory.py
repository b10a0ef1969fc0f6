"""In-memory link store for development and tests."""

import logging
from dataclasses import replace
from datetime import datetime, timezone
from typing import Dict, List, Optional

from .base import LinkStoreBase
from .models import Link
from ..errors import DuplicateCode, NotFound


class MemoryLinkStore(LinkStoreBase):
    """Dict-backed link store.

    Mutations never await between reading and writing, so each one is atomic
    with respect to other tasks on the same event loop.
    """

    def __init__(self, db_config: str = "memory://", logger: Optional[logging.Logger] = None):
        super().__init__(db_config)
        self.logger = logger or logging.getLogger(__name__)
        self._links: Dict[str, Link] = {}
        self._closed = False

    async def initialize(self) -> None:
        self.logger.debug("Using in-memory link store")

    async def exists(self, code: str) -> bool:
        return code in self._links

    async def insert(self, code: str, target_url: str) -> Link:
        if code in self._links:
            raise DuplicateCode(code)

        link = Link(
            code=code,
            target_url=target_url,
            created_at=datetime.now(timezone.utc),
        )
        self._links[code] = link
        self.logger.debug(f"Inserted link {code} -> {target_url}")
        return replace(link)

    async def increment_and_fetch(self, code: str) -> str:
        link = self._links.get(code)
        if link is None or link.deleted:
            raise NotFound(code)

        link.total_clicks += 1
        link.last_clicked = datetime.now(timezone.utc)
        return link.target_url

    async def mark_deleted(self, code: str) -> None:
        link = self._links.get(code)
        if link is not None:
            link.deleted = True

    async def list_live(self) -> List[Link]:
        # Newest insert first so that equal timestamps still list newest first
        live = [replace(link) for link in reversed(list(self._links.values())) if not link.deleted]
        live.sort(key=lambda link: link.created_at, reverse=True)
        return live

    async def get_link(self, code: str) -> Optional[Link]:
        link = self._links.get(code)
        return replace(link) if link else None

    async def health_check(self) -> bool:
        return not self._closed

    async def close(self) -> None:
        self._closed = True
