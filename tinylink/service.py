"""Business logic service for TinyLink."""

import logging
from typing import Dict, FrozenSet, List, Optional

from .shortcode import ShortCodeGenerator
from .common.validators import URLValidator
from .database.base import LinkStoreBase
from .database.models import Link
from .errors import (
    BadCodeFormat,
    CodeTaken,
    DuplicateCode,
    ExhaustedRetries,
    MissingUrl,
)

# Paths served by the router itself; a link with one of these codes is unreachable
RESERVED_CODES: FrozenSet[str] = frozenset({"api", "healthz", "shorten", "delete"})


class LinkService:
    """Service layer for shortening and resolving links."""

    def __init__(
        self,
        store: LinkStoreBase,
        validator: Optional[URLValidator] = None,
        short_code_generator: Optional[ShortCodeGenerator] = None,
        logger: Optional[logging.Logger] = None,
        max_collision_retries: int = 10,
    ):
        """Initialize link service.

        Args:
            store: Link store instance
            validator: Optional URL validator
            short_code_generator: Optional short code generator
            logger: Optional logger
            max_collision_retries: Random codes tried before the fallback code
        """
        self.store = store
        self.validator = validator or URLValidator(logger=logger)
        self.generator = short_code_generator or ShortCodeGenerator()
        self.logger = logger or logging.getLogger(__name__)
        self.max_collision_retries = max_collision_retries

    async def shorten(
        self,
        raw_url: Optional[str],
        custom_code: Optional[str] = None,
    ) -> Link:
        """Create a new short link.

        Args:
            raw_url: URL as submitted by the user
            custom_code: Optional custom short code

        Returns:
            The created link; ``link.code`` is the assigned code

        Raises:
            MissingUrl: If no URL was given
            InvalidUrl: If the URL fails normalization or DNS validation
            BadCodeFormat: If the custom code is malformed
            CodeTaken: If the custom code is already assigned or reserved
            ExhaustedRetries: If no unique code could be generated
            StorageError: On store failure
        """
        if not raw_url or not raw_url.strip():
            raise MissingUrl()

        target_url = await self.validator.normalize_and_validate(raw_url)

        code = custom_code.strip() if custom_code else ""
        if code:
            link = await self._insert_custom(code, target_url)
        else:
            link = await self._insert_generated(target_url)

        self.logger.info(f"Created short link: {link.code} -> {target_url}")
        return link

    async def resolve(self, code: str) -> str:
        """Count a visit and return the destination of a live link.

        Raises:
            NotFound: If the code never existed or was deleted
            StorageError: On store failure
        """
        target_url = await self.store.increment_and_fetch(code)
        self.logger.debug(f"Resolved {code} -> {target_url}")
        return target_url

    async def delete(self, code: str) -> None:
        """Soft-delete a link. Deleting twice, or deleting an unknown code, is a no-op."""
        await self.store.mark_deleted(code)
        self.logger.info(f"Deleted short link: {code}")

    async def list_live(self) -> List[Link]:
        """List live links, newest first."""
        return await self.store.list_live()

    async def code_available(self, code: str) -> bool:
        """Advisory check whether a custom code could be claimed right now.

        A True answer reserves nothing; the insert is what decides.
        """
        if code in RESERVED_CODES:
            return False
        return not await self.store.exists(code)

    async def get_link_info(self, code: str) -> Optional[Link]:
        """Operator lookup that also returns deleted links."""
        return await self.store.get_link(code)

    async def health_check(self) -> Dict[str, bool]:
        """Perform health check.

        Returns:
            Dictionary with health status
        """
        db_healthy = await self.store.health_check()
        return {
            "database": db_healthy,
            "overall": db_healthy,
        }

    async def _insert_custom(self, code: str, target_url: str) -> Link:
        if not self.generator.validate_custom(code):
            raise BadCodeFormat()

        if code in RESERVED_CODES:
            raise CodeTaken(code)

        try:
            return await self.store.insert(code, target_url)
        except DuplicateCode as e:
            raise CodeTaken(code) from e

    async def _insert_generated(self, target_url: str) -> Link:
        """Insert under a random code, retrying on collision.

        Raises:
            ExhaustedRetries: If the fallback code collides as well
        """
        for attempt in range(self.max_collision_retries):
            code = self.generator.random_code()
            if code in RESERVED_CODES:
                continue
            try:
                return await self.store.insert(code, target_url)
            except DuplicateCode:
                self.logger.debug(f"Collision on generated code {code} (attempt {attempt + 1})")

        code = self.generator.fallback_code()
        self.logger.warning(
            f"{self.max_collision_retries} generated codes collided, trying fallback {code}"
        )
        try:
            return await self.store.insert(code, target_url)
        except DuplicateCode as e:
            raise ExhaustedRetries(self.max_collision_retries + 1) from e

    async def close(self) -> None:
        """Close service connections."""
        await self.store.close()
