"""Abstract base class for link store implementations."""

from abc import ABC, abstractmethod
from typing import List, Optional

from .models import Link


class LinkStoreBase(ABC):
    """Abstract base class for link store operations.

    Every operation is a single round trip against the backing store.
    Uniqueness of codes and atomicity of click increments are guaranteed
    here, never by the caller.
    """

    def __init__(self, db_config: str):
        """Initialize store.

        Args:
            db_config: Database connection string
        """
        self.db_config = db_config

    @abstractmethod
    async def initialize(self) -> None:
        """Prepare the store (create schema if configured to)."""
        pass

    @abstractmethod
    async def exists(self, code: str) -> bool:
        """Check if a code was ever assigned, deleted or not.

        Advisory only: a False result does not reserve the code.
        """
        pass

    @abstractmethod
    async def insert(self, code: str, target_url: str) -> Link:
        """Insert a new link.

        Args:
            code: The short code to assign
            target_url: Canonical destination URL

        Returns:
            The created link

        Raises:
            DuplicateCode: If the code already exists
            StorageError: On any other store failure
        """
        pass

    @abstractmethod
    async def increment_and_fetch(self, code: str) -> str:
        """Count a click on a live link and return its destination.

        Increments ``total_clicks`` and sets ``last_clicked`` to now in one
        atomic step.

        Raises:
            NotFound: If no live link has this code
            StorageError: On store failure
        """
        pass

    @abstractmethod
    async def mark_deleted(self, code: str) -> None:
        """Soft-delete a link. Idempotent; unknown codes are ignored."""
        pass

    @abstractmethod
    async def list_live(self) -> List[Link]:
        """List links that are not deleted, newest first."""
        pass

    @abstractmethod
    async def get_link(self, code: str) -> Optional[Link]:
        """Fetch a link including deleted ones (operator diagnostics)."""
        pass

    @abstractmethod
    async def health_check(self) -> bool:
        """Check if store can run a trivial query.

        Returns:
            True if healthy, False otherwise
        """
        pass

    @abstractmethod
    async def close(self) -> None:
        """Close store connections."""
        pass
