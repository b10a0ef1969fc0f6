"""Database layer for TinyLink."""

import logging
from typing import Optional

from .base import LinkStoreBase
from .memory import MemoryLinkStore
from .postgres import PostgresLinkStore
from .models import Link


def create_store(
    database_url: str,
    pool_max_size: int = 10,
    timeout_seconds: int = 30,
    create_tables: bool = False,
    logger: Optional[logging.Logger] = None,
) -> LinkStoreBase:
    """Create the store matching the URL scheme (memory:// or postgresql://)."""
    scheme = database_url.split("://", 1)[0].lower()

    if scheme == "memory":
        return MemoryLinkStore(database_url, logger=logger)

    if scheme in ("postgres", "postgresql"):
        return PostgresLinkStore(
            db_config=database_url,
            pool_max_size=pool_max_size,
            connection_timeout_seconds=timeout_seconds,
            create_tables=create_tables,
            logger=logger,
        )

    raise ValueError(f"Unsupported database URL scheme: {scheme}")


__all__ = ["LinkStoreBase", "MemoryLinkStore", "PostgresLinkStore", "Link", "create_store"]
