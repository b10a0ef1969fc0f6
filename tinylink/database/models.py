"""Data models for TinyLink."""

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Mapping, Optional


@dataclass
class Link:
    """A short code mapped to its destination."""

    code: str
    target_url: str
    created_at: datetime
    total_clicks: int = 0
    last_clicked: Optional[datetime] = None
    deleted: bool = False

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "code": self.code,
            "target_url": self.target_url,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "total_clicks": self.total_clicks,
            "last_clicked": self.last_clicked.isoformat() if self.last_clicked else None,
            "deleted": self.deleted,
        }

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "Link":
        """Create from a database row or dictionary."""
        created_at = record["created_at"]
        if not isinstance(created_at, datetime):
            created_at = datetime.fromisoformat(created_at)
        return cls(
            code=record["code"],
            target_url=record["target_url"],
            created_at=created_at,
            total_clicks=record.get("total_clicks") or 0,
            last_clicked=record.get("last_clicked"),
            deleted=bool(record.get("deleted", False)),
        )
