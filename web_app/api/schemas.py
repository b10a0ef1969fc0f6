"""Pydantic schemas for API requests and responses."""

from pydantic import BaseModel, Field
from typing import List, Optional
from datetime import datetime


class ShortenRequest(BaseModel):
    """Request to shorten a URL."""

    url: str = Field("", description="The URL to shorten; scheme defaults to https", max_length=2048)
    custom_code: Optional[str] = Field(None, description="Optional custom code (3-8 letters/digits)")

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "url": "example.com/very/long/path/to/resource",
                    "custom_code": None
                },
                {
                    "url": "https://github.com/user/repo",
                    "custom_code": "myrepo"
                }
            ]
        }
    }


class ShortenResponse(BaseModel):
    """Response after shortening a URL."""

    code: str = Field(..., description="The assigned short code")
    short_url: str = Field(..., description="The complete short URL")
    target_url: str = Field(..., description="The canonical destination URL")
    created_at: datetime = Field(..., description="Creation timestamp")


class LinkResponse(BaseModel):
    """A live link with its click statistics."""

    code: str
    short_url: str
    target_url: str
    total_clicks: int
    last_clicked: Optional[datetime] = None
    created_at: datetime


class LinkListResponse(BaseModel):
    """Live links, newest first."""

    count: int
    links: List[LinkResponse]


class CodeAvailabilityResponse(BaseModel):
    """Advisory availability of a custom code."""

    code: str
    valid: bool = Field(..., description="Code matches the custom code format")
    available: bool = Field(..., description="Code is valid and not yet assigned")


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = Field(..., description="Overall status")
    database: str = Field(..., description="Database status")
    timestamp: datetime = Field(..., description="Check timestamp")


class ErrorResponse(BaseModel):
    """Error response."""

    detail: str = Field(..., description="Error message")
