"""
Chirper Backend: Pydantic Request/Response Schemas
==================================================

What:  Pydantic models defining the API contract between frontend and backend.
How:   Route handlers return these; FastAPI serializes them and documents them
       in the OpenAPI schema.

Timestamps are exposed as ISO-8601 strings with an explicit UTC offset
(e.g. "2025-11-16T08:36:48+00:00"), rendered by `to_iso8601`.
"""

from datetime import datetime, timezone
from typing import Dict, List

from pydantic import BaseModel, Field


def to_iso8601(value: datetime) -> str:
    """
    Render a timestamp as ISO-8601, second precision, UTC offset included.

    Naive values (SQLite returns them) are taken to be UTC already.
    """
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).isoformat(timespec="seconds")


# ══════════════════════════════════════════════════════════════════════════
# Input Models: produced by the validation policy, never parsed directly
# ══════════════════════════════════════════════════════════════════════════


class CreateTweetInput(BaseModel):
    """A request body that passed every `body` rule."""
    body: str


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class UserSummary(BaseModel):
    """The author fields embedded in a tweet view."""
    id: int = Field(description="Author's user id")
    name: str = Field(description="Author's display name")


class TweetView(BaseModel):
    """
    What:  Response-shaped projection of a Tweet plus its author.
    Who:   Returned by POST /api/tweets with HTTP 201 Created.
    """
    id: str = Field(description="Tweet identifier (UUID string)")
    body: str = Field(description="Tweet text, exactly as submitted")
    user: UserSummary = Field(description="Author id and display name")
    created_at: str = Field(description="When the row was created (ISO 8601)")
    posted_at: str = Field(description="Logical post time (ISO 8601)")


class CurrentUserResponse(BaseModel):
    """Returned by GET /api/user for the authenticated caller."""
    id: int
    name: str
    email: str
    created_at: str
    updated_at: str


class HealthResponse(BaseModel):
    """
    What:  Health check response showing service and database status.
    Who:   Returned by GET /health for monitoring and load balancer checks.
    """
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")


# ══════════════════════════════════════════════════════════════════════════
# Error Response Models: documentation for the global exception handlers
# ══════════════════════════════════════════════════════════════════════════


class ErrorResponse(BaseModel):
    """Body of 401 and 5xx responses."""
    message: str = Field(description="Human-readable error description")


class ValidationErrorResponse(BaseModel):
    """
    Body of 422 responses.

    Example:
        {
            "message": "The tweet body may not be greater than 280 characters.",
            "errors": {"body": ["The tweet body may not be greater than 280 characters."]}
        }
    """
    message: str = Field(description="First error message, with a count of the rest")
    errors: Dict[str, List[str]] = Field(description="Messages per failing field")
