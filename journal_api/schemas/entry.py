"""
Daily Journal API - Pydantic Request/Response Schemas
=======================================================

What:  Pydantic models defining the HTTP contract for entries.
How:   FastAPI uses these models to parse request bodies, serialize responses,
       and generate the OpenAPI document.

Request models are deliberately lenient: title/body are optional strings here
and the length/presence rules live on the Entry model, so a bad entry is
reported as a 400 by the service layer instead of FastAPI's 422. The limits
still appear in the generated docs through `json_schema_extra`.
"""

import uuid
from datetime import datetime, timezone
from typing import Optional

from pydantic import AliasChoices, BaseModel, Field, field_serializer

from journal_api.models.entry import BODY_MAX_LENGTH, TITLE_MAX_LENGTH


def format_timestamp(value: datetime) -> str:
    """
    Render a timestamp as UTC ISO 8601 with milliseconds, e.g. 2024-09-09T00:00:00.000Z.

    Naive values (SQLite returns these) are taken to be UTC already.
    """
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    value = value.astimezone(timezone.utc)
    return value.isoformat(timespec="milliseconds").replace("+00:00", "Z")


# ══════════════════════════════════════════════════════════════════════════
# Request Models
# ══════════════════════════════════════════════════════════════════════════


class EntryCreate(BaseModel):
    """Body of POST /entry."""
    title: Optional[str] = Field(
        default=None,
        description="Entry title",
        json_schema_extra={"maxLength": TITLE_MAX_LENGTH, "example": "Day 1"},
    )
    body: Optional[str] = Field(
        default=None,
        description="Entry content",
        json_schema_extra={"maxLength": BODY_MAX_LENGTH, "example": "Hello"},
    )


class EntryUpdate(BaseModel):
    """
    Body of PUT /entry/{id}.

    Omitted or empty fields keep their stored value.
    """
    title: Optional[str] = Field(
        default=None,
        description="New title; omitted or empty keeps the current one",
        json_schema_extra={"maxLength": TITLE_MAX_LENGTH},
    )
    body: Optional[str] = Field(
        default=None,
        description="New content; omitted or empty keeps the current one",
        json_schema_extra={"maxLength": BODY_MAX_LENGTH, "example": "Hello world"},
    )


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class EntryResponse(BaseModel):
    """
    Full representation of an entry.

    Serialized with camelCase timestamp keys:
        {"id", "title", "body", "createdAt", "updatedAt"}
    """
    id: uuid.UUID = Field(description="Auto generated entry ID")
    title: str = Field(description="Entry title", json_schema_extra={"example": "Entry Title"})
    body: str = Field(
        description="Entry content",
        json_schema_extra={"example": "This is the body of the entry."},
    )
    created_at: datetime = Field(
        validation_alias=AliasChoices("created_at", "createdAt"),
        serialization_alias="createdAt",
        description="Date of entry creation (UTC ISO 8601)",
        json_schema_extra={"example": "2024-09-09T00:00:00.000Z"},
    )
    updated_at: datetime = Field(
        validation_alias=AliasChoices("updated_at", "updatedAt"),
        serialization_alias="updatedAt",
        description="Date of last entry update (UTC ISO 8601)",
        json_schema_extra={"example": "2024-09-09T00:00:00.000Z"},
    )

    model_config = {"from_attributes": True}

    @field_serializer("created_at", "updated_at")
    def _serialize_timestamp(self, value: datetime) -> str:
        return format_timestamp(value)


class MessageResponse(BaseModel):
    """Confirmation body, e.g. {"message": "Entry deleted"}."""
    message: str = Field(description="Human-readable confirmation")


class ErrorResponse(BaseModel):
    """
    Body of every error response.

    Example:
        {"message": "Entry not found"}
    """
    message: str = Field(description="Human-readable error description")


class HealthResponse(BaseModel):
    """Returned by GET /health for monitoring and container health checks."""
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
