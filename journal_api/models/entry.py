"""
Daily Journal API - Entry SQLAlchemy Model
============================================

What:  ORM model representing the `entries` table.
How:   Inherits from SQLAlchemy's DeclarativeBase; Alembic reads this for migrations.
Who:   Used by EntryService for CRUD operations and by Alembic for schema management.

Field rules (checked in Python before anything is flushed):
    title       required, non-empty, at most 50 characters
    body        required, non-empty, at most 5000 characters
    created_at  set at construction, cannot be reassigned afterwards
    updated_at  equals created_at at construction, refreshed on every update
"""

import uuid
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from sqlalchemy import DateTime, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column, validates

from journal_api.database import Base
from journal_api.exceptions import ValidationError

TITLE_MAX_LENGTH = 50
BODY_MAX_LENGTH = 5000

FIELD_LIMITS: Dict[str, int] = {
    "title": TITLE_MAX_LENGTH,
    "body": BODY_MAX_LENGTH,
}


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def check_field(name: str, value: Any) -> Optional[str]:
    """Return the problem with a title/body value, or None if it is acceptable."""
    if value is None or value == "":
        return f"{name} is required"
    if not isinstance(value, str):
        return f"{name} must be a string"
    limit = FIELD_LIMITS[name]
    if len(value) > limit:
        return f"{name} must be at most {limit} characters (got {len(value)})"
    return None


def validation_message(errors: Dict[str, str]) -> str:
    return "Entry validation failed: " + ", ".join(
        f"{field}: {problem}" for field, problem in errors.items()
    )


def validate_entry_fields(title: Any, body: Any) -> None:
    """
    Check title and body together.

    Raises:
        ValidationError: listing every invalid field, not just the first.
    """
    errors = {}
    for name, value in (("title", title), ("body", body)):
        problem = check_field(name, value)
        if problem:
            errors[name] = problem
    if errors:
        raise ValidationError(message=validation_message(errors), errors=errors)


class Entry(Base):
    """
    A single journal record.

    Lifecycle:
        1. Constructed from client title/body; id and both timestamps assigned here
        2. Updated in place: title/body optionally replaced, updated_at refreshed
        3. Deleted permanently (no soft-delete)
    """

    __tablename__ = "entries"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
        comment="Opaque entry identifier",
    )

    title: Mapped[str] = mapped_column(
        String(TITLE_MAX_LENGTH),
        nullable=False,
        index=True,
        comment="Entry title, matched exactly by the title lookup",
    )

    body: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        comment="Entry content",
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        comment="When this entry was created (UTC), immutable",
    )

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        comment="When this entry was last updated (UTC)",
    )

    def __init__(self, **kwargs: Any):
        validate_entry_fields(kwargs.get("title"), kwargs.get("body"))
        kwargs.setdefault("id", uuid.uuid4())
        if kwargs.get("created_at") is None:
            kwargs["created_at"] = utcnow()
        if kwargs.get("updated_at") is None:
            kwargs["updated_at"] = kwargs["created_at"]
        super().__init__(**kwargs)

    @validates("title", "body")
    def _validate_text(self, key: str, value: Any) -> str:
        problem = check_field(key, value)
        if problem:
            raise ValidationError(
                message=validation_message({key: problem}),
                field=key,
                errors={key: problem},
            )
        return value

    @validates("created_at")
    def _validate_created_at(self, key: str, value: datetime) -> datetime:
        # __dict__ lookup avoids a lazy load on detached instances
        current = self.__dict__.get("created_at")
        if current is not None and value != current:
            raise ValidationError(
                message="Entry validation failed: createdAt is immutable",
                field="createdAt",
            )
        return value

    def touch(self) -> None:
        """Refresh updated_at to the current time."""
        self.updated_at = utcnow()

    def __repr__(self) -> str:
        return f"<Entry(id={self.id}, title={self.title!r}, created_at='{self.created_at}')>"
