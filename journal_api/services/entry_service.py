"""
Daily Journal API - Entry Service
===================================

What:  The entry operations: list, find by title, get, create, update, delete.
How:   Each method receives the request's AsyncSession (opened by
       DatabaseLifecycle) and performs one unit of work against the store.
       Writes commit before returning.
Who:   Called by route handlers in routes/entries.py.

Error Handling Strategy:
    ValidationError (on create) and NotFoundError propagate as-is. A rejected
    replacement value on update becomes EntryUpdateError. Anything SQLAlchemy
    raises is logged and wrapped in DatabaseError so driver details never
    reach the client.
"""

import logging
from typing import List, Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from journal_api.exceptions import (
    DatabaseError,
    EntryUpdateError,
    NotFoundError,
    ValidationError,
)
from journal_api.models.entry import Entry
from journal_api.schemas.entry import EntryResponse

logger = logging.getLogger(__name__)


def parse_entry_id(entry_id: str) -> UUID:
    """
    Turn a path segment into an entry id.

    A malformed id cannot match any entry, so it is reported as not found.
    """
    try:
        return UUID(str(entry_id))
    except ValueError:
        raise NotFoundError(resource="Entry", resource_id=str(entry_id)) from None


class EntryService:
    """
    Stateless business logic for entries.

    Responsibilities:
        - list_entries(): every entry, store order
        - find_by_title(): exact, case-sensitive title match
        - get_entry(): one entry or NotFoundError
        - create_entry(): validate, assign id and timestamps, persist
        - update_entry(): replace non-empty fields, refresh updated_at
        - delete_entry(): permanent removal
    """

    async def _load(self, db: AsyncSession, entry_id: str) -> Entry:
        entry_uuid = parse_entry_id(entry_id)
        result = await db.execute(select(Entry).where(Entry.id == entry_uuid))
        entry = result.scalar_one_or_none()
        if entry is None:
            raise NotFoundError(resource="Entry", resource_id=str(entry_id))
        return entry

    async def list_entries(self, db: AsyncSession) -> List[EntryResponse]:
        """Return all entries, unfiltered and in whatever order the store yields."""
        try:
            result = await db.execute(select(Entry))
            entries = result.scalars().all()
        except SQLAlchemyError as e:
            logger.error("Database error listing entries: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not retrieve entries. Please try again.",
                context={"error_type": type(e).__name__},
            )
        return [EntryResponse.model_validate(entry) for entry in entries]

    async def find_by_title(self, db: AsyncSession, title: str) -> List[EntryResponse]:
        """
        Return entries whose title equals `title` exactly.

        An empty list is a normal result, not an error.
        """
        try:
            result = await db.execute(select(Entry).where(Entry.title == title))
            entries = result.scalars().all()
        except SQLAlchemyError as e:
            logger.error("Database error searching entries by title: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not retrieve entries. Please try again.",
                context={"title": title, "error_type": type(e).__name__},
            )
        return [EntryResponse.model_validate(entry) for entry in entries]

    async def get_entry(self, db: AsyncSession, entry_id: str) -> EntryResponse:
        """
        Retrieve a single entry by id.

        Raises:
            NotFoundError: No entry has this id, or the id is malformed (→ 404)
            DatabaseError: Query execution failed (→ 500)
        """
        try:
            entry = await self._load(db, entry_id)
        except SQLAlchemyError as e:
            logger.error("Database error fetching entry %s: %s", entry_id, str(e))
            raise DatabaseError(
                message="Could not retrieve the entry. Please try again.",
                context={"entry_id": entry_id},
            )
        return EntryResponse.model_validate(entry)

    async def create_entry(
        self,
        db: AsyncSession,
        title: Optional[str],
        body: Optional[str],
    ) -> EntryResponse:
        """
        Validate and persist a new entry.

        The Entry constructor validates title/body and assigns the id and both
        timestamps, so an invalid entry never reaches the session.

        Raises:
            ValidationError: title/body missing, empty or too long (→ 400)
            DatabaseError: Insert failed (→ 500)
        """
        entry = Entry(title=title, body=body)
        try:
            db.add(entry)
            await db.commit()
        except SQLAlchemyError as e:
            logger.error("Database error creating entry: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not save the entry. Please try again.",
                context={"error_type": type(e).__name__},
            )
        logger.info("Entry created: %s", entry.id)
        return EntryResponse.model_validate(entry)

    async def update_entry(
        self,
        db: AsyncSession,
        entry_id: str,
        title: Optional[str] = None,
        body: Optional[str] = None,
    ) -> EntryResponse:
        """
        Replace title and/or body and refresh updated_at.

        A field is replaced only when the new value is present and non-empty.
        updated_at moves to "now" even when neither field changes; created_at
        is never touched.

        Raises:
            NotFoundError: No entry has this id (→ 404)
            EntryUpdateError: A replacement value exceeds its length limit (→ 500);
                nothing is committed
            DatabaseError: Query or commit failed (→ 500)
        """
        try:
            entry = await self._load(db, entry_id)
            if title:
                entry.title = title
            if body:
                entry.body = body
            entry.touch()
            await db.commit()
        except ValidationError as e:
            logger.warning("Rejected update of entry %s: %s", entry_id, e.message)
            raise EntryUpdateError(
                message=e.message,
                context={"entry_id": entry_id, **e.context},
            ) from e
        except SQLAlchemyError as e:
            logger.error("Database error updating entry %s: %s", entry_id, str(e), exc_info=True)
            raise DatabaseError(
                message="Could not update the entry. Please try again.",
                context={"entry_id": entry_id, "error_type": type(e).__name__},
            )
        logger.info("Entry updated: %s", entry.id)
        return EntryResponse.model_validate(entry)

    async def delete_entry(self, db: AsyncSession, entry_id: str) -> None:
        """
        Permanently remove an entry.

        Raises:
            NotFoundError: No entry has this id (→ 404)
            DatabaseError: Delete failed (→ 500)
        """
        try:
            entry = await self._load(db, entry_id)
            await db.delete(entry)
            await db.commit()
        except SQLAlchemyError as e:
            logger.error("Database error deleting entry %s: %s", entry_id, str(e), exc_info=True)
            raise DatabaseError(
                message="Could not delete the entry. Please try again.",
                context={"entry_id": entry_id, "error_type": type(e).__name__},
            )
        logger.info("Entry deleted: %s", entry_id)


# ── Singleton Instance ────────────────────────────────────────────────────
entry_service = EntryService()
