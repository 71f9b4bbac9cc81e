"""
Daily Journal API - Entry Route Handlers
==========================================

What:  The /entry resource: list, find by title, get, create, update, delete.
How:   Each handler receives a connected session from get_db_session, delegates
       to EntryService, and returns the result. Errors are raised as
       application exceptions and turned into {"message": ...} responses by
       the global handlers in main.py.

Route order matters: /entry/title/{title} is declared before /entry/{entry_id}
so "title" is never taken for an id.
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, Path, status
from sqlalchemy.ext.asyncio import AsyncSession

from journal_api.database import get_db_session
from journal_api.schemas.entry import (
    EntryCreate,
    EntryResponse,
    EntryUpdate,
    ErrorResponse,
    MessageResponse,
)
from journal_api.services.entry_service import entry_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/entry", tags=["Entry"])

SERVER_ERROR = {500: {"description": "Server error", "model": ErrorResponse}}
NOT_FOUND = {404: {"description": "Entry not found", "model": ErrorResponse}}
BAD_REQUEST = {400: {"description": "Data validation error", "model": ErrorResponse}}


@router.get(
    "",
    response_model=List[EntryResponse],
    responses={**SERVER_ERROR},
    summary="Get all entries",
    description="Returns every entry in the journal, unfiltered.",
)
async def list_entries(db: AsyncSession = Depends(get_db_session)) -> List[EntryResponse]:
    return await entry_service.list_entries(db)


@router.get(
    "/title/{title}",
    response_model=List[EntryResponse],
    responses={**SERVER_ERROR},
    summary="Get entries by title",
    description=(
        "Returns all entries whose title matches exactly (case-sensitive). "
        "An empty array is returned when nothing matches."
    ),
)
async def find_entries_by_title(
    title: str = Path(description="Entry title"),
    db: AsyncSession = Depends(get_db_session),
) -> List[EntryResponse]:
    return await entry_service.find_by_title(db, title)


@router.get(
    "/{entry_id}",
    response_model=EntryResponse,
    responses={**NOT_FOUND, **SERVER_ERROR},
    summary="Get an entry by ID",
)
async def get_entry(
    entry_id: str = Path(description="Entry ID to retrieve"),
    db: AsyncSession = Depends(get_db_session),
) -> EntryResponse:
    return await entry_service.get_entry(db, entry_id)


@router.post(
    "",
    response_model=EntryResponse,
    status_code=status.HTTP_201_CREATED,
    responses={**BAD_REQUEST, **SERVER_ERROR},
    summary="Create a new entry",
    description=(
        "Creates an entry from a title (max 50 characters) and a body "
        "(max 5000 characters). The ID and both timestamps are assigned by the server."
    ),
)
async def create_entry(
    payload: EntryCreate,
    db: AsyncSession = Depends(get_db_session),
) -> EntryResponse:
    return await entry_service.create_entry(db, title=payload.title, body=payload.body)


@router.put(
    "/{entry_id}",
    response_model=EntryResponse,
    responses={**NOT_FOUND, **SERVER_ERROR},
    summary="Update an entry",
    description=(
        "Replaces the title and/or body when supplied and non-empty; other fields "
        "keep their stored value. updatedAt is refreshed on every successful update. "
        "A replacement over its length limit fails the update with a 500."
    ),
)
async def update_entry(
    entry_id: str = Path(description="Entry ID to update"),
    payload: Optional[EntryUpdate] = None,
    db: AsyncSession = Depends(get_db_session),
) -> EntryResponse:
    payload = payload or EntryUpdate()
    return await entry_service.update_entry(
        db, entry_id, title=payload.title, body=payload.body
    )


@router.delete(
    "/{entry_id}",
    response_model=MessageResponse,
    responses={**NOT_FOUND, **SERVER_ERROR},
    summary="Delete an entry",
)
async def delete_entry(
    entry_id: str = Path(description="Entry ID to delete"),
    db: AsyncSession = Depends(get_db_session),
) -> MessageResponse:
    await entry_service.delete_entry(db, entry_id)
    return MessageResponse(message="Entry deleted")
