"""
Notekeeper Backend — Notes Route Handlers
===========================================

What:  GET/POST/PATCH/DELETE /notes.
How:   FastAPI validates the JSON body against the operation's schema, the
       handler delegates to NoteService, and exceptions are mapped to status
       codes by the global handlers in main.py.

All four operations share one path; the note id travels in the request body
for PATCH and DELETE.
"""

import logging
from typing import List

from fastapi import APIRouter, Body, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from notekeeper.database import get_db_session
from notekeeper.schemas.note import (
    ErrorResponse,
    MessageResponse,
    NoteCreate,
    NoteDelete,
    NoteUpdate,
    NoteWithUsername,
)
from notekeeper.services.note_service import note_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/notes", tags=["Notes"])


@router.get(
    "",
    response_model=List[NoteWithUsername],
    responses={
        400: {"description": "No notes found", "model": ErrorResponse},
        503: {"description": "Owner lookup failed", "model": ErrorResponse},
    },
    summary="List all notes with their owner's username",
)
async def get_all_notes(
    db: AsyncSession = Depends(get_db_session),
) -> List[NoteWithUsername]:
    return await note_service.list_notes(db)


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=MessageResponse,
    responses={
        400: {"description": "Missing or invalid fields", "model": ErrorResponse},
        409: {"description": "Duplicate title", "model": ErrorResponse},
    },
    summary="Create a note",
)
async def create_new_note(
    payload: NoteCreate,
    db: AsyncSession = Depends(get_db_session),
) -> MessageResponse:
    return await note_service.create_note(db, payload)


@router.patch(
    "",
    response_model=MessageResponse,
    responses={
        400: {"description": "Missing/invalid fields or note not found", "model": ErrorResponse},
        409: {"description": "Duplicate title", "model": ErrorResponse},
    },
    summary="Replace a note's user, title, text and completed flag",
)
async def update_note(
    payload: NoteUpdate,
    db: AsyncSession = Depends(get_db_session),
) -> MessageResponse:
    return await note_service.update_note(db, payload)


@router.delete(
    "",
    response_model=MessageResponse,
    responses={
        400: {"description": "Missing id or note not found", "model": ErrorResponse},
    },
    summary="Delete a note",
)
async def delete_note(
    payload: NoteDelete = Body(...),
    db: AsyncSession = Depends(get_db_session),
) -> MessageResponse:
    return await note_service.delete_note(db, payload)
