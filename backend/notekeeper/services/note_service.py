"""
Notekeeper Backend — Note Service (Business Logic)
====================================================

What:  List, create, update and delete notes.
How:   Each operation validates its references, checks title uniqueness,
       performs one write and commits it before the response is built.
Who:   Called by the /notes route handlers.

Operation Flow (PATCH /notes):
    ┌──────────┐   ┌──────────┐   ┌──────────┐   ┌───────────┐   ┌────────┐
    │  Note    │──▶│  User    │──▶│  Title   │──▶│  Replace  │──▶│ Commit │
    │  exists? │   │  exists? │   │  free?   │   │  fields   │   │        │
    └──────────┘   └──────────┘   └──────────┘   └───────────┘   └────────┘
        │ no           │ no           │ taken                        │ unique index
        ▼              ▼              ▼                              ▼ violated
    NotFoundError  ValidationError  ConflictError               ConflictError

Title uniqueness:
    The pre-check compares lower(title) in SQL, the same expression the
    uq_notes_title_lower index is built on. The pre-check gives a precise
    message; the index is the authority when two writers race, and its
    IntegrityError is translated into the same ConflictError.

NoteService is stateless; it receives the request's session on every call.
"""

import logging
from typing import List, NoReturn, Optional
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from notekeeper.exceptions import (
    ConflictError,
    DependencyError,
    NotekeeperError,
    NotFoundError,
    ValidationError,
)
from notekeeper.models.note import Note
from notekeeper.schemas.note import (
    MessageResponse,
    NoteCreate,
    NoteDelete,
    NoteUpdate,
    NoteWithUsername,
)
from notekeeper.services.user_service import user_service

logger = logging.getLogger(__name__)

TITLE_INDEX_NAME = "uq_notes_title_lower"


class NoteService:
    """
    Business logic layer for note operations.

    Responsibilities:
        - list_notes():  All notes joined with their owner's username
        - create_note(): Insert with completed=False
        - update_note(): Full replacement of user, title, text, completed
        - delete_note(): Physical removal

    Error Handling Strategy:
        Application exceptions propagate unchanged. IntegrityError from the
        title index becomes ConflictError; any other SQLAlchemyError becomes
        DependencyError after the session is rolled back.
    """

    async def list_notes(self, db: AsyncSession) -> List[NoteWithUsername]:
        """
        Return every note decorated with its owner's username.

        Order follows the store's retrieval order. An empty store is reported
        as NotFoundError rather than an empty list.

        Raises:
            NotFoundError:   No notes exist
            DependencyError: A referenced user could not be resolved, or a
                             query failed
        """
        try:
            result = await db.execute(select(Note))
            notes = list(result.scalars().all())
        except SQLAlchemyError as e:
            logger.error("Database error listing notes: %s", str(e), exc_info=True)
            raise DependencyError(
                context={"operation": "list_notes", "error_type": type(e).__name__},
            ) from e

        if not notes:
            raise NotFoundError(resource="note", message="No notes found")

        usernames = await user_service.resolve_usernames(
            db, (note.user_id for note in notes)
        )

        return [
            NoteWithUsername(
                id=note.id,
                user=note.user_id,
                title=note.title,
                text=note.text,
                completed=note.completed,
                created_at=note.created_at,
                updated_at=note.updated_at,
                username=usernames[note.user_id],
            )
            for note in notes
        ]

    async def create_note(self, db: AsyncSession, payload: NoteCreate) -> MessageResponse:
        """
        Create a note with completed=False.

        Raises:
            ValidationError: Unknown user, or the write produced no record
            ConflictError:   Another note already has this title (any case)
        """
        try:
            await user_service.ensure_user_exists(db, payload.user)

            duplicate = await self._find_by_title(db, payload.title)
            if duplicate is not None:
                raise ConflictError(context={"title": payload.title})

            note = Note(
                user_id=payload.user,
                title=payload.title,
                text=payload.text,
                completed=False,
            )
            db.add(note)
            await self._commit(db, payload.title)
        except NotekeeperError:
            raise
        except SQLAlchemyError as e:
            await self._fail(db, "create_note", e)

        if note.id is None:
            raise ValidationError(message="Invalid note data received")

        logger.info("Note created: %s ('%s')", note.id, note.title)
        return MessageResponse(message="New note created")

    async def update_note(self, db: AsyncSession, payload: NoteUpdate) -> MessageResponse:
        """
        Replace user, title, text and completed on an existing note.

        A note may keep its own title; only a different note owning the
        title (case-insensitively) is a conflict.

        Raises:
            NotFoundError:   No note with payload.id
            ValidationError: Unknown user
            ConflictError:   Title owned by another note
        """
        try:
            note = await self._get_note(db, payload.id)
            await user_service.ensure_user_exists(db, payload.user)

            duplicate = await self._find_by_title(db, payload.title)
            if duplicate is not None and duplicate.id != note.id:
                raise ConflictError(context={"title": payload.title})

            note.user_id = payload.user
            note.title = payload.title
            note.text = payload.text
            note.completed = payload.completed
            await self._commit(db, payload.title)
        except NotekeeperError:
            raise
        except SQLAlchemyError as e:
            await self._fail(db, "update_note", e)

        logger.info("Note updated: %s ('%s')", note.id, note.title)
        return MessageResponse(message=f"'{note.title}' updated")

    async def delete_note(self, db: AsyncSession, payload: NoteDelete) -> MessageResponse:
        """
        Physically remove a note.

        Raises:
            NotFoundError: No note with payload.id
        """
        try:
            note = await self._get_note(db, payload.id)
            title, note_id = note.title, note.id
            await db.delete(note)
            await db.commit()
        except NotekeeperError:
            raise
        except SQLAlchemyError as e:
            await self._fail(db, "delete_note", e)

        logger.info("Note deleted: %s ('%s')", note_id, title)
        return MessageResponse(message=f"Note '{title}' with ID {note_id} deleted")

    # ── Helpers ───────────────────────────────────────────────────────────

    async def _get_note(self, db: AsyncSession, note_id: UUID) -> Note:
        note = await db.get(Note, note_id)
        if note is None:
            raise NotFoundError(
                resource="note",
                resource_id=str(note_id),
                message="Note not found",
            )
        return note

    async def _find_by_title(self, db: AsyncSession, title: str) -> Optional[Note]:
        """Return the note whose title equals `title` ignoring case, if any."""
        result = await db.execute(
            select(Note).where(func.lower(Note.title) == func.lower(title)).limit(1)
        )
        return result.scalars().first()

    async def _commit(self, db: AsyncSession, title: str) -> None:
        """
        Commit the pending write, translating constraint violations.

        Title index violation → ConflictError
        Foreign key violation → ValidationError(field="user")
        """
        try:
            await db.commit()
        except IntegrityError as e:
            await db.rollback()
            if TITLE_INDEX_NAME in str(e.orig):
                logger.warning("Title index rejected '%s'", title)
                raise ConflictError(context={"title": title}) from e
            logger.warning("Integrity error on note write: %s", str(e.orig))
            raise ValidationError(
                message="The referenced user does not exist",
                field="user",
            ) from e

    async def _fail(self, db: AsyncSession, operation: str, error: SQLAlchemyError) -> NoReturn:
        logger.error("Database error in %s: %s", operation, str(error), exc_info=True)
        await db.rollback()
        raise DependencyError(
            context={"operation": operation, "error_type": type(error).__name__},
        ) from error


# ── Singleton Instance ────────────────────────────────────────────────────
note_service = NoteService()
