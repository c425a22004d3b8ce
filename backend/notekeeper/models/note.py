"""
Notekeeper Backend — Note SQLAlchemy Model
============================================

What:  ORM model representing the `notes` table.
How:   Inherits from the shared DeclarativeBase; `init_models()` creates it.
Who:   Used by NoteService for CRUD operations.

Table Design:
    - UUID primary key, generated in Python so SQLite and PostgreSQL agree
    - user_id: foreign key to users.id (owning user, mutable)
    - title: unique under lower(title), so "Report" and "report" collide.
      Case folding is whatever the dialect's lower() does: SQLite folds
      ASCII only ("Éclair" and "éclair" stay distinct), PostgreSQL folds
      non-ASCII letters when the database LC_CTYPE is a UTF-8 locale.
    - text: note body
    - completed: strict boolean, false on creation
    - created_at / updated_at: UTC with timezone
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import Boolean, DateTime, ForeignKey, Index, Text, Uuid, func
from sqlalchemy import text as sa_text
from sqlalchemy.orm import Mapped, mapped_column

from notekeeper.database import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Note(Base):
    """
    A note owned by a user.

    Lifecycle:
        1. Created by POST /notes (completed = False)
        2. Fully replaced by PATCH /notes (user, title, text, completed)
        3. Physically removed by DELETE /notes

    Query Patterns:
        - Title conflict check: WHERE lower(title) = lower(:title)
          → Uses uq_notes_title_lower
        - Get single note: WHERE id = :uuid → primary key
    """

    __tablename__ = "notes"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
        comment="Unique identifier, immutable after creation",
    )

    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("users.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
        comment="Owning user",
    )

    title: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        comment="Note title, unique case-insensitively",
    )

    text: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        comment="Free text body",
    )

    completed: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False,
        server_default=sa_text("false"),
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=_utcnow,
        server_default=func.current_timestamp(),
    )

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=_utcnow,
        onupdate=_utcnow,
        server_default=func.current_timestamp(),
    )

    def __repr__(self) -> str:
        return (
            f"<Note(id={self.id}, title='{self.title}', "
            f"completed={self.completed})>"
        )


# Case-insensitive uniqueness lives in the store so concurrent writers
# cannot both pass the application pre-check.
Index("uq_notes_title_lower", func.lower(Note.title), unique=True)
