"""
Notekeeper Backend — Pydantic Request/Response Schemas
=======================================================

What:  Pydantic models defining the API contract of the notes endpoints.
How:   FastAPI validates request bodies against the request models before
       the service layer runs; response models shape the JSON returned.

Request bodies are strict per operation: every field is required, ids must
be UUIDs, text fields must not be blank, and `completed` must be a real JSON
boolean (the string "true" is rejected).
"""

import uuid
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, StrictBool, field_validator


def _reject_blank(value: str) -> str:
    if not value.strip():
        raise ValueError("must not be blank")
    return value


# ══════════════════════════════════════════════════════════════════════════
# Request Models — What clients send
# ══════════════════════════════════════════════════════════════════════════


class NoteCreate(BaseModel):
    """Body of POST /notes."""
    user: uuid.UUID = Field(description="Id of the owning user")
    title: str = Field(min_length=1, description="Unique title (case-insensitive)")
    text: str = Field(min_length=1, description="Note body")

    check_not_blank = field_validator("title", "text")(_reject_blank)


class NoteUpdate(BaseModel):
    """Body of PATCH /notes. Every mutable field is replaced."""
    id: uuid.UUID = Field(description="Id of the note to update")
    user: uuid.UUID = Field(description="Id of the owning user")
    title: str = Field(min_length=1)
    text: str = Field(min_length=1)
    completed: StrictBool = Field(description="Completion flag; must be a JSON boolean")

    check_not_blank = field_validator("title", "text")(_reject_blank)


class NoteDelete(BaseModel):
    """Body of DELETE /notes."""
    id: uuid.UUID = Field(description="Id of the note to delete")


# ══════════════════════════════════════════════════════════════════════════
# Response Models — What the API returns
# ══════════════════════════════════════════════════════════════════════════


class NoteWithUsername(BaseModel):
    """
    What:  A stored note decorated with its owner's username.
    Who:   Items of the GET /notes array.
    """
    id: uuid.UUID
    user: uuid.UUID = Field(description="Id of the owning user")
    title: str
    text: str
    completed: bool
    created_at: datetime
    updated_at: datetime
    username: str = Field(description="Username of the owning user")


class MessageResponse(BaseModel):
    """Confirmation returned by create, update and delete."""
    message: str = Field(description="Human-readable confirmation")


class ErrorResponse(BaseModel):
    """
    What:  Error format shared by every endpoint.

    Example:
        {
            "error": "conflict",
            "message": "A note with this title already exists",
            "details": {"field": "title"},
            "request_id": "1f3a9c2e"
        }
    """
    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    details: Optional[dict] = Field(default=None, description="Additional error context")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(BaseModel):
    """Returned by GET /health for probes and monitoring."""
    status: str = Field(description="Overall service status: healthy or unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
