"""
Notekeeper Backend — Custom Exception Hierarchy
=================================================

What:  Defines application-specific exceptions for each failure the note
       handlers can report.
How:   Each exception class carries a message and optional context dict.
       Global exception handlers (registered in main.py) catch these and
       return structured JSON error responses with the right HTTP status.
Who:   Raised by services; caught by global handlers.

Exception Hierarchy:
    NotekeeperError (base)
    ├── ValidationError   → 400 Bad Request (missing/malformed input)
    ├── NotFoundError     → 400 Bad Request (referenced note does not exist)
    ├── ConflictError     → 409 Conflict (duplicate title)
    └── DependencyError   → 503 Service Unavailable (store/lookup failure)

NotFoundError maps to 400 rather than 404: API consumers of the notes
endpoints treat an unknown id the same as any other bad request body.
"""

from typing import Any, Dict, Optional


class NotekeeperError(Exception):
    """
    Base exception for all Notekeeper application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged, returned only for client errors)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(NotekeeperError):
    """
    Raised when client input fails validation.

    When:    Missing required fields, non-boolean `completed`, unknown user id,
             or a write that unexpectedly produced no record.
    HTTP:    400 Bad Request
    """

    def __init__(
        self,
        message: str = "Validation failed",
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message=message, context=ctx)
        self.field = field


class NotFoundError(NotekeeperError):
    """
    Raised when a requested resource does not exist.

    When:    Update/delete with an unknown note id; listing an empty store.
    HTTP:    400 Bad Request

    SQLAlchemy returns None for missing records; services convert that
    into this exception.
    """

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[str] = None,
        message: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        if message is None:
            message = f"The requested {resource} was not found"
            if resource_id:
                message = f"{resource.capitalize()} with ID '{resource_id}' was not found"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)
        self.resource = resource
        self.resource_id = resource_id


class ConflictError(NotekeeperError):
    """
    Raised when a write would violate a uniqueness constraint.

    When:    A different note already owns the (case-insensitive) title, either
             found by the pre-check or reported by the unique index at write time.
    HTTP:    409 Conflict
    """

    def __init__(
        self,
        message: str = "A note with this title already exists",
        field: Optional[str] = "title",
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message=message, context=ctx)
        self.field = field


class DependencyError(NotekeeperError):
    """
    Raised when a downstream lookup or store operation fails.

    When:    A note references a user that cannot be resolved, or a query
             raised an unexpected SQLAlchemy error.
    HTTP:    503 Service Unavailable

    The message returned to the client is generic; `context` (missing ids,
    driver error type) is logged server-side only.
    """

    def __init__(
        self,
        message: str = "A required service is temporarily unavailable. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
