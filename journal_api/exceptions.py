"""
Daily Journal API - Custom Exception Hierarchy
================================================

What:  Application-specific exceptions for the failure modes of an entry request.
How:   Each exception class carries a message and optional context dict.
       Global exception handlers (registered in main.py) catch these and
       return `{"message": ...}` JSON bodies with the matching HTTP status.
Who:   Raised by the model, the services and the database lifecycle; caught by
       the global handlers.

Exception Hierarchy:
    JournalError (base)
    ├── ValidationError              → 400 Bad Request (client can fix)
    ├── NotFoundError                → 404 Not Found
    ├── EntryUpdateError             → 500 Internal Server Error
    └── DatabaseError                → 500 Internal Server Error
        └── DatabaseConnectionError  → 500 Internal Server Error
"""

from typing import Any, Dict, Optional

UNEXPECTED_ERROR_MESSAGE = "An unexpected error occurred. Please try again later."


class JournalError(Exception):
    """
    Base exception for all Daily Journal application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged but NOT returned to client)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(JournalError):
    """
    Raised when entry data fails validation.

    When:    Missing, empty or oversized title/body; malformed request body.
    HTTP:    400 Bad Request

    `errors` maps each offending field to its problem, so a request with two
    bad fields reports both at once.
    """

    def __init__(
        self,
        message: str = "Validation failed",
        field: Optional[str] = None,
        errors: Optional[Dict[str, str]] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        if errors:
            ctx["errors"] = dict(errors)
        super().__init__(message=message, context=ctx)
        self.field = field
        self.errors = dict(errors or {})


class NotFoundError(JournalError):
    """
    Raised when a requested resource does not exist.

    When:    GET/PUT/DELETE /entry/{id} with an id that matches no entry, or an
             id that is not a valid identifier at all.
    HTTP:    404 Not Found

    The message is always "<resource> not found"; the id only goes to the logs.
    """

    def __init__(
        self,
        resource: str = "Entry",
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=f"{resource} not found", context=ctx)
        self.resource_id = resource_id


class EntryUpdateError(JournalError):
    """
    Raised when an update supplies a replacement value the entry rejects.

    When:    PUT /entry/{id} with a title or body over its length limit.
    HTTP:    500 Internal Server Error, carrying the validation message

    Only creation reports bad input as 400; a rejected update is a failed
    save. Nothing is persisted.
    """

    def __init__(
        self,
        message: str = "Could not update the entry",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class DatabaseError(JournalError):
    """
    Raised when database operations fail unexpectedly.

    When:    Connection lost mid-query, constraint violation, failed close, etc.
    HTTP:    500 Internal Server Error

    Detailed error info (SQL, driver message) goes into `context` and is
    logged server-side only.
    """

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class DatabaseConnectionError(DatabaseError):
    """
    Raised when a connection to the store cannot be opened.

    When:    Store unreachable, credentials rejected, or connect() called on a
             lifecycle that is already connected.
    HTTP:    500 Internal Server Error
    """

    def __init__(
        self,
        message: str = "Could not connect to the database",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
