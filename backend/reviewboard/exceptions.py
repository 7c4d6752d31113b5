"""
Review Board Backend — Custom Exception Hierarchy
==================================================

What:  Application-specific exceptions for the three failure kinds the
       service distinguishes.
How:   Each exception carries a client-safe message and an optional context
       dict. Global handlers (registered in main.py) turn them into JSON
       error responses with the right HTTP status code.
Who:   Raised by ReviewStore and ReviewService; caught by global handlers.

Exception Hierarchy:
    ReviewBoardError (base)
    ├── ValidationError   → 400 Bad Request (client can fix)
    ├── NotFoundError     → 404 Not Found
    └── DatabaseError     → 500 Internal Server Error
"""

from typing import Any, Dict, Optional


class ReviewBoardError(Exception):
    """
    Base exception for all Review Board application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged but NOT returned for 5xx errors)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(ReviewBoardError):
    """
    Raised when client input fails a business rule.

    When:    Rating outside 1..5.
    HTTP:    400 Bad Request

    Schema-level problems (malformed JSON, wrong field types) are reported by
    FastAPI as RequestValidationError and mapped to the same 400 response.
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


class NotFoundError(ReviewBoardError):
    """
    Raised when a requested resource does not exist.

    When:    DELETE /delete-review with an id that matches no row.
    HTTP:    404 Not Found
    """

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"The requested {resource} was not found"
        if resource_id:
            message = f"No {resource} found with id {resource_id}"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)


class DatabaseError(ReviewBoardError):
    """
    Raised when a store operation fails unexpectedly.

    When:    Cannot open the SQLite file, schema statement fails, a query or
             insert fails, the connection is closed.
    HTTP:    500 Internal Server Error

    The message returned to the client is always generic; the original
    SQLAlchemy error is kept in `context` and logged server-side only.
    """

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
