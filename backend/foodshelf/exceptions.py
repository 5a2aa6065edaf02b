"""
FoodShelf Backend — Custom Exception Hierarchy
================================================

What:  Application-specific exceptions for each failure the API can report.
Why:   Services raise domain errors without knowing about HTTP; the global
       handlers registered in main.py translate each type to a status code
       and a consistent JSON body.
How:   Each exception class carries a message and optional context dict.
Who:   Raised by services and the auth dependency; caught by global handlers.

Exception Hierarchy:
    FoodShelfError (base)        → 500 Internal Server Error
    ├── ValidationError          → 400 Bad Request (client can fix)
    ├── NotFoundError            → 404 Not Found
    ├── ForbiddenError           → 403 Forbidden (authenticated, not the owner)
    ├── UnauthorizedError        → 401 Unauthorized (missing/invalid token)
    └── DatabaseError            → 500 Internal Server Error

    Schema-level request validation stays with FastAPI (422).
"""

from typing import Any, Dict, Optional


class FoodShelfError(Exception):
    """
    Base exception for all FoodShelf application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged, returned only where harmless)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(FoodShelfError):
    """
    Raised when client input breaks a business rule.

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


class NotFoundError(FoodShelfError):
    """
    Raised when a requested resource does not exist.

    When:    GET/PATCH/DELETE /foods/{id} with an id that resolves to nothing.
    HTTP:    404 Not Found

    SQLAlchemy returns None for missing rows; handle_404() converts that
    None into this exception inside the service layer.
    """

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"The requested {resource} was not found"
        if resource_id:
            message = f"{resource} with ID '{resource_id}' was not found"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)


class ForbiddenError(FoodShelfError):
    """
    Raised when an authenticated user acts on a record they do not own.

    When:    PATCH or DELETE /foods/{id} by anyone other than the owner.
    HTTP:    403 Forbidden

    Why 403 (not 401):
        The caller's identity is known and valid; re-authenticating will not
        help. 401 is reserved for a missing or unrecognized bearer token.
    """

    def __init__(
        self,
        message: str = "You do not own this resource",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class UnauthorizedError(FoodShelfError):
    """
    Raised by the auth dependency when no valid bearer token was supplied.

    HTTP:    401 Unauthorized, with `WWW-Authenticate: Bearer`
    """

    def __init__(
        self,
        message: str = "A valid bearer token is required",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class DatabaseError(FoodShelfError):
    """
    Raised when database operations fail unexpectedly.

    When:    Connection lost mid-query, constraint violation, driver error.
    HTTP:    500 Internal Server Error

    The message returned to the client is always generic; the context
    (original exception type, ids) is logged server-side only.
    """

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
