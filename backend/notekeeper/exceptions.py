"""
Notekeeper Backend: Custom Exception Hierarchy
================================================

What:  Application-specific exceptions raised by the route layer.
How:   Global handlers registered in main.py turn them into JSON responses.

Exception Hierarchy:
    NotekeeperError (base)
    ├── ValidationError   → 400 Bad Request (body is the list of field errors)
    └── NotFoundError     → 404 Not Found

Store and connectivity failures are NOT wrapped: SQLAlchemy exceptions reach
their own global handler unchanged and become a generic 500.
"""

from typing import Any, Dict, List, Optional

from notekeeper.schemas.note import FieldError


class NotekeeperError(Exception):
    """
    Base exception for all Notekeeper application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged, not returned to the client)
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
    Raised when a note payload violates one or more field rules.

    What:    Carries every violation found by the validator, in title, text,
             datetime order.
    HTTP:    400 Bad Request

    Example response body:
        [
            {"field": "title", "error": "Title must be a string of length 1 to 255 characters"},
            {"field": "datetime", "error": "Datetime must be ISO 8601 date"}
        ]
    """

    def __init__(
        self,
        errors: List[FieldError],
        message: str = "Validation failed",
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        ctx["fields"] = [e.field for e in errors]
        super().__init__(message=message, context=ctx)
        self.errors = errors


class NotFoundError(NotekeeperError):
    """
    Raised when a requested note does not exist.

    HTTP:    404 Not Found

    The store signals absence with None / a zero row count; routes convert
    that into this exception so the status code is decided in one place.
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
