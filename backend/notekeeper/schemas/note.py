"""
Notekeeper Backend: Pydantic Request/Response Schemas
=======================================================

What:  Pydantic models defining the API contract.
Why:   Schemas are separate from the SQLAlchemy model so the wire format
       (ISO-8601 datetimes, field names) is controlled in one place.

Request bodies are deliberately NOT declared as Pydantic models on the
routes: field rules live in the validator, which reports every problem as a
`{field, error}` entry with a 400 instead of FastAPI's 422 format.
"""

import datetime as dt
from typing import Optional

from pydantic import BaseModel, Field


# ══════════════════════════════════════════════════════════════════════════
# Request Models
# ══════════════════════════════════════════════════════════════════════════


class NoteIn(BaseModel):
    """
    What:  A payload that already passed validation.
    Who:   Built by the notes routes and handed to NoteStore.create/update.

    All three fields are replaced on update; there is no partial update.
    """
    title: str = Field(description="Note title, 1 to 255 characters")
    text: str = Field(description="Free-form note body (may be empty)")
    datetime: str = Field(description="ISO 8601 date/time string")


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class NoteResponse(BaseModel):
    """Full representation of a stored note."""
    id: int = Field(description="Server-assigned note identifier")
    title: str = Field(description="Sanitized note title")
    text: str = Field(description="Sanitized note body")
    datetime: dt.datetime = Field(description="Point in time of the note (ISO 8601)")

    model_config = {"from_attributes": True}


class FieldError(BaseModel):
    """
    One violated validation rule.

    Example:
        {"field": "title", "error": "Title must be a string of length 1 to 255 characters"}
    """
    field: str = Field(description="Name of the offending payload field")
    error: str = Field(description="Human-readable rule description")


# ══════════════════════════════════════════════════════════════════════════
# Error Response Models
# ══════════════════════════════════════════════════════════════════════════


class ErrorResponse(BaseModel):
    """
    Standardized error body for 404 and 500 responses.

    Example:
        {
            "error": "not_found",
            "message": "note with ID '42' was not found",
            "request_id": "1a2b3c4d"
        }
    """
    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    details: Optional[dict] = Field(default=None, description="Additional error context")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(BaseModel):
    """Health check response showing service and database status."""
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
