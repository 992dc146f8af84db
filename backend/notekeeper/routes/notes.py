"""
Notekeeper Backend: Notes Route Handlers
==========================================

What:  The /api/notes collection and /api/notes/{id} item endpoints.
How:   Each handler decodes the JSON body, runs validate_note(), raises
       ValidationError when it reports anything, otherwise calls the note
       store and maps an absent result to NotFoundError.
Who:   Any HTTP client of the notes API.

Route Inventory:
    GET    /api/notes        list every note
    POST   /api/notes        create a note            → 201
    GET    /api/notes/{id}   fetch one note           → 404 if absent
    PUT    /api/notes/{id}   replace all three fields → 404 if absent
    DELETE /api/notes/{id}   delete a note            → 204, 404 if absent
"""

from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Body, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from notekeeper.database import get_db_session
from notekeeper.exceptions import NotFoundError, ValidationError
from notekeeper.schemas.note import ErrorResponse, NoteIn, NoteResponse
from notekeeper.services.note_store import note_store
from notekeeper.services.validator import validate_note

router = APIRouter(prefix="/api", tags=["Notes"])

# Body is left untyped so the validator, not FastAPI, decides what is wrong
NotePayload = Optional[Dict[str, Any]]


def _validated(payload: NotePayload) -> NoteIn:
    """
    Run the validator and build the store input.

    A missing or null body counts as an empty object.

    Raises:
        ValidationError: with every violated rule, in title, text, datetime order
    """
    payload = payload or {}
    errors = validate_note(payload)
    if errors:
        raise ValidationError(errors=errors)
    return NoteIn(
        title=payload.get("title", ""),
        text=payload.get("text", ""),
        datetime=payload.get("datetime", ""),
    )


@router.get(
    "/notes",
    response_model=List[NoteResponse],
    responses={500: {"description": "Server error", "model": ErrorResponse}},
    summary="List all notes",
)
async def list_notes(db: AsyncSession = Depends(get_db_session)) -> List[NoteResponse]:
    """Every stored note; no pagination or filtering."""
    notes = await note_store.read_all(db)
    return [NoteResponse.model_validate(note) for note in notes]


@router.post(
    "/notes",
    status_code=status.HTTP_201_CREATED,
    response_model=NoteResponse,
    responses={
        201: {"description": "Note created", "model": NoteResponse},
        400: {"description": "Invalid payload: list of {field, error} entries"},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Create a note",
)
async def create_note(
    payload: NotePayload = Body(default=None),
    db: AsyncSession = Depends(get_db_session),
) -> NoteResponse:
    """
    Create a note from `{title, text, datetime}`.

    The store is only reached when the payload passes validation.
    """
    note_in = _validated(payload)
    created = await note_store.create(db, note_in)
    return NoteResponse.model_validate(created)


@router.get(
    "/notes/{note_id}",
    response_model=NoteResponse,
    responses={
        404: {"description": "Note not found", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Get a single note by ID",
)
async def get_note(
    note_id: int,
    db: AsyncSession = Depends(get_db_session),
) -> NoteResponse:
    note = await note_store.read_one(db, note_id)
    if note is None:
        raise NotFoundError(resource="note", resource_id=str(note_id))
    return NoteResponse.model_validate(note)


@router.put(
    "/notes/{note_id}",
    response_model=NoteResponse,
    responses={
        400: {"description": "Invalid payload: list of {field, error} entries"},
        404: {"description": "Note not found", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Replace a note",
)
async def update_note(
    note_id: int,
    payload: NotePayload = Body(default=None),
    db: AsyncSession = Depends(get_db_session),
) -> NoteResponse:
    """
    Replace title, text and datetime of a note.

    Validation runs first, so an invalid payload for a missing id is a 400,
    not a 404.
    """
    note_in = _validated(payload)
    updated = await note_store.update(db, note_id, note_in)
    if updated is None:
        raise NotFoundError(resource="note", resource_id=str(note_id))
    return NoteResponse.model_validate(updated)


@router.delete(
    "/notes/{note_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={
        404: {"description": "Note not found", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Delete a note",
)
async def delete_note(
    note_id: int,
    db: AsyncSession = Depends(get_db_session),
) -> Response:
    deleted = await note_store.delete(db, note_id)
    if not deleted:
        raise NotFoundError(resource="note", resource_id=str(note_id))
    return Response(status_code=status.HTTP_204_NO_CONTENT)
