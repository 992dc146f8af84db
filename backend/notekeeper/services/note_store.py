"""
Notekeeper Backend: Note Store (Persistence Operations)
=========================================================

What:  The five note operations: create, read_all, read_one, update, delete.
How:   Each operation issues exactly one SQL statement on the session the
       caller borrowed for the request (see database.get_db_session).
Who:   Called by the notes routes after the validator accepted the payload.

Result Contract:
    create    → the inserted Note (id assigned by the database)
    read_all  → list of every Note, ordered by id
    read_one  → the Note, or None when the id does not exist
    update    → the updated Note, or None when the id does not exist
    delete    → number of rows removed (0 or 1)

    Absence is a value, never an exception. Database errors are not caught
    here; they propagate to the global handler.

Sanitization:
    title, text and the datetime string go through sanitize() on create and
    update. Reads return stored values verbatim.
"""

import datetime as dt
import logging
from typing import List, Optional

from sqlalchemy import delete, insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from notekeeper.exceptions import ValidationError
from notekeeper.models.note import Note
from notekeeper.schemas.note import FieldError, NoteIn
from notekeeper.services.sanitize import sanitize
from notekeeper.services.validator import DATETIME_ERROR, parse_datetime

logger = logging.getLogger(__name__)


class NoteStore:
    """
    Stateless persistence layer for notes.

    Holds no connection or cache of its own; every call receives the
    request's AsyncSession, so concurrent requests never share state.
    Concurrent writes to one id are ordered by the database (last write wins).
    """

    def _sanitized_values(self, note: NoteIn) -> dict:
        """Sanitize the writable fields and convert the datetime for storage."""
        datetime_value = parse_datetime(sanitize(note.datetime))
        if datetime_value is None:
            # Only reachable when a caller skipped validate_note()
            raise ValidationError(errors=[FieldError(field="datetime", error=DATETIME_ERROR)])
        return {
            "title": sanitize(note.title),
            "text": sanitize(note.text),
            # Stored in UTC; backends without zone support keep the wall time
            "datetime": datetime_value.astimezone(dt.timezone.utc),
        }

    async def create(self, db: AsyncSession, note: NoteIn) -> Note:
        """
        Insert a new note and return the stored row.

        Query:
            INSERT INTO notes (datetime, title, text) VALUES (...) RETURNING *

        Raises:
            ValidationError: the datetime string does not parse
            sqlalchemy.exc.SQLAlchemyError: connectivity or constraint failure
        """
        values = self._sanitized_values(note)
        result = await db.execute(insert(Note).returning(Note), [values])
        created = result.scalar_one()
        logger.info("Note %s created", created.id)
        return created

    async def read_all(self, db: AsyncSession) -> List[Note]:
        """Every note, no filtering, ordered by id."""
        result = await db.execute(select(Note).order_by(Note.id))
        return list(result.scalars().all())

    async def read_one(self, db: AsyncSession, note_id: int) -> Optional[Note]:
        """
        The note with `note_id`, or None.

        Query plan:
            SELECT * FROM notes WHERE id = :id  → primary key lookup
        """
        result = await db.execute(select(Note).where(Note.id == note_id))
        return result.scalar_one_or_none()

    async def update(self, db: AsyncSession, note_id: int, note: NoteIn) -> Optional[Note]:
        """
        Replace title, text and datetime of `note_id` in one statement.

        Query:
            UPDATE notes SET title = ..., text = ..., datetime = ...
            WHERE id = :id RETURNING *

        Returns:
            The updated note, or None when no row has that id (including
            one deleted by a concurrent request).
        """
        values = self._sanitized_values(note)
        result = await db.execute(
            update(Note)
            .where(Note.id == note_id)
            .values(**values)
            .returning(Note)
        )
        updated = result.scalar_one_or_none()
        if updated is not None:
            logger.info("Note %s updated", note_id)
        return updated

    async def delete(self, db: AsyncSession, note_id: int) -> int:
        """
        Delete `note_id` and return how many rows were removed (0 or 1).

        Irreversible; there is no soft delete.
        """
        result = await db.execute(delete(Note).where(Note.id == note_id))
        deleted = result.rowcount
        if deleted:
            logger.info("Note %s deleted", note_id)
        return deleted


note_store = NoteStore()
