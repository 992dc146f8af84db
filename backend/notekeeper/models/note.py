"""
Notekeeper Backend: Note SQLAlchemy Model
===========================================

What:  ORM model representing the `notes` table.
Who:   Used by NoteStore for CRUD statements and by create_tables() at startup.

Table Design:
    - id: integer primary key generated by the database
    - datetime: timestamp with time zone; the point in time the note refers to
    - title: VARCHAR(255), matching the validator's 1..255 rule
    - text: TEXT, unbounded free-form body

    Stored strings are already sanitized; the model does no escaping itself.
"""

import datetime as dt

from sqlalchemy import DateTime, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from notekeeper.database import Base


TITLE_MAX_LENGTH = 255


class Note(Base):
    """
    A single note row.

    Lifecycle:
        1. Inserted by NoteStore.create(); the database assigns `id`
        2. title, text and datetime replaced together by NoteStore.update()
        3. Removed for good by NoteStore.delete() (no soft delete)
    """

    __tablename__ = "notes"

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
    )

    # Column name matches the public field; the annotation uses the module
    # alias because `datetime` is shadowed inside the class body.
    datetime: Mapped[dt.datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        comment="Point in time the note refers to",
    )

    title: Mapped[str] = mapped_column(
        String(TITLE_MAX_LENGTH),
        nullable=False,
        comment="Sanitized note title, 1 to 255 characters",
    )

    text: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        default="",
        comment="Sanitized free-form note body",
    )

    def __repr__(self) -> str:
        """Developer-friendly string representation for debugging."""
        return f"<Note(id={self.id}, datetime='{self.datetime}')>"
