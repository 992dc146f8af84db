"""
Notekeeper Backend: Note Payload Validator
============================================

What:  Pure functions that check a proposed note payload field by field.
Who:   Called by the notes routes before any store operation.

Rules (all evaluated, reported in this order):
    title     string of length 1..255, measured after sanitize()
    text      string (empty allowed)
    datetime  ISO 8601 string for an instant strictly after the Unix epoch,
              representable in UTC (no year past 9999 after conversion)

Missing fields default to the empty string, so an empty payload yields a
title error and a datetime error but no text error.
"""

import datetime as dt
from typing import Any, List, Mapping, Optional

from notekeeper.models.note import TITLE_MAX_LENGTH
from notekeeper.schemas.note import FieldError
from notekeeper.services.sanitize import sanitize


TITLE_ERROR = "Title must be a string of length 1 to 255 characters"
TEXT_ERROR = "Text must be a string"
DATETIME_ERROR = "Datetime must be ISO 8601 date"


def parse_datetime(value: Any) -> Optional[dt.datetime]:
    """
    Parse an ISO 8601 string into a timezone-aware datetime.

    Returns None for non-strings, unparseable strings, and instants that fall
    outside the datetime range once converted to UTC. Values without an
    offset are taken as UTC.
    """
    if not isinstance(value, str):
        return None
    try:
        parsed = dt.datetime.fromisoformat(value.strip())
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=dt.timezone.utc)
    try:
        # e.g. 9999-12-31T23:00:00-05:00 lands in year 10000
        parsed.astimezone(dt.timezone.utc)
    except OverflowError:
        return None
    return parsed


def _is_valid_title(title: Any) -> bool:
    # Entities added by sanitize() count toward the stored length
    return isinstance(title, str) and 1 <= len(sanitize(title)) <= TITLE_MAX_LENGTH


def _is_valid_datetime(value: Any) -> bool:
    parsed = parse_datetime(value)
    # The epoch itself and anything before it is rejected
    return parsed is not None and parsed.timestamp() > 0


def validate_note(payload: Mapping[str, Any]) -> List[FieldError]:
    """
    Check a candidate note and return one FieldError per violated rule.

    Args:
        payload: Decoded JSON object with optional title, text, datetime keys.

    Returns:
        An empty list when the payload is valid; otherwise the errors in
        title, text, datetime order.
    """
    title = payload.get("title", "")
    text = payload.get("text", "")
    datetime_value = payload.get("datetime", "")

    errors: List[FieldError] = []

    if not _is_valid_title(title):
        errors.append(FieldError(field="title", error=TITLE_ERROR))

    if not isinstance(text, str):
        errors.append(FieldError(field="text", error=TEXT_ERROR))

    if not _is_valid_datetime(datetime_value):
        errors.append(FieldError(field="datetime", error=DATETIME_ERROR))

    return errors
