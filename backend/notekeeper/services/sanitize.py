"""
Notekeeper Backend: Markup Sanitizer
======================================

What:  Neutralizes markup a browser could execute before a string is stored.
How:   bleach.clean with bleach's default allow-list (a, b, i, em, strong,
       code, lists, ...). Anything else is escaped rather than stripped, so
       `<script>alert(1)</script>` is kept as visible, inert text:
       `&lt;script&gt;alert(1)&lt;/script&gt;`.
Who:   NoteStore, on create and update only.

Existing character entities are left alone, which makes the transform
idempotent: sanitize(sanitize(s)) == sanitize(s).
"""

import bleach


def sanitize(value: str) -> str:
    """Returns `value` with disallowed tags and attributes escaped."""
    return bleach.clean(value, strip=False)
