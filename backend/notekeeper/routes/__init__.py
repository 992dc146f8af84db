# Routes package init
"""
Notekeeper Backend: API Routes Package
========================================

Route Inventory:
    - notes.py:   GET/POST /api/notes, GET/PUT/DELETE /api/notes/{id}
    - health.py:  GET /health

Routes stay thin: decode the request, call the validator and the note store,
and pick the status code. Field rules and SQL live in services.
"""
