"""
Notekeeper Backend: Application Package Initializer
=====================================================

What: Marks the `notekeeper` directory as a Python package.
Who:  Imported by uvicorn (`notekeeper.main:app`) and by pytest.

Architecture Note:
    The backend is split into thin layers:

    ┌─────────────────────────────────────┐
    │        Routes (API Layer)           │  ← decode payload, map results to HTTP
    ├─────────────────────────────────────┤
    │   Services (Validator, Note Store)  │  ← field rules, sanitization, SQL
    ├─────────────────────────────────────┤
    │     Models & Schemas (Data)         │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │     Database (Persistence)          │  ← async engine, pooled sessions
    └─────────────────────────────────────┘

    Control flows one way per request: route → validator → store → route.
"""

__version__ = "1.0.0"
