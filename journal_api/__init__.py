"""
Daily Journal API - Application Package Initializer
=====================================================

What: Marks the `journal_api` directory as a Python package.
Who:  Used implicitly by Python's import system and explicitly by Alembic, pytest, and uvicorn.

Architecture Note:
    The service follows the same layered split on every request:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← status codes, path/body params
    ├─────────────────────────────────────┤
    │         Services (Entry operations) │  ← list, find, create, update, delete
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │        Database (Lifecycle)         │  ← connect / disconnect per request
    └─────────────────────────────────────┘

    Routes never touch the database directly; they receive a session from the
    per-request dependency and hand it to the service.
"""

__version__ = "1.0.0"
