"""
FoodShelf Backend — Application Package Initializer
====================================================

What:  Marks the `foodshelf` directory as a Python package.
Why:   Enables module imports like `from foodshelf.config import settings`.
Who:   Used implicitly by Python's import system and explicitly by Alembic, pytest, and uvicorn.

Architecture Note:
    The backend keeps the usual layered split:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns, auth, sanitizing
    ├─────────────────────────────────────┤
    │         Services (Business Logic)   │  ← Lookup, ownership, mutation
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │        Database (Persistence)       │  ← Async SQLAlchemy sessions
    └─────────────────────────────────────┘

    Routes never touch the session directly; they hand it to FoodService,
    which raises domain exceptions that main.py turns into status codes.
"""

__version__ = "1.0.0"
