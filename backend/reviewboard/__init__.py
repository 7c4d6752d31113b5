"""
Review Board Backend — Application Package Initializer
======================================================

What: Marks the `reviewboard` directory as a Python package.
Who:  Used by uvicorn (`reviewboard.main:app`), pytest, and the console script.

Architecture Note:
    The backend is split into the same thin layers for every request:

    ┌─────────────────────────────────────┐
    │      Routes + Middleware (HTTP)     │  ← status codes, CORS, request IDs
    ├─────────────────────────────────────┤
    │     ReviewService + IdAllocator     │  ← validation, id assignment, lock
    ├─────────────────────────────────────┤
    │        Models & Schemas (Data)      │  ← SQLAlchemy table + Pydantic
    ├─────────────────────────────────────┤
    │        ReviewStore (Persistence)    │  ← one shared SQLite connection
    └─────────────────────────────────────┘
"""

__version__ = "1.0.0"
