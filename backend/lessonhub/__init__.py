"""
LessonHub Backend — Application Package Initializer
=====================================================

What: Marks the `lessonhub` directory as a Python package.
Who:  Used by uvicorn (`lessonhub.main:app`), `python -m lessonhub`, and pytest.

Architecture Note:
    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │         Services (Store Calls)      │  ← One collection call per operation
    ├─────────────────────────────────────┤
    │        Schemas (API Contracts)      │  ← Pydantic response/error models
    ├─────────────────────────────────────┤
    │        Database (MongoDB Client)    │  ← One async client per process
    └─────────────────────────────────────┘

    Lessons and orders are schema-less MongoDB documents; the only
    conditional logic is the numeric-vs-text search query construction
    in `lessonhub.services.search`.
"""

__version__ = "1.0.0"
