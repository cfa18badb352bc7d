"""
Todo Memo Backend — Application Package Initializer
====================================================

What: Marks the `todo_memo` directory as a Python package.
Who:  Imported by uvicorn (`todo_memo.main:app`), pytest, and the `todo-memo` script.

Architecture Note:
    The backend is split into thin layers:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │    Services (Validation, Ordering,  │  ← Business rules
    │         Todo orchestration)         │
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← Domain entity + Pydantic contracts
    ├─────────────────────────────────────┤
    │     Todo Store (Persistence)        │  ← MongoDB (motor) or in-memory
    └─────────────────────────────────────┘
"""

__version__ = "1.0.0"
