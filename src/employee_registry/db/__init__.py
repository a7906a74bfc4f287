"""
employee_registry.db

Persistence package (SQLAlchemy Core over an async engine).

Responsibilities:
- Provide table declarations, engine setup, the storage binding and repositories.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# Only `db.database` talks to the engine directly; repositories go through `Database`.
