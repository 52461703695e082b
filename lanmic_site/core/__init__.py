"""
Core layer: logging, monitoring, persistence and I/O models.

Subpackages:
    database: SQLModel entities, repositories and session management.
    models: Pydantic request/response schemas.
"""
