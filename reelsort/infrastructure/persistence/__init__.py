"""
Persistance SQLModel de ReelSort.

Expose l'engine, l'initialisation des tables et les repositories.
"""

from reelsort.infrastructure.persistence.database import (
    create_db_engine,
    get_session,
    init_db,
)

__all__ = ["create_db_engine", "get_session", "init_db"]
