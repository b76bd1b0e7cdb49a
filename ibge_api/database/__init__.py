"""
Database module for the IBGE API.

Provides SQLAlchemy async database connection, models, and repositories.
"""
from ibge_api.database.connection import (
    Base,
    Database,
    create_engine_from_settings,
    get_db,
)
from ibge_api.database.repositories import (
    BaseRepository,
    LocationRepository,
    UserRepository,
)

__all__ = [
    # Connection
    "Base",
    "Database",
    "create_engine_from_settings",
    "get_db",
    # Repositories
    "BaseRepository",
    "LocationRepository",
    "UserRepository",
]
