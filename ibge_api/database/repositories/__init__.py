"""
Database repositories for the IBGE API.
"""
from ibge_api.database.repositories.base import BaseRepository
from ibge_api.database.repositories.location import LocationRepository
from ibge_api.database.repositories.user import UserRepository

__all__ = [
    "BaseRepository",
    "LocationRepository",
    "UserRepository",
]
