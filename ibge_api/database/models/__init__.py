"""
SQLAlchemy models for the IBGE API.
"""
from ibge_api.database.models.location import Location
from ibge_api.database.models.user import User

__all__ = [
    "Location",
    "User",
]
