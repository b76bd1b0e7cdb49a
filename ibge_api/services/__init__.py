"""Services module."""
from ibge_api.services.location_service import LocationService
from ibge_api.services.token_service import TokenService
from ibge_api.services.user_service import UserService

__all__ = [
    "LocationService",
    "TokenService",
    "UserService",
]
