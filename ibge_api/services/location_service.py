"""
Business logic for IBGE locations.
"""

import logging
from typing import List, Optional

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from ibge_api.database.models.location import Location
from ibge_api.database.repositories.location import LocationRepository
from ibge_api.models.location_models import LocationDTO
from ibge_api.services.errors import NotFoundError, PersistenceError
from ibge_api.services.validation import LOCATION_RULES, validate

logger = logging.getLogger(__name__)


def to_dto(location: Location) -> LocationDTO:
    """Map a persisted location to its external shape."""
    return LocationDTO(id=location.id, state=location.state, city=location.city)


class LocationService:
    """Service for location CRUD operations."""

    def __init__(self, session: AsyncSession):
        """
        Initialize location service.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session
        self.repo = LocationRepository(session)

    async def list(self) -> List[LocationDTO]:
        """Return every location ordered by IBGE code (empty list if none)."""
        locations = await self.repo.get_all()
        return [to_dto(location) for location in locations]

    async def get_by_city(self, city: str) -> Optional[LocationDTO]:
        location = await self.repo.get_by_city(city)
        return to_dto(location) if location else None

    async def get_by_state(self, state: str) -> Optional[LocationDTO]:
        location = await self.repo.get_by_state(state)
        return to_dto(location) if location else None

    async def get_by_code(self, code: str) -> Optional[LocationDTO]:
        location = await self.repo.get_by_id(code)
        return to_dto(location) if location else None

    async def create(self, location: LocationDTO) -> int:
        """
        Persist a new location.

        Args:
            location: Location payload

        Returns:
            Number of records written (1)

        Raises:
            ValidationError: If the payload breaks a field rule
            PersistenceError: If the write fails (e.g. duplicate IBGE code)
        """
        validate(location, LOCATION_RULES)

        try:
            await self.repo.create_location(
                id=location.id,
                city=location.city,
                state=location.state,
            )
            await self.session.commit()
        except IntegrityError as e:
            await self.session.rollback()
            logger.warning(f"Location {location.id} already exists: {e.orig}")
            raise PersistenceError(f"Location {location.id} already exists", cause=e)
        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.error(f"Failed to save location {location.id}: {e}")
            raise PersistenceError("An error ocurred while saving the record", cause=e)

        logger.info(f"Location {location.id} created ({location.city}/{location.state})")
        return 1

    async def update(self, location: LocationDTO) -> int:
        """
        Overwrite city and state of an existing location.

        The record is looked up by IBGE code before writing; update never
        creates a record.

        Returns:
            Number of records written (1)

        Raises:
            ValidationError: If the payload breaks a field rule
            NotFoundError: If no location has this code
            PersistenceError: If the write fails
        """
        validate(location, LOCATION_RULES)

        existing = await self.repo.get_by_id(location.id)
        if not existing:
            raise NotFoundError(f"Location {location.id} not found")

        try:
            await self.repo.update_location(
                existing,
                city=location.city,
                state=location.state,
            )
            await self.session.commit()
        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.error(f"Failed to update location {location.id}: {e}")
            raise PersistenceError("An error ocurred while saving the record", cause=e)

        logger.info(f"Location {location.id} updated")
        return 1

    async def remove(self, code: str) -> int:
        """
        Delete a location by IBGE code.

        Returns:
            Number of records deleted (1)

        Raises:
            NotFoundError: If no location has this code
            PersistenceError: If the delete fails
        """
        existing = await self.repo.get_by_id(code)
        if not existing:
            raise NotFoundError(f"Location {code} not found")

        try:
            await self.repo.delete(existing)
            await self.session.commit()
        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.error(f"Failed to delete location {code}: {e}")
            raise PersistenceError("An error ocurred while saving the record", cause=e)

        logger.info(f"Location {code} removed")
        return 1
