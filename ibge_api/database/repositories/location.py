"""
Location repository for IBGE municipality lookups.
"""
from typing import Optional

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from ibge_api.database.models.location import Location
from ibge_api.database.repositories.base import BaseRepository


class LocationRepository(BaseRepository[Location]):
    """Repository for Location model with city/state lookups."""

    def __init__(self, session: AsyncSession):
        """Initialize repository with session."""
        super().__init__(session, Location)

    async def get_by_city(self, city: str) -> Optional[Location]:
        """
        Get the first location whose city matches (case-insensitive).

        City names repeat across states, so ties resolve to the lowest
        IBGE code.

        Args:
            city: City name

        Returns:
            Location instance or None if not found
        """
        result = await self.session.execute(
            select(Location)
            .where(func.lower(Location.city) == city.lower())
            .order_by(Location.id)
            .limit(1)
        )
        return result.scalars().first()

    async def get_by_state(self, state: str) -> Optional[Location]:
        """
        Get the first location in a state (case-insensitive UF match).

        Ties resolve to the lowest IBGE code.

        Args:
            state: Two-letter state code

        Returns:
            Location instance or None if not found
        """
        result = await self.session.execute(
            select(Location)
            .where(func.lower(Location.state) == state.lower())
            .order_by(Location.id)
            .limit(1)
        )
        return result.scalars().first()

    async def create_location(self, id: str, city: str, state: str) -> Location:
        """Create a new location."""
        return await self.create(Location(id=id, city=city, state=state))

    async def update_location(self, location: Location, city: str, state: str) -> Location:
        """Overwrite city and state of an existing location. The code is kept."""
        location.city = city
        location.state = state
        return await self.update(location)
