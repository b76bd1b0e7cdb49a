"""
Locations router for IBGE municipality records.

Every route requires a bearer token.
"""

import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Request, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from ibge_api.database.connection import get_db
from ibge_api.middleware.auth import get_current_user
from ibge_api.models.location_models import LocationDTO
from ibge_api.services.location_service import LocationService

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/v1",
    tags=["Location"],
    dependencies=[Depends(get_current_user)],
    responses={401: {"description": "Missing or invalid bearer token"}},
)

SAVE_ERROR = "An error ocurred while saving the record"


def get_location_service(db: AsyncSession = Depends(get_db)) -> LocationService:
    return LocationService(db)


def _not_found(detail: str) -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=detail)


@router.get("/locations", response_model=List[LocationDTO], name="get_locations")
async def list_locations(
    service: LocationService = Depends(get_location_service),
) -> List[LocationDTO]:
    """List every location ordered by IBGE code."""
    return await service.list()


@router.get(
    "/locations/city/{city}",
    response_model=LocationDTO,
    name="get_location_by_city",
    responses={404: {"description": "No location in this city"}},
)
async def get_location_by_city(
    city: str,
    service: LocationService = Depends(get_location_service),
) -> LocationDTO:
    """
    Get a location by city name.

    Matching is case-insensitive; when several states share the city name
    the lowest IBGE code is returned.
    """
    location = await service.get_by_city(city)
    if not location:
        raise _not_found(f"No location found for city {city}")
    return location


@router.get(
    "/locations/state/{state}",
    response_model=LocationDTO,
    name="get_location_by_state",
    responses={404: {"description": "No location in this state"}},
)
async def get_location_by_state(
    state: str,
    service: LocationService = Depends(get_location_service),
) -> LocationDTO:
    """Get the location with the lowest IBGE code in a state."""
    location = await service.get_by_state(state)
    if not location:
        raise _not_found(f"No location found for state {state}")
    return location


@router.get(
    "/locations/ibge/{ibge}",
    response_model=LocationDTO,
    name="get_location_by_ibge",
    responses={404: {"description": "Unknown IBGE code"}},
)
async def get_location_by_ibge(
    ibge: str,
    service: LocationService = Depends(get_location_service),
) -> LocationDTO:
    """Get a location by IBGE code."""
    location = await service.get_by_code(ibge)
    if not location:
        raise _not_found(f"Location {ibge} not found")
    return location


@router.post(
    "/location",
    response_model=LocationDTO,
    status_code=status.HTTP_201_CREATED,
    name="post_location",
    responses={400: {"description": "Invalid payload or save error"}},
)
async def create_location(
    location: LocationDTO,
    request: Request,
    response: Response,
    service: LocationService = Depends(get_location_service),
) -> LocationDTO:
    """
    Create a location.

    The Location header points to the GET-by-ibge route of the new record.
    """
    result = await service.create(location)

    if result <= 0:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=SAVE_ERROR)

    response.headers["Location"] = str(
        request.url_for("get_location_by_ibge", ibge=location.id)
    )
    return location


@router.put(
    "/location",
    status_code=status.HTTP_204_NO_CONTENT,
    name="put_location",
    responses={
        400: {"description": "Invalid payload or save error"},
        404: {"description": "Unknown IBGE code"},
    },
)
async def update_location(
    location: LocationDTO,
    service: LocationService = Depends(get_location_service),
) -> None:
    """Overwrite city and state of the location with the given IBGE code."""
    result = await service.update(location)

    if result <= 0:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=SAVE_ERROR)


@router.delete(
    "/location/{ibge}",
    status_code=status.HTTP_204_NO_CONTENT,
    name="delete_location",
    responses={
        400: {"description": "Delete failed"},
        404: {"description": "Unknown IBGE code"},
    },
)
async def delete_location(
    ibge: str,
    service: LocationService = Depends(get_location_service),
) -> None:
    """Delete the location with the given IBGE code."""
    result = await service.remove(ibge)

    if result <= 0:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=SAVE_ERROR)
