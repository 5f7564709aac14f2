"""
Station endpoints for API v1.

Stations must be registered before a line can reference them.
"""

from typing import List

from fastapi import APIRouter, Depends, Request, Response, status

from subway_api.app.api.deps import get_station_service
from subway_api.app.schemas.station import StationCreate, StationRead
from subway_api.app.services.station_service import StationService

router = APIRouter()


@router.post("", response_model=StationRead, status_code=status.HTTP_201_CREATED)
async def create_station(
    station_in: StationCreate,
    request: Request,
    response: Response,
    service: StationService = Depends(get_station_service),
) -> StationRead:
    station = await service.create_station(station_in)
    response.headers["Location"] = f"{request.url.path.rstrip('/')}/{station.id}"
    return station


@router.get("", response_model=List[StationRead])
async def list_stations(service: StationService = Depends(get_station_service)) -> List[StationRead]:
    return await service.list_stations()


@router.get("/{station_id}", response_model=StationRead)
async def get_station(
    station_id: int,
    service: StationService = Depends(get_station_service),
) -> StationRead:
    return await service.get_station(station_id)


@router.delete("/{station_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_station(
    station_id: int,
    service: StationService = Depends(get_station_service),
) -> Response:
    """Delete a station.  Stations still used by a line are refused with 400."""
    await service.delete_station(station_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
