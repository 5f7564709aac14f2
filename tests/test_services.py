"""Tests for the service layer's error translation."""

import pytest

from subway_api.app.core.exceptions import DuplicateNameError, NotFoundError, ValidationError
from subway_api.app.repositories import LineRepository, StationRepository
from subway_api.app.schemas.line import LineRequest
from subway_api.app.schemas.station import StationCreate
from subway_api.app.services.line_service import LineService
from subway_api.app.services.station_service import StationService


@pytest.fixture
def station_service(conn):
    return StationService(StationRepository(conn))


@pytest.fixture
def line_service(conn, station_service):
    return LineService(LineRepository(conn), station_service)


@pytest.fixture
async def stations(station_service):
    return [
        (await station_service.create_station(StationCreate(name=name))).id
        for name in ("모란역", "복정역", "강남역")
    ]


def request(name, up_station_id, down_station_id, color="yellow", distance=10):
    return LineRequest(
        name=name,
        color=color,
        up_station_id=up_station_id,
        down_station_id=down_station_id,
        distance=distance,
    )


@pytest.mark.asyncio
async def test_save_line(line_service, stations):
    line = await line_service.save_line(request("분당선", stations[0], stations[1]))

    assert line.name == "분당선"
    assert [station.name for station in line.stations] == ["모란역", "복정역"]


@pytest.mark.asyncio
async def test_duplicate_line_name(line_service, stations):
    await line_service.save_line(request("분당선", stations[0], stations[1]))

    with pytest.raises(DuplicateNameError):
        await line_service.save_line(request("분당선", stations[1], stations[2]))
    assert len(await line_service.find_all_lines()) == 1


@pytest.mark.asyncio
async def test_unknown_station(line_service, stations):
    with pytest.raises(NotFoundError):
        await line_service.save_line(request("분당선", stations[0], 999))
    assert await line_service.find_all_lines() == []


@pytest.mark.asyncio
async def test_same_endpoints(line_service, stations):
    with pytest.raises(ValidationError):
        await line_service.save_line(request("분당선", stations[0], stations[0]))


@pytest.mark.asyncio
async def test_update_to_taken_name(line_service, stations):
    bundang = await line_service.save_line(request("분당선", stations[0], stations[1]))
    await line_service.save_line(request("신분당선", stations[1], stations[2], color="red"))

    with pytest.raises(DuplicateNameError):
        await line_service.update_line_by_id(bundang.id, request("신분당선", stations[0], stations[1]))


@pytest.mark.asyncio
async def test_missing_line(line_service):
    with pytest.raises(NotFoundError):
        await line_service.find_line_by_id(1)
    with pytest.raises(NotFoundError):
        await line_service.delete_line_by_id(1)


@pytest.mark.asyncio
async def test_duplicate_station_name(station_service, stations):
    with pytest.raises(DuplicateNameError):
        await station_service.create_station(StationCreate(name="모란역"))


@pytest.mark.asyncio
async def test_delete_station_in_use(line_service, station_service, stations):
    await line_service.save_line(request("분당선", stations[0], stations[1]))

    with pytest.raises(ValidationError):
        await station_service.delete_station(stations[0])
