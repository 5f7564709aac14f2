"""
FastAPI dependencies building request‑scoped services.

Each request gets its own connection from ``get_db``; the services
created here share it, so everything a route does happens in one
transaction.
"""

import sqlite3

from fastapi import Depends

from subway_api.app.core.db import get_db
from subway_api.app.repositories import LineRepository, StationRepository
from subway_api.app.services.line_service import LineService
from subway_api.app.services.station_service import StationService


def get_station_service(conn: sqlite3.Connection = Depends(get_db)) -> StationService:
    return StationService(StationRepository(conn))


def get_line_service(
    conn: sqlite3.Connection = Depends(get_db),
    station_service: StationService = Depends(get_station_service),
) -> LineService:
    return LineService(LineRepository(conn), station_service)
