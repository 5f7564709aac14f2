"""
Service layer for subway lines.

``LineService`` sits between the HTTP routes and ``LineRepository``.
It holds no business rule of its own beyond checking the request
against the station registry: both endpoint stations must exist and
must differ.  Storage failures are translated into the domain errors
of ``core.exceptions``:

* a UNIQUE violation on the line name becomes ``DuplicateNameError``;
* an unknown line or station id surfaces as ``NotFoundError``.

Each write runs in ``transaction``: it is committed before the method
returns and rolled back when it raises, so a failed create or update
leaves the store unchanged.  Nothing inside a transaction block awaits
real I/O, so the write lock is never held across a suspension point.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List

from subway_api.app.core.db import transaction
from subway_api.app.core.exceptions import DuplicateNameError, UniquenessError, ValidationError
from subway_api.app.repositories import LineRepository
from subway_api.app.schemas.line import LineRequest, LineResponse
from subway_api.app.services.station_service import StationService

logger = logging.getLogger(__name__)


class LineService:
    """Create, read, update and delete lines."""

    def __init__(self, repository: LineRepository, station_service: StationService) -> None:
        self.repository = repository
        self.station_service = station_service

    async def save_line(self, request: LineRequest) -> LineResponse:
        """Create a line from ``request`` and return it with its stations."""
        with transaction(self.repository.conn):
            await self._check_stations(request)
            try:
                row = self.repository.insert(
                    request.name,
                    request.color,
                    request.up_station_id,
                    request.down_station_id,
                    request.distance,
                )
            except UniquenessError as exc:
                raise DuplicateNameError(str(exc)) from exc
        logger.info("Created line %s (%s)", row["id"], row["name"])
        return self._row_to_line_response(row)

    async def find_all_lines(self) -> List[LineResponse]:
        return [self._row_to_line_response(row) for row in self.repository.find_all()]

    async def find_line_by_id(self, line_id: int) -> LineResponse:
        return self._row_to_line_response(self.repository.find_by_id(line_id))

    async def update_line_by_id(self, line_id: int, request: LineRequest) -> LineResponse:
        """Replace the name, color and endpoints of a line.

        The id never changes.  Raises ``NotFoundError`` for an unknown
        line and ``DuplicateNameError`` when another line already uses
        the new name.
        """
        with transaction(self.repository.conn):
            await self._check_stations(request)
            try:
                row = self.repository.update(
                    line_id,
                    request.name,
                    request.color,
                    request.up_station_id,
                    request.down_station_id,
                    request.distance,
                )
            except UniquenessError as exc:
                raise DuplicateNameError(str(exc)) from exc
        logger.info("Updated line %s", line_id)
        return self._row_to_line_response(row)

    async def delete_line_by_id(self, line_id: int) -> None:
        with transaction(self.repository.conn):
            self.repository.delete(line_id)
        logger.info("Deleted line %s", line_id)

    async def _check_stations(self, request: LineRequest) -> None:
        if request.up_station_id == request.down_station_id:
            raise ValidationError("Upstream and downstream stations must differ")
        # Raises NotFoundError for an unknown station.
        await self.station_service.get_station(request.up_station_id)
        await self.station_service.get_station(request.down_station_id)

    @staticmethod
    def _row_to_line_response(row: Dict[str, Any]) -> LineResponse:
        return LineResponse(
            id=row["id"],
            name=row["name"],
            color=row["color"],
            stations=[StationService._row_to_station_read(station) for station in row["stations"]],
            created_at=row["created_at"],
            updated_at=row["updated_at"],
        )
