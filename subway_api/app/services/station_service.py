"""
Service layer for stations.

Stations are registered on their own and referenced by lines.  The line
subsystem only reads them through ``get_station``; a station still used
by a line cannot be deleted.
"""

import logging
from typing import Any, Dict, List

from subway_api.app.core.db import transaction
from subway_api.app.core.exceptions import DuplicateNameError, UniquenessError, ValidationError
from subway_api.app.repositories import StationRepository
from subway_api.app.schemas.station import StationCreate, StationRead

logger = logging.getLogger(__name__)


class StationService:
    """Service for registering and looking up stations."""

    def __init__(self, repository: StationRepository) -> None:
        self.repository = repository

    async def create_station(self, data: StationCreate) -> StationRead:
        with transaction(self.repository.conn):
            try:
                row = self.repository.insert(data.name)
            except UniquenessError as exc:
                raise DuplicateNameError(str(exc)) from exc
        logger.info("Created station %s (%s)", row["id"], row["name"])
        return self._row_to_station_read(row)

    async def list_stations(self) -> List[StationRead]:
        return [self._row_to_station_read(row) for row in self.repository.find_all()]

    async def get_station(self, station_id: int) -> StationRead:
        """Return a station or raise ``NotFoundError``."""
        return self._row_to_station_read(self.repository.find_by_id(station_id))

    async def delete_station(self, station_id: int) -> None:
        with transaction(self.repository.conn):
            self.repository.find_by_id(station_id)
            if self.repository.is_used(station_id):
                raise ValidationError(f"Station {station_id} is used by a line")
            self.repository.delete(station_id)
        logger.info("Deleted station %s", station_id)

    @staticmethod
    def _row_to_station_read(row: Dict[str, Any]) -> StationRead:
        return StationRead(
            id=row["id"],
            name=row["name"],
            created_at=row["created_at"],
            updated_at=row["updated_at"],
        )
