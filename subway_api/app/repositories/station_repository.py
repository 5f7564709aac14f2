"""Persistence for stations."""

import sqlite3
from typing import Any, Dict, Iterable, List

from subway_api.app.core.db import is_unique_violation
from subway_api.app.core.exceptions import NotFoundError, UniquenessError


class StationRepository:
    """CRUD queries against the ``stations`` table."""

    def __init__(self, conn: sqlite3.Connection) -> None:
        self.conn = conn

    def insert(self, name: str) -> Dict[str, Any]:
        cursor = self.conn.cursor()
        try:
            cursor.execute("INSERT INTO stations (name) VALUES (?)", (name,))
        except sqlite3.IntegrityError as exc:
            if is_unique_violation(exc):
                raise UniquenessError(f"Station name already exists: {name}") from exc
            raise
        return self.find_by_id(cursor.lastrowid)

    def find_all(self) -> List[Dict[str, Any]]:
        rows = self.conn.execute("SELECT * FROM stations ORDER BY id ASC").fetchall()
        return [dict(row) for row in rows]

    def find_by_id(self, station_id: int) -> Dict[str, Any]:
        row = self.conn.execute(
            "SELECT * FROM stations WHERE id = ?", (station_id,)
        ).fetchone()
        if row is None:
            raise NotFoundError(f"Station {station_id} not found")
        return dict(row)

    def find_by_ids(self, station_ids: Iterable[int]) -> Dict[int, Dict[str, Any]]:
        """Return the requested stations keyed by id; unknown ids are skipped."""
        ids = sorted(set(station_ids))
        if not ids:
            return {}
        placeholders = ", ".join("?" for _ in ids)
        rows = self.conn.execute(
            f"SELECT * FROM stations WHERE id IN ({placeholders})", ids
        ).fetchall()
        return {row["id"]: dict(row) for row in rows}

    def is_used(self, station_id: int) -> bool:
        """Return True when a section of any line references the station."""
        row = self.conn.execute(
            "SELECT 1 FROM sections WHERE up_station_id = ? OR down_station_id = ? LIMIT 1",
            (station_id, station_id),
        ).fetchone()
        return row is not None

    def delete(self, station_id: int) -> None:
        cursor = self.conn.execute("DELETE FROM stations WHERE id = ?", (station_id,))
        if cursor.rowcount == 0:
            raise NotFoundError(f"Station {station_id} not found")
