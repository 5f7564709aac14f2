"""
Persistence for subway lines.

A line row holds the name and color; the stations belong to the line
through ``sections``, each joining an upstream and a downstream station
with a distance.  The stations of a line are therefore not stored in
order: ``order_stations`` rebuilds the order by walking the sections
from the upstream terminal.
"""

import sqlite3
from collections import defaultdict
from typing import Any, Dict, Iterable, List, Tuple

from subway_api.app.core.db import is_unique_violation
from subway_api.app.core.exceptions import NotFoundError, UniquenessError

from .station_repository import StationRepository


def order_stations(sections: Iterable[Tuple[int, int]]) -> List[int]:
    """Return station ids from the upstream terminal to the downstream one.

    ``sections`` are ``(up_station_id, down_station_id)`` pairs in any
    order.  The terminal is the only up station that is never a down
    station.
    """
    next_station: Dict[int, int] = {}
    for up_station_id, down_station_id in sections:
        next_station[up_station_id] = down_station_id
    if not next_station:
        return []

    down_stations = set(next_station.values())
    start = next((up for up in next_station if up not in down_stations), None)
    if start is None:
        raise ValueError("Sections form a loop; no upstream terminal")

    ordered = [start]
    while ordered[-1] in next_station and len(ordered) <= len(next_station):
        ordered.append(next_station[ordered[-1]])
    return ordered


class LineRepository:
    """CRUD queries against ``lines`` and their ``sections``."""

    def __init__(self, conn: sqlite3.Connection) -> None:
        self.conn = conn
        self.stations = StationRepository(conn)

    def insert(
        self,
        name: str,
        color: str,
        up_station_id: int,
        down_station_id: int,
        distance: int,
    ) -> Dict[str, Any]:
        """Insert a line with its first section and return the stored record.

        Raises ``UniquenessError`` when ``name`` is already taken.
        """
        cursor = self.conn.cursor()
        try:
            cursor.execute("INSERT INTO lines (name, color) VALUES (?, ?)", (name, color))
        except sqlite3.IntegrityError as exc:
            if is_unique_violation(exc):
                raise UniquenessError(f"Line name already exists: {name}") from exc
            raise
        line_id = cursor.lastrowid
        self._insert_section(line_id, up_station_id, down_station_id, distance)
        return self.find_by_id(line_id)

    def find_all(self) -> List[Dict[str, Any]]:
        rows = self.conn.execute("SELECT * FROM lines ORDER BY id ASC").fetchall()
        stations = self._stations_by_line([row["id"] for row in rows])
        return [dict(row, stations=stations.get(row["id"], [])) for row in rows]

    def find_by_id(self, line_id: int) -> Dict[str, Any]:
        row = self.conn.execute("SELECT * FROM lines WHERE id = ?", (line_id,)).fetchone()
        if row is None:
            raise NotFoundError(f"Line {line_id} not found")
        stations = self._stations_by_line([line_id])
        return dict(row, stations=stations.get(line_id, []))

    def update(
        self,
        line_id: int,
        name: str,
        color: str,
        up_station_id: int,
        down_station_id: int,
        distance: int,
    ) -> Dict[str, Any]:
        """Replace name, color and endpoints of an existing line."""
        cursor = self.conn.cursor()
        try:
            cursor.execute(
                """
                UPDATE lines
                SET name = ?, color = ?, updated_at = CURRENT_TIMESTAMP
                WHERE id = ?
                """,
                (name, color, line_id),
            )
        except sqlite3.IntegrityError as exc:
            if is_unique_violation(exc):
                raise UniquenessError(f"Line name already exists: {name}") from exc
            raise
        if cursor.rowcount == 0:
            raise NotFoundError(f"Line {line_id} not found")
        cursor.execute("DELETE FROM sections WHERE line_id = ?", (line_id,))
        self._insert_section(line_id, up_station_id, down_station_id, distance)
        return self.find_by_id(line_id)

    def delete(self, line_id: int) -> None:
        # sections go with the line (ON DELETE CASCADE)
        cursor = self.conn.execute("DELETE FROM lines WHERE id = ?", (line_id,))
        if cursor.rowcount == 0:
            raise NotFoundError(f"Line {line_id} not found")

    def _insert_section(
        self,
        line_id: int,
        up_station_id: int,
        down_station_id: int,
        distance: int,
    ) -> None:
        try:
            self.conn.execute(
                """
                INSERT INTO sections (line_id, up_station_id, down_station_id, distance)
                VALUES (?, ?, ?, ?)
                """,
                (line_id, up_station_id, down_station_id, distance),
            )
        except sqlite3.IntegrityError as exc:
            # A station was removed after the service looked it up.
            raise NotFoundError(
                f"Station {up_station_id} or {down_station_id} not found"
            ) from exc

    def _stations_by_line(self, line_ids: List[int]) -> Dict[int, List[Dict[str, Any]]]:
        if not line_ids:
            return {}
        placeholders = ", ".join("?" for _ in line_ids)
        rows = self.conn.execute(
            f"""
            SELECT line_id, up_station_id, down_station_id
            FROM sections
            WHERE line_id IN ({placeholders})
            ORDER BY id ASC
            """,
            line_ids,
        ).fetchall()

        sections: Dict[int, List[Tuple[int, int]]] = defaultdict(list)
        station_ids = set()
        for row in rows:
            sections[row["line_id"]].append((row["up_station_id"], row["down_station_id"]))
            station_ids.update((row["up_station_id"], row["down_station_id"]))
        stations = self.stations.find_by_ids(station_ids)

        return {
            line_id: [stations[station_id] for station_id in order_stations(pairs)]
            for line_id, pairs in sections.items()
        }
