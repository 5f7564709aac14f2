"""Tests for the repository layer."""

import pytest

from subway_api.app.core.exceptions import NotFoundError, UniquenessError
from subway_api.app.repositories import LineRepository, StationRepository, order_stations


class TestOrderStations:
    def test_single_section(self):
        assert order_stations([(1, 2)]) == [1, 2]

    def test_sections_out_of_order(self):
        assert order_stations([(3, 4), (1, 2), (2, 3)]) == [1, 2, 3, 4]

    def test_no_sections(self):
        assert order_stations([]) == []

    def test_loop(self):
        with pytest.raises(ValueError):
            order_stations([(1, 2), (2, 1)])


@pytest.fixture
def stations(conn):
    repo = StationRepository(conn)
    return [repo.insert(name)["id"] for name in ("모란역", "복정역", "강남역", "광교역")]


class TestStationRepository:
    def test_insert_and_find(self, conn):
        repo = StationRepository(conn)

        station = repo.insert("강남역")

        assert repo.find_by_id(station["id"])["name"] == "강남역"

    def test_duplicate_name(self, conn):
        repo = StationRepository(conn)
        repo.insert("강남역")

        with pytest.raises(UniquenessError):
            repo.insert("강남역")

    def test_find_by_ids_skips_unknown(self, conn, stations):
        found = StationRepository(conn).find_by_ids([stations[0], 999])

        assert list(found) == [stations[0]]

    def test_is_used(self, conn, stations):
        LineRepository(conn).insert("분당선", "yellow", stations[0], stations[1], 10)
        repo = StationRepository(conn)

        assert repo.is_used(stations[0])
        assert not repo.is_used(stations[2])


class TestLineRepository:
    def test_insert(self, conn, stations):
        line = LineRepository(conn).insert("분당선", "yellow", stations[0], stations[1], 10)

        assert line["id"] is not None
        assert line["name"] == "분당선"
        assert [station["id"] for station in line["stations"]] == stations[:2]

    def test_duplicate_name_leaves_store_unchanged(self, conn, stations):
        repo = LineRepository(conn)
        repo.insert("분당선", "yellow", stations[0], stations[1], 10)

        with pytest.raises(UniquenessError):
            repo.insert("분당선", "red", stations[2], stations[3], 20)
        assert len(repo.find_all()) == 1

    def test_find_all_in_id_order(self, conn, stations):
        repo = LineRepository(conn)
        first = repo.insert("분당선", "yellow", stations[0], stations[1], 10)
        second = repo.insert("신분당선", "red", stations[2], stations[3], 20)

        assert [line["id"] for line in repo.find_all()] == [first["id"], second["id"]]

    def test_stations_follow_sections(self, conn, stations):
        repo = LineRepository(conn)
        line = repo.insert("분당선", "yellow", stations[1], stations[2], 10)
        # extend the line at both ends, inserted out of order
        conn.execute(
            "INSERT INTO sections (line_id, up_station_id, down_station_id, distance) VALUES (?, ?, ?, ?)",
            (line["id"], stations[2], stations[3], 5),
        )
        conn.execute(
            "INSERT INTO sections (line_id, up_station_id, down_station_id, distance) VALUES (?, ?, ?, ?)",
            (line["id"], stations[0], stations[1], 5),
        )

        found = repo.find_by_id(line["id"])

        assert [station["id"] for station in found["stations"]] == stations

    def test_update_replaces_endpoints(self, conn, stations):
        repo = LineRepository(conn)
        line = repo.insert("분당선", "yellow", stations[0], stations[1], 10)

        updated = repo.update(line["id"], "신분당선", "red", stations[2], stations[3], 20)

        assert updated["id"] == line["id"]
        assert updated["name"] == "신분당선"
        assert [station["id"] for station in updated["stations"]] == stations[2:]

    def test_update_missing(self, conn, stations):
        with pytest.raises(NotFoundError):
            LineRepository(conn).update(999, "분당선", "yellow", stations[0], stations[1], 10)

    def test_delete_removes_sections(self, conn, stations):
        repo = LineRepository(conn)
        line = repo.insert("분당선", "yellow", stations[0], stations[1], 10)

        repo.delete(line["id"])

        with pytest.raises(NotFoundError):
            repo.find_by_id(line["id"])
        assert conn.execute("SELECT COUNT(*) FROM sections").fetchone()[0] == 0

    def test_delete_missing(self, conn):
        with pytest.raises(NotFoundError):
            LineRepository(conn).delete(999)

    def test_ids_are_not_reused(self, conn, stations):
        repo = LineRepository(conn)
        line = repo.insert("분당선", "yellow", stations[0], stations[1], 10)
        repo.delete(line["id"])

        again = repo.insert("분당선", "yellow", stations[0], stations[1], 10)

        assert again["id"] > line["id"]
