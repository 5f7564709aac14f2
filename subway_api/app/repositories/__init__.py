"""
Repository layer.

Repositories own the SQL.  Each one wraps a connection handed to it by
the caller and never commits: the services own the transaction
(see ``core.db.transaction``).  Rows are returned as plain dictionaries.
"""

from .line_repository import LineRepository, order_stations
from .station_repository import StationRepository

__all__ = ["LineRepository", "StationRepository", "order_stations"]
