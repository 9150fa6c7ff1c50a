from __future__ import annotations

from typing import Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall
from .model import Location
from .repository import LocationRepository


class MySQLLocationRepository(LocationRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self) -> Sequence[Location]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT location_id, name, latitude, longitude, radius, created_by
                FROM locations
                ORDER BY location_id
                """
            )
            return [
                Location(
                    location_id=int(r["location_id"]),
                    name=r["name"],
                    latitude=float(r["latitude"]),
                    longitude=float(r["longitude"]),
                    radius=float(r["radius"]),
                    created_by=r.get("created_by"),
                )
                for r in fetchall(cur)
            ]
