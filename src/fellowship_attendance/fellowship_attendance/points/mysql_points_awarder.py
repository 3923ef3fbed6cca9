from __future__ import annotations

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor
from .awarder import PointsAwarder
from .model import PointsAwardEvent


class MySQLPointsAwarder(PointsAwarder):
    """Writes a points_log row and bumps the monthly counter in one transaction."""

    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def award(self, event: PointsAwardEvent) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO points_log(user_id, points, event_type, description)
                VALUES(%s,%s,%s,%s)
                """,
                (event.user_id, int(event.amount), event.reason.value, event.description),
            )
            cur.execute(
                "UPDATE users SET current_month_points = current_month_points + %s WHERE user_id=%s",
                (int(event.amount), event.user_id),
            )
