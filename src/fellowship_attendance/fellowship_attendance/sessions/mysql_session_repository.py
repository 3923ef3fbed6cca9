from __future__ import annotations

from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, from_db_datetime
from .model import GeoPoint, Session
from .repository import SessionRepository

_COLUMNS = "session_id, cohort_id, title, session_number, scheduled_date, latitude, longitude"


def _to_session(r: dict) -> Session:
    location = None
    if r.get("latitude") is not None and r.get("longitude") is not None:
        location = GeoPoint(latitude=float(r["latitude"]), longitude=float(r["longitude"]))
    return Session(
        session_id=str(r["session_id"]),
        cohort_id=str(r["cohort_id"]),
        title=r["title"],
        session_number=int(r["session_number"]),
        scheduled_date=from_db_datetime(r["scheduled_date"]),
        location=location,
    )


class MySQLSessionRepository(SessionRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, session_id: str) -> Optional[Session]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM sessions WHERE session_id=%s", (session_id,))
            r = fetchone(cur)
            return _to_session(r) if r else None

    def list_for_cohort(self, cohort_id: str) -> Sequence[Session]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM sessions
                WHERE cohort_id=%s
                ORDER BY session_number ASC
                """,
                (cohort_id,),
            )
            return [_to_session(r) for r in fetchall(cur)]
