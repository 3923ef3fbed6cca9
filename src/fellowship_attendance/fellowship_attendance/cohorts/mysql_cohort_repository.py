from __future__ import annotations

from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Cohort, Fellow
from .repository import CohortRosterProvider


def _to_fellow(r: dict) -> Fellow:
    return Fellow(
        user_id=str(r["user_id"]),
        first_name=r["first_name"],
        last_name=r["last_name"],
        email=r["email"],
    )


class MySQLCohortRosterProvider(CohortRosterProvider):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_cohort(self, cohort_id: str) -> Optional[Cohort]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT cohort_id, name FROM cohorts WHERE cohort_id=%s", (cohort_id,))
            r = fetchone(cur)
            if not r:
                return None
            return Cohort(cohort_id=str(r["cohort_id"]), name=r["name"])

    def list_fellows(self, cohort_id: str) -> Sequence[Fellow]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT u.user_id, u.first_name, u.last_name, u.email
                FROM cohort_fellows cf
                JOIN users u ON u.user_id = cf.user_id
                WHERE cf.cohort_id=%s
                ORDER BY u.last_name ASC, u.first_name ASC
                """,
                (cohort_id,),
            )
            return [_to_fellow(r) for r in fetchall(cur)]

    def is_member(self, cohort_id: str, user_id: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT 1 AS ok FROM cohort_fellows WHERE cohort_id=%s AND user_id=%s",
                (cohort_id, user_id),
            )
            return fetchone(cur) is not None

    def get_fellow(self, user_id: str) -> Optional[Fellow]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT user_id, first_name, last_name, email FROM users WHERE user_id=%s",
                (user_id,),
            )
            r = fetchone(cur)
            return _to_fellow(r) if r else None
