from __future__ import annotations

from dataclasses import replace
from typing import Collection, Optional, Sequence

from ..core.exceptions import ConflictError, StaleRecordError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import (
    db_cursor,
    fetchall,
    fetchone,
    from_db_datetime,
    in_clause,
    is_duplicate_key,
    to_db_datetime,
)
from .model import AttendanceRecord
from .repository import AttendanceStore

_COLUMNS = """
    attendance_id, user_id, session_id, check_in_time, check_out_time,
    is_late, is_excused, notes, latitude, longitude, ip_address, user_agent, version
"""


def _to_record(r: dict) -> AttendanceRecord:
    return AttendanceRecord(
        attendance_id=int(r["attendance_id"]),
        user_id=str(r["user_id"]),
        session_id=str(r["session_id"]),
        check_in_time=from_db_datetime(r["check_in_time"]),
        check_out_time=from_db_datetime(r.get("check_out_time")),
        is_late=bool(r["is_late"]),
        is_excused=bool(r["is_excused"]),
        notes=r.get("notes"),
        latitude=r.get("latitude"),
        longitude=r.get("longitude"),
        ip_address=r.get("ip_address"),
        user_agent=r.get("user_agent"),
        version=int(r["version"]),
    )


class MySQLAttendanceRepository(AttendanceStore):
    """Attendance store backed by the `attendance` table.

    Uniqueness relies on UNIQUE KEY (user_id, session_id); updates use the
    version column for optimistic locking.
    """

    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get(self, user_id: str, session_id: str) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM attendance WHERE user_id=%s AND session_id=%s",
                (user_id, session_id),
            )
            r = fetchone(cur)
            return _to_record(r) if r else None

    def insert(self, record: AttendanceRecord) -> AttendanceRecord:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    INSERT INTO attendance(
                        user_id, session_id, check_in_time, check_out_time, is_late, is_excused,
                        notes, latitude, longitude, ip_address, user_agent, version
                    )
                    VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,0)
                    """,
                    (
                        record.user_id,
                        record.session_id,
                        to_db_datetime(record.check_in_time),
                        to_db_datetime(record.check_out_time),
                        int(record.is_late),
                        int(record.is_excused),
                        record.notes,
                        record.latitude,
                        record.longitude,
                        record.ip_address,
                        record.user_agent,
                    ),
                )
                attendance_id = int(cur.lastrowid)
        except Exception as e:
            if is_duplicate_key(e):
                raise ConflictError("Attendance record already exists") from e
            raise
        return replace(record, attendance_id=attendance_id, version=0)

    def update(self, record: AttendanceRecord) -> AttendanceRecord:
        # Only the mutable columns; is_late and geo metadata are write-once.
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE attendance
                SET check_out_time=%s, is_excused=%s, notes=%s, version=version+1
                WHERE user_id=%s AND session_id=%s AND version=%s
                """,
                (
                    to_db_datetime(record.check_out_time),
                    int(record.is_excused),
                    record.notes,
                    record.user_id,
                    record.session_id,
                    int(record.version),
                ),
            )
            if cur.rowcount == 0:
                raise StaleRecordError("Attendance record was modified concurrently, please retry")
        return replace(record, version=record.version + 1)

    def list_for_session(self, session_id: str) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance
                WHERE session_id=%s
                ORDER BY check_in_time ASC
                """,
                (session_id,),
            )
            return [_to_record(r) for r in fetchall(cur)]

    def list_for_sessions(self, session_ids: Collection[str]) -> Sequence[AttendanceRecord]:
        session_ids = list(session_ids)
        if not session_ids:
            return []
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM attendance WHERE session_id IN ({in_clause(session_ids)})",
                tuple(session_ids),
            )
            return [_to_record(r) for r in fetchall(cur)]

    def list_for_user(
        self,
        user_id: str,
        *,
        session_ids: Optional[Collection[str]] = None,
    ) -> Sequence[AttendanceRecord]:
        clauses = ["user_id=%s"]
        params: list[object] = [user_id]

        if session_ids is not None:
            session_ids = list(session_ids)
            if not session_ids:
                return []
            clauses.append(f"session_id IN ({in_clause(session_ids)})")
            params.extend(session_ids)

        where = " AND ".join(clauses)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance
                WHERE {where}
                ORDER BY check_in_time DESC
                """,
                tuple(params),
            )
            return [_to_record(r) for r in fetchall(cur)]
