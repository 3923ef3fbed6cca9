from __future__ import annotations

from typing import Collection, Optional, Protocol, Sequence

from .model import AttendanceRecord


class AttendanceStore(Protocol):
    """Keyed record store with a uniqueness constraint on (user_id, session_id)."""

    def get(self, user_id: str, session_id: str) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def insert(self, record: AttendanceRecord) -> AttendanceRecord:
        """Atomically create the record unless its key exists.

        Raises ConflictError when a record for (user_id, session_id) already exists.
        Returns the stored record (with attendance_id assigned).
        """

        raise NotImplementedError

    def update(self, record: AttendanceRecord) -> AttendanceRecord:
        """Replace the mutable fields if the stored version equals record.version.

        Raises StaleRecordError otherwise. Returns the record with version bumped.
        """

        raise NotImplementedError

    def list_for_session(self, session_id: str) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def list_for_sessions(self, session_ids: Collection[str]) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def list_for_user(
        self,
        user_id: str,
        *,
        session_ids: Optional[Collection[str]] = None,
    ) -> Sequence[AttendanceRecord]:
        """Records of a user ordered by check_in_time descending."""

        raise NotImplementedError
