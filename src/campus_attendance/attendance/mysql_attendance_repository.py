from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Sequence

import mysql.connector

from ..common.datetime_utils import from_utc_naive, to_utc_naive
from ..core.enums import ActorKind, JustificationStatus
from ..core.exceptions import NotFoundError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, in_clause, is_duplicate_key
from ..justifications.model import JustificationDocument
from .model import AttendanceRecord
from .repository import AttendanceRepository

_COLUMNS = """
    record_id, actor_id, actor_kind, attendance_date, is_present, is_late,
    scan_time, check_in, check_out, status, justification,
    document_mime, document_size, document_ref,
    review_comment, reviewed_by, reviewed_at
"""


def _row_to_record(r: dict) -> AttendanceRecord:
    document = None
    if r.get("document_ref"):
        document = JustificationDocument(
            mime_type=r["document_mime"],
            size_bytes=int(r["document_size"] or 0),
            storage_ref=r["document_ref"],
        )
    return AttendanceRecord(
        record_id=int(r["record_id"]),
        actor_id=str(r["actor_id"]),
        actor_kind=ActorKind(r["actor_kind"]),
        attendance_date=r["attendance_date"],
        is_present=bool(r["is_present"]),
        is_late=bool(r["is_late"]),
        status=JustificationStatus(r["status"]),
        scan_time=from_utc_naive(r.get("scan_time")),
        check_in=from_utc_naive(r.get("check_in")),
        check_out=from_utc_naive(r.get("check_out")),
        justification=r.get("justification"),
        document=document,
        review_comment=r.get("review_comment"),
        reviewed_by=r.get("reviewed_by"),
        reviewed_at=from_utc_naive(r.get("reviewed_at")),
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get(self, record_id: int) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM attendance_records WHERE record_id=%s", (int(record_id),))
            r = fetchone(cur)
            return _row_to_record(r) if r else None

    def get_for_actor_and_date(self, actor_id: str, attendance_date: date) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM attendance_records WHERE actor_id=%s AND attendance_date=%s",
                (actor_id, attendance_date),
            )
            r = fetchone(cur)
            return _row_to_record(r) if r else None

    def insert_if_absent(
        self,
        *,
        actor_id: str,
        actor_kind: ActorKind,
        attendance_date: date,
        is_present: bool,
        is_late: bool,
        status: JustificationStatus,
        scan_time: Optional[datetime] = None,
        check_in: Optional[datetime] = None,
    ) -> tuple[AttendanceRecord, bool]:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    INSERT INTO attendance_records(
                        actor_id, actor_kind, attendance_date, is_present, is_late, status, scan_time, check_in
                    )
                    VALUES(%s,%s,%s,%s,%s,%s,%s,%s)
                    """,
                    (
                        actor_id,
                        actor_kind.value,
                        attendance_date,
                        int(is_present),
                        int(is_late),
                        status.value,
                        to_utc_naive(scan_time),
                        to_utc_naive(check_in),
                    ),
                )
                record_id = int(cur.lastrowid)
        except mysql.connector.IntegrityError as exc:
            if not is_duplicate_key(exc):
                raise
            existing = self.get_for_actor_and_date(actor_id, attendance_date)
            if existing is None:
                raise
            return existing, False

        created = self.get(record_id)
        if created is None:
            raise NotFoundError("Attendance record disappeared after insert")
        return created, True

    def set_checkout(self, *, record_id: int, check_out: datetime) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE attendance_records
                SET check_out=%s
                WHERE record_id=%s AND check_in IS NOT NULL AND check_out IS NULL AND check_in <= %s
                """,
                (to_utc_naive(check_out), int(record_id), to_utc_naive(check_out)),
            )
            return cur.rowcount > 0

    def apply_submission(
        self,
        *,
        record_id: int,
        expected_status: JustificationStatus,
        justification: str,
        document: Optional[JustificationDocument],
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE attendance_records
                SET status=%s, justification=%s,
                    document_mime=%s, document_size=%s, document_ref=%s,
                    review_comment=NULL, reviewed_by=NULL, reviewed_at=NULL
                WHERE record_id=%s AND status=%s
                """,
                (
                    JustificationStatus.PENDING.value,
                    justification,
                    document.mime_type if document else None,
                    document.size_bytes if document else None,
                    document.storage_ref if document else None,
                    int(record_id),
                    expected_status.value,
                ),
            )
            return cur.rowcount > 0

    def apply_review(
        self,
        *,
        record_id: int,
        expected_status: JustificationStatus,
        new_status: JustificationStatus,
        review_comment: Optional[str],
        reviewed_by: str,
        reviewed_at: datetime,
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE attendance_records
                SET status=%s, review_comment=%s, reviewed_by=%s, reviewed_at=%s
                WHERE record_id=%s AND status=%s
                """,
                (
                    new_status.value,
                    review_comment,
                    reviewed_by,
                    to_utc_naive(reviewed_at),
                    int(record_id),
                    expected_status.value,
                ),
            )
            return cur.rowcount > 0

    def list_for_actor(
        self,
        actor_id: str,
        *,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        limit: int = 100,
    ) -> Sequence[AttendanceRecord]:
        clauses = ["actor_id=%s"]
        params: list[object] = [actor_id]
        if start_date is not None:
            clauses.append("attendance_date >= %s")
            params.append(start_date)
        if end_date is not None:
            clauses.append("attendance_date <= %s")
            params.append(end_date)
        params.append(int(limit))

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance_records
                WHERE {" AND ".join(clauses)}
                ORDER BY attendance_date DESC
                LIMIT %s
                """,
                tuple(params),
            )
            return [_row_to_record(r) for r in fetchall(cur)]

    def list_for_actors(
        self,
        actor_ids: Sequence[str],
        *,
        start_date: date,
        end_date: date,
    ) -> Sequence[AttendanceRecord]:
        if not actor_ids:
            return []
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance_records
                WHERE actor_id IN ({in_clause(actor_ids)}) AND attendance_date BETWEEN %s AND %s
                ORDER BY attendance_date DESC, actor_id ASC
                """,
                (*actor_ids, start_date, end_date),
            )
            return [_row_to_record(r) for r in fetchall(cur)]

    def list_by_status(self, status: JustificationStatus, *, limit: int = 200) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance_records
                WHERE status=%s
                ORDER BY attendance_date ASC, record_id ASC
                LIMIT %s
                """,
                (status.value, int(limit)),
            )
            return [_row_to_record(r) for r in fetchall(cur)]
