from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import ActorKind, JustificationStatus
from ..justifications.model import JustificationDocument
from .model import AttendanceRecord


class AttendanceRepository(Protocol):
    """Storage for attendance records.

    Implementations must back ``(actor_id, attendance_date)`` with a unique
    index and make every mutation conditional, so that concurrent scanning
    stations and concurrent reviewers cannot both win.
    """

    def get(self, record_id: int) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def get_for_actor_and_date(self, actor_id: str, attendance_date: date) -> Optional[AttendanceRecord]:
        raise NotImplementedError

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
        """Insert-or-read. Returns ``(record, created)``."""

        raise NotImplementedError

    def set_checkout(self, *, record_id: int, check_out: datetime) -> bool:
        """Set check-out only while it is still unset."""

        raise NotImplementedError

    def apply_submission(
        self,
        *,
        record_id: int,
        expected_status: JustificationStatus,
        justification: str,
        document: Optional[JustificationDocument],
    ) -> bool:
        """Move to PENDING only if the stored status still equals ``expected_status``."""

        raise NotImplementedError

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
        raise NotImplementedError

    def list_for_actor(
        self,
        actor_id: str,
        *,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        limit: int = 100,
    ) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def list_for_actors(
        self,
        actor_ids: Sequence[str],
        *,
        start_date: date,
        end_date: date,
    ) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def list_by_status(self, status: JustificationStatus, *, limit: int = 200) -> Sequence[AttendanceRecord]:
        raise NotImplementedError
