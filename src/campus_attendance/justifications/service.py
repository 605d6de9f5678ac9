from __future__ import annotations

import logging
from datetime import datetime
from typing import Callable, Optional

from ..actors.model import Identity
from ..attendance.model import AttendanceRecord
from ..attendance.repository import AttendanceRepository
from ..common.datetime_utils import now_utc
from ..common.validators import optional_text, require_non_empty
from ..core.enums import JustificationStatus
from ..core.exceptions import AuthorizationError, InvalidStateError, NotFoundError, ValidationError
from .model import ALLOWED_PRIOR, JustificationDocument, Notification
from .notifier import MESSAGES, LoggingNotifier, Notifier

logger = logging.getLogger(__name__)


class JustificationWorkflow:
    """Absence/lateness justification state machine.

    TO_JUSTIFY|REJECTED --submit--> PENDING --approve--> APPROVED
                                            --reject---> REJECTED

    Every write is conditional on the status read just before it, so two
    concurrent reviewers cannot both succeed.
    """

    def __init__(
        self,
        attendance: AttendanceRepository,
        notifier: Optional[Notifier] = None,
        *,
        clock: Callable[[], datetime] = now_utc,
    ):
        self._attendance = attendance
        self._notifier = notifier or LoggingNotifier()
        self._clock = clock

    def _load(self, record_id: int) -> AttendanceRecord:
        record = self._attendance.get(int(record_id))
        if record is None:
            raise NotFoundError("Attendance record not found")
        return record

    @staticmethod
    def _require_prior(record: AttendanceRecord, target: JustificationStatus) -> None:
        allowed = ALLOWED_PRIOR[target]
        if record.status not in allowed:
            names = " or ".join(s.value for s in allowed)
            raise InvalidStateError(
                f"Cannot move to {target.value} from {record.status.value}; record must be {names}"
            )

    def _notify(self, record: AttendanceRecord) -> None:
        message = MESSAGES[record.status].format(
            day=record.attendance_date.isoformat(),
            comment=record.review_comment or "",
        )
        try:
            self._notifier.notify(
                Notification(actor_id=record.actor_id, record_id=record.record_id, status=record.status, message=message)
            )
        except Exception:
            # The transition is committed; a lost notification must not undo it.
            logger.exception("Notification failed for record %s", record.record_id)

    def check_submittable(self, record_id: int, *, identity: Identity) -> AttendanceRecord:
        """Ownership and prior-status checks, run before any upload is stored."""

        record = self._load(record_id)
        if record.actor_id != identity.actor_id and not identity.is_admin:
            raise AuthorizationError("You can only justify your own attendance")
        self._require_prior(record, JustificationStatus.PENDING)
        return record

    def submit_justification(
        self,
        record_id: int,
        text: str,
        document: Optional[JustificationDocument] = None,
        *,
        identity: Identity,
    ) -> AttendanceRecord:
        text = require_non_empty(text, "Justification")
        record = self.check_submittable(record_id, identity=identity)
        ok = self._attendance.apply_submission(
            record_id=record.record_id,
            expected_status=record.status,
            justification=text,
            document=document,
        )
        if not ok:
            raise InvalidStateError("Record was modified concurrently; reload and retry")

        updated = self._load(record.record_id)
        logger.info("Justification submitted for record %s (%s)", updated.record_id, record.status.value)
        self._notify(updated)
        return updated

    def approve(self, record_id: int, comment: Optional[str] = None, *, identity: Identity) -> AttendanceRecord:
        return self._decide(record_id, JustificationStatus.APPROVED, optional_text(comment), identity=identity)

    def reject(self, record_id: int, reason: str, *, identity: Identity) -> AttendanceRecord:
        reason = require_non_empty(reason, "Rejection reason")
        return self._decide(record_id, JustificationStatus.REJECTED, reason, identity=identity)

    def review(
        self,
        record_id: int,
        status: str | JustificationStatus,
        comment: Optional[str] = None,
        *,
        identity: Identity,
    ) -> AttendanceRecord:
        """Review payload entry point: ``{status: APPROVED|REJECTED, comment?}``."""

        try:
            target = JustificationStatus(str(getattr(status, "value", status) or "").strip().upper())
        except ValueError:
            target = None
        if target == JustificationStatus.APPROVED:
            return self.approve(record_id, comment, identity=identity)
        if target == JustificationStatus.REJECTED:
            return self.reject(record_id, comment or "", identity=identity)
        raise ValidationError("Review status must be APPROVED or REJECTED")

    def _decide(
        self,
        record_id: int,
        target: JustificationStatus,
        comment: Optional[str],
        *,
        identity: Identity,
    ) -> AttendanceRecord:
        if not identity.is_admin:
            raise AuthorizationError("Only administrators review justifications")

        record = self._load(record_id)
        self._require_prior(record, target)
        ok = self._attendance.apply_review(
            record_id=record.record_id,
            expected_status=JustificationStatus.PENDING,
            new_status=target,
            review_comment=comment,
            reviewed_by=identity.actor_id,
            reviewed_at=self._clock(),
        )
        if not ok:
            raise InvalidStateError("Record was reviewed concurrently; reload and retry")

        updated = self._load(record.record_id)
        logger.info("Record %s %s by %s", updated.record_id, target.value.lower(), identity.actor_id)
        self._notify(updated)
        return updated
