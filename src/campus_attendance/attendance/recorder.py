from __future__ import annotations

import logging
from datetime import date, datetime

from ..actors.model import Actor
from ..core.enums import ActorKind, JustificationStatus, ScanAction
from ..core.exceptions import ValidationError
from .model import AttendanceRecord, ScanResult
from .policy import LateCutoffPolicy
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


class AttendanceRecorder:
    """Learner attendance: a single presence mark per day, first scan wins."""

    def __init__(self, attendance: AttendanceRepository, policy: LateCutoffPolicy):
        self._attendance = attendance
        self._policy = policy

    def record_scan(self, learner: Actor, timestamp: datetime) -> ScanResult:
        if learner.kind != ActorKind.LEARNER:
            raise ValidationError("Presence marks are recorded for learners only")

        timestamp = self._policy.localize(learner, timestamp)
        decision = self._policy.decide_arrival(learner, timestamp)
        record, created = self._attendance.insert_if_absent(
            actor_id=learner.actor_id,
            actor_kind=ActorKind.LEARNER,
            attendance_date=decision.attendance_date,
            is_present=True,
            is_late=decision.is_late,
            status=decision.status,
            scan_time=timestamp,
        )

        if not created:
            logger.info("Learner %s already scanned on %s", learner.matricule, record.attendance_date)
            return ScanResult(actor=learner, record=record, action=ScanAction.NONE, already_scanned=True)

        logger.info(
            "Learner %s marked present on %s (late=%s)",
            learner.matricule,
            record.attendance_date,
            record.is_late,
        )
        return ScanResult(actor=learner, record=record, action=ScanAction.CHECKIN)

    def record_absence(self, actor: Actor, attendance_date: date) -> tuple[AttendanceRecord, bool]:
        """Absence mark for the end-of-day sweep. Existing records are left untouched."""

        record, created = self._attendance.insert_if_absent(
            actor_id=actor.actor_id,
            actor_kind=actor.kind,
            attendance_date=attendance_date,
            is_present=False,
            is_late=False,
            status=JustificationStatus.TO_JUSTIFY,
        )
        if created:
            logger.info("%s %s marked absent on %s", actor.kind.value.title(), actor.matricule, attendance_date)
        return record, created
