from __future__ import annotations

import logging
from datetime import datetime, timedelta

from ..actors.model import Actor
from ..core.enums import ActorKind, CoachPresenceState, ScanAction
from ..core.exceptions import NotFoundError, ValidationError
from .model import AttendanceRecord, ScanResult
from .policy import LateCutoffPolicy
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


class CheckInOutRecorder:
    """Coach attendance as a toggle: NOT_ARRIVED -> CHECKED_IN -> COMPLETED.

    A second read closer than ``min_gap`` to the check-in is taken as the
    camera reading the same physical scan twice and is ignored.
    """

    def __init__(
        self,
        attendance: AttendanceRepository,
        policy: LateCutoffPolicy,
        *,
        min_gap: timedelta = timedelta(seconds=60),
    ):
        self._attendance = attendance
        self._policy = policy
        self._min_gap = min_gap

    def current_state(self, coach: Actor, timestamp: datetime) -> CoachPresenceState:
        record = self._attendance.get_for_actor_and_date(coach.actor_id, self._policy.day_for(coach, timestamp))
        return record.presence_state if record else CoachPresenceState.NOT_ARRIVED

    def record_scan(self, coach: Actor, timestamp: datetime) -> ScanResult:
        if coach.kind != ActorKind.COACH:
            raise ValidationError("Check-in/check-out is recorded for coaches only")

        timestamp = self._policy.localize(coach, timestamp)
        day = self._policy.day_for(coach, timestamp)
        record = self._attendance.get_for_actor_and_date(coach.actor_id, day)

        if record is None:
            return self._check_in(coach, timestamp)

        if record.presence_state == CoachPresenceState.CHECKED_IN:
            return self._check_out(coach, record, timestamp)

        if record.presence_state == CoachPresenceState.COMPLETED:
            logger.info("Coach %s already completed %s", coach.matricule, day)
        else:
            # The end-of-day sweep already marked this day absent.
            logger.info("Coach %s is marked absent on %s, scan ignored", coach.matricule, day)
        return ScanResult(actor=coach, record=record, action=ScanAction.NONE, already_scanned=True)

    def _check_in(self, coach: Actor, timestamp: datetime) -> ScanResult:
        decision = self._policy.decide_arrival(coach, timestamp)
        record, created = self._attendance.insert_if_absent(
            actor_id=coach.actor_id,
            actor_kind=ActorKind.COACH,
            attendance_date=decision.attendance_date,
            is_present=True,
            is_late=decision.is_late,
            status=decision.status,
            check_in=timestamp,
        )
        if not created:
            # Another station inserted first; this read is the same arrival.
            logger.debug("Coach %s check-in raced, keeping stored record", coach.matricule)
            return ScanResult(actor=coach, record=record, action=ScanAction.NONE, already_scanned=True)

        logger.info("Coach %s checked in on %s (late=%s)", coach.matricule, record.attendance_date, record.is_late)
        return ScanResult(actor=coach, record=record, action=ScanAction.CHECKIN)

    def _check_out(self, coach: Actor, record: AttendanceRecord, timestamp: datetime) -> ScanResult:
        if record.check_in is None:
            raise NotFoundError("Attendance record has no check-in to close")
        if timestamp - record.check_in < self._min_gap:
            logger.debug("Coach %s repeat read ignored (%s after check-in)", coach.matricule, timestamp - record.check_in)
            return ScanResult(actor=coach, record=record, action=ScanAction.NONE, already_scanned=True)

        if not self._attendance.set_checkout(record_id=record.record_id, check_out=timestamp):
            current = self._attendance.get(record.record_id)
            if current is None:
                raise NotFoundError("Attendance record disappeared during check-out")
            return ScanResult(actor=coach, record=current, action=ScanAction.NONE, already_scanned=True)

        updated = self._attendance.get(record.record_id)
        if updated is None:
            raise NotFoundError("Attendance record disappeared during check-out")
        logger.info("Coach %s checked out on %s", coach.matricule, updated.attendance_date)
        return ScanResult(actor=coach, record=updated, action=ScanAction.CHECKOUT)
