from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..actors.model import Actor
from ..common.datetime_utils import isoformat_or_none
from ..core.enums import ActorKind, CoachPresenceState, JustificationStatus, ScanAction
from ..justifications.model import JustificationDocument


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one actor, one calendar day."""

    record_id: int
    actor_id: str
    actor_kind: ActorKind
    attendance_date: date
    is_present: bool
    is_late: bool
    status: JustificationStatus
    scan_time: Optional[datetime] = None
    check_in: Optional[datetime] = None
    check_out: Optional[datetime] = None
    justification: Optional[str] = None
    document: Optional[JustificationDocument] = None
    review_comment: Optional[str] = None
    reviewed_by: Optional[str] = None
    reviewed_at: Optional[datetime] = None

    @property
    def presence_state(self) -> CoachPresenceState:
        if self.check_in is None:
            return CoachPresenceState.NOT_ARRIVED
        if self.check_out is None:
            return CoachPresenceState.CHECKED_IN
        return CoachPresenceState.COMPLETED

    @property
    def worked_seconds(self) -> float:
        if self.check_in is None or self.check_out is None:
            return 0.0
        return (self.check_out - self.check_in).total_seconds()

    def to_dict(self) -> dict:
        data = {
            "id": self.record_id,
            "actorId": self.actor_id,
            "date": self.attendance_date.isoformat(),
            "isPresent": self.is_present,
            "isLate": self.is_late,
            "status": self.status.value,
        }
        if self.actor_kind == ActorKind.COACH:
            data["checkIn"] = isoformat_or_none(self.check_in)
            data["checkOut"] = isoformat_or_none(self.check_out)
        else:
            data["scanTime"] = isoformat_or_none(self.scan_time)
        if self.justification:
            data["justification"] = self.justification
        if self.document:
            data["documentRef"] = self.document.storage_ref
        if self.review_comment:
            data["comment"] = self.review_comment
        return data


@dataclass(frozen=True)
class ScanResult:
    """Outcome of one attendance scan, reported back to the scanning station."""

    actor: Actor
    record: AttendanceRecord
    action: ScanAction
    already_scanned: bool = False

    @property
    def is_late(self) -> bool:
        return self.record.is_late

    @property
    def state(self) -> Optional[CoachPresenceState]:
        if self.actor.kind != ActorKind.COACH:
            return None
        return self.record.presence_state

    def to_dict(self) -> dict:
        data = {
            "actor": self.actor.to_dict(),
            "record": self.record.to_dict(),
            "action": self.action.value,
            "alreadyScanned": self.already_scanned,
            "isLate": self.is_late,
        }
        if self.state is not None:
            data["state"] = self.state.value
        return data
