from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional

from ..actors.model import Actor
from ..actors.repository import ActorDirectory
from ..attendance.checkinout import CheckInOutRecorder
from ..attendance.model import ScanResult
from ..attendance.recorder import AttendanceRecorder
from ..common.datetime_utils import now_utc
from ..core.enums import ActorKind
from ..core.exceptions import InactiveActorError, NotFoundError
from .payload import ScanPayload, extract_code

logger = logging.getLogger(__name__)


class ScanIngestor:
    """Entry point for attendance scans: resolve the code, then dispatch by actor kind.

    Never writes records itself; unknown or inactive actors are rejected before
    any recorder is reached.
    """

    def __init__(
        self,
        actors: ActorDirectory,
        learners: AttendanceRecorder,
        coaches: CheckInOutRecorder,
    ):
        self._actors = actors
        self._learners = learners
        self._coaches = coaches

    def resolve(self, payload: ScanPayload) -> Actor:
        code = extract_code(payload)
        actor = self._actors.find_by_code(code)
        if actor is None:
            logger.warning("Unrecognized scan code %r", code)
            raise NotFoundError("Unrecognized code")
        if not actor.is_active:
            logger.warning("Scan refused for inactive %s %s", actor.kind.value.lower(), actor.matricule)
            raise InactiveActorError(f"{actor.full_name} is inactive")
        return actor

    def ingest(self, payload: ScanPayload, *, now: Optional[datetime] = None) -> ScanResult:
        actor = self.resolve(payload)
        timestamp = now or now_utc()
        if actor.kind == ActorKind.COACH:
            return self._coaches.record_scan(actor, timestamp)
        return self._learners.record_scan(actor, timestamp)
