from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Iterable

from ..actors.repository import ActorDirectory
from ..core.enums import ActorKind
from .recorder import AttendanceRecorder

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SweepReport:
    attendance_date: date
    scanned: int
    marked_absent: int


class AbsenceSweep:
    """End-of-day job: absence records for active actors with no record that day.

    Safe to rerun; the unique (actor, day) index keeps existing records.
    """

    def __init__(self, actors: ActorDirectory, recorder: AttendanceRecorder):
        self._actors = actors
        self._recorder = recorder

    def run(self, attendance_date: date, *, kinds: Iterable[ActorKind] = (ActorKind.LEARNER,)) -> SweepReport:
        scanned = 0
        marked = 0
        for kind in kinds:
            for actor in self._actors.list_active(kind):
                scanned += 1
                _, created = self._recorder.record_absence(actor, attendance_date)
                if created:
                    marked += 1

        logger.info("Absence sweep %s: %d actors checked, %d marked absent", attendance_date, scanned, marked)
        return SweepReport(attendance_date=attendance_date, scanned=scanned, marked_absent=marked)
