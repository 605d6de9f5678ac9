from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Optional, Sequence

from ..actors.model import Actor
from ..attendance.policy import LateCutoffPolicy
from ..common.datetime_utils import now_utc
from ..core.enums import ActorKind, MealType
from ..core.exceptions import DuplicateScanError, ValidationError
from ..scans.payload import ScanPayload
from ..scans.service import ScanIngestor
from .model import MealScan
from .repository import MealScanRepository

logger = logging.getLogger(__name__)


def parse_meal_type(value: object) -> MealType:
    try:
        return MealType(str(value or "").strip().upper())
    except ValueError:
        raise ValidationError("Meal type must be BREAKFAST or LUNCH")


class MealScanRecorder:
    """At most one scan per learner, day and meal type; no classification."""

    def __init__(self, meals: MealScanRepository, policy: LateCutoffPolicy, ingestor: ScanIngestor):
        self._meals = meals
        self._policy = policy
        self._ingestor = ingestor

    def record_meal(self, learner: Actor, meal_type: MealType, timestamp: datetime) -> MealScan:
        if learner.kind != ActorKind.LEARNER:
            raise ValidationError("Meal service scans are for learners only")

        timestamp = self._policy.localize(learner, timestamp)
        scan, created = self._meals.insert_if_absent(
            learner_id=learner.actor_id,
            meal_date=timestamp.date(),
            meal_type=meal_type,
            scanned_at=timestamp,
        )
        if not created:
            logger.info("Duplicate %s scan for learner %s on %s", meal_type.value, learner.matricule, scan.meal_date)
            raise DuplicateScanError(f"{learner.full_name} already had {meal_type.value.lower()} on {scan.meal_date}")

        logger.info("%s served to learner %s", meal_type.value, learner.matricule)
        return scan

    def record_meal_scan(self, payload: ScanPayload, meal_type: MealType, *, now: Optional[datetime] = None) -> tuple[Actor, MealScan]:
        learner = self._ingestor.resolve(payload)
        return learner, self.record_meal(learner, meal_type, now or now_utc())

    def history(self, *, meal_date: Optional[date] = None, meal_type: Optional[MealType] = None, limit: int = 100) -> Sequence[MealScan]:
        if meal_date is None:
            scans = self._meals.list_latest(limit=limit)
            if meal_type is not None:
                scans = [s for s in scans if s.meal_type == meal_type]
            return scans
        return self._meals.list_for_date(meal_date, meal_type=meal_type)

    @staticmethod
    def count_by_type(scans: Sequence[MealScan]) -> dict[str, int]:
        counts = {t.value: 0 for t in MealType}
        for s in scans:
            counts[s.meal_type.value] += 1
        return counts
