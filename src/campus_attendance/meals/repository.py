from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import MealType
from .model import MealScan


class MealScanRepository(Protocol):
    """Unique per (learner_id, meal_date, meal_type)."""

    def insert_if_absent(
        self,
        *,
        learner_id: str,
        meal_date: date,
        meal_type: MealType,
        scanned_at: datetime,
    ) -> tuple[MealScan, bool]:
        raise NotImplementedError

    def list_for_date(self, meal_date: date, *, meal_type: Optional[MealType] = None) -> Sequence[MealScan]:
        raise NotImplementedError

    def list_latest(self, *, limit: int = 100) -> Sequence[MealScan]:
        raise NotImplementedError
