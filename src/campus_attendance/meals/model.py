from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime

from ..core.enums import MealType


@dataclass(frozen=True)
class MealScan:
    scan_id: int
    learner_id: str
    meal_date: date
    meal_type: MealType
    scanned_at: datetime

    def to_dict(self) -> dict:
        return {
            "id": self.scan_id,
            "learnerId": self.learner_id,
            "date": self.meal_date.isoformat(),
            "mealType": self.meal_type.value,
            "scannedAt": self.scanned_at.isoformat(),
        }
