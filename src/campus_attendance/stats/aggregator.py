from __future__ import annotations

import math
from dataclasses import asdict, dataclass
from typing import Iterable, Optional

from ..core.enums import JustificationStatus


@dataclass(frozen=True)
class CoachWorkStats:
    completed_days: int
    total_hours_worked: float
    average_hours_per_day: float


@dataclass(frozen=True)
class AttendanceStats:
    present: int
    late: int
    absent: int
    total: int
    attendance_rate: int
    to_justify: int
    coach: Optional[CoachWorkStats] = None

    def to_dict(self) -> dict:
        data = {
            "present": self.present,
            "late": self.late,
            "absent": self.absent,
            "total": self.total,
            "attendanceRate": self.attendance_rate,
            "toJustify": self.to_justify,
        }
        if self.coach is not None:
            work = asdict(self.coach)
            data.update(
                completedDays=work["completed_days"],
                totalHoursWorked=round(work["total_hours_worked"], 2),
                averageHoursPerDay=round(work["average_hours_per_day"], 2),
                totalWorkedLabel=format_duration(work["total_hours_worked"] * 3600),
            )
        return data


def attendance_rate(present: int, late: int, total: int) -> int:
    """Percentage of attended days, late arrivals included, rounded half up."""

    if total <= 0:
        return 0
    return int(math.floor((present + late) * 100 / total + 0.5))


def format_duration(seconds: float) -> str:
    minutes = int(seconds // 60)
    return f"{minutes // 60}h {minutes % 60:02d}min"


class AttendanceStatsAggregator:
    """Counts and rates over a set of attendance records (one actor or a group)."""

    def aggregate(self, records: Iterable, *, include_coach: bool = False) -> AttendanceStats:
        present = late = absent = to_justify = 0
        completed_days = 0
        worked_seconds = 0.0

        for r in records:
            if not r.is_present:
                absent += 1
            elif r.is_late:
                late += 1
            else:
                present += 1
            if r.status == JustificationStatus.TO_JUSTIFY:
                to_justify += 1
            if r.check_in is not None and r.check_out is not None:
                completed_days += 1
                worked_seconds += r.worked_seconds

        total = present + late + absent
        coach = None
        if include_coach:
            total_hours = worked_seconds / 3600
            coach = CoachWorkStats(
                completed_days=completed_days,
                total_hours_worked=total_hours,
                average_hours_per_day=total_hours / completed_days if completed_days else 0.0,
            )

        return AttendanceStats(
            present=present,
            late=late,
            absent=absent,
            total=total,
            attendance_rate=attendance_rate(present, late, total),
            to_justify=to_justify,
            coach=coach,
        )

    def aggregate_by_actor(self, records: Iterable, *, include_coach: bool = False) -> dict[str, AttendanceStats]:
        grouped: dict[str, list] = {}
        for r in records:
            grouped.setdefault(r.actor_id, []).append(r)
        return {actor_id: self.aggregate(rows, include_coach=include_coach) for actor_id, rows in grouped.items()}
