from __future__ import annotations

from datetime import date, datetime, timedelta

import pytest

from campus_attendance.attendance.model import AttendanceRecord
from campus_attendance.core.enums import ActorKind, JustificationStatus
from campus_attendance.stats.aggregator import AttendanceStatsAggregator, attendance_rate, format_duration


def _record(day: int, *, present=True, late=False, actor="awa", check_in=None, check_out=None, kind=ActorKind.LEARNER):
    return AttendanceRecord(
        record_id=day,
        actor_id=actor,
        actor_kind=kind,
        attendance_date=date(2025, 3, day),
        is_present=present,
        is_late=late,
        status=JustificationStatus.TO_JUSTIFY if (late or not present) else JustificationStatus.NONE,
        check_in=check_in,
        check_out=check_out,
    )


def test_three_present_one_late_one_absent():
    records = [_record(1), _record(2), _record(3), _record(4, late=True), _record(5, present=False)]

    stats = AttendanceStatsAggregator().aggregate(records)

    assert (stats.present, stats.late, stats.absent, stats.total) == (3, 1, 1, 5)
    assert stats.attendance_rate == 80
    assert stats.to_justify == 2
    assert stats.coach is None


def test_empty_set_has_zero_rate():
    stats = AttendanceStatsAggregator().aggregate([])
    assert stats.total == 0
    assert stats.attendance_rate == 0


def test_rate_rounds_half_up():
    assert attendance_rate(1, 0, 8) == 13  # 12.5
    assert attendance_rate(2, 0, 3) == 67


def test_coach_hours_over_completed_days_only():
    start = datetime(2025, 3, 1, 8, 0)
    records = [
        _record(1, kind=ActorKind.COACH, check_in=start, check_out=start + timedelta(hours=8)),
        _record(2, kind=ActorKind.COACH, check_in=start, check_out=start + timedelta(hours=7)),
        _record(3, kind=ActorKind.COACH, check_in=start),
    ]

    stats = AttendanceStatsAggregator().aggregate(records, include_coach=True)

    assert stats.coach.completed_days == 2
    assert stats.coach.total_hours_worked == pytest.approx(15.0)
    assert stats.coach.average_hours_per_day == pytest.approx(7.5)
    assert stats.to_dict()["totalWorkedLabel"] == "15h 00min"


def test_coach_without_completed_days_averages_zero():
    stats = AttendanceStatsAggregator().aggregate([_record(1, present=False)], include_coach=True)
    assert stats.coach.average_hours_per_day == 0.0


def test_aggregate_by_actor():
    records = [_record(1), _record(2, actor="fatou", present=False), _record(3, actor="fatou")]

    by_actor = AttendanceStatsAggregator().aggregate_by_actor(records)

    assert by_actor["awa"].attendance_rate == 100
    assert by_actor["fatou"].attendance_rate == 50


def test_format_duration():
    assert format_duration(8 * 3600 + 5 * 60 + 59) == "8h 05min"
