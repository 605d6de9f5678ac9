from __future__ import annotations

from datetime import date, timedelta

import pytest

from campus_attendance.actors.model import Identity
from campus_attendance.core.enums import JustificationStatus, Role
from campus_attendance.core.exceptions import AuthorizationError, NotFoundError, ValidationError


def test_learner_reads_own_attendance_only(container, learner, learner_identity, at):
    container.scan_ingestor.ingest(learner.matricule, now=at(8, 30))
    queries = container.attendance_queries

    mine = queries.my_attendance(learner_identity)
    assert [r.actor_id for r in mine] == [learner.actor_id]

    with pytest.raises(AuthorizationError):
        queries.for_actor(learner_identity, "fatou")


def test_date_range_filters_records(container, learner, admin_identity, at):
    for offset in range(5):
        container.scan_ingestor.ingest(learner.matricule, now=at(8, 0, day=date(2025, 3, 10) + timedelta(days=offset)))

    rows = container.attendance_queries.for_actor(
        admin_identity, learner.actor_id, start=date(2025, 3, 11), end=date(2025, 3, 13)
    )
    assert sorted(r.attendance_date.day for r in rows) == [11, 12, 13]


def test_inverted_range_is_rejected(container, learner, admin_identity):
    with pytest.raises(ValidationError):
        container.attendance_queries.for_actor(
            admin_identity, learner.actor_id, start=date(2025, 3, 13), end=date(2025, 3, 11)
        )


def test_group_query_covers_members(container, admin_identity, at):
    container.scan_ingestor.ingest("MAT-AWA", now=at(8, 0))
    container.scan_ingestor.ingest("MAT-FATOU", now=at(9, 0))
    container.scan_ingestor.ingest("MAT-MOUSSA", now=at(8, 0))

    rows = container.attendance_queries.for_group(admin_identity, "P7", end=at(8, 0).date(), today=at(8, 0).date())
    assert {r.actor_id for r in rows} == {"awa", "fatou"}


def test_group_query_is_staff_only(container, learner_identity):
    with pytest.raises(AuthorizationError):
        container.attendance_queries.for_group(learner_identity, "P7")


def test_pending_review_queue(container, seed_record, admin_identity, learner_identity):
    seed_record(JustificationStatus.PENDING)

    assert len(container.attendance_queries.pending_reviews(admin_identity)) == 1
    with pytest.raises(AuthorizationError):
        container.attendance_queries.pending_reviews(learner_identity)


def test_coaches_today_board(container, coach, admin_identity, at):
    container.scan_ingestor.ingest(coach.matricule, now=at(8, 0))

    board = container.attendance_queries.coaches_today(admin_identity, now=at(10, 0))
    by_id = {row["coach"]["id"]: row for row in board}
    assert by_id["moussa"]["state"] == "CHECKED_IN"
    assert by_id["admin"]["record"] is None
    assert by_id["admin"]["state"] == "NOT_ARRIVED"


def test_stats_for_coach_include_hours(container, coach, at):
    container.scan_ingestor.ingest(coach.matricule, now=at(8, 0))
    container.scan_ingestor.ingest(coach.matricule, now=at(16, 30))

    stats = container.attendance_queries.stats_for_actor(Identity("admin", Role.ADMIN), coach.actor_id)
    assert stats.present == 1
    assert stats.coach.completed_days == 1
    assert stats.coach.total_hours_worked == pytest.approx(8.5)


def test_stats_for_unknown_actor(container, admin_identity):
    with pytest.raises(NotFoundError):
        container.attendance_queries.stats_for_actor(admin_identity, "nobody")


def test_attendance_storage_exposes_no_per_day_listing():
    from campus_attendance.attendance.mysql_attendance_repository import MySQLAttendanceRepository
    from campus_attendance.attendance.repository import AttendanceRepository

    assert not hasattr(AttendanceRepository, "list_for_date")
    assert not hasattr(MySQLAttendanceRepository, "list_for_date")
