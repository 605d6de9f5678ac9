from campus_attendance.core.enums import ActorKind, JustificationStatus


def test_sweep_marks_only_unscanned_active_learners(container, attendance_repo, learner, at):
    container.scan_ingestor.ingest(learner.matricule, now=at(8, 0))

    report = container.absence_sweep.run(at(8, 0).date())

    # awa scanned, fatou did not, ibou is inactive
    assert report.scanned == 2
    assert report.marked_absent == 1
    fatou = attendance_repo.get_for_actor_and_date("fatou", at(8, 0).date())
    assert fatou.is_present is False
    assert fatou.status == JustificationStatus.TO_JUSTIFY
    assert attendance_repo.get_for_actor_and_date("ibou", at(8, 0).date()) is None


def test_sweep_is_idempotent(container, at):
    day = at(8, 0).date()
    first = container.absence_sweep.run(day)
    second = container.absence_sweep.run(day)

    assert first.marked_absent == 2
    assert second.marked_absent == 0


def test_sweep_can_include_coaches(container, attendance_repo, coach, at):
    day = at(8, 0).date()
    container.absence_sweep.run(day, kinds=(ActorKind.LEARNER, ActorKind.COACH))

    record = attendance_repo.get_for_actor_and_date(coach.actor_id, day)
    assert record.is_present is False
    assert record.check_in is None
