import pytest

from campus_attendance.core.enums import MealType
from campus_attendance.core.exceptions import DuplicateScanError, InactiveActorError, ValidationError
from campus_attendance.meals.service import parse_meal_type


def test_breakfast_twice_same_day_is_refused(container, learner, at):
    recorder = container.meal_recorder
    first = recorder.record_meal(learner, MealType.BREAKFAST, at(7, 30))

    with pytest.raises(DuplicateScanError):
        recorder.record_meal(learner, MealType.BREAKFAST, at(7, 45))

    assert recorder.history(meal_date=at(7, 30).date()) == [first]


def test_lunch_is_independent_from_breakfast(container, learner, at):
    recorder = container.meal_recorder
    recorder.record_meal(learner, MealType.BREAKFAST, at(7, 30))
    lunch = recorder.record_meal(learner, MealType.LUNCH, at(12, 30))

    assert lunch.meal_type == MealType.LUNCH
    assert lunch.meal_date == at(12, 30).date()


def test_same_meal_next_day_is_allowed(container, learner, at):
    from datetime import date

    container.meal_recorder.record_meal(learner, MealType.LUNCH, at(12, 0))
    again = container.meal_recorder.record_meal(learner, MealType.LUNCH, at(12, 0, day=date(2025, 3, 11)))
    assert again.meal_date == date(2025, 3, 11)


def test_meal_scan_resolves_payload(container, at):
    learner, scan = container.meal_recorder.record_meal_scan('{"id": "fatou"}', MealType.BREAKFAST, now=at(7, 0))
    assert learner.actor_id == "fatou"
    assert scan.learner_id == "fatou"


def test_meal_scan_refuses_inactive_and_coaches(container, coach, at):
    with pytest.raises(InactiveActorError):
        container.meal_recorder.record_meal_scan("MAT-IBOU", MealType.LUNCH, now=at(12, 0))
    with pytest.raises(ValidationError):
        container.meal_recorder.record_meal(coach, MealType.LUNCH, at(12, 0))


def test_count_by_type(container, learner, at):
    recorder = container.meal_recorder
    recorder.record_meal(learner, MealType.BREAKFAST, at(7, 0))
    recorder.record_meal(learner, MealType.LUNCH, at(12, 0))
    recorder.record_meal_scan("MAT-FATOU", MealType.LUNCH, now=at(12, 5))

    scans = recorder.history()
    assert recorder.count_by_type(scans) == {"BREAKFAST": 1, "LUNCH": 2}
    assert len(recorder.history(meal_type=MealType.LUNCH)) == 2


@pytest.mark.parametrize("raw, expected", [("breakfast", MealType.BREAKFAST), (" LUNCH ", MealType.LUNCH)])
def test_parse_meal_type(raw, expected):
    assert parse_meal_type(raw) == expected


def test_parse_meal_type_rejects_unknown():
    with pytest.raises(ValidationError):
        parse_meal_type("DINNER")
