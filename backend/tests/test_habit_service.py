"""
Tests for the habit lifecycle
"""
import pytest

from dayzero.core.constants import KEY_HABITS
from dayzero.core.exceptions import HabitNotFoundError, InvalidHabitDataError, ValidationError
from dayzero.models.habit import HabitUpdateRequest
from dayzero.services.habits import HabitService, clamp_target
from .conftest import FakeReminders, utc


def test_create_assigns_identity_and_creation_day(habit_service, clock):
    habit = habit_service.create("Meditate", target_per_week=3, target_times=["08:00"])
    assert habit.id
    assert habit.title == "Meditate"
    assert habit.icon == "meditation"
    assert habit.created_day_id == "2024-01-03"
    assert habit.created_at == habit.updated_at == int(clock().timestamp() * 1000)
    assert habit_service.get(habit.id) == habit


def test_create_uses_explicit_day_or_timezone(habit_service, clock):
    clock.now = utc(2024, 1, 3, 3, 0)
    assert habit_service.create("Run", day_id="2023-12-25").created_day_id == "2023-12-25"
    assert habit_service.create("Read", tz="America/Los_Angeles").created_day_id == "2024-01-02"
    assert habit_service.create("Walk").created_day_id == "2024-01-03"


def test_create_ids_are_unique(habit_service):
    ids = {habit_service.create(f"Habit {i}").id for i in range(20)}
    assert len(ids) == 20


@pytest.mark.parametrize("given,stored", [(0, 1), (-3, 1), (10, 7), (7, 7), (1, 1), (4, 4), (None, 5), ("abc", 5), (True, 5)])
def test_create_clamps_weekly_target(habit_service, given, stored):
    assert habit_service.create("Stretch", target_per_week=given).target_per_week == stored


def test_clamp_target_handles_floats():
    assert clamp_target(3.7) == 3
    assert clamp_target(float("nan")) == 5
    assert clamp_target(float("inf")) == 5


@pytest.mark.parametrize("title", ["", "   ", None, 42])
def test_create_rejects_blank_title(habit_service, store, title):
    with pytest.raises(InvalidHabitDataError):
        habit_service.create(title)
    assert store.get(KEY_HABITS, []) == []


def test_create_trims_title(habit_service):
    assert habit_service.create("  Journal  ").title == "Journal"


@pytest.mark.parametrize("times", [["24:00"], ["8:00"], ["08:60"], ["morning"], "08:00", ["08:00\n"], ["\uff10\uff18:00"]])
def test_create_rejects_malformed_times(habit_service, store, times):
    with pytest.raises(InvalidHabitDataError):
        habit_service.create("Run", target_times=times)
    assert store.get(KEY_HABITS, []) == []


def test_create_dedupes_times_keeping_order(habit_service):
    habit = habit_service.create("Water", target_times=["18:30", "08:00", "18:30"])
    assert habit.target_times == ["18:30", "08:00"]


def test_create_rejects_bad_day_id(habit_service):
    with pytest.raises(InvalidHabitDataError):
        habit_service.create("Run", day_id="2024-02-30")


def test_create_rejects_unknown_timezone(habit_service):
    with pytest.raises(ValidationError):
        habit_service.create("Run", tz="Nowhere/City")


def test_list_is_newest_first(habit_service):
    first = habit_service.create("First")
    second = habit_service.create("Second")
    third = habit_service.create("Third")
    assert [h.id for h in habit_service.list()] == [third.id, second.id, first.id]


def test_list_empty(habit_service):
    assert habit_service.list() == []


def test_update_applies_patch_and_bumps_updated_at(habit_service, clock):
    habit = habit_service.create("Read", target_per_week=3)
    clock.advance(hours=1)
    updated = habit_service.update(habit.id, {"title": "Read 10 pages", "target_per_week": 12, "target_times": ["21:00"]})
    assert updated.title == "Read 10 pages"
    assert updated.target_per_week == 7
    assert updated.target_times == ["21:00"]
    assert updated.updated_at > habit.updated_at
    assert updated.created_at == habit.created_at
    assert updated.created_day_id == habit.created_day_id
    assert habit_service.get(habit.id) == updated


def test_update_accepts_request_model(habit_service):
    habit = habit_service.create("Read")
    updated = habit_service.update(habit.id, HabitUpdateRequest(icon="book"))
    assert updated.icon == "book"
    assert updated.title == "Read"


def test_update_missing_habit(habit_service):
    with pytest.raises(HabitNotFoundError):
        habit_service.update("nope", {"title": "x"})


@pytest.mark.parametrize("patch", [
    {"id": "other"},
    {"created_day_id": "2020-01-01"},
    {"title": "  "},
    {"target_per_week": "five"},
    {"target_times": ["25:00"]},
])
def test_update_rejects_invalid_patch_without_change(habit_service, patch):
    habit = habit_service.create("Read")
    with pytest.raises(InvalidHabitDataError):
        habit_service.update(habit.id, patch)
    assert habit_service.get(habit.id) == habit


def test_created_day_survives_timezone_change(habit_service, profiles, clock):
    clock.now = utc(2024, 1, 3, 3, 0)
    habit = habit_service.create("Run")
    profiles.update_profile({"timezone": "America/Los_Angeles"})
    updated = habit_service.update(habit.id, {"title": "Run 5k"})
    assert updated.created_day_id == "2024-01-03"


def test_delete_is_idempotent(habit_service):
    habit = habit_service.create("Run")
    habit_service.delete(habit.id)
    habit_service.delete(habit.id)
    assert habit_service.list() == []
    with pytest.raises(HabitNotFoundError):
        habit_service.get(habit.id)


def test_lifecycle_drives_reminders(habit_service, reminders):
    habit = habit_service.create("Run", target_times=["07:00"])
    habit_service.update(habit.id, {"target_times": ["06:30", "19:00"]})
    habit_service.delete(habit.id)
    assert reminders.scheduled == [
        (habit.id, ("07:00",), "UTC"),
        (habit.id, ("06:30", "19:00"), "UTC"),
    ]
    assert reminders.canceled == [habit.id]


def test_reminder_failures_do_not_block_lifecycle(habit_repository, profiles, clock):
    service = HabitService(habit_repository, profiles, reminders=FakeReminders(fail=True), clock=clock)
    habit = service.create("Run")
    service.update(habit.id, {"title": "Run far"})
    service.delete(habit.id)
    assert service.list() == []
