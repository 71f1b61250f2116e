"""
Shared fixtures: in-memory store, fixed clock and a wired service graph
"""
from datetime import datetime, timedelta
from typing import List

import pytest
import pytz

from dayzero.core.constants import KEY_PROFILE
from dayzero.core.exceptions import RemoteUnavailableError, StorageUnavailableError
from dayzero.models.habit import Habit
from dayzero.models.log import HabitLog
from dayzero.services.coach import CoachService
from dayzero.services.entitlements import EntitlementService
from dayzero.services.habits import HabitRepository, HabitService
from dayzero.services.logs import LogRepository, LogService
from dayzero.services.profile import ProfileService
from dayzero.storage import InMemoryStore, KeyValueStore


def utc(*args) -> datetime:
    return pytz.utc.localize(datetime(*args))


def make_habit(habit_id: str = "h1", target: int = 3, title: str = "Meditate") -> Habit:
    return Habit(
        id=habit_id,
        title=title,
        target_per_week=target,
        created_at=0,
        updated_at=0,
        created_day_id="2024-01-01"
    )


def make_log(habit_id: str, date: str, mood=None, log_id: str = None) -> HabitLog:
    return HabitLog(id=log_id or f"{habit_id}-{date}-{mood}", habit_id=habit_id, date=date, mood=mood)


class FixedClock:
    """Callable clock that tests can move forward"""

    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now = self.now + timedelta(**kwargs)


class FakeReminders:
    def __init__(self, fail: bool = False):
        self.fail = fail
        self.scheduled: List[tuple] = []
        self.canceled: List[str] = []

    def schedule_habit_reminders(self, habit, tz):
        if self.fail:
            raise RuntimeError("scheduler down")
        self.scheduled.append((habit.id, tuple(habit.target_times), tz))

    def cancel_habit_reminders(self, habit_id):
        if self.fail:
            raise RuntimeError("scheduler down")
        self.canceled.append(habit_id)


class FakePlanSource:
    def __init__(self, plan: str = "premium", fail: bool = False):
        self.plan = plan
        self.fail = fail
        self.calls: List[str] = []

    def fetch_plan(self, user_id):
        self.calls.append(user_id)
        if self.fail:
            raise RemoteUnavailableError("offline")
        return self.plan


class FakeCoachBackend:
    def __init__(self, answer: str = "Start with two minutes a day.", fail: bool = False):
        self.answer = answer
        self.fail = fail
        self.prompts: List[str] = []

    def complete(self, prompt):
        self.prompts.append(prompt)
        if self.fail:
            raise RemoteUnavailableError("model error")
        return self.answer


class FailingStore(KeyValueStore):
    """Store whose every operation fails"""

    def get(self, key, default=None):
        raise StorageUnavailableError("disk gone")

    def set(self, key, value):
        raise StorageUnavailableError("disk gone")

    def keys(self, prefix=""):
        raise StorageUnavailableError("disk gone")


@pytest.fixture
def clock():
    return FixedClock(utc(2024, 1, 3, 12, 0))


@pytest.fixture
def store():
    return InMemoryStore({KEY_PROFILE: {"timezone": "UTC", "daily_reset_hour_local": 20, "locale": "en-US"}})


@pytest.fixture
def profiles(store):
    return ProfileService(store)


@pytest.fixture
def habit_repository(store):
    return HabitRepository(store)


@pytest.fixture
def reminders():
    return FakeReminders()


@pytest.fixture
def habit_service(habit_repository, profiles, reminders, clock):
    return HabitService(habit_repository, profiles, reminders=reminders, clock=clock)


@pytest.fixture
def log_service(store, habit_repository, profiles, clock):
    return LogService(LogRepository(store), habit_repository, profiles, clock=clock)


@pytest.fixture
def plan_source():
    return FakePlanSource()


@pytest.fixture
def entitlements(store, profiles, habit_repository, plan_source, clock):
    return EntitlementService(store, profiles, habit_repository, plan_source=plan_source, clock=clock)


@pytest.fixture
def coach_backend():
    return FakeCoachBackend()


@pytest.fixture
def coach(entitlements, coach_backend):
    return CoachService(entitlements, coach_backend)
