"""Global test fixtures and utilities for healthquest tests"""
import pytest
from datetime import datetime, timedelta

from healthquest.models.level import (
    Level,
    LevelTheme,
    MindfulnessChallenge,
    MindfulnessType,
    PhysicalChallenge,
)
from healthquest.models.user import ActivityType
from healthquest.storage.json_store import JsonStore


# ============================================================================
# Time Fixtures
# ============================================================================

class FakeClock:
    """Callable clock that only moves when told to"""

    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now += timedelta(**kwargs)


class ManualTimer:
    def __init__(self, callback, interval, due, repeating):
        self.callback = callback
        self.interval = interval
        self.due = due
        self.repeating = repeating
        self.cancelled = False
        self.fired = False

    def cancel(self):
        self.cancelled = True


class ManualScheduler:
    """Scheduler whose time advances only through advance()"""

    def __init__(self):
        self.now = 0.0
        self.timers = []

    def call_every(self, interval, callback):
        timer = ManualTimer(callback, interval, self.now + interval, repeating=True)
        self.timers.append(timer)
        return timer

    def call_later(self, delay, callback):
        timer = ManualTimer(callback, delay, self.now + delay, repeating=False)
        self.timers.append(timer)
        return timer

    @property
    def active_timers(self):
        return [t for t in self.timers if not t.cancelled and not t.fired]

    @property
    def active_repeating(self):
        return [t for t in self.active_timers if t.repeating]

    def advance(self, seconds: float) -> None:
        target = self.now + seconds
        while True:
            due = [t for t in self.active_timers if t.due <= target + 1e-9]
            if not due:
                break
            timer = min(due, key=lambda t: t.due)
            self.now = timer.due
            if timer.repeating:
                timer.due += timer.interval
            else:
                timer.fired = True
            timer.callback()
        self.now = target


@pytest.fixture
def clock():
    """Clock fixed at a known local date"""
    return FakeClock(datetime(2024, 6, 15, 9, 30, 0))


@pytest.fixture
def scheduler():
    return ManualScheduler()


# ============================================================================
# Storage Fixtures
# ============================================================================

@pytest.fixture
def store(tmp_path):
    """JsonStore in a per-test temporary directory"""
    return JsonStore(tmp_path / "data")


# ============================================================================
# Level Fixtures
# ============================================================================

@pytest.fixture
def sample_levels():
    """Three small levels: mixed, physical only, and empty"""
    return [
        Level(
            number=1,
            title="Trailhead",
            theme=LevelTheme.FOREST,
            physical_challenges=[
                PhysicalChallenge(
                    title="Morning Walk",
                    activity_type=ActivityType.WALKING,
                    target_value=5000,
                    unit="steps",
                ),
            ],
            mindfulness_challenges=[
                MindfulnessChallenge(
                    title="First Breath",
                    duration=1,
                    type=MindfulnessType.BREATHING,
                ),
            ],
            rewards=["Trail Badge", "Explorer"],
            is_unlocked=True,
        ),
        Level(
            number=2,
            title="Ridge",
            theme=LevelTheme.MOUNTAIN,
            physical_challenges=[
                PhysicalChallenge(
                    title="Lift",
                    activity_type=ActivityType.STRENGTH,
                    target_value=20,
                    unit="minutes",
                ),
            ],
            rewards=["Ridge Badge", "Explorer"],
        ),
        Level(
            number=3,
            title="Empty Plains",
            theme=LevelTheme.DESERT,
            rewards=["Plains Badge"],
        ),
    ]
