"""
Activity Ledger

Records daily activity, mood/energy check-ins and mini-game results, and
derives same-day progress metrics. Every mutating call persists the ledger
and publishes an event before returning; reads are pure.
"""

import logging
from datetime import date, datetime
from typing import Callable, List, Optional

from pydantic import ValidationError as PydanticValidationError

from healthquest.events import ActivityLogged, EventEmitter, MoodCheckedIn, StepsLogged
from healthquest.exceptions import ValidationError
from healthquest.gamification.streak_system import calculate_weekly_streak
from healthquest.models.activity import (
    ActivityLedgerRecord,
    ActivityLog,
    DailyActivity,
    DailyCheckIn,
    EnergyLevel,
    IntensityLevel,
    MiniGameResult,
    MoodLevel,
)
from healthquest.models.user import ActivityType
from healthquest.storage.json_store import JsonStore, ACTIVITY_LEDGER_KEY

logger = logging.getLogger(__name__)

# Daily target minutes per activity type
TARGET_MINUTES = {
    ActivityType.CARDIO: 30,
    ActivityType.STRENGTH: 20,
    ActivityType.YOGA: 25,
    ActivityType.WALKING: 60,
    ActivityType.CYCLING: 45,
    ActivityType.SWIMMING: 30,
    ActivityType.MEDITATION: 15,
}

STEPS_PER_MINUTE = 100


class ActivityLedger:
    """
    Ledger of daily activity and check-ins.

    Args:
        store: Durable store for the ledger record
        clock: Returns the current local datetime (injectable for tests)
    """

    def __init__(self, store: JsonStore, clock: Callable[[], datetime] = datetime.now):
        self.store = store
        self.clock = clock
        self.events = EventEmitter()
        self._record = self._load()

    def _load(self) -> ActivityLedgerRecord:
        data = self.store.load(ACTIVITY_LEDGER_KEY)
        if data is None:
            return ActivityLedgerRecord()
        try:
            return ActivityLedgerRecord.model_validate(data)
        except PydanticValidationError as e:
            logger.error(f"Saved activity ledger is invalid, starting empty: {e}")
            return ActivityLedgerRecord()

    def _save(self) -> None:
        self.store.save(ACTIVITY_LEDGER_KEY, self._record.model_dump(mode="json"))

    def _today(self) -> date:
        return self.clock().date()

    def _todays_record(self) -> Optional[DailyActivity]:
        today = self._today()
        for record in self._record.daily_activities:
            if record.day == today:
                return record
        return None

    def _append(self, entry: ActivityLog) -> DailyActivity:
        """Append to today's record, creating it on the first log of the day"""
        if entry.duration < 0:
            raise ValidationError(
                "Duration must not be negative",
                field="duration",
                value=entry.duration,
                operation="log_activity"
            )

        record = self._todays_record()
        if record is None:
            record = DailyActivity(day=self._today())
            self._record.daily_activities.append(record)

        record.activities.append(entry)
        record.total_minutes += entry.duration
        return record

    # ----- activity -----

    def log_activity(self, entry: ActivityLog, source: str = "activity") -> ActivityLog:
        """
        Append an entry to today's record.

        Raises:
            ValidationError: If the entry's duration is negative
        """
        record = self._append(entry)
        self._save()

        logger.info(
            f"Logged {entry.duration} min of {entry.type.value} "
            f"(today: {record.total_minutes} min)"
        )
        self.events.emit(ActivityLogged(entry=entry, source=source))
        return entry

    def log_steps(self, steps: int) -> ActivityLog:
        """Log steps as a walking entry: 100 steps count as one minute"""
        if steps < 0:
            raise ValidationError(
                "Step count must not be negative",
                field="steps",
                value=steps,
                operation="log_steps"
            )

        entry = ActivityLog(
            type=ActivityType.WALKING,
            duration=steps // STEPS_PER_MINUTE,
            intensity=IntensityLevel.MODERATE,
            description=f"Logged {steps} steps",
            timestamp=self.clock(),
        )
        self.log_activity(entry, source="steps")
        self.events.emit(StepsLogged(steps=steps, entry_id=entry.id))
        return entry

    def quick_log(self, activity_type: ActivityType, minutes: int) -> ActivityLog:
        """Log an activity with moderate intensity"""
        entry = ActivityLog(
            type=activity_type,
            duration=minutes,
            intensity=IntensityLevel.MODERATE,
            description=f"{minutes} minutes of {activity_type.value}",
            timestamp=self.clock(),
        )
        return self.log_activity(entry)

    def complete_mini_game(self, result: MiniGameResult) -> ActivityLog:
        """Record a mini-game and count it as activity of the mapped type"""
        entry = ActivityLog(
            type=result.game_type.activity_type,
            duration=result.duration,
            intensity=IntensityLevel.MODERATE,
            description=f"Completed {result.game_type.value.replace('_', ' ')} mini-game",
            timestamp=self.clock(),
        )
        # Validate before recording anything
        self._append(entry)
        self._record.completed_mini_games.append(result)
        self._save()

        logger.info(f"Completed {result.game_type.value} mini-game (score {result.score})")
        self.events.emit(ActivityLogged(entry=entry, source="mini_game"))
        return entry

    # ----- check-ins -----

    @property
    def check_in(self) -> Optional[DailyCheckIn]:
        """Today's check-in, if there is one"""
        check_in = self._record.check_in
        if check_in is not None and check_in.day == self._today():
            return check_in.model_copy()
        return None

    @property
    def current_mood(self) -> MoodLevel:
        check_in = self.check_in
        return check_in.mood if check_in else MoodLevel.NEUTRAL

    def update_mood(self, mood: MoodLevel, note: str = "") -> DailyCheckIn:
        """Set today's mood, creating the check-in with medium energy if needed"""
        today = self._today()
        check_in = self._record.check_in
        if check_in is None or check_in.day != today:
            check_in = DailyCheckIn(day=today, mood=mood, energy_level=EnergyLevel.MEDIUM, note=note)
            self._record.check_in = check_in
        else:
            check_in.mood = mood
            check_in.note = note

        self._save()
        logger.info(f"Mood check-in: {mood.value}")
        self.events.emit(MoodCheckedIn(mood=mood))
        return check_in.model_copy()

    def update_energy(self, energy: EnergyLevel) -> DailyCheckIn:
        """Set today's energy, creating the check-in with a neutral mood if needed"""
        today = self._today()
        check_in = self._record.check_in
        if check_in is None or check_in.day != today:
            check_in = DailyCheckIn(day=today, mood=MoodLevel.NEUTRAL, energy_level=energy)
            self._record.check_in = check_in
        else:
            check_in.energy_level = energy

        self._save()
        logger.info(f"Energy check-in: {energy.value}")
        return check_in.model_copy()

    # ----- statistics -----

    @property
    def daily_activities(self) -> List[DailyActivity]:
        return [record.model_copy(deep=True) for record in self._record.daily_activities]

    @property
    def completed_mini_games(self) -> List[MiniGameResult]:
        return list(self._record.completed_mini_games)

    def get_todays_progress(self, activity_type: ActivityType) -> float:
        """Minutes logged today for a type relative to its daily target, clamped to [0, 1]"""
        record = self._todays_record()
        if record is None:
            return 0.0

        minutes = sum(a.duration for a in record.activities if a.type == activity_type)
        target = TARGET_MINUTES[activity_type]
        return max(0.0, min(minutes / target, 1.0))

    def get_total_active_minutes(self) -> int:
        record = self._todays_record()
        return record.total_minutes if record else 0

    def get_total_steps(self) -> int:
        """Today's steps, estimated back from walking minutes"""
        record = self._todays_record()
        if record is None:
            return 0
        walking = sum(a.duration for a in record.activities if a.type == ActivityType.WALKING)
        return walking * STEPS_PER_MINUTE

    def get_weekly_streak(self) -> int:
        return calculate_weekly_streak(self._record.daily_activities, self._today())
