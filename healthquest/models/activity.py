"""Pydantic models for activity tracking and daily check-ins"""
from datetime import date, datetime
from enum import Enum
from typing import Optional
from uuid import UUID, uuid4
from pydantic import BaseModel, ConfigDict, Field

from healthquest.models.user import ActivityType


class IntensityLevel(str, Enum):
    """How hard an activity was"""
    LIGHT = "light"
    MODERATE = "moderate"
    INTENSE = "intense"


class MoodLevel(str, Enum):
    """Daily mood check-in values"""
    VERY_HAPPY = "very_happy"
    HAPPY = "happy"
    NEUTRAL = "neutral"
    SAD = "sad"
    STRESSED = "stressed"


class EnergyLevel(str, Enum):
    """Daily energy check-in values"""
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class MiniGameType(str, Enum):
    """Short guided mini-games; each counts as an activity of some type"""
    JUMPING_JACKS = "jumping_jacks"
    SQUATS = "squats"
    PUSH_UPS = "push_ups"
    PLANK = "plank"
    DANCING = "dancing"
    BREATHING = "breathing"

    @property
    def activity_type(self) -> ActivityType:
        return MINI_GAME_ACTIVITY_TYPES[self]


MINI_GAME_ACTIVITY_TYPES: dict[MiniGameType, ActivityType] = {
    MiniGameType.JUMPING_JACKS: ActivityType.CARDIO,
    MiniGameType.DANCING: ActivityType.CARDIO,
    MiniGameType.SQUATS: ActivityType.STRENGTH,
    MiniGameType.PUSH_UPS: ActivityType.STRENGTH,
    MiniGameType.PLANK: ActivityType.STRENGTH,
    MiniGameType.BREATHING: ActivityType.MEDITATION,
}


class ActivityLog(BaseModel):
    """A single logged activity. Immutable once created."""
    model_config = ConfigDict(frozen=True)

    id: UUID = Field(default_factory=uuid4)
    type: ActivityType
    duration: int  # minutes, validated by the ledger
    intensity: IntensityLevel = IntensityLevel.MODERATE
    description: str = ""
    timestamp: datetime = Field(default_factory=datetime.now)


class DailyActivity(BaseModel):
    """All activity logged on one calendar day (append-only)"""
    day: date
    activities: list[ActivityLog] = Field(default_factory=list)
    total_minutes: int = Field(default=0, ge=0)


class DailyCheckIn(BaseModel):
    """Mood and energy for one day; overwritten within the same day"""
    day: date
    mood: MoodLevel
    energy_level: EnergyLevel
    note: str = ""


class MiniGameResult(BaseModel):
    """Result of a finished mini-game"""
    id: UUID = Field(default_factory=uuid4)
    game_type: MiniGameType
    score: int = 0
    duration: int  # minutes
    completed_at: datetime = Field(default_factory=datetime.now)


class ActivityLedgerRecord(BaseModel):
    """Persisted snapshot of the activity ledger"""
    daily_activities: list[DailyActivity] = Field(default_factory=list)
    check_in: Optional[DailyCheckIn] = None
    completed_mini_games: list[MiniGameResult] = Field(default_factory=list)
