"""Mindfulness session models (transient, never persisted)"""
from datetime import datetime
from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field

from healthquest.models.level import MindfulnessChallenge


class SessionState(str, Enum):
    """Session machine states"""
    IDLE = "idle"
    RUNNING = "running"
    PAUSED = "paused"
    COMPLETED = "completed"


class SessionPhase(str, Enum):
    """Which third of the session we are in, for guidance text"""
    BEGINNING = "beginning"
    MIDDLE = "middle"
    END = "end"


class BreathingPhase(str, Enum):
    """Position in the 4-4-6 breathing cycle"""
    INHALE = "inhale"
    HOLD = "hold"
    EXHALE = "exhale"


class MindfulnessSession(BaseModel):
    """One timed run of a mindfulness challenge"""
    challenge: MindfulnessChallenge
    level_number: Optional[int] = None
    start_time: datetime = Field(default_factory=datetime.now)
    duration: int = Field(ge=0)  # seconds
    is_completed: bool = False
