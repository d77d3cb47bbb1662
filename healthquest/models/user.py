"""User-related Pydantic models"""
from enum import Enum
from pydantic import BaseModel, Field


class FitnessLevel(str, Enum):
    """Self-reported fitness level"""
    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"


class ActivityType(str, Enum):
    """Kinds of physical or mindful activity that can be logged"""
    CARDIO = "cardio"
    STRENGTH = "strength"
    YOGA = "yoga"
    MEDITATION = "meditation"
    WALKING = "walking"
    CYCLING = "cycling"
    SWIMMING = "swimming"


class User(BaseModel):
    """User profile and progression state"""
    name: str = ""
    fitness_level: FitnessLevel = FitnessLevel.BEGINNER
    preferred_activities: set[ActivityType] = Field(default_factory=set)
    current_level: int = Field(default=1, ge=1)
    total_experience: int = Field(default=0, ge=0)
    achievements: list[str] = Field(default_factory=list)  # unique, insertion ordered
    profile_setup_completed: bool = False
