"""Level and challenge models for the quest engine"""
from enum import Enum
from uuid import UUID, uuid4
from pydantic import BaseModel, Field

from healthquest.models.user import ActivityType


class LevelTheme(str, Enum):
    """Level themes (colors and icons belong to the rendering layer)"""
    FOREST = "forest"
    MOUNTAIN = "mountain"
    OCEAN = "ocean"
    DESERT = "desert"
    CITY = "city"


class MindfulnessType(str, Enum):
    """Kinds of guided mindfulness practice"""
    BREATHING = "breathing"
    MEDITATION = "meditation"
    GRATITUDE = "gratitude"
    VISUALIZATION = "visualization"


class PhysicalChallenge(BaseModel):
    """A physical task completed once today's progress for its activity type reaches 100%"""
    id: UUID = Field(default_factory=uuid4)
    title: str
    description: str = ""
    activity_type: ActivityType
    target_value: float = Field(ge=0)
    unit: str
    is_completed: bool = False


class MindfulnessChallenge(BaseModel):
    """A mindfulness task completed only by finishing a session for it"""
    id: UUID = Field(default_factory=uuid4)
    title: str
    description: str = ""
    duration: int = Field(ge=0)  # minutes
    type: MindfulnessType
    is_completed: bool = False


class Level(BaseModel):
    """A themed stage bundling physical and mindfulness challenges"""
    number: int = Field(ge=1)
    title: str
    description: str = ""
    theme: LevelTheme
    required_experience: int = Field(default=0, ge=0)
    physical_challenges: list[PhysicalChallenge] = Field(default_factory=list)
    mindfulness_challenges: list[MindfulnessChallenge] = Field(default_factory=list)
    rewards: list[str] = Field(default_factory=list)
    is_unlocked: bool = False
    is_completed: bool = False

    @property
    def challenge_count(self) -> int:
        return len(self.physical_challenges) + len(self.mindfulness_challenges)

    @property
    def completed_challenge_count(self) -> int:
        return (
            sum(1 for c in self.physical_challenges if c.is_completed)
            + sum(1 for c in self.mindfulness_challenges if c.is_completed)
        )
