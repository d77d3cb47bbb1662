"""
Quest/Level Engine

Owns the ordered level catalogue and enforces unlock/completion rules.

Level lifecycle:
    locked -> unlocked -> completable -> completed

- Level 1 starts unlocked; level N+1 unlocks when level N is completed
- "completable" is not stored: it is recomputed from the challenge flags
- completed is terminal

Preconditions that are not met (unknown level, locked level, level not yet
completable) are silent no-ops: the caller gets None back and nothing changes.
"""

import logging
from typing import List, Optional, Union
from uuid import UUID

from pydantic import TypeAdapter, ValidationError as PydanticValidationError

from healthquest.exceptions import ValidationError
from healthquest.gamification.levels import create_default_levels
from healthquest.models.level import Level, MindfulnessChallenge, PhysicalChallenge
from healthquest.storage.json_store import JsonStore, LEVELS_KEY

logger = logging.getLogger(__name__)

_levels_adapter = TypeAdapter(List[Level])

ChallengeId = Union[UUID, str]


def parse_challenge_id(challenge_id: ChallengeId) -> UUID:
    """
    Normalize a challenge identifier.

    Raises:
        ValidationError: If a string id is not a valid UUID
    """
    if isinstance(challenge_id, UUID):
        return challenge_id
    try:
        return UUID(str(challenge_id))
    except ValueError:
        raise ValidationError(
            "Challenge id is not a valid UUID",
            field="challenge_id",
            value=challenge_id,
            operation="parse_challenge_id"
        )


def is_level_completable(level: Level) -> bool:
    """
    True when every physical and mindfulness challenge is completed.

    A level without any challenges is never completable.
    """
    if level.challenge_count == 0:
        return False
    return (
        all(c.is_completed for c in level.physical_challenges)
        and all(c.is_completed for c in level.mindfulness_challenges)
    )


def get_level_progress(level: Level) -> float:
    """Completed challenges / total challenges, 0 for an empty level"""
    total = level.challenge_count
    if total == 0:
        return 0.0
    return level.completed_challenge_count / total


class QuestEngine:
    """
    Level catalogue with gated progression.

    Responsibilities:
    - Load or create the catalogue
    - Mark challenges completed
    - Complete levels and unlock their successors
    - Progress ratios for the rendering layer
    """

    def __init__(self, store: JsonStore, levels: Optional[List[Level]] = None):
        self.store = store
        if levels is not None:
            self._levels = sorted(levels, key=lambda lvl: lvl.number)
            self._save()
        else:
            self._levels = self._load()

    def _load(self) -> List[Level]:
        data = self.store.load(LEVELS_KEY)
        if data is not None:
            try:
                levels = _levels_adapter.validate_python(data)
                return sorted(levels, key=lambda lvl: lvl.number)
            except PydanticValidationError as e:
                logger.error(f"Saved level catalogue is invalid, recreating defaults: {e}")

        levels = create_default_levels()
        self.store.save(LEVELS_KEY, _levels_adapter.dump_python(levels, mode="json"))
        logger.info(f"Created default level catalogue ({len(levels)} levels)")
        return levels

    def _save(self) -> None:
        self.store.save(LEVELS_KEY, _levels_adapter.dump_python(self._levels, mode="json"))

    def _find(self, number: int) -> Optional[Level]:
        for level in self._levels:
            if level.number == number:
                return level
        return None

    # ----- queries -----

    @property
    def levels(self) -> List[Level]:
        """Snapshot of the catalogue, ordered by number"""
        return [level.model_copy(deep=True) for level in self._levels]

    @property
    def current_level(self) -> Optional[Level]:
        """First level not yet completed (None when every level is done)"""
        for level in self._levels:
            if not level.is_completed:
                return level.model_copy(deep=True)
        return None

    def get_level(self, number: int) -> Optional[Level]:
        level = self._find(number)
        return level.model_copy(deep=True) if level else None

    def get_available_levels(self) -> List[Level]:
        return [level.model_copy(deep=True) for level in self._levels if level.is_unlocked]

    def is_level_completable(self, number: int) -> bool:
        level = self._find(number)
        return level is not None and is_level_completable(level)

    def get_level_progress(self, number: int) -> float:
        level = self._find(number)
        return get_level_progress(level) if level else 0.0

    def get_total_progress(self) -> float:
        """Completed levels / total levels"""
        if not self._levels:
            return 0.0
        completed = sum(1 for level in self._levels if level.is_completed)
        return completed / len(self._levels)

    def find_physical_challenge(
        self, challenge_id: ChallengeId, level_number: int
    ) -> Optional[PhysicalChallenge]:
        return self._find_challenge(challenge_id, level_number, "physical_challenges")

    def find_mindfulness_challenge(
        self, challenge_id: ChallengeId, level_number: int
    ) -> Optional[MindfulnessChallenge]:
        return self._find_challenge(challenge_id, level_number, "mindfulness_challenges")

    def _find_challenge(self, challenge_id: ChallengeId, level_number: int, attr: str):
        cid = parse_challenge_id(challenge_id)
        level = self._find(level_number)
        if level is None:
            return None
        for challenge in getattr(level, attr):
            if challenge.id == cid:
                return challenge.model_copy()
        return None

    # ----- mutations -----

    def unlock_level(self, number: int) -> bool:
        level = self._find(number)
        if level is None:
            logger.debug(f"unlock_level ignored: no level {number}")
            return False
        if not level.is_unlocked:
            level.is_unlocked = True
            self._save()
            logger.info(f"Unlocked level {number}")
        return True

    def complete_physical_challenge(
        self, challenge_id: ChallengeId, level_number: int
    ) -> Optional[PhysicalChallenge]:
        """
        Mark a physical challenge completed.

        Returns:
            The challenge if its flag changed, None if it was unknown or already completed
        """
        return self._complete_challenge(
            challenge_id, level_number, "physical_challenges"
        )

    def complete_mindfulness_challenge(
        self, challenge_id: ChallengeId, level_number: int
    ) -> Optional[MindfulnessChallenge]:
        """
        Mark a mindfulness challenge completed.

        Returns:
            The challenge if its flag changed, None if it was unknown or already completed
        """
        return self._complete_challenge(
            challenge_id, level_number, "mindfulness_challenges"
        )

    def _complete_challenge(self, challenge_id: ChallengeId, level_number: int, attr: str):
        cid = parse_challenge_id(challenge_id)
        level = self._find(level_number)
        if level is None:
            logger.debug(f"Challenge {cid} ignored: no level {level_number}")
            return None

        for challenge in getattr(level, attr):
            if challenge.id != cid:
                continue
            if challenge.is_completed:
                return None
            challenge.is_completed = True
            self._save()
            logger.info(f"Completed challenge '{challenge.title}' in level {level_number}")
            return challenge.model_copy()

        logger.debug(f"Challenge {cid} ignored: not in level {level_number}")
        return None

    def complete_level(self, number: int) -> Optional[Level]:
        """
        Complete a level and unlock the next one.

        Returns:
            The completed level, or None if the level is unknown, locked,
            already completed or not completable
        """
        level = self._find(number)
        if level is None:
            logger.debug(f"complete_level ignored: no level {number}")
            return None
        if not level.is_unlocked or level.is_completed:
            logger.debug(f"complete_level ignored: level {number} is locked or already completed")
            return None
        if not is_level_completable(level):
            logger.debug(f"complete_level ignored: level {number} has open challenges")
            return None

        level.is_completed = True

        next_level = self._find(number + 1)
        if next_level is not None:
            next_level.is_unlocked = True

        self._save()
        logger.info(f"Completed level {number} ('{level.title}')")
        return level.model_copy(deep=True)
