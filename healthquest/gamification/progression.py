"""
Progression Ledger

Owns the user profile: total experience, the level derived from it and the
set of unlocked achievements. Every mutation is persisted before returning.
"""

import logging
from typing import Dict, Any, Iterable, Optional

from pydantic import ValidationError as PydanticValidationError

from healthquest.exceptions import ValidationError
from healthquest.gamification.xp_system import (
    calculate_level_from_xp,
    calculate_progress_to_next_level,
)
from healthquest.models.user import ActivityType, FitnessLevel, User
from healthquest.storage.json_store import JsonStore, USER_KEY

logger = logging.getLogger(__name__)


class ProgressionLedger:
    """
    Ledger for XP, level and achievements.

    Responsibilities:
    - Award XP and recompute the level (monotonic)
    - Register achievements idempotently
    - Profile and onboarding updates
    """

    def __init__(self, store: JsonStore):
        self.store = store
        self._user = self._load()

    def _load(self) -> User:
        data = self.store.load(USER_KEY)
        if data is None:
            logger.info("No saved profile, starting a new user")
            return User()

        try:
            user = User.model_validate(data)
        except PydanticValidationError as e:
            logger.error(f"Saved profile is invalid, starting a new user: {e}")
            return User()

        # Level is derived from XP; repair a stale stored value
        user.current_level = calculate_level_from_xp(user.total_experience)
        return user

    def _save(self) -> None:
        self.store.save(USER_KEY, self._user.model_dump(mode="json"))

    @property
    def user(self) -> User:
        """Snapshot of the current profile"""
        return self._user.model_copy(deep=True)

    @property
    def show_onboarding(self) -> bool:
        return not self._user.profile_setup_completed

    def add_experience(self, amount: int, source_type: str = "bonus") -> Dict[str, Any]:
        """
        Award XP and check for level up

        Args:
            amount: XP to add, must not be negative
            source_type: What earned it (activity, steps, mood, mindfulness, ...)

        Returns:
            {
                'xp_awarded': int,
                'old_total_xp': int,
                'new_total_xp': int,
                'old_level': int,
                'new_level': int,
                'leveled_up': bool
            }

        Raises:
            ValidationError: If amount is negative
        """
        if amount < 0:
            raise ValidationError(
                "XP amount must not be negative",
                field="amount",
                value=amount,
                operation="add_experience"
            )

        old_total = self._user.total_experience
        old_level = self._user.current_level

        self._user.total_experience = old_total + amount
        new_level = calculate_level_from_xp(self._user.total_experience)
        if new_level > self._user.current_level:
            self._user.current_level = new_level

        self._save()

        leveled_up = self._user.current_level > old_level
        logger.info(
            f"Awarded {amount} XP for {source_type}. "
            f"Total: {self._user.total_experience} XP, Level: {self._user.current_level}"
        )
        if leveled_up:
            logger.info(f"User leveled up from {old_level} to {self._user.current_level}!")

        return {
            "xp_awarded": amount,
            "old_total_xp": old_total,
            "new_total_xp": self._user.total_experience,
            "old_level": old_level,
            "new_level": self._user.current_level,
            "leveled_up": leveled_up,
        }

    def add_achievement(self, achievement_id: str) -> bool:
        """
        Register an achievement.

        Returns:
            True if it was new, False if the user already had it

        Raises:
            ValidationError: If the identifier is empty
        """
        if not achievement_id or not achievement_id.strip():
            raise ValidationError(
                "Achievement identifier must not be empty",
                field="achievement_id",
                value=achievement_id,
                operation="add_achievement"
            )

        if achievement_id in self._user.achievements:
            return False

        self._user.achievements.append(achievement_id)
        self._save()
        logger.info(f"Unlocked achievement: {achievement_id}")
        return True

    def progress_to_next_level(self) -> float:
        return calculate_progress_to_next_level(
            self._user.total_experience, self._user.current_level
        )

    def update_profile(
        self,
        name: str,
        fitness_level: FitnessLevel,
        preferred_activities: Optional[Iterable[ActivityType]] = None
    ) -> User:
        """Update onboarding profile fields"""
        self._user.name = name
        self._user.fitness_level = fitness_level
        self._user.preferred_activities = set(preferred_activities or [])
        self._save()
        return self.user

    def complete_onboarding(self) -> User:
        self._user.profile_setup_completed = True
        self._save()
        logger.info("Onboarding completed")
        return self.user
