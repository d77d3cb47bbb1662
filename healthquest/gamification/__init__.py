"""
Gamification system for HealthQuest

This module implements the progression side of the engine:
- XP and leveling (1000 XP per level)
- Achievement set driven by level rewards
- Activity streaks
- Quest levels with gated challenges
"""

from healthquest.gamification.xp_system import calculate_level_from_xp, get_xp_for_activity
from healthquest.gamification.streak_system import calculate_weekly_streak
from healthquest.gamification.progression import ProgressionLedger
from healthquest.gamification.quest_engine import QuestEngine, is_level_completable, get_level_progress

__all__ = [
    "calculate_level_from_xp",
    "get_xp_for_activity",
    "calculate_weekly_streak",
    "ProgressionLedger",
    "QuestEngine",
    "is_level_completable",
    "get_level_progress",
]
