"""
XP and Leveling System

Manages level calculations and the XP award policy.

Leveling Curve:
- Flat 1000 XP per level, starting at level 1 with 0 XP

XP Award Rules:
- Activity logged: 2 XP per minute
- Steps logged: 1 XP per 10 steps
- Mood check-in: 10 XP
- Mindfulness session completed: 75 XP
- Physical challenge confirmed: 50 XP
- Level completed: level number x 100 XP (plus the level's rewards as achievements)
"""

from typing import Dict, Any

XP_PER_LEVEL = 1000

XP_PER_ACTIVITY_MINUTE = 2
STEPS_PER_XP = 10
MOOD_CHECK_IN_XP = 10
MINDFULNESS_SESSION_XP = 75
PHYSICAL_CHALLENGE_XP = 50
LEVEL_COMPLETION_XP_PER_NUMBER = 100


def calculate_level_from_xp(total_xp: int) -> int:
    """Level for a given XP total: every 1000 XP is one level, never below 1"""
    return max(1, total_xp // XP_PER_LEVEL + 1)


def calculate_progress_to_next_level(total_xp: int, current_level: int) -> float:
    """
    Fraction of the current 1000 XP band already earned.

    Always in [0, 1) as long as current_level matches total_xp.
    """
    band_start = (current_level - 1) * XP_PER_LEVEL
    return (total_xp - band_start) / XP_PER_LEVEL


def get_level_info(total_xp: int) -> Dict[str, Any]:
    """
    Calculate level details from total XP

    Returns:
        {
            'current_level': int,
            'xp_in_current_level': int,
            'xp_to_next_level': int,
            'total_xp_for_next_level': int
        }
    """
    level = calculate_level_from_xp(total_xp)
    xp_in_level = total_xp - (level - 1) * XP_PER_LEVEL

    return {
        "current_level": level,
        "xp_in_current_level": xp_in_level,
        "xp_to_next_level": XP_PER_LEVEL - xp_in_level,
        "total_xp_for_next_level": level * XP_PER_LEVEL,
    }


def get_xp_for_activity(activity_type: str, **kwargs) -> int:
    """
    Calculate XP amount for different activity types

    Args:
        activity_type: Type of award (activity, steps, mood, mindfulness, physical_challenge, level)
        **kwargs: Award context (minutes, steps, level_number)

    Returns:
        XP amount to award
    """
    if activity_type == "activity":
        return kwargs.get("minutes", 0) * XP_PER_ACTIVITY_MINUTE
    if activity_type == "steps":
        return kwargs.get("steps", 0) // STEPS_PER_XP
    if activity_type == "mood":
        return MOOD_CHECK_IN_XP
    if activity_type == "mindfulness":
        return MINDFULNESS_SESSION_XP
    if activity_type == "physical_challenge":
        return PHYSICAL_CHALLENGE_XP
    if activity_type == "level":
        return kwargs.get("level_number", 0) * LEVEL_COMPLETION_XP_PER_NUMBER

    raise ValueError(f"Unknown XP award type: {activity_type}")
