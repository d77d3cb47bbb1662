"""Unit tests for XP and Leveling System (healthquest/gamification/xp_system.py)"""
import pytest

from healthquest.gamification.xp_system import (
    calculate_level_from_xp,
    calculate_progress_to_next_level,
    get_level_info,
    get_xp_for_activity,
)


# ============================================================================
# Level Calculation Tests
# ============================================================================

def test_calculate_level_from_xp_zero():
    """Test level 1 with 0 XP"""
    assert calculate_level_from_xp(0) == 1


def test_calculate_level_from_xp_boundaries():
    """Test each 1000 XP band boundary"""
    assert calculate_level_from_xp(999) == 1
    assert calculate_level_from_xp(1000) == 2
    assert calculate_level_from_xp(1999) == 2
    assert calculate_level_from_xp(2000) == 3
    assert calculate_level_from_xp(25500) == 26


def test_calculate_level_from_xp_negative():
    """Test that negative XP never drops below level 1"""
    assert calculate_level_from_xp(-500) == 1


@pytest.mark.parametrize("total_xp", [0, 1, 500, 999, 1000, 1001, 4321, 99999])
def test_progress_to_next_level_in_unit_interval(total_xp):
    """Progress within the current band is always in [0, 1)"""
    level = calculate_level_from_xp(total_xp)
    progress = calculate_progress_to_next_level(total_xp, level)
    assert 0.0 <= progress < 1.0


def test_progress_to_next_level_values():
    assert calculate_progress_to_next_level(0, 1) == 0.0
    assert calculate_progress_to_next_level(250, 1) == 0.25
    assert calculate_progress_to_next_level(1750, 2) == 0.75


def test_get_level_info():
    """Test level details mid-band"""
    info = get_level_info(2300)

    assert info["current_level"] == 3
    assert info["xp_in_current_level"] == 300
    assert info["xp_to_next_level"] == 700
    assert info["total_xp_for_next_level"] == 3000


# ============================================================================
# Award Policy Tests
# ============================================================================

def test_get_xp_for_activity_minutes():
    """2 XP per activity minute"""
    assert get_xp_for_activity("activity", minutes=15) == 30
    assert get_xp_for_activity("activity", minutes=0) == 0


def test_get_xp_for_activity_steps():
    """1 XP per 10 steps, rounded down"""
    assert get_xp_for_activity("steps", steps=5000) == 500
    assert get_xp_for_activity("steps", steps=19) == 1


def test_get_xp_for_activity_flat_awards():
    assert get_xp_for_activity("mood") == 10
    assert get_xp_for_activity("mindfulness") == 75
    assert get_xp_for_activity("physical_challenge") == 50


def test_get_xp_for_activity_level():
    """Level completion is worth level number x 100"""
    assert get_xp_for_activity("level", level_number=1) == 100
    assert get_xp_for_activity("level", level_number=4) == 400


def test_get_xp_for_activity_unknown():
    with pytest.raises(ValueError):
        get_xp_for_activity("juggling")
