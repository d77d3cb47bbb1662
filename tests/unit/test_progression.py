"""Unit tests for ProgressionLedger (healthquest/gamification/progression.py)"""
import pytest

from healthquest.exceptions import ValidationError
from healthquest.gamification.progression import ProgressionLedger
from healthquest.models.user import ActivityType, FitnessLevel
from healthquest.storage.json_store import USER_KEY


@pytest.fixture
def ledger(store):
    return ProgressionLedger(store)


# ============================================================================
# Experience Tests
# ============================================================================

def test_new_user_defaults(ledger):
    user = ledger.user

    assert user.current_level == 1
    assert user.total_experience == 0
    assert user.achievements == []
    assert ledger.show_onboarding is True


def test_add_experience_basic(ledger):
    """Test awarding XP without a level up"""
    result = ledger.add_experience(250, source_type="activity")

    assert result["xp_awarded"] == 250
    assert result["old_total_xp"] == 0
    assert result["new_total_xp"] == 250
    assert result["leveled_up"] is False
    assert ledger.user.current_level == 1


def test_add_experience_level_up(ledger):
    """Test crossing a 1000 XP boundary"""
    ledger.add_experience(900)
    result = ledger.add_experience(200)

    assert result["leveled_up"] is True
    assert result["old_level"] == 1
    assert result["new_level"] == 2
    assert ledger.user.total_experience == 1100


def test_add_experience_multiple_levels_at_once(ledger):
    result = ledger.add_experience(3500)

    assert result["new_level"] == 4
    assert ledger.progress_to_next_level() == 0.5


def test_add_experience_negative_rejected(ledger):
    """Negative XP is rejected before any mutation"""
    ledger.add_experience(100)

    with pytest.raises(ValidationError) as exc_info:
        ledger.add_experience(-1)

    assert exc_info.value.field == "amount"
    assert ledger.user.total_experience == 100


def test_add_experience_zero(ledger):
    result = ledger.add_experience(0)

    assert result["xp_awarded"] == 0
    assert ledger.user.total_experience == 0


def test_level_invariant_holds_after_every_award(ledger):
    """level == max(1, total // 1000 + 1) and total never decreases"""
    previous_total = 0
    for amount in [0, 10, 990, 1, 999, 5000, 75, 50, 400]:
        ledger.add_experience(amount)
        user = ledger.user
        assert user.total_experience >= previous_total
        assert user.current_level == max(1, user.total_experience // 1000 + 1)
        assert 0.0 <= ledger.progress_to_next_level() < 1.0
        previous_total = user.total_experience


# ============================================================================
# Achievement Tests
# ============================================================================

def test_add_achievement_new(ledger):
    assert ledger.add_achievement("Forest Explorer Badge") is True
    assert ledger.user.achievements == ["Forest Explorer Badge"]


def test_add_achievement_idempotent(ledger):
    """Adding an achievement twice keeps a single entry"""
    ledger.add_achievement("Forest Explorer Badge")
    assert ledger.add_achievement("Forest Explorer Badge") is False
    assert ledger.user.achievements == ["Forest Explorer Badge"]


def test_add_achievement_empty_rejected(ledger):
    with pytest.raises(ValidationError):
        ledger.add_achievement("   ")
    assert ledger.user.achievements == []


# ============================================================================
# Profile & Persistence Tests
# ============================================================================

def test_update_profile_and_onboarding(ledger):
    ledger.update_profile("Robin", FitnessLevel.INTERMEDIATE, [ActivityType.YOGA, ActivityType.YOGA])
    user = ledger.complete_onboarding()

    assert user.name == "Robin"
    assert user.fitness_level == FitnessLevel.INTERMEDIATE
    assert user.preferred_activities == {ActivityType.YOGA}
    assert ledger.show_onboarding is False


def test_state_survives_reload(store, ledger):
    ledger.add_experience(1500)
    ledger.add_achievement("Badge")

    reloaded = ProgressionLedger(store)

    assert reloaded.user.total_experience == 1500
    assert reloaded.user.current_level == 2
    assert reloaded.user.achievements == ["Badge"]


def test_stale_stored_level_is_repaired(store):
    """The level is derived from XP, not trusted from disk"""
    store.save(USER_KEY, {"total_experience": 2500, "current_level": 1})

    ledger = ProgressionLedger(store)

    assert ledger.user.current_level == 3


def test_invalid_stored_profile_falls_back(store):
    store.save(USER_KEY, {"total_experience": -10})

    ledger = ProgressionLedger(store)

    assert ledger.user.total_experience == 0


def test_user_snapshot_is_detached(ledger):
    snapshot = ledger.user
    snapshot.total_experience = 9999

    assert ledger.user.total_experience == 0
