"""Unit tests for Quest/Level Engine (healthquest/gamification/quest_engine.py)"""
import pytest
from uuid import uuid4

from healthquest.exceptions import ValidationError
from healthquest.gamification.quest_engine import (
    QuestEngine,
    get_level_progress,
    is_level_completable,
)
from healthquest.models.level import Level, LevelTheme, MindfulnessChallenge, MindfulnessType
from healthquest.storage.json_store import LEVELS_KEY


@pytest.fixture
def engine(store, sample_levels):
    return QuestEngine(store, levels=sample_levels)


def _complete_all(engine, number):
    level = engine.get_level(number)
    for challenge in level.physical_challenges:
        engine.complete_physical_challenge(challenge.id, number)
    for challenge in level.mindfulness_challenges:
        engine.complete_mindfulness_challenge(challenge.id, number)


# ============================================================================
# Catalogue Tests
# ============================================================================

def test_default_catalogue_created(store):
    """A fresh store gets the five default levels with only level 1 unlocked"""
    engine = QuestEngine(store)
    levels = engine.levels

    assert [level.number for level in levels] == [1, 2, 3, 4, 5]
    assert [level.is_unlocked for level in levels] == [True, False, False, False, False]
    assert not any(level.is_completed for level in levels)
    assert store.load(LEVELS_KEY) is not None


def test_catalogue_survives_reload(store, engine):
    challenge = engine.get_level(1).physical_challenges[0]
    engine.complete_physical_challenge(challenge.id, 1)

    reloaded = QuestEngine(store)

    assert reloaded.get_level(1).physical_challenges[0].is_completed is True
    assert len(reloaded.levels) == 3


def test_available_levels_and_current_level(engine):
    assert [level.number for level in engine.get_available_levels()] == [1]
    assert engine.current_level.number == 1


def test_unlock_level(engine):
    assert engine.unlock_level(3) is True
    assert engine.get_level(3).is_unlocked is True
    assert engine.unlock_level(42) is False


# ============================================================================
# Challenge Completion Tests
# ============================================================================

def test_complete_physical_challenge(engine):
    challenge = engine.get_level(1).physical_challenges[0]

    completed = engine.complete_physical_challenge(challenge.id, 1)

    assert completed is not None
    assert completed.id == challenge.id
    assert engine.get_level(1).physical_challenges[0].is_completed is True


def test_complete_challenge_twice_reports_no_change(engine):
    challenge = engine.get_level(1).physical_challenges[0]
    engine.complete_physical_challenge(challenge.id, 1)

    assert engine.complete_physical_challenge(challenge.id, 1) is None


def test_complete_challenge_accepts_string_id(engine):
    challenge = engine.get_level(1).mindfulness_challenges[0]

    assert engine.complete_mindfulness_challenge(str(challenge.id), 1) is not None


def test_complete_challenge_unknown_pair_is_noop(engine):
    """Unknown ids or wrong level numbers change nothing"""
    challenge = engine.get_level(1).physical_challenges[0]

    assert engine.complete_physical_challenge(uuid4(), 1) is None
    assert engine.complete_physical_challenge(challenge.id, 2) is None
    assert engine.complete_physical_challenge(challenge.id, 99) is None
    # A physical id is not a mindfulness id
    assert engine.complete_mindfulness_challenge(challenge.id, 1) is None
    assert engine.get_level_progress(1) == 0.0


def test_complete_challenge_malformed_id(engine):
    with pytest.raises(ValidationError):
        engine.complete_physical_challenge("not-a-uuid", 1)


# ============================================================================
# Progress Tests
# ============================================================================

def test_level_progress_partial(engine):
    challenge = engine.get_level(1).physical_challenges[0]
    engine.complete_physical_challenge(challenge.id, 1)

    assert engine.get_level_progress(1) == 0.5
    assert engine.is_level_completable(1) is False


def test_level_progress_reaches_one_exactly_when_completable(engine):
    _complete_all(engine, 1)

    assert engine.get_level_progress(1) == 1.0
    assert engine.is_level_completable(1) is True


def test_empty_level_never_completable(engine):
    """A level with zero challenges has progress 0 and cannot be completed"""
    assert engine.get_level_progress(3) == 0.0
    assert engine.is_level_completable(3) is False

    engine.unlock_level(3)
    assert engine.complete_level(3) is None


def test_level_with_only_physical_challenges(engine):
    """An empty mindfulness list does not block completion"""
    challenge = engine.get_level(2).physical_challenges[0]
    engine.complete_physical_challenge(challenge.id, 2)

    assert engine.is_level_completable(2) is True


def test_pure_helpers_on_mindfulness_only_level():
    level = Level(
        number=1,
        title="Calm",
        theme=LevelTheme.OCEAN,
        mindfulness_challenges=[
            MindfulnessChallenge(title="A", duration=5, type=MindfulnessType.GRATITUDE, is_completed=True),
            MindfulnessChallenge(title="B", duration=5, type=MindfulnessType.MEDITATION),
        ],
    )

    assert get_level_progress(level) == 0.5
    assert is_level_completable(level) is False


def test_total_progress(engine):
    assert engine.get_total_progress() == 0.0

    _complete_all(engine, 1)
    engine.complete_level(1)

    assert engine.get_total_progress() == pytest.approx(1 / 3)


# ============================================================================
# Level Completion Tests
# ============================================================================

def test_complete_level_unlocks_next(engine):
    _complete_all(engine, 1)

    completed = engine.complete_level(1)

    assert completed is not None
    assert completed.is_completed is True
    assert engine.get_level(1).is_completed is True
    assert engine.get_level(2).is_unlocked is True
    assert engine.current_level.number == 2


def test_complete_level_not_completable_is_noop(engine):
    assert engine.complete_level(1) is None
    assert engine.get_level(1).is_completed is False
    assert engine.get_level(2).is_unlocked is False


def test_complete_level_invalid_number_is_noop(engine):
    assert engine.complete_level(0) is None
    assert engine.complete_level(17) is None


def test_complete_locked_level_is_noop(engine):
    """Finished challenges on a locked level do not complete it"""
    _complete_all(engine, 2)

    assert engine.complete_level(2) is None
    assert engine.get_level(2).is_completed is False


def test_complete_level_twice_is_noop(engine):
    _complete_all(engine, 1)
    engine.complete_level(1)

    assert engine.complete_level(1) is None


def test_complete_last_level(store):
    level = Level(
        number=1,
        title="Solo",
        theme=LevelTheme.CITY,
        mindfulness_challenges=[
            MindfulnessChallenge(title="Only", duration=1, type=MindfulnessType.VISUALIZATION),
        ],
        is_unlocked=True,
    )
    engine = QuestEngine(store, levels=[level])
    engine.complete_mindfulness_challenge(level.mindfulness_challenges[0].id, 1)

    assert engine.complete_level(1) is not None
    assert engine.current_level is None
    assert engine.get_total_progress() == 1.0


def test_snapshots_are_detached(engine):
    level = engine.get_level(1)
    level.physical_challenges[0].is_completed = True

    assert engine.get_level(1).physical_challenges[0].is_completed is False
