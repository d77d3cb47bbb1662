"""
GamificationService - Gamification Business Logic

Connects user actions to the XP award policy. The rendering layer calls
this service; it routes the action to the activity ledger, the session
machine or the quest engine and pushes the resulting awards into the
progression ledger.

Awards for ledger and session activity are driven by their events, so the
policy holds no matter which entry point recorded the activity.
"""

import logging
from typing import Any, Callable, Dict, List, Optional

from healthquest.events import (
    ActivityLogged,
    EngineEvent,
    MoodCheckedIn,
    SessionCompleted,
    StepsLogged,
)
from healthquest.gamification.progression import ProgressionLedger
from healthquest.gamification.quest_engine import ChallengeId, QuestEngine
from healthquest.gamification.xp_system import get_level_info, get_xp_for_activity
from healthquest.models.activity import EnergyLevel, MiniGameResult, MoodLevel
from healthquest.models.level import PhysicalChallenge
from healthquest.models.session import MindfulnessSession
from healthquest.models.user import ActivityType
from healthquest.services.activity_ledger import ActivityLedger
from healthquest.services.mindfulness import MindfulnessSessionMachine

logger = logging.getLogger(__name__)

# Ledger event sources that earn per-minute XP (steps earn per-step XP instead)
_MINUTE_XP_SOURCES = {"activity", "mini_game"}


class GamificationService:
    """
    Service for gamification features.

    Responsibilities:
    - XP awards for activity, steps, mood check-ins and sessions
    - Physical challenge confirmation
    - Level completion rewards
    - Published state snapshot for the rendering layer
    """

    def __init__(
        self,
        activity_ledger: ActivityLedger,
        progression: ProgressionLedger,
        quest_engine: QuestEngine,
        session_machine: MindfulnessSessionMachine
    ):
        self.activity_ledger = activity_ledger
        self.progression = progression
        self.quest_engine = quest_engine
        self.session_machine = session_machine

        self._unsubscribers = [
            activity_ledger.events.subscribe(self._on_event),
            session_machine.events.subscribe(self._on_event),
        ]
        logger.debug("GamificationService initialized")

    def close(self) -> None:
        """Stop listening to ledger and session events"""
        for unsubscribe in self._unsubscribers:
            unsubscribe()
        self._unsubscribers = []

    # ----- event-driven awards -----

    def _on_event(self, event: EngineEvent) -> None:
        if isinstance(event, ActivityLogged):
            if event.source in _MINUTE_XP_SOURCES:
                xp = get_xp_for_activity("activity", minutes=event.entry.duration)
                self.progression.add_experience(xp, source_type=event.source)

        elif isinstance(event, StepsLogged):
            xp = get_xp_for_activity("steps", steps=event.steps)
            self.progression.add_experience(xp, source_type="steps")

        elif isinstance(event, MoodCheckedIn):
            self.progression.add_experience(get_xp_for_activity("mood"), source_type="mood")

        elif isinstance(event, SessionCompleted):
            self._handle_session_completed(event)

    def _handle_session_completed(self, event: SessionCompleted) -> None:
        if event.level_number is not None:
            self.quest_engine.complete_mindfulness_challenge(event.challenge.id, event.level_number)
        self.progression.add_experience(
            get_xp_for_activity("mindfulness"), source_type="mindfulness"
        )

    def _track(self, action: Callable[[], Any]) -> Dict[str, Any]:
        """Run an action and report the XP and level change it caused"""
        before = self.progression.user
        outcome = action()
        after = self.progression.user

        return {
            "result": outcome,
            "xp_awarded": after.total_experience - before.total_experience,
            "level_up": after.current_level > before.current_level,
            "new_level": after.current_level,
        }

    # ----- activity -----

    def log_activity(self, activity_type: ActivityType, minutes: int) -> Dict[str, Any]:
        """
        Log minutes of activity (2 XP per minute)

        Returns:
            {
                'result': ActivityLog,
                'xp_awarded': int,
                'level_up': bool,
                'new_level': int
            }
        """
        return self._track(lambda: self.activity_ledger.quick_log(activity_type, minutes))

    def log_steps(self, steps: int) -> Dict[str, Any]:
        """Log a step count (1 XP per 10 steps)"""
        return self._track(lambda: self.activity_ledger.log_steps(steps))

    def update_mood(self, mood: MoodLevel, note: str = "") -> Dict[str, Any]:
        """Mood check-in (10 XP)"""
        return self._track(lambda: self.activity_ledger.update_mood(mood, note))

    def update_energy(self, energy: EnergyLevel) -> Dict[str, Any]:
        return self._track(lambda: self.activity_ledger.update_energy(energy))

    def complete_mini_game(self, result: MiniGameResult) -> Dict[str, Any]:
        return self._track(lambda: self.activity_ledger.complete_mini_game(result))

    # ----- challenges -----

    def get_challenge_progress(self, challenge: PhysicalChallenge) -> float:
        """Today's progress toward a physical challenge, from its activity type"""
        return self.activity_ledger.get_todays_progress(challenge.activity_type)

    def confirm_physical_challenge(self, challenge_id: ChallengeId, level_number: int) -> Dict[str, Any]:
        """
        Confirm a physical challenge whose daily progress reached 100% (50 XP).

        Unknown, already completed or unfinished challenges are ignored.

        Returns:
            {
                'completed': bool,
                'xp_awarded': int,
                'level_up': bool,
                'new_level': int,
                'level_completable': bool
            }
        """
        result = {
            "completed": False,
            "xp_awarded": 0,
            "level_up": False,
            "new_level": self.progression.user.current_level,
            "level_completable": self.quest_engine.is_level_completable(level_number),
        }

        challenge = self.quest_engine.find_physical_challenge(challenge_id, level_number)
        if challenge is None or challenge.is_completed:
            return result

        progress = self.get_challenge_progress(challenge)
        if progress < 1.0:
            logger.debug(
                f"Challenge '{challenge.title}' not confirmed: progress {progress:.0%}"
            )
            return result

        if self.quest_engine.complete_physical_challenge(challenge.id, level_number) is None:
            return result

        award = self.progression.add_experience(
            get_xp_for_activity("physical_challenge"), source_type="physical_challenge"
        )
        result.update({
            "completed": True,
            "xp_awarded": award["xp_awarded"],
            "level_up": award["leveled_up"],
            "new_level": award["new_level"],
            "level_completable": self.quest_engine.is_level_completable(level_number),
        })
        return result

    # ----- sessions -----

    def start_session(self, challenge_id: ChallengeId, level_number: int) -> Optional[MindfulnessSession]:
        """Start a session for a mindfulness challenge of a level"""
        challenge = self.quest_engine.find_mindfulness_challenge(challenge_id, level_number)
        if challenge is None:
            logger.debug(f"start_session ignored: no challenge {challenge_id} in level {level_number}")
            return None
        return self.session_machine.start(challenge, level_number=level_number)

    # ----- levels -----

    def complete_level(self, level_number: int) -> Dict[str, Any]:
        """
        Complete a level: level_number x 100 XP and the level's rewards as achievements

        Returns:
            {
                'completed': bool,
                'xp_awarded': int,
                'level_up': bool,
                'new_level': int,
                'achievements_unlocked': list,
                'next_level_unlocked': Optional[int]
            }
        """
        result = {
            "completed": False,
            "xp_awarded": 0,
            "level_up": False,
            "new_level": self.progression.user.current_level,
            "achievements_unlocked": [],
            "next_level_unlocked": None,
        }

        level = self.quest_engine.complete_level(level_number)
        if level is None:
            return result

        award = self.progression.add_experience(
            get_xp_for_activity("level", level_number=level.number), source_type="level"
        )

        unlocked: List[str] = []
        for reward in level.rewards:
            if self.progression.add_achievement(reward):
                unlocked.append(reward)

        next_level = self.quest_engine.get_level(level.number + 1)

        result.update({
            "completed": True,
            "xp_awarded": award["xp_awarded"],
            "level_up": award["leveled_up"],
            "new_level": award["new_level"],
            "achievements_unlocked": unlocked,
            "next_level_unlocked": next_level.number if next_level else None,
        })
        return result

    # ----- published state -----

    def snapshot(self) -> Dict[str, Any]:
        """Everything the rendering layer displays, as plain data"""
        user = self.progression.user
        current_level = self.quest_engine.current_level
        machine = self.session_machine
        session = machine.session

        return {
            "user": user.model_dump(mode="json"),
            "level_info": get_level_info(user.total_experience),
            "progress_to_next_level": self.progression.progress_to_next_level(),
            "levels": [level.model_dump(mode="json") for level in self.quest_engine.levels],
            "current_level": current_level.number if current_level else None,
            "total_progress": self.quest_engine.get_total_progress(),
            "today": {
                "active_minutes": self.activity_ledger.get_total_active_minutes(),
                "steps": self.activity_ledger.get_total_steps(),
                "weekly_streak": self.activity_ledger.get_weekly_streak(),
                "mood": self.activity_ledger.current_mood.value,
                "progress": {
                    activity_type.value: self.activity_ledger.get_todays_progress(activity_type)
                    for activity_type in ActivityType
                },
            },
            "session": {
                "state": machine.state.value,
                "is_active": machine.is_active,
                "remaining_seconds": machine.remaining_seconds,
                "session": session.model_dump(mode="json") if session else None,
                "guidance_text": machine.guidance_text,
                "breathing_phase": machine.breathing_phase.value if machine.breathing_phase else None,
            },
        }
