"""
Mindfulness Session Machine

Runs at most one timed session at a time.

States:
    idle -> running -> (paused <-> running) -> completed -> idle

- start() is only accepted from idle
- every tick while running counts one second down; reaching zero completes
  the session, publishes SessionCompleted and clears the session after a
  short grace period so the UI can show the completion state
- end() is the user-cancel path and never awards completion credit

The machine owns a single repeating tick timer; it is cancelled on pause,
end and completion, so no tick is ever delivered after those.
"""

import logging
from datetime import datetime
from typing import Callable, Optional

from healthquest.config import SESSION_GRACE_SECONDS, SESSION_TICK_SECONDS
from healthquest.events import EventEmitter, SessionCompleted
from healthquest.models.level import MindfulnessChallenge, MindfulnessType
from healthquest.models.session import (
    BreathingPhase,
    MindfulnessSession,
    SessionPhase,
    SessionState,
)
from healthquest.utils.timers import AsyncioScheduler, TimerHandle

logger = logging.getLogger(__name__)

GUIDANCE_TEXT = {
    MindfulnessType.BREATHING: {
        SessionPhase.BEGINNING: "Find a comfortable position and close your eyes. We'll start with deep, calming breaths.",
        SessionPhase.MIDDLE: "Breathe in slowly for 4 counts... hold for 4... exhale for 6. Let your body relax with each breath.",
        SessionPhase.END: "Take three final deep breaths. Notice how calm and centered you feel. Slowly open your eyes.",
    },
    MindfulnessType.MEDITATION: {
        SessionPhase.BEGINNING: "Sit comfortably with your spine straight. Close your eyes and begin to notice your natural breath.",
        SessionPhase.MIDDLE: "If thoughts arise, acknowledge them gently and return your focus to your breath. There's no need to judge or change anything.",
        SessionPhase.END: "Gradually bring your awareness back to your surroundings. Wiggle your fingers and toes before opening your eyes.",
    },
    MindfulnessType.GRATITUDE: {
        SessionPhase.BEGINNING: "Take a moment to settle in. Think of something you're grateful for today, no matter how small.",
        SessionPhase.MIDDLE: "Bring to mind three things you appreciate in your life. Feel the warmth and joy these thoughts bring.",
        SessionPhase.END: "Hold onto these feelings of gratitude. Let them fill your heart as you return to your day.",
    },
    MindfulnessType.VISUALIZATION: {
        SessionPhase.BEGINNING: "Close your eyes and imagine a peaceful place where you feel completely safe and relaxed.",
        SessionPhase.MIDDLE: "Explore this peaceful space with all your senses. What do you see, hear, feel, and smell? Make it as vivid as possible.",
        SessionPhase.END: "Know that you can return to this peaceful place anytime you need it. Take a deep breath and slowly open your eyes.",
    },
}

# 4s inhale + 4s hold + 6s exhale
BREATHING_CYCLE_SECONDS = 14


def get_guidance_text(mindfulness_type: MindfulnessType, phase: SessionPhase) -> str:
    return GUIDANCE_TEXT[mindfulness_type][phase]


def get_session_phase(total_seconds: int, remaining_seconds: int) -> SessionPhase:
    """
    Phase of a session from elapsed time: first third is the beginning,
    second third the middle, the rest the end.
    """
    if total_seconds <= 0:
        return SessionPhase.END

    elapsed = total_seconds - remaining_seconds
    if elapsed * 3 < total_seconds:
        return SessionPhase.BEGINNING
    if elapsed * 3 < total_seconds * 2:
        return SessionPhase.MIDDLE
    return SessionPhase.END


def get_breathing_phase(remaining_seconds: int) -> BreathingPhase:
    """Breathing cue for the current second, counted down through a 14s cycle"""
    position = remaining_seconds % BREATHING_CYCLE_SECONDS
    if position >= 10:
        return BreathingPhase.INHALE
    if position >= 6:
        return BreathingPhase.HOLD
    return BreathingPhase.EXHALE


class MindfulnessSessionMachine:
    """
    Timed mindfulness session state machine.

    Args:
        scheduler: Provides call_every/call_later (defaults to the asyncio loop)
        tick_seconds: Interval between countdown ticks
        grace_seconds: Delay before a completed session is cleared
        clock: Returns the current datetime (session start time)
    """

    def __init__(
        self,
        scheduler=None,
        tick_seconds: float = SESSION_TICK_SECONDS,
        grace_seconds: float = SESSION_GRACE_SECONDS,
        clock: Callable[[], datetime] = datetime.now
    ):
        self.scheduler = scheduler or AsyncioScheduler()
        self.tick_seconds = tick_seconds
        self.grace_seconds = grace_seconds
        self.clock = clock
        self.events = EventEmitter()

        self._state = SessionState.IDLE
        self._session: Optional[MindfulnessSession] = None
        self._remaining = 0
        self._tick_timer: Optional[TimerHandle] = None
        self._clear_timer: Optional[TimerHandle] = None

    # ----- published state -----

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def session(self) -> Optional[MindfulnessSession]:
        return self._session.model_copy() if self._session else None

    @property
    def remaining_seconds(self) -> int:
        return self._remaining

    @property
    def is_active(self) -> bool:
        """True only while the countdown is running"""
        return self._state == SessionState.RUNNING

    @property
    def phase(self) -> Optional[SessionPhase]:
        if self._session is None:
            return None
        return get_session_phase(self._session.duration, self._remaining)

    @property
    def guidance_text(self) -> Optional[str]:
        if self._session is None:
            return None
        return get_guidance_text(self._session.challenge.type, self.phase)

    @property
    def breathing_phase(self) -> Optional[BreathingPhase]:
        """Breathing cue, only for breathing sessions"""
        if self._session is None or self._session.challenge.type != MindfulnessType.BREATHING:
            return None
        return get_breathing_phase(self._remaining)

    # ----- commands -----

    def start(
        self, challenge: MindfulnessChallenge, level_number: Optional[int] = None
    ) -> Optional[MindfulnessSession]:
        """
        Start a session for a challenge.

        Returns:
            The new session, or None if another session is still open
        """
        if self._state != SessionState.IDLE:
            logger.debug(f"start ignored: session is {self._state.value}")
            return None

        session = MindfulnessSession(
            challenge=challenge,
            level_number=level_number,
            start_time=self.clock(),
            duration=challenge.duration * 60,
        )
        # Nothing changes unless the tick timer could be scheduled
        self._start_ticking()
        self._session = session
        self._remaining = session.duration
        self._state = SessionState.RUNNING

        logger.info(
            f"Started {challenge.type.value} session '{challenge.title}' "
            f"({self._session.duration}s)"
        )
        return self.session

    def pause(self) -> bool:
        if self._state != SessionState.RUNNING:
            logger.debug(f"pause ignored: session is {self._state.value}")
            return False

        self._stop_ticking()
        self._state = SessionState.PAUSED
        logger.info(f"Paused session with {self._remaining}s remaining")
        return True

    def resume(self) -> bool:
        if self._state != SessionState.PAUSED or self._session is None:
            logger.debug(f"resume ignored: session is {self._state.value}")
            return False

        self._start_ticking()
        self._state = SessionState.RUNNING
        logger.info(f"Resumed session with {self._remaining}s remaining")
        return True

    def end(self) -> bool:
        """Cancel the open session without completion credit"""
        if self._state == SessionState.IDLE:
            logger.debug("end ignored: no session")
            return False

        self._stop_ticking()
        self._cancel_clear()
        self._reset()
        logger.info("Session ended by user")
        return True

    def tick(self) -> None:
        """Count one second down; called by the tick timer"""
        if self._state != SessionState.RUNNING or self._session is None:
            return

        if self._remaining > 0:
            self._remaining -= 1

        if self._remaining == 0:
            self._complete()

    def shutdown(self) -> None:
        """Cancel every timer and drop the session (process teardown)"""
        self._stop_ticking()
        self._cancel_clear()
        self._reset()
        self.events.clear()

    # ----- internals -----

    def _start_ticking(self) -> None:
        # Single active tick timer
        self._stop_ticking()
        self._tick_timer = self.scheduler.call_every(self.tick_seconds, self.tick)

    def _stop_ticking(self) -> None:
        if self._tick_timer is not None:
            self._tick_timer.cancel()
            self._tick_timer = None

    def _cancel_clear(self) -> None:
        if self._clear_timer is not None:
            self._clear_timer.cancel()
            self._clear_timer = None

    def _reset(self) -> None:
        self._session = None
        self._remaining = 0
        self._state = SessionState.IDLE

    def _complete(self) -> None:
        self._stop_ticking()
        self._state = SessionState.COMPLETED
        self._session.is_completed = True

        session = self._session
        logger.info(f"Completed session '{session.challenge.title}'")

        self._clear_timer = self.scheduler.call_later(self.grace_seconds, self._clear_completed)
        self.events.emit(SessionCompleted(
            challenge=session.challenge,
            level_number=session.level_number,
            duration_seconds=session.duration,
        ))

    def _clear_completed(self) -> None:
        self._clear_timer = None
        if self._state == SessionState.COMPLETED:
            self._reset()
            logger.debug("Cleared completed session")
