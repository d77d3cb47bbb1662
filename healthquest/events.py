"""
Engine Events

Components publish what happened (activity logged, mood checked in, session
completed) through an EventEmitter instead of exposing observable fields.
The gamification service subscribes to award XP; the rendering layer may
subscribe to refresh its view.

Usage:
    unsubscribe = ledger.events.subscribe(on_event)
    ...
    unsubscribe()
"""
import logging
from typing import Callable, List, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict

from healthquest.models.activity import ActivityLog, MoodLevel
from healthquest.models.level import MindfulnessChallenge

logger = logging.getLogger(__name__)


class EngineEvent(BaseModel):
    """Base class for engine events"""
    model_config = ConfigDict(frozen=True)


class ActivityLogged(EngineEvent):
    """An activity entry was appended to today's record"""
    entry: ActivityLog
    source: str = "activity"  # activity, steps, mini_game


class StepsLogged(EngineEvent):
    """A step count was logged (the derived walking entry is published separately)"""
    steps: int
    entry_id: UUID


class MoodCheckedIn(EngineEvent):
    """Today's mood was recorded"""
    mood: MoodLevel


class SessionCompleted(EngineEvent):
    """A mindfulness session ran to zero"""
    challenge: MindfulnessChallenge
    level_number: Optional[int] = None
    duration_seconds: int


Subscriber = Callable[[EngineEvent], None]


class EventEmitter:
    """Synchronous publish/subscribe for engine events"""

    def __init__(self):
        self._subscribers: List[Subscriber] = []

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        """
        Register a callback for every emitted event.

        Returns:
            A function that removes the subscription
        """
        self._subscribers.append(callback)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    def emit(self, event: EngineEvent) -> None:
        """Deliver an event to all subscribers in registration order"""
        for callback in list(self._subscribers):
            try:
                callback(event)
            except Exception as e:
                # One broken subscriber must not block the rest
                logger.error(
                    f"Subscriber {callback!r} failed handling {type(event).__name__}: {e}",
                    exc_info=True
                )

    def clear(self) -> None:
        """Drop all subscribers"""
        self._subscribers.clear()
