"""
Service Container - Dependency Injection Container

Builds each engine component once and hands it out by reference.
Components are lazy-loaded on first access; the container owns their
lifecycle and tears them down in shutdown().

There is no module-level instance: the entry point creates the container
and passes it (or the services it needs) to consumers.
"""

from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Callable, Optional
import logging

from healthquest.config import DATA_PATH, SESSION_GRACE_SECONDS, SESSION_TICK_SECONDS
from healthquest.storage.json_store import JsonStore

logger = logging.getLogger(__name__)


@dataclass
class ServiceContainer:
    """
    Simple dependency injection container for the engine.

    Infrastructure dependencies (store, scheduler, clock) are injected;
    services are lazy-loaded via properties.
    """

    # Infrastructure dependencies (injected)
    store: JsonStore
    scheduler: Optional[object] = None  # AsyncioScheduler when None
    clock: Callable[[], datetime] = datetime.now
    tick_seconds: float = SESSION_TICK_SECONDS
    grace_seconds: float = SESSION_GRACE_SECONDS

    # Services (lazy-loaded via properties)
    _activity_ledger: Optional[object] = field(default=None, init=False, repr=False)
    _progression: Optional[object] = field(default=None, init=False, repr=False)
    _quest_engine: Optional[object] = field(default=None, init=False, repr=False)
    _session_machine: Optional[object] = field(default=None, init=False, repr=False)
    _gamification_service: Optional[object] = field(default=None, init=False, repr=False)

    @property
    def activity_ledger(self):
        """Get ActivityLedger instance (lazy-loaded)"""
        if self._activity_ledger is None:
            from healthquest.services.activity_ledger import ActivityLedger
            self._activity_ledger = ActivityLedger(self.store, clock=self.clock)
            logger.debug("ActivityLedger instantiated")
        return self._activity_ledger

    @property
    def progression(self):
        """Get ProgressionLedger instance (lazy-loaded)"""
        if self._progression is None:
            from healthquest.gamification.progression import ProgressionLedger
            self._progression = ProgressionLedger(self.store)
            logger.debug("ProgressionLedger instantiated")
        return self._progression

    @property
    def quest_engine(self):
        """Get QuestEngine instance (lazy-loaded)"""
        if self._quest_engine is None:
            from healthquest.gamification.quest_engine import QuestEngine
            self._quest_engine = QuestEngine(self.store)
            logger.debug("QuestEngine instantiated")
        return self._quest_engine

    @property
    def session_machine(self):
        """Get MindfulnessSessionMachine instance (lazy-loaded)"""
        if self._session_machine is None:
            from healthquest.services.mindfulness import MindfulnessSessionMachine
            self._session_machine = MindfulnessSessionMachine(
                scheduler=self.scheduler,
                tick_seconds=self.tick_seconds,
                grace_seconds=self.grace_seconds,
                clock=self.clock
            )
            logger.debug("MindfulnessSessionMachine instantiated")
        return self._session_machine

    @property
    def gamification_service(self):
        """Get GamificationService instance (lazy-loaded)"""
        if self._gamification_service is None:
            from healthquest.services.gamification_service import GamificationService
            self._gamification_service = GamificationService(
                self.activity_ledger,
                self.progression,
                self.quest_engine,
                self.session_machine
            )
            logger.debug("GamificationService instantiated")
        return self._gamification_service

    def shutdown(self) -> None:
        """Cancel session timers and detach event subscribers"""
        if self._gamification_service is not None:
            self._gamification_service.close()
        if self._session_machine is not None:
            self._session_machine.shutdown()
        if self._activity_ledger is not None:
            self._activity_ledger.events.clear()
        logger.info("Service container shut down")


def create_container(
    data_path: Path = DATA_PATH,
    scheduler: Optional[object] = None,
    clock: Callable[[], datetime] = datetime.now
) -> ServiceContainer:
    """
    Build the service container.

    Should be called once at process start.

    Args:
        data_path: Directory holding the persisted records
        scheduler: Timer provider for sessions (asyncio loop when None)
        clock: Current local datetime provider

    Returns:
        ServiceContainer: The initialized container
    """
    container = ServiceContainer(
        store=JsonStore(data_path),
        scheduler=scheduler,
        clock=clock
    )
    logger.info(f"Service container initialized (data path: {data_path})")
    return container
