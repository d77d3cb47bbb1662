"""
Service Layer Package

Services sit between the rendering layer and the ledgers.

Core Services:
- ActivityLedger: Activity logs, mood/energy check-ins, daily progress
- MindfulnessSessionMachine: Timed guided sessions
- GamificationService: XP award policy, challenge confirmation, level rewards
"""

from healthquest.services.container import ServiceContainer, create_container

__all__ = [
    "ServiceContainer",
    "create_container",
]
