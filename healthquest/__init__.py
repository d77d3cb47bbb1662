"""HealthQuest progression and session engine"""

__version__ = "0.1.0"
