"""Configuration management"""
import os
from pathlib import Path
from dotenv import load_dotenv

from healthquest.exceptions import ConfigurationError

load_dotenv()

# Storage
DATA_PATH: Path = Path(os.getenv("DATA_PATH", "./data"))

# Logging
LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

# Mindfulness sessions
# - SESSION_TICK_SECONDS: interval between countdown ticks
# - SESSION_GRACE_SECONDS: how long a completed session stays visible before it is cleared
SESSION_TICK_SECONDS: float = float(os.getenv("SESSION_TICK_SECONDS", "1.0"))
SESSION_GRACE_SECONDS: float = float(os.getenv("SESSION_GRACE_SECONDS", "2.0"))

_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


# Validation
def validate_config() -> None:
    """Validate configuration values"""
    if LOG_LEVEL.upper() not in _LOG_LEVELS:
        raise ConfigurationError(
            f"Unknown log level: {LOG_LEVEL}",
            config_key="LOG_LEVEL"
        )
    if SESSION_TICK_SECONDS <= 0:
        raise ConfigurationError(
            "SESSION_TICK_SECONDS must be positive",
            config_key="SESSION_TICK_SECONDS"
        )
    if SESSION_GRACE_SECONDS < 0:
        raise ConfigurationError(
            "SESSION_GRACE_SECONDS must not be negative",
            config_key="SESSION_GRACE_SECONDS"
        )
