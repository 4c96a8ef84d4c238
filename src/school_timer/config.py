"""Timer configuration loaded from environment variables."""

from pydantic import Field
from pydantic_settings import BaseSettings


class TimerConfig(BaseSettings):
    """Timer configuration loaded from environment variables.

    Settings are loaded from environment variables with sensible defaults.
    For local development, create a .env file in the project root.
    """

    # Paths
    state_dir: str = Field(
        default="data/state",
        description="Directory holding schedule.json and preferences.json",
    )

    # Polling
    tick_interval_seconds: float = Field(
        default=1.0,
        gt=0,
        description="Seconds between two status derivations",
    )

    # Logging
    log_json: bool = Field(
        default=False,
        description="Output logs in JSON format (for production)",
    )
    log_level: str = Field(
        default="INFO",
        description="Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    )

    model_config = {
        "env_prefix": "",
        "case_sensitive": False,
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }


# Singleton pattern
_config: TimerConfig | None = None


def get_config() -> TimerConfig:
    """Get the timer configuration singleton.

    Returns:
        TimerConfig: Timer configuration instance
    """
    global _config
    if _config is None:
        _config = TimerConfig()
    return _config
