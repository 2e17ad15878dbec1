"""
Configuration for the odds challenge bot.
"""

import os
from pathlib import Path
from typing import Any, Dict, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field, ValidationError, model_validator


ENV_FIELDS = {
    "GAME_TIMEOUT_MS": "game_timeout_ms",
    "MIN_ODDS_MAX": "min_odds_max",
    "MAX_ODDS_MAX": "max_odds_max",
    "LOG_LEVEL": "log_level",
    "LOG_TO_FILE": "log_to_file",
    "LOGS_PATH": "logs_path",
}


class ConfigError(Exception):
    """Raised when the environment does not describe a valid configuration."""

    def __init__(self, field_errors: Dict[str, str]):
        self.field_errors = field_errors
        details = ", ".join(f"{name}: {msg}" for name, msg in field_errors.items())
        super().__init__(f"Invalid configuration: {details}")


class Config(BaseModel):
    """Runtime configuration."""

    # Game settings
    game_timeout_ms: int = Field(default=120_000, gt=0, description="End-to-end lifetime of a challenge")
    min_odds_max: int = Field(default=2, ge=2, description="Smallest upper bound a challenger may choose")
    max_odds_max: int = Field(default=10_000, ge=2, description="Largest upper bound a challenger may choose")

    # Logging
    log_level: str = Field(default="INFO", description="Root log level")
    log_to_file: bool = Field(default=False, description="Write JSON logs to logs_path")
    logs_path: Path = Field(default=Path("logs"), description="Directory for log files")

    @model_validator(mode="after")
    def check_odds_bounds(self) -> "Config":
        if self.min_odds_max > self.max_odds_max:
            raise ValueError("MIN_ODDS_MAX must not exceed MAX_ODDS_MAX")
        return self


def load_config(env: Optional[Dict[str, str]] = None) -> Config:
    """Build a configuration from environment variables.

    Values missing from the environment fall back to the model defaults.
    When ``env`` is None the process environment is used, after loading
    any ``.env`` file in the working directory.
    """
    if env is None:
        load_dotenv()
        env = dict(os.environ)

    values: Dict[str, Any] = {
        field: env[name] for name, field in ENV_FIELDS.items() if env.get(name)
    }

    try:
        return Config(**values)
    except ValidationError as e:
        field_errors = {}
        for error in e.errors():
            loc = error["loc"][0] if error["loc"] else "config"
            field_errors[str(loc)] = error["msg"]
        raise ConfigError(field_errors) from e


_config: Optional[Config] = None


def get_config() -> Config:
    """Get the process-wide configuration, loading it on first use."""
    global _config
    if _config is None:
        _config = load_config()
    return _config


def reset_config() -> None:
    """Forget the cached configuration."""
    global _config
    _config = None
