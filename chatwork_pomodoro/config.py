"""Configuration read once from the environment (and a local .env file)."""

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from dotenv import load_dotenv

from chatwork_pomodoro.errors import ConfigError

load_dotenv()

CHATWORK_API_BASE = "https://api.chatwork.com/v2"
DEFAULT_MESSAGE_ID_LOG = "message-id.log"
DEFAULT_WORKING_MINUTES = 25
DEFAULT_RESTING_MINUTES = 5
DEFAULT_WORKING_MESSAGE = "Working time! ~%time%"
DEFAULT_RESTING_MESSAGE = "Resting time! ~%time%"

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
_LOG_FORMATS = ("console", "json")


def _require(environ: Mapping[str, str], key: str) -> str:
    value = environ.get(key, "").strip()
    if not value:
        raise ConfigError(f"{key} is not set", key=key)
    return value


def _minutes(environ: Mapping[str, str], key: str, default: int) -> int:
    raw = environ.get(key)
    if raw is None:
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ConfigError(f"{key} is not a number: {raw!r}", key=key)
    if value < 1:
        raise ConfigError(f"{key} must be greater than 0 (got {value})", key=key)
    return value


@dataclass(frozen=True)
class AppConfig:
    """Immutable process configuration."""

    token: str
    room_id: str
    working_minutes: int = DEFAULT_WORKING_MINUTES
    resting_minutes: int = DEFAULT_RESTING_MINUTES
    working_message: str = DEFAULT_WORKING_MESSAGE
    resting_message: str = DEFAULT_RESTING_MESSAGE
    message_log_path: str = DEFAULT_MESSAGE_ID_LOG
    api_base: str = CHATWORK_API_BASE

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "AppConfig":
        """Create AppConfig from environment variables.

        Raises ConfigError for a missing token or room id, or for a duration
        that is not an integer >= 1.
        """
        env = os.environ if environ is None else environ
        return cls(
            token=_require(env, "CHATWORK_API_TOKEN"),
            room_id=_require(env, "CHATWORK_ROOM_ID"),
            working_minutes=_minutes(env, "WORKING_MINUTES", DEFAULT_WORKING_MINUTES),
            resting_minutes=_minutes(env, "RESTING_MINUTES", DEFAULT_RESTING_MINUTES),
            working_message=env.get("MESSAGE_ON_START_WORKING", DEFAULT_WORKING_MESSAGE),
            resting_message=env.get("MESSAGE_ON_START_RESTING", DEFAULT_RESTING_MESSAGE),
            message_log_path=env.get("MESSAGE_ID_LOG", DEFAULT_MESSAGE_ID_LOG) or DEFAULT_MESSAGE_ID_LOG,
            api_base=(env.get("CHATWORK_API_BASE") or CHATWORK_API_BASE).rstrip("/"),
        )


def logging_level(environ: Mapping[str, str]) -> str:
    """LOG_LEVEL, falling back to INFO for unknown names."""
    level = environ.get("LOG_LEVEL", "INFO").strip().upper()
    return level if level in _LOG_LEVELS else "INFO"


def logging_format(environ: Mapping[str, str]) -> str:
    fmt = environ.get("LOG_FORMAT", "console").strip().lower()
    return fmt if fmt in _LOG_FORMATS else "console"
