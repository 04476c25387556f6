"""Chatwork Pomodoro — working/resting broadcasts to a Chatwork room."""

__version__ = "0.1.0"

from chatwork_pomodoro.config import AppConfig
from chatwork_pomodoro.errors import ConfigError, LogIOError, NotifierError, TransportError
from chatwork_pomodoro.domain import CycleController, CycleState, ShutdownHandler
from chatwork_pomodoro.adapters.chatwork import ChatworkClient
from chatwork_pomodoro.adapters.storage import MessageLog

__all__ = [
    "AppConfig",
    "ConfigError",
    "LogIOError",
    "NotifierError",
    "TransportError",
    "CycleController",
    "CycleState",
    "ShutdownHandler",
    "ChatworkClient",
    "MessageLog",
]
