"""Storage adapters."""

from chatwork_pomodoro.adapters.storage.message_log import MessageLog

__all__ = ["MessageLog"]
