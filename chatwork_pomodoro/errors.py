"""Error classifications for the notifier.

Lower layers raise these; only the entry point in ``chatwork_pomodoro.app``
turns them into process exit codes.
"""

from typing import Any, Dict, Optional


class NotifierError(Exception):
    """Base class for all notifier errors."""

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.context = context or {}


class ConfigError(NotifierError):
    """Missing or invalid environment value. Fatal at startup."""

    def __init__(self, message: str, key: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.key = key


class TransportError(NotifierError):
    """Chat service call failed (network, decoding, or HTTP status)."""

    def __init__(self, message: str, status: Optional[int] = None,
                 operation: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.status = status
        self.operation = operation


class LogIOError(NotifierError):
    """Message log could not be created, written, read or removed."""

    def __init__(self, message: str, operation: Optional[str] = None,
                 target: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.operation = operation
        self.target = target
