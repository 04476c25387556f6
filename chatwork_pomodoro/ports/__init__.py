"""Port interfaces (Hexagonal Architecture)."""

from chatwork_pomodoro.ports.outbound import ChatTransport, MessageLogPort

__all__ = [
    "ChatTransport",
    "MessageLogPort",
]
