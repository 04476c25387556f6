"""Outbound ports — interfaces the cycle and shutdown logic depend on."""

from typing import List, Protocol, runtime_checkable


@runtime_checkable
class ChatTransport(Protocol):
    """Interface for the remote chat room.

    Both operations raise TransportError on failure. Room and credentials
    are bound by the adapter.
    """

    async def send(self, message: str) -> str: ...
    async def delete(self, message_id: str) -> None: ...


@runtime_checkable
class MessageLogPort(Protocol):
    """Interface for the append-only record of sent message ids.

    All operations raise LogIOError on failure.
    """

    def initialize(self) -> None: ...
    def append(self, message_id: str) -> None: ...
    def read_all(self) -> List[str]: ...
    def remove(self) -> None: ...
