"""Chatwork client using aiohttp — implements ChatTransport."""

import asyncio

import aiohttp

from chatwork_pomodoro.config import CHATWORK_API_BASE
from chatwork_pomodoro.errors import TransportError


class ChatworkClient:
    """Async Chatwork REST API v2 client bound to one room.

    Each call is a single attempt: no retry, no timeout beyond aiohttp's own.
    """

    def __init__(self, token: str, room_id: str, api_base: str = CHATWORK_API_BASE):
        self._token = token
        self._room_id = room_id
        self._api_base = api_base.rstrip("/")

    @property
    def messages_url(self) -> str:
        return f"{self._api_base}/rooms/{self._room_id}/messages"

    def _headers(self) -> dict:
        return {
            "X-ChatWorkToken": self._token,
            "Accept": "application/json",
        }

    async def send(self, message: str) -> str:
        """Post ``message`` to the room and return the new message id."""
        data = {"body": message, "self_unread": "1"}
        try:
            async with aiohttp.ClientSession() as session:
                async with session.post(self.messages_url, headers=self._headers(), data=data) as resp:
                    if resp.status >= 400:
                        body = await resp.text()
                        raise TransportError(f"HTTP {resp.status}: {body}",
                                             status=resp.status, operation="send")
                    payload = await resp.json()
        except (aiohttp.ClientError, asyncio.TimeoutError, ValueError) as e:
            raise TransportError(str(e) or type(e).__name__, operation="send") from e

        message_id = payload.get("message_id") if isinstance(payload, dict) else None
        if not message_id:
            raise TransportError(f"No message_id in response: {payload!r}", operation="send")
        return str(message_id)

    async def delete(self, message_id: str) -> None:
        url = f"{self.messages_url}/{message_id}"
        try:
            async with aiohttp.ClientSession() as session:
                async with session.delete(url, headers=self._headers()) as resp:
                    status = resp.status
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise TransportError(str(e) or type(e).__name__, operation="delete") from e

        if not 200 <= status < 300:
            raise TransportError(f"Failed to delete message: {status}",
                                 status=status, operation="delete")
