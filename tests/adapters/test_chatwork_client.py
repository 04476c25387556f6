"""Unit tests for ChatworkClient."""

import aiohttp
import pytest
from unittest.mock import patch

from chatwork_pomodoro.adapters.chatwork import ChatworkClient
from chatwork_pomodoro.config import CHATWORK_API_BASE
from chatwork_pomodoro.errors import TransportError

SESSION = "chatwork_pomodoro.adapters.chatwork.client.aiohttp.ClientSession"


def _mock_aiohttp_session(responses, calls=None, error=None):
    """Return a class replacing aiohttp.ClientSession.

    responses: list of (status, payload) consumed in order by post()/delete().
    A payload that is an Exception is raised from json().
    calls: optional list collecting (method, url, kwargs).
    error: exception raised by post()/delete() instead of responding.
    """
    call_idx = 0

    class FakeResponse:
        def __init__(self, status, payload):
            self.status = status
            self._payload = payload

        async def json(self):
            if isinstance(self._payload, Exception):
                raise self._payload
            return self._payload

        async def text(self):
            return str(self._payload)

        async def __aenter__(self):
            return self

        async def __aexit__(self, *args):
            pass

    class FakeSession:
        def _respond(self, method, url, kwargs):
            nonlocal call_idx
            if calls is not None:
                calls.append((method, url, kwargs))
            if error is not None:
                raise error
            status, payload = responses[call_idx]
            call_idx += 1
            return FakeResponse(status, payload)

        def post(self, url, **kwargs):
            return self._respond("POST", url, kwargs)

        def delete(self, url, **kwargs):
            return self._respond("DELETE", url, kwargs)

        async def __aenter__(self):
            return self

        async def __aexit__(self, *args):
            pass

    return FakeSession


@pytest.fixture
def client():
    return ChatworkClient(token="tok456", room_id="123")


class TestUrls:
    def test_messages_url(self, client):
        assert client.messages_url == f"{CHATWORK_API_BASE}/rooms/123/messages"

    def test_api_base_trailing_slash(self):
        c = ChatworkClient(token="t", room_id="9", api_base="http://localhost:8080/v2/")
        assert c.messages_url == "http://localhost:8080/v2/rooms/9/messages"


class TestSend:
    @pytest.mark.asyncio
    async def test_send_success(self, client):
        calls = []
        session = _mock_aiohttp_session([(200, {"message_id": "1681234567"})], calls=calls)
        with patch(SESSION, session):
            message_id = await client.send("[toall]\nWorking time! ~10:25")

        assert message_id == "1681234567"
        method, url, kwargs = calls[0]
        assert method == "POST"
        assert url == f"{CHATWORK_API_BASE}/rooms/123/messages"
        assert kwargs["headers"] == {"X-ChatWorkToken": "tok456", "Accept": "application/json"}
        assert kwargs["data"] == {"body": "[toall]\nWorking time! ~10:25", "self_unread": "1"}

    @pytest.mark.asyncio
    async def test_numeric_id_becomes_string(self, client):
        session = _mock_aiohttp_session([(200, {"message_id": 42})])
        with patch(SESSION, session):
            assert await client.send("hi") == "42"

    @pytest.mark.asyncio
    async def test_http_error(self, client):
        session = _mock_aiohttp_session([(401, {"errors": ["Invalid API token"]})])
        with patch(SESSION, session):
            with pytest.raises(TransportError) as exc:
                await client.send("hi")
        assert exc.value.status == 401
        assert exc.value.operation == "send"
        assert "Invalid API token" in str(exc.value)

    @pytest.mark.asyncio
    async def test_missing_message_id(self, client):
        session = _mock_aiohttp_session([(200, {"unexpected": True})])
        with patch(SESSION, session):
            with pytest.raises(TransportError, match="No message_id"):
                await client.send("hi")

    @pytest.mark.asyncio
    async def test_undecodable_body(self, client):
        session = _mock_aiohttp_session([(200, ValueError("Expecting value"))])
        with patch(SESSION, session):
            with pytest.raises(TransportError, match="Expecting value"):
                await client.send("hi")

    @pytest.mark.asyncio
    async def test_network_error(self, client):
        session = _mock_aiohttp_session([], error=aiohttp.ClientConnectionError("connection refused"))
        with patch(SESSION, session):
            with pytest.raises(TransportError, match="connection refused") as exc:
                await client.send("hi")
        assert exc.value.status is None


class TestDelete:
    @pytest.mark.asyncio
    async def test_delete_success(self, client):
        calls = []
        session = _mock_aiohttp_session([(200, {"message_id": "555"})], calls=calls)
        with patch(SESSION, session):
            assert await client.delete("555") is None

        method, url, kwargs = calls[0]
        assert method == "DELETE"
        assert url == f"{CHATWORK_API_BASE}/rooms/123/messages/555"
        assert kwargs["headers"]["X-ChatWorkToken"] == "tok456"

    @pytest.mark.asyncio
    async def test_delete_not_found(self, client):
        session = _mock_aiohttp_session([(404, {"errors": ["Not found"]})])
        with patch(SESSION, session):
            with pytest.raises(TransportError, match="Failed to delete message: 404") as exc:
                await client.delete("555")
        assert exc.value.status == 404
        assert exc.value.operation == "delete"

    @pytest.mark.asyncio
    async def test_delete_network_error(self, client):
        session = _mock_aiohttp_session([], error=aiohttp.ClientConnectionError("reset"))
        with patch(SESSION, session):
            with pytest.raises(TransportError, match="reset"):
                await client.delete("555")
