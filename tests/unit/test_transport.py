"""Tests for the httpx-backed transport."""

import httpx
import pytest

from movie_manager import USER_AGENT
from movie_manager.core.client import HttpxTransport, NetworkError, TMDBClient


def make_transport(handler) -> HttpxTransport:
    return HttpxTransport(transport=httpx.MockTransport(handler))


def corrupt_gzip(request: httpx.Request) -> httpx.Response:
    return httpx.Response(
        200,
        headers={"Content-Encoding": "gzip"},
        stream=httpx.ByteStream(b"not gzip at all"),
    )


class TestHttpxTransport:
    """Test HttpxTransport against httpx's mock transport."""

    @pytest.mark.asyncio
    async def test_returns_status_and_bytes(self):
        """Test that the raw response is handed back unchanged."""
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["method"] = request.method
            seen["user_agent"] = request.headers["User-Agent"]
            return httpx.Response(401, content=b'{"status_code": 7}')

        transport = make_transport(handler)
        response = await transport.send("GET", "https://api.themoviedb.org/3/search/movie?api_key=k")
        await transport.aclose()

        assert response.status_code == 401
        assert response.content == b'{"status_code": 7}'
        assert seen == {"method": "GET", "user_agent": USER_AGENT}

    @pytest.mark.asyncio
    async def test_sends_body_and_headers(self):
        """Test that POST bodies and headers reach the wire."""
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["content"] = request.content
            seen["content_type"] = request.headers["Content-Type"]
            return httpx.Response(200, json={"success": True})

        transport = make_transport(handler)
        await transport.send(
            "DELETE",
            "https://api.themoviedb.org/3/authentication/session?api_key=k",
            headers={"Content-Type": "application/json"},
            content=b'{"session_id":"s"}',
        )
        await transport.aclose()

        assert seen == {"content": b'{"session_id":"s"}', "content_type": "application/json"}

    @pytest.mark.asyncio
    async def test_connect_error_becomes_network_error(self):
        """Test that transport exceptions are wrapped with their cause."""
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        transport = make_transport(handler)
        with pytest.raises(NetworkError) as exc_info:
            await transport.send("GET", "https://api.themoviedb.org/3/authentication/token/new")
        await transport.aclose()

        assert isinstance(exc_info.value.original_error, httpx.ConnectError)

    @pytest.mark.asyncio
    async def test_timeout_becomes_network_error(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("timed out", request=request)

        transport = make_transport(handler)
        with pytest.raises(NetworkError):
            await transport.send("GET", "https://api.themoviedb.org/3/authentication/token/new")
        await transport.aclose()

    @pytest.mark.asyncio
    async def test_corrupt_encoding_becomes_network_error(self):
        """Test that a body httpx cannot decompress is wrapped too."""
        transport = make_transport(corrupt_gzip)
        with pytest.raises(NetworkError) as exc_info:
            await transport.send("GET", "https://api.themoviedb.org/3/search/movie?api_key=k")
        await transport.aclose()

        assert isinstance(exc_info.value.original_error, httpx.DecodingError)

    @pytest.mark.asyncio
    async def test_corrupt_encoding_through_client(self):
        """Test that reads raise NetworkError and toggles return False."""
        async with TMDBClient("k", transport=make_transport(corrupt_gzip)) as client:
            assert await client.modify_watchlist(1, True) is False
            with pytest.raises(NetworkError):
                await client.search("alien")

    @pytest.mark.asyncio
    async def test_does_not_close_injected_client(self):
        """Test that a caller-owned AsyncClient stays open."""
        client = httpx.AsyncClient(transport=httpx.MockTransport(lambda r: httpx.Response(200)))
        transport = HttpxTransport(client=client)

        await transport.aclose()

        assert not client.is_closed
        await client.aclose()

    @pytest.mark.asyncio
    async def test_client_end_to_end(self):
        """Test a full handshake through httpx with a scripted backend."""
        def handler(request: httpx.Request) -> httpx.Response:
            path = request.url.path
            if path.endswith("/token/new"):
                return httpx.Response(200, json={"success": True, "request_token": "t1"})
            if path.endswith("/validate_with_login"):
                return httpx.Response(200, json={"success": True, "request_token": "t2"})
            if path.endswith("/session/new"):
                return httpx.Response(200, json={"success": True, "session_id": "s1"})
            return httpx.Response(404, json={"status_code": 34, "status_message": "Not found"})

        async with TMDBClient("k", transport=make_transport(handler)) as client:
            await client.login("user", "pass")
            assert client.session.session_id == "s1"
            assert client.session.request_token == "t2"
