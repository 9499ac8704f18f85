"""Shared fixtures and a fake transport for the TMDb client tests."""

import json
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Tuple, Union
from urllib.parse import urlparse

import pytest

from movie_manager.core.client import (
    Endpoints,
    NetworkError,
    SessionStore,
    TMDBClient,
    Transport,
    TransportResponse,
)

API_KEY = "test-api-key"

REQUEST_TOKEN_PAYLOAD = {
    "success": True,
    "expires_at": "2026-10-17 12:00:00 UTC",
    "request_token": "fresh-token",
}

VALIDATED_TOKEN_PAYLOAD = {
    "success": True,
    "expires_at": "2026-10-17 12:00:00 UTC",
    "request_token": "validated-token",
}

SESSION_PAYLOAD = {"success": True, "session_id": "session-123"}

INVALID_TOKEN_PAYLOAD = {
    "success": False,
    "status_code": 33,
    "status_message": "Invalid request token: The request token is either expired or invalid.",
}

INVALID_CREDENTIALS_PAYLOAD = {
    "success": False,
    "status_code": 30,
    "status_message": "Invalid username and/or password: You did not provide a valid login.",
}

MOVIES_PAYLOAD = {
    "page": 1,
    "results": [
        {
            "id": 76341,
            "title": "Mad Max: Fury Road",
            "poster_path": "/8tZYtuWezp8JbcsvHYO0O46tFbo.jpg",
            "release_date": "2015-05-13",
            "overview": "An apocalyptic story set in the furthest reaches of our planet.",
            "vote_average": 7.6,
            "genre_ids": [28, 12, 878],
        },
        {
            "id": 9355,
            "title": "Mad Max Beyond Thunderdome",
            "poster_path": None,
            "release_date": "1985-06-29",
        },
    ],
    "total_pages": 1,
    "total_results": 2,
}


@dataclass
class RecordedRequest:
    method: str
    url: str
    headers: Optional[Dict[str, str]]
    content: Optional[bytes]

    @property
    def path(self) -> str:
        return urlparse(self.url).path

    @property
    def json(self) -> Any:
        return json.loads(self.content) if self.content else None


Reply = Union[dict, bytes, Exception, Callable[[RecordedRequest], Any]]


class FakeTransport(Transport):
    """Answers requests from a (method, path suffix) routing table.

    Replies are reused, so the backend is stable across repeated calls.
    A reply can be a dict (sent as JSON), raw bytes, an exception to raise,
    or a callable receiving the recorded request and returning one of those.
    """

    def __init__(self) -> None:
        self.routes: Dict[Tuple[str, str], Tuple[Reply, int]] = {}
        self.requests: List[RecordedRequest] = []
        self.closed = False

    def add(self, method: str, path: str, reply: Reply, status_code: int = 200) -> "FakeTransport":
        self.routes[(method, path)] = (reply, status_code)
        return self

    async def send(self, method, url, headers=None, content=None) -> TransportResponse:
        request = RecordedRequest(method, url, headers, content)
        self.requests.append(request)

        for (route_method, route_path), (reply, status_code) in self.routes.items():
            if route_method == method and request.path.endswith(route_path):
                if callable(reply):
                    reply = reply(request)
                if isinstance(reply, Exception):
                    raise reply
                if isinstance(reply, bytes):
                    return TransportResponse(status_code, reply)
                return TransportResponse(status_code, json.dumps(reply).encode("utf-8"))

        raise NetworkError(f"No route for {method} {request.path}")

    async def aclose(self) -> None:
        self.closed = True

    def paths(self) -> List[str]:
        return [r.path for r in self.requests]


@pytest.fixture
def transport() -> FakeTransport:
    return FakeTransport()


@pytest.fixture
def session() -> SessionStore:
    return SessionStore()


@pytest.fixture
def endpoints(session: SessionStore) -> Endpoints:
    return Endpoints(API_KEY, session)


@pytest.fixture
def client(transport: FakeTransport, session: SessionStore) -> TMDBClient:
    return TMDBClient(API_KEY, session=session, transport=transport)


@pytest.fixture
def logged_in(session: SessionStore) -> SessionStore:
    session.session_id = "session-123"
    return session


@pytest.fixture
def handshake_backend(transport: FakeTransport) -> FakeTransport:
    """Backend that only validates logins carrying the token it issued."""

    def validate(request: RecordedRequest) -> dict:
        body = request.json
        if body["request_token"] != REQUEST_TOKEN_PAYLOAD["request_token"]:
            return INVALID_TOKEN_PAYLOAD
        if (body["username"], body["password"]) != ("moviefan", "secret"):
            return INVALID_CREDENTIALS_PAYLOAD
        return VALIDATED_TOKEN_PAYLOAD

    def create_session(request: RecordedRequest) -> dict:
        if request.json["request_token"] != VALIDATED_TOKEN_PAYLOAD["request_token"]:
            return INVALID_TOKEN_PAYLOAD
        return SESSION_PAYLOAD

    transport.add("GET", "/authentication/token/new", REQUEST_TOKEN_PAYLOAD)
    transport.add("POST", "/authentication/token/validate_with_login", validate)
    transport.add("POST", "/authentication/session/new", create_session)
    return transport
