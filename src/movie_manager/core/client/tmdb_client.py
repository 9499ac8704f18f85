"""
Asynchronous TMDb API client.

This module turns high-level account operations into HTTP calls against the
TMDb v3 API. It drives the login handshake by reading and writing an owned
SessionStore, decodes typed response envelopes and falls back to TMDb's
error envelope when the expected shape does not match.

Every public coroutine either returns its value or raises exactly one
TMDBError subclass. Completion is observed on the event loop that awaits it.
"""

import logging
from typing import List, Optional, Type, TypeVar

from pydantic import BaseModel, ValidationError

from ...config.settings import MovieManagerSettings
from .endpoints import Endpoints
from .errors import APIError, AuthError, ConfigurationError, DecodeError, TMDBError
from .models import (
    LoginRequest,
    LogoutRequest,
    LogoutResponse,
    MarkFavorite,
    MarkWatchlist,
    Movie,
    MovieResults,
    PostSession,
    RequestTokenResponse,
    SessionResponse,
    TMDBResponse,
)
from .session import SessionStore
from .transport import HttpxTransport, Transport

logger = logging.getLogger(__name__)

ResponseT = TypeVar("ResponseT", bound=BaseModel)

# TMDb status codes meaning "success", "item updated" and "item deleted".
TOGGLE_SUCCESS_CODES = frozenset({1, 12, 13})

JSON_HEADERS = {"Content-Type": "application/json"}


class TMDBClient:
    """
    Client for the TMDb account, authentication and search endpoints.

    The session state and the transport are injected so the handshake can be
    exercised in isolation with a fake transport.
    """

    def __init__(
        self,
        api_key: str,
        session: Optional[SessionStore] = None,
        transport: Optional[Transport] = None,
        endpoints: Optional[Endpoints] = None,
        timeout_seconds: float = 30.0,
    ):
        if not api_key:
            raise ConfigurationError("A TMDb API key is required", config_field="api_key")

        self.session = session if session is not None else SessionStore()
        self.transport = transport if transport is not None else HttpxTransport(timeout_seconds)
        self.endpoints = endpoints or Endpoints(api_key, self.session)
        # Endpoints must read the same state the handshake writes.
        self.endpoints.session = self.session

    async def __aenter__(self) -> "TMDBClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self.transport.aclose()

    # ------------------------------------------------------------------
    # Authentication handshake
    # ------------------------------------------------------------------
    async def get_request_token(self) -> bool:
        """Fetch a fresh request token. First step of every login."""
        response = await self._get(
            self.endpoints.request_token(), RequestTokenResponse, error_type=AuthError
        )
        self.session.request_token = response.request_token
        logger.info("Obtained request token")
        return True

    async def validate_login(self, username: str, password: str) -> bool:
        """Validate credentials against the stored request token.

        TMDb answers with the validated token, which replaces the stored one.
        """
        body = LoginRequest(
            username=username,
            password=password,
            request_token=self.session.request_token,
        )
        response = await self._post(
            self.endpoints.validate_login(), body, RequestTokenResponse, error_type=AuthError
        )
        self.session.request_token = response.request_token
        logger.info(f"Validated login for {username}")
        return True

    async def create_session(self) -> bool:
        """Exchange the validated request token for a session id."""
        body = PostSession(request_token=self.session.request_token)
        response = await self._post(
            self.endpoints.create_session(), body, SessionResponse, error_type=AuthError
        )
        self.session.session_id = response.session_id
        logger.info("Session created")
        return True

    async def login(self, username: str, password: str) -> bool:
        """Run the full handshake: token, credential validation, session."""
        await self.get_request_token()
        await self.validate_login(username, password)
        return await self.create_session()

    def web_auth_url(self) -> str:
        """URL that lets the user approve the current request token in a browser.

        No network I/O. Once approved, call create_session().
        """
        return self.endpoints.web_auth()

    async def login_via_website(self) -> str:
        """Obtain a request token and return the browser approval URL for it."""
        await self.get_request_token()
        return self.web_auth_url()

    async def logout(self) -> bool:
        """Delete the remote session.

        The store is cleared only when TMDb confirms the deletion; otherwise
        the session may still be valid server-side and is kept.
        """
        body = LogoutRequest(session_id=self.session.session_id)
        response = await self._delete(self.endpoints.logout(), body, LogoutResponse)
        if response.success:
            self.session.clear()
            logger.info("Logged out")
        else:
            logger.warning(
                f"TMDb declined to delete the session (status {response.status_code}): "
                f"{response.status_message or 'no reason given'}"
            )
        return response.success

    # ------------------------------------------------------------------
    # Account lists and search
    # ------------------------------------------------------------------
    async def get_watchlist(self) -> List[Movie]:
        response = await self._get(self.endpoints.watchlist(), MovieResults)
        return response.results

    async def get_favorites(self) -> List[Movie]:
        response = await self._get(self.endpoints.favorites(), MovieResults)
        return response.results

    async def search(self, query: str) -> List[Movie]:
        """Search the catalog by free text. Failures raise like any other read."""
        if not query.strip():
            return []
        response = await self._get(self.endpoints.search(query), MovieResults)
        return response.results

    async def modify_watchlist(self, movie_id: int, watchlist: bool) -> bool:
        """Add or remove a movie from the watchlist. Never raises."""
        body = MarkWatchlist(media_id=movie_id, watchlist=watchlist)
        return await self._toggle(self.endpoints.modify_watchlist(), body)

    async def modify_favorites(self, movie_id: int, favorite: bool) -> bool:
        """Mark or unmark a movie as favorite. Never raises."""
        body = MarkFavorite(media_id=movie_id, favorite=favorite)
        return await self._toggle(self.endpoints.modify_favorites(), body)

    async def download_poster_image(self, poster_path: str) -> bytes:
        """Download raw poster bytes from the image CDN."""
        url = self.endpoints.poster_image(poster_path)
        logger.debug(f"GET {url}")
        response = await self.transport.send("GET", url)
        if response.status_code >= 400:
            raise APIError(
                f"Poster download failed with HTTP {response.status_code}",
                details={"http_status": response.status_code},
            )
        return response.content

    # ------------------------------------------------------------------
    # Request helpers
    # ------------------------------------------------------------------
    async def _toggle(self, url: str, body: BaseModel) -> bool:
        try:
            response = await self._post(url, body, TMDBResponse)
        except TMDBError as e:
            logger.warning(f"List update failed: {e}")
            return False
        if response.status_code not in TOGGLE_SUCCESS_CODES:
            logger.warning(
                f"List update rejected with status {response.status_code}: {response.status_message}"
            )
            return False
        return True

    async def _get(
        self,
        url: str,
        response_type: Type[ResponseT],
        error_type: Type[APIError] = APIError,
    ) -> ResponseT:
        return await self._send("GET", url, response_type, error_type=error_type)

    async def _post(
        self,
        url: str,
        body: BaseModel,
        response_type: Type[ResponseT],
        error_type: Type[APIError] = APIError,
    ) -> ResponseT:
        return await self._send("POST", url, response_type, body=body, error_type=error_type)

    async def _delete(
        self,
        url: str,
        body: BaseModel,
        response_type: Type[ResponseT],
        error_type: Type[APIError] = APIError,
    ) -> ResponseT:
        return await self._send("DELETE", url, response_type, body=body, error_type=error_type)

    async def _send(
        self,
        method: str,
        url: str,
        response_type: Type[ResponseT],
        body: Optional[BaseModel] = None,
        error_type: Type[APIError] = APIError,
    ) -> ResponseT:
        headers = None
        content = None
        if body is not None:
            headers = dict(JSON_HEADERS)
            content = body.model_dump_json().encode("utf-8")

        logger.debug(f"{method} {self.endpoints.redact(url)}")
        response = await self.transport.send(method, url, headers=headers, content=content)
        logger.debug(f"{method} {self.endpoints.redact(url)} -> HTTP {response.status_code}")
        return self._decode(response.content, response_type, error_type)

    @staticmethod
    def _decode(
        content: bytes,
        response_type: Type[ResponseT],
        error_type: Type[APIError],
    ) -> ResponseT:
        """Decode the expected envelope, then TMDb's error envelope, then give up."""
        try:
            return response_type.model_validate_json(content)
        except ValidationError as e:
            original_error = e

        try:
            envelope = TMDBResponse.model_validate_json(content)
        except ValidationError:
            raise DecodeError(
                f"Response did not match {response_type.__name__}",
                expected=response_type.__name__,
                body=content,
                original_error=original_error,
            ) from original_error

        raise error_type(
            envelope.status_message or "TMDb returned an error",
            status_code=envelope.status_code,
            status_message=envelope.status_message,
        )


def create_tmdb_client(
    settings: Optional[MovieManagerSettings] = None,
    transport: Optional[Transport] = None,
) -> TMDBClient:
    """
    Create a TMDBClient from settings.

    Args:
        settings: Settings to use; loaded from the environment when omitted
        transport: Optional transport override

    Returns:
        Configured TMDBClient with a fresh SessionStore seeded from settings
    """
    settings = settings or MovieManagerSettings()
    if not settings.api_key:
        raise ConfigurationError("A TMDb API key is required", config_field="api_key")

    session = SessionStore(
        account_id=settings.account_id,
        session_id=settings.session_id or "",
    )
    endpoints = Endpoints(
        settings.api_key,
        session,
        base_url=settings.base_url,
        auth_url=settings.auth_url,
        image_base_url=settings.image_base_url,
        redirect_scheme=settings.redirect_scheme,
    )
    return TMDBClient(
        settings.api_key,
        session=session,
        transport=transport,
        endpoints=endpoints,
        timeout_seconds=settings.timeout,
    )
