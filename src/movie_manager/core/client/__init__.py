"""
TMDb API client for Movie Manager.

This package provides the asynchronous client, its session state, the
injectable HTTP transport, endpoint URL construction, response models and
the structured error types.
"""

from .errors import (
    TMDBError,
    NetworkError,
    DecodeError,
    APIError,
    AuthError,
    ConfigurationError,
    create_user_friendly_message,
)
from .models import (
    Movie,
    MovieResults,
    RequestTokenResponse,
    SessionResponse,
    LogoutResponse,
    TMDBResponse,
)
from .session import SessionStore
from .endpoints import Endpoints
from .transport import Transport, TransportResponse, HttpxTransport
from .tmdb_client import TMDBClient, TOGGLE_SUCCESS_CODES, create_tmdb_client

__all__ = [
    # Errors
    "TMDBError",
    "NetworkError",
    "DecodeError",
    "APIError",
    "AuthError",
    "ConfigurationError",
    "create_user_friendly_message",

    # Models
    "Movie",
    "MovieResults",
    "RequestTokenResponse",
    "SessionResponse",
    "LogoutResponse",
    "TMDBResponse",

    # Client
    "SessionStore",
    "Endpoints",
    "Transport",
    "TransportResponse",
    "HttpxTransport",
    "TMDBClient",
    "TOGGLE_SUCCESS_CODES",
    "create_tmdb_client",
]
