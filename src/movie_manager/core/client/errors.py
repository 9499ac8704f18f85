"""
Structured error system for the Movie Manager TMDb client.

Every client operation either returns a typed value or raises exactly one
of the errors defined here. Transport failures, undecodable payloads and
the remote service's own error envelope are kept distinct so callers can
tell them apart.
"""

from typing import Any, Dict, Optional


class TMDBError(Exception):
    """Base exception for all TMDb client errors."""

    def __init__(
        self,
        message: str,
        status: Optional[int] = None,
        code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
        original_error: Optional[Exception] = None
    ):
        super().__init__(message)
        self.message = message
        self.status = status
        self.code = code
        self.details = details or {}
        self.original_error = original_error

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to dictionary representation."""
        return {
            "message": self.message,
            "status": self.status,
            "code": self.code,
            "details": self.details,
            "type": self.__class__.__name__
        }

    def __str__(self) -> str:
        parts = [self.message]
        if self.status is not None:
            parts.append(f"(Status: {self.status})")
        if self.code:
            parts.append(f"(Code: {self.code})")
        return " ".join(parts)


class NetworkError(TMDBError):
    """Transport-level failure: no connectivity, timeout, DNS and so on."""

    def __init__(
        self,
        message: str = "Network error",
        **kwargs
    ):
        super().__init__(message, code="NETWORK_ERROR", **kwargs)


class DecodeError(TMDBError):
    """Response body did not match the expected envelope or the error envelope."""

    def __init__(
        self,
        message: str = "Unexpected response payload",
        expected: Optional[str] = None,
        body: Optional[bytes] = None,
        **kwargs
    ):
        super().__init__(message, code="DECODE_ERROR", **kwargs)
        if expected:
            self.details["expected"] = expected
        if body is not None:
            snippet = body[:200].decode("utf-8", errors="replace")
            self.details["body"] = snippet + ("..." if len(body) > 200 else "")


class APIError(TMDBError):
    """The remote service answered with its own error envelope."""

    def __init__(
        self,
        message: str = "TMDb API error",
        status_code: Optional[int] = None,
        status_message: Optional[str] = None,
        code: str = "API_ERROR",
        **kwargs
    ):
        super().__init__(message, status=status_code, code=code, **kwargs)
        if status_message:
            self.details["status_message"] = status_message

    @property
    def status_code(self) -> Optional[int]:
        """Remote TMDb status code (not the HTTP status)."""
        return self.status

    @property
    def status_message(self) -> Optional[str]:
        return self.details.get("status_message")


class AuthError(APIError):
    """Error envelope returned during the login handshake."""

    def __init__(
        self,
        message: str = "Authentication failed",
        **kwargs
    ):
        super().__init__(message, code="AUTHENTICATION_ERROR", **kwargs)


class ConfigurationError(TMDBError):
    """Error related to client configuration."""

    def __init__(
        self,
        message: str = "Configuration error",
        config_field: Optional[str] = None,
        **kwargs
    ):
        super().__init__(message, code="CONFIGURATION_ERROR", **kwargs)
        if config_field:
            self.details["config_field"] = config_field


def create_user_friendly_message(error: TMDBError) -> str:
    """
    Create a user-friendly error message.

    Args:
        error: The TMDBError to convert

    Returns:
        User-friendly error message
    """
    if isinstance(error, AuthError):
        if error.status_message:
            return f"Login failed: {error.status_message}"
        return "Login failed. Please check your username and password."

    elif isinstance(error, APIError):
        if "http_status" in error.details:
            return f"Download failed with HTTP {error.details['http_status']}."
        if error.status_message:
            return f"TMDb rejected the request: {error.status_message}"
        return "TMDb rejected the request."

    elif isinstance(error, NetworkError):
        return "Network error occurred. Please check your internet connection and try again."

    elif isinstance(error, DecodeError):
        return "TMDb returned a response that could not be understood."

    elif isinstance(error, ConfigurationError):
        field = error.details.get("config_field")
        if field == "api_key":
            return "No TMDb API key configured. Set the MOVIE_MANAGER_API_KEY environment variable."
        return f"Configuration error: {error.message}"

    else:
        return f"An error occurred: {error.message}"
