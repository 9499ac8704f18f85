"""Tests for the structured error types."""

from movie_manager.core.client import (
    APIError,
    AuthError,
    ConfigurationError,
    DecodeError,
    NetworkError,
    TMDBError,
    create_user_friendly_message,
)


class TestErrorTypes:
    """Test error construction and representation."""

    def test_hierarchy(self):
        """Test that every error is a TMDBError and AuthError is an APIError."""
        for error in (NetworkError(), DecodeError(), APIError(), AuthError(), ConfigurationError()):
            assert isinstance(error, TMDBError)
        assert isinstance(AuthError(), APIError)
        assert not isinstance(DecodeError(), APIError)

    def test_api_error_carries_remote_status(self):
        """Test the remote status code and message accessors."""
        error = APIError("Invalid API key", status_code=7, status_message="Invalid API key")
        assert error.status_code == 7
        assert error.status_message == "Invalid API key"
        assert error.code == "API_ERROR"
        assert str(error) == "Invalid API key (Status: 7) (Code: API_ERROR)"

    def test_auth_error_code(self):
        error = AuthError("bad login", status_code=30)
        assert error.code == "AUTHENTICATION_ERROR"
        assert error.status_code == 30

    def test_network_error_keeps_cause(self):
        cause = ConnectionResetError("reset")
        error = NetworkError("offline", original_error=cause)
        assert error.original_error is cause
        assert error.code == "NETWORK_ERROR"

    def test_decode_error_body_snippet(self):
        """Test that long bodies are truncated in details."""
        error = DecodeError(expected="MovieResults", body=b"x" * 500)
        assert error.details["expected"] == "MovieResults"
        assert error.details["body"] == "x" * 200 + "..."

    def test_to_dict(self):
        error = AuthError("bad login", status_code=30, status_message="Invalid username")
        data = error.to_dict()
        assert data == {
            "message": "bad login",
            "status": 30,
            "code": "AUTHENTICATION_ERROR",
            "details": {"status_message": "Invalid username"},
            "type": "AuthError",
        }


class TestUserFriendlyMessages:
    """Test CLI facing messages."""

    def test_auth_error_message(self):
        error = AuthError(status_code=30, status_message="Invalid username and/or password")
        assert create_user_friendly_message(error) == "Login failed: Invalid username and/or password"

    def test_auth_error_without_message(self):
        assert "check your username" in create_user_friendly_message(AuthError())

    def test_api_error_message(self):
        error = APIError(status_code=34, status_message="The resource you requested could not be found.")
        assert "could not be found" in create_user_friendly_message(error)

    def test_http_status_message(self):
        error = APIError("Poster download failed", details={"http_status": 404})
        assert create_user_friendly_message(error) == "Download failed with HTTP 404."

    def test_network_error_message(self):
        assert "internet connection" in create_user_friendly_message(NetworkError())

    def test_decode_error_message(self):
        assert "could not be understood" in create_user_friendly_message(DecodeError())

    def test_missing_api_key_message(self):
        error = ConfigurationError("missing", config_field="api_key")
        assert "MOVIE_MANAGER_API_KEY" in create_user_friendly_message(error)
