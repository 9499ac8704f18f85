"""
Authentication state shared between the login handshake and later calls.
"""

from dataclasses import dataclass


@dataclass
class SessionStore:
    """
    Mutable session state owned by a single TMDBClient.

    ``request_token`` is only meaningful between token acquisition and
    session creation. A non-empty ``session_id`` means the user is logged in.
    No validation or locking happens here; the client is the only writer.
    """
    account_id: int = 0
    request_token: str = ""
    session_id: str = ""

    @property
    def is_authenticated(self) -> bool:
        return bool(self.session_id)

    def clear(self) -> None:
        """Forget the handshake token and the session."""
        self.request_token = ""
        self.session_id = ""
