"""
Request bodies and response envelopes for the TMDb v3 API.

Every endpoint answers with exactly one envelope shape. Field names follow
the JSON keys TMDb uses, and unknown keys are ignored.
"""

from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict


class Movie(BaseModel):
    """A catalog entry. Two movies are equal when their ids match."""

    model_config = ConfigDict(extra="ignore")

    id: int
    title: str
    poster_path: Optional[str] = None
    backdrop_path: Optional[str] = None
    original_title: Optional[str] = None
    original_language: Optional[str] = None
    overview: Optional[str] = None
    release_date: Optional[str] = None
    genre_ids: List[int] = []
    popularity: Optional[float] = None
    vote_average: Optional[float] = None
    vote_count: Optional[int] = None
    adult: bool = False
    video: bool = False

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, Movie):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)

    @property
    def release_year(self) -> str:
        """Four digit year, or an empty string when TMDb has no date."""
        if self.release_date:
            return self.release_date[:4]
        return ""


# Response envelopes

class RequestTokenResponse(BaseModel):
    """Token envelope returned by token/new and token/validate_with_login."""
    success: bool
    expires_at: Optional[str] = None
    request_token: str


class SessionResponse(BaseModel):
    """Envelope returned by session/new."""
    success: bool
    session_id: str


class LogoutResponse(BaseModel):
    """Envelope returned when a session is deleted.

    A declined deletion comes back as TMDb's error envelope, which also
    decodes here with success false.
    """
    success: bool
    status_code: Optional[int] = None
    status_message: Optional[str] = None


class TMDBResponse(BaseModel):
    """Generic status envelope, also used by TMDb for every error."""
    status_code: int
    status_message: Optional[str] = None
    success: Optional[bool] = None


class MovieResults(BaseModel):
    """Paged list of movies (watchlist, favorites, search)."""
    page: int = 1
    results: List[Movie]
    total_pages: int = 1
    total_results: int = 0


# Request bodies

class LoginRequest(BaseModel):
    username: str
    password: str
    request_token: str


class PostSession(BaseModel):
    request_token: str


class LogoutRequest(BaseModel):
    session_id: str


class MarkWatchlist(BaseModel):
    media_type: str = "movie"
    media_id: int
    watchlist: bool


class MarkFavorite(BaseModel):
    media_type: str = "movie"
    media_id: int
    favorite: bool
