"""
Local watchlist and favorites for the logged-in user.

The lists are populated from TMDb and then kept in sync optimistically:
after TMDb accepts a toggle, the local list is edited directly instead of
being re-fetched.
"""

import logging
from typing import List

from .client.models import Movie
from .client.tmdb_client import TMDBClient

logger = logging.getLogger(__name__)


class MovieLists:
    """In-memory watchlist and favorites backed by a TMDBClient."""

    def __init__(self, client: TMDBClient):
        self.client = client
        self.watchlist: List[Movie] = []
        self.favorites: List[Movie] = []

    # --- Fetch ---
    async def refresh_watchlist(self) -> List[Movie]:
        self.watchlist = await self.client.get_watchlist()
        return self.watchlist

    async def refresh_favorites(self) -> List[Movie]:
        self.favorites = await self.client.get_favorites()
        return self.favorites

    async def refresh(self) -> None:
        await self.refresh_watchlist()
        await self.refresh_favorites()

    # --- Membership ---
    def is_in_watchlist(self, movie: Movie) -> bool:
        return movie in self.watchlist

    def is_favorite(self, movie: Movie) -> bool:
        return movie in self.favorites

    # --- Toggle ---
    async def toggle_watchlist(self, movie: Movie) -> bool:
        """Flip watchlist membership remotely, then locally if TMDb agreed."""
        add = not self.is_in_watchlist(movie)
        success = await self.client.modify_watchlist(movie.id, add)
        if success:
            self.apply_watchlist_update(movie, add)
        return success

    async def toggle_favorite(self, movie: Movie) -> bool:
        """Flip favorite membership remotely, then locally if TMDb agreed."""
        add = not self.is_favorite(movie)
        success = await self.client.modify_favorites(movie.id, add)
        if success:
            self.apply_favorite_update(movie, add)
        return success

    # --- Optimistic update ---
    def apply_watchlist_update(self, movie: Movie, added: bool) -> None:
        self.watchlist = _apply(self.watchlist, movie, added)
        logger.debug(f"Watchlist {'+' if added else '-'} {movie.id}")

    def apply_favorite_update(self, movie: Movie, added: bool) -> None:
        self.favorites = _apply(self.favorites, movie, added)
        logger.debug(f"Favorites {'+' if added else '-'} {movie.id}")


def _apply(movies: List[Movie], movie: Movie, added: bool) -> List[Movie]:
    if added:
        if movie in movies:
            return movies
        return movies + [movie]
    return [m for m in movies if m != movie]
