"""
Core functionality for Movie Manager.

Contains the TMDb API client, session state and the local movie lists.
"""

from .movie_lists import MovieLists

__all__ = ["MovieLists"]
