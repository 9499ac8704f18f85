"""
Movie Manager - a TMDb account client.

This package provides an asynchronous client for The Movie Database API
covering login, logout, watchlist and favorites management, search and
poster downloads, plus a small command-line front end.
"""

__version__ = "0.1.0"
__author__ = "Movie Manager Team"
__license__ = "Apache-2.0"

from typing import Final

# Package metadata
VERSION: Final[str] = __version__
PACKAGE_NAME: Final[str] = "movie-manager"
USER_AGENT: Final[str] = f"{PACKAGE_NAME}/{VERSION}"

# Re-export commonly used items
__all__ = [
    "__version__",
    "VERSION",
    "PACKAGE_NAME",
    "USER_AGENT",
]
