"""
URL construction for the TMDb endpoints used by the client.

URLs are assembled by plain concatenation so parameter order and escaping
stay exactly what TMDb receives: base, path, ``?api_key=``, then any
endpoint parameters.
"""

from urllib.parse import quote

from .session import SessionStore

DEFAULT_BASE_URL = "https://api.themoviedb.org/3"
DEFAULT_AUTH_URL = "https://www.themoviedb.org"
DEFAULT_IMAGE_BASE_URL = "https://image.tmdb.org/t/p/w500"
DEFAULT_REDIRECT_SCHEME = "themoviemanager"

REQUEST_TOKEN_PATH = "/authentication/token/new"
LOGIN_VALIDATION_PATH = "/authentication/token/validate_with_login"
CREATE_SESSION_PATH = "/authentication/session/new"
DELETE_SESSION_PATH = "/authentication/session"
SEARCH_PATH = "/search/movie"


class Endpoints:
    """Builds endpoint URLs from the API key and the current session state."""

    def __init__(
        self,
        api_key: str,
        session: SessionStore,
        base_url: str = DEFAULT_BASE_URL,
        auth_url: str = DEFAULT_AUTH_URL,
        image_base_url: str = DEFAULT_IMAGE_BASE_URL,
        redirect_scheme: str = DEFAULT_REDIRECT_SCHEME,
    ):
        self.api_key = api_key
        self.session = session
        self.base_url = base_url.rstrip("/")
        self.auth_url = auth_url.rstrip("/")
        self.image_base_url = image_base_url.rstrip("/")
        self.redirect_scheme = redirect_scheme

    @property
    def api_key_param(self) -> str:
        return f"?api_key={self.api_key}"

    @property
    def session_param(self) -> str:
        return f"&session_id={self.session.session_id}"

    def _url(self, path: str) -> str:
        return self.base_url + path + self.api_key_param

    def _account_url(self, path: str) -> str:
        return self._url(f"/account/{self.session.account_id}{path}") + self.session_param

    # --- Authentication ---
    def request_token(self) -> str:
        return self._url(REQUEST_TOKEN_PATH)

    def validate_login(self) -> str:
        return self._url(LOGIN_VALIDATION_PATH)

    def create_session(self) -> str:
        return self._url(CREATE_SESSION_PATH)

    def logout(self) -> str:
        return self._url(DELETE_SESSION_PATH)

    def web_auth(self) -> str:
        """Browser URL that validates the current request token out-of-band."""
        return (
            f"{self.auth_url}/authenticate/{self.session.request_token}"
            f"?redirect_to={self.redirect_scheme}:authenticate"
        )

    # --- Account lists ---
    def watchlist(self) -> str:
        return self._account_url("/watchlist/movies") + "&sort_by=created_at.desc"

    def favorites(self) -> str:
        return self._account_url("/favorite/movies")

    def modify_watchlist(self) -> str:
        return self._account_url("/watchlist")

    def modify_favorites(self) -> str:
        return self._account_url("/favorite")

    # --- Catalog ---
    def search(self, query: str) -> str:
        return self._url(SEARCH_PATH) + "&query=" + quote(query, safe="")

    def poster_image(self, poster_path: str) -> str:
        # TMDb poster paths start with "/", so the result carries "w500//".
        return f"{self.image_base_url}/{poster_path}"

    def redact(self, url: str) -> str:
        """Hide the API key before a URL is logged."""
        if not self.api_key:
            return url
        return url.replace(self.api_key, "***")
