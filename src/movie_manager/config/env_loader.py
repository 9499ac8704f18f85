"""
.env file discovery for Movie Manager.

Looks for a .env file starting in the working directory and walking up,
so credentials can live next to a project or in the home directory.
"""

from pathlib import Path
from typing import Dict, List, Optional
import logging

from dotenv import dotenv_values, load_dotenv

logger = logging.getLogger(__name__)

EXAMPLE_ENV = '''# Movie Manager Configuration
# Lines starting with # are comments and will be ignored.

# Required: your TMDb v3 API key
MOVIE_MANAGER_API_KEY=your-api-key-here

# Optional: credentials for the login command
MOVIE_MANAGER_USERNAME=
MOVIE_MANAGER_PASSWORD=

# Optional: reuse an existing session instead of logging in
MOVIE_MANAGER_SESSION_ID=

# Optional: debug settings
MOVIE_MANAGER_DEBUG=false
MOVIE_MANAGER_LOG_LEVEL=WARNING
'''


class EnvFileLoader:
    """
    .env file loader with hierarchical search.

    Search order (stops at first file found):
    1. Current directory: .movie-manager/.env -> .env
    2. Parent directories (up to git root or home): .movie-manager/.env -> .env
    3. Home directory: ~/.movie-manager/.env -> ~/.env
    """

    CONFIG_DIR_NAME = ".movie-manager"
    ENV_FILE_NAME = ".env"

    def __init__(self, working_directory: Optional[Path] = None):
        self.working_directory = Path(working_directory or Path.cwd()).resolve()
        self._loaded_file: Optional[Path] = None
        self._loaded_vars: Dict[str, str] = {}

    def load_env_file(self) -> Optional[Path]:
        """Load environment variables from the first .env file found.

        Variables already present in the environment win.

        Returns:
            Path to loaded .env file or None if none found
        """
        for candidate in self.get_search_paths():
            if candidate.is_file():
                load_dotenv(candidate, override=False)
                self._loaded_file = candidate
                self._loaded_vars = {
                    key: value
                    for key, value in dotenv_values(candidate).items()
                    if value is not None
                }
                logger.info(f"Loaded environment variables from: {candidate}")
                return candidate

        logger.debug("No .env file found in search path")
        return None

    def get_loaded_file(self) -> Optional[Path]:
        return self._loaded_file

    def get_loaded_vars(self) -> Dict[str, str]:
        return self._loaded_vars.copy()

    def get_search_paths(self) -> List[Path]:
        """Get list of all paths that would be searched for .env files, in order."""
        search_paths = []
        current_dir = self.working_directory

        while current_dir != current_dir.parent:
            search_paths.append(current_dir / self.CONFIG_DIR_NAME / self.ENV_FILE_NAME)
            search_paths.append(current_dir / self.ENV_FILE_NAME)

            if self._should_stop_search(current_dir):
                break
            current_dir = current_dir.parent

        home_dir = Path.home()
        for path in (home_dir / self.CONFIG_DIR_NAME / self.ENV_FILE_NAME, home_dir / self.ENV_FILE_NAME):
            if path not in search_paths:
                search_paths.append(path)

        return search_paths

    def _should_stop_search(self, directory: Path) -> bool:
        """Stop at a git repository root or the home directory."""
        if (directory / ".git").exists():
            return True
        return directory == Path.home()

    def create_example_env_file(self, target_dir: Optional[Path] = None) -> Path:
        """Write an example .env file into ``target_dir`` (default: project config dir).

        Returns:
            Path to created example file
        """
        if target_dir is None:
            target_dir = self.working_directory / self.CONFIG_DIR_NAME
        target_dir.mkdir(parents=True, exist_ok=True)

        env_file_path = target_dir / self.ENV_FILE_NAME
        env_file_path.write_text(EXAMPLE_ENV, encoding="utf-8")
        logger.info(f"Created example .env file: {env_file_path}")
        return env_file_path


def load_env_with_hierarchy(working_directory: Optional[Path] = None) -> Optional[Path]:
    """Convenience function to load .env file with hierarchical search."""
    loader = EnvFileLoader(working_directory)
    return loader.load_env_file()
