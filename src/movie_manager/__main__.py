"""
Entry point for running Movie Manager as a module.

This allows users to run the CLI using:
    python -m movie_manager [command] [options]
"""

from movie_manager.cli.app import main

if __name__ == "__main__":
    main()
