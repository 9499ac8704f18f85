"""
Configuration package for Movie Manager.

This package contains settings management and .env file discovery.
"""

__all__ = ["settings", "env_loader"]
