"""
CLI interface package for Movie Manager.

This package contains the Typer application that drives the TMDb client.
"""

__all__ = ["app"]
