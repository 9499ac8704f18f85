"""
Main CLI application entry point.

This module contains the Typer application and the command handlers that
drive the TMDb client: login, logout, list browsing, search, list toggles
and poster downloads.
"""

from typing import Any, Coroutine, List, Optional, TypeVar
import asyncio
import logging
from pathlib import Path
import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table

from movie_manager import VERSION
from movie_manager.config.env_loader import EnvFileLoader, load_env_with_hierarchy
from movie_manager.config.settings import MovieManagerSettings
from movie_manager.core import MovieLists
from movie_manager.core.client import (
    Movie,
    TMDBClient,
    TMDBError,
    create_tmdb_client,
    create_user_friendly_message,
)

T = TypeVar("T")

# Create the main Typer application
app = typer.Typer(
    name="movie-manager",
    help="Movie Manager - manage your TMDb watchlist and favorites",
    add_completion=False,
    rich_markup_mode="rich",
)

# Rich console for output
console = Console()

logger = logging.getLogger(__name__)


def version_callback(value: bool) -> None:
    """Display version information and exit."""
    if value:
        console.print(f"[bold blue]Movie Manager[/bold blue] version [green]{VERSION}[/green]")
        raise typer.Exit()


def configure_logging(level: str) -> None:
    """Route log records through rich at the configured level."""
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


@app.callback()
def callback(
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        "-v",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
    debug: bool = typer.Option(False, "--debug", help="Enable debug logging"),
) -> None:
    """
    Movie Manager - manage your TMDb watchlist and favorites.

    Reads MOVIE_MANAGER_* settings from the environment or a .env file.
    """
    load_env_with_hierarchy()
    settings = _load_settings()
    configure_logging("DEBUG" if debug else settings.effective_log_level)


def _load_settings() -> MovieManagerSettings:
    return MovieManagerSettings()


def _create_client(session_id: Optional[str] = None) -> TMDBClient:
    settings = _load_settings()
    client = create_tmdb_client(settings)
    if session_id:
        client.session.session_id = session_id
    return client


def _run(coro: Coroutine[Any, Any, T]) -> T:
    """Run a coroutine, turning client errors into a friendly exit."""
    try:
        return asyncio.run(coro)
    except TMDBError as e:
        logger.debug(f"Command failed: {e}")
        console.print(f"[red]Error:[/red] {create_user_friendly_message(e)}")
        raise typer.Exit(1)


def _require_session(client: TMDBClient) -> None:
    if not client.session.is_authenticated:
        console.print("[red]Error:[/red] Not logged in.")
        console.print("[dim]Run 'movie-manager login' and set MOVIE_MANAGER_SESSION_ID, or pass --session-id.[/dim]")
        raise typer.Exit(1)


def _print_movies(title: str, movies: List[Movie]) -> None:
    if not movies:
        console.print(f"[yellow]{title}: no movies[/yellow]")
        return

    table = Table(title=title, show_header=True, header_style="bold magenta")
    table.add_column("ID", style="cyan", justify="right")
    table.add_column("Title", style="green")
    table.add_column("Year")
    table.add_column("Poster", style="dim")
    for movie in movies:
        table.add_row(str(movie.id), movie.title, movie.release_year, movie.poster_path or "")
    console.print(table)


SessionOption = typer.Option(None, "--session-id", help="Session id (defaults to MOVIE_MANAGER_SESSION_ID)")


@app.command("login")
def login_command(
    username: Optional[str] = typer.Option(None, "--username", "-u", help="TMDb username"),
    password: Optional[str] = typer.Option(None, "--password", "-p", help="TMDb password"),
    web: bool = typer.Option(False, "--web", help="Approve the login in a browser instead"),
) -> None:
    """Log in to TMDb and print the new session id."""
    settings = _load_settings()

    if not web:
        username = username or settings.username or typer.prompt("Username")
        password = password or settings.password or typer.prompt("Password", hide_input=True)

    session_id = _run(_async_login(username, password, web))
    console.print(Panel(
        f"Session id: [bold green]{session_id}[/bold green]\n"
        f"[dim]export MOVIE_MANAGER_SESSION_ID={session_id}[/dim]",
        title="Logged in",
        border_style="green",
    ))


async def _async_login(username: Optional[str], password: Optional[str], web: bool) -> str:
    async with _create_client() as client:
        if web:
            url = await client.login_via_website()
            console.print(f"Approve the request token at:\n[link={url}]{url}[/link]")
            typer.launch(url)
            typer.confirm("Approved in the browser?", abort=True)
            await client.create_session()
        else:
            await client.login(username or "", password or "")
        return client.session.session_id


@app.command("logout")
def logout_command(session_id: Optional[str] = SessionOption) -> None:
    """Delete the current TMDb session."""
    success = _run(_async_logout(session_id))
    if success:
        console.print("[green]Logged out.[/green]")
    else:
        console.print("[yellow]TMDb did not confirm the logout.[/yellow]")
        raise typer.Exit(1)


async def _async_logout(session_id: Optional[str]) -> bool:
    async with _create_client(session_id) as client:
        _require_session(client)
        return await client.logout()


@app.command("watchlist")
def watchlist_command(session_id: Optional[str] = SessionOption) -> None:
    """Show your watchlist, newest first."""
    movies = _run(_async_fetch_list(session_id, favorites=False))
    _print_movies("Watchlist", movies)


@app.command("favorites")
def favorites_command(session_id: Optional[str] = SessionOption) -> None:
    """Show your favorite movies."""
    movies = _run(_async_fetch_list(session_id, favorites=True))
    _print_movies("Favorites", movies)


async def _async_fetch_list(session_id: Optional[str], favorites: bool) -> List[Movie]:
    async with _create_client(session_id) as client:
        _require_session(client)
        if favorites:
            return await client.get_favorites()
        return await client.get_watchlist()


@app.command("search")
def search_command(query: str = typer.Argument(..., help="Title to search for")) -> None:
    """Search the TMDb catalog."""
    movies = _run(_async_search(query))
    _print_movies(f"Results for '{query}'", movies)


async def _async_search(query: str) -> List[Movie]:
    async with _create_client() as client:
        return await client.search(query)


@app.command("watch")
def watch_command(
    movie_id: int = typer.Argument(..., help="TMDb movie id"),
    remove: bool = typer.Option(False, "--remove", "-r", help="Remove from the watchlist"),
    session_id: Optional[str] = SessionOption,
) -> None:
    """Add a movie to (or remove it from) your watchlist."""
    success = _run(_async_toggle(session_id, movie_id, not remove, favorites=False))
    _report_toggle(success, "watchlist", remove)


@app.command("favorite")
def favorite_command(
    movie_id: int = typer.Argument(..., help="TMDb movie id"),
    remove: bool = typer.Option(False, "--remove", "-r", help="Remove from favorites"),
    session_id: Optional[str] = SessionOption,
) -> None:
    """Mark (or unmark) a movie as favorite."""
    success = _run(_async_toggle(session_id, movie_id, not remove, favorites=True))
    _report_toggle(success, "favorites", remove)


async def _async_toggle(session_id: Optional[str], movie_id: int, add: bool, favorites: bool) -> Optional[bool]:
    """Bring the movie into the requested state through the local lists.

    Returns None when the list already matches, otherwise TMDb's verdict.
    """
    async with _create_client(session_id) as client:
        _require_session(client)
        lists = MovieLists(client)
        if favorites:
            current = await lists.refresh_favorites()
        else:
            current = await lists.refresh_watchlist()

        movie = next((m for m in current if m.id == movie_id), Movie(id=movie_id, title=""))
        if (movie in current) == add:
            return None
        if favorites:
            return await lists.toggle_favorite(movie)
        return await lists.toggle_watchlist(movie)


def _report_toggle(success: Optional[bool], list_name: str, removed: bool) -> None:
    if success is None:
        state = "not in" if removed else "already in"
        console.print(f"[yellow]Movie is {state} your {list_name}.[/yellow]")
        return
    if not success:
        console.print(f"[red]Error:[/red] TMDb did not update your {list_name}.")
        raise typer.Exit(1)
    action = "Removed from" if removed else "Added to"
    console.print(f"[green]{action} {list_name}.[/green]")


@app.command("poster")
def poster_command(
    poster_path: str = typer.Argument(..., help="Poster path as returned by TMDb, e.g. /abc123.jpg"),
    output: Path = typer.Option(..., "--output", "-o", help="File to write the image to"),
) -> None:
    """Download a poster image."""
    data = _run(_async_poster(poster_path))
    output.write_bytes(data)
    console.print(f"[green]Saved {len(data)} bytes to {output}[/green]")


async def _async_poster(poster_path: str) -> bytes:
    async with _create_client() as client:
        return await client.download_poster_image(poster_path)


@app.command("config")
def config_command(
    init: bool = typer.Option(False, "--init", help="Create an example .env file"),
) -> None:
    """Show or initialize Movie Manager configuration."""
    if init:
        path = EnvFileLoader().create_example_env_file()
        console.print(f"[green]Created {path}[/green]")
        return

    _show_current_config(_load_settings())


def _show_current_config(settings: MovieManagerSettings) -> None:
    table = Table(title="Current Configuration", show_header=True, header_style="bold magenta")
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="green")
    for key, value in settings.to_dict().items():
        table.add_row(key, "" if value is None else str(value))
    console.print(table)

    if not settings.is_configured:
        console.print("[yellow]No API key configured. Set MOVIE_MANAGER_API_KEY.[/yellow]")


def main() -> None:
    """Entry point for the CLI application."""
    app()


if __name__ == "__main__":
    main()
