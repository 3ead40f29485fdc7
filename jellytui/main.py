# jellytui/main.py

import asyncio
import logging
from typing import List, Optional

import typer
from rich.console import Console
from rich.table import Table

from . import __version__, api, config, logs
from .errors import JellyTUIError
from .models import CatalogRecord, RecordKind, SessionProfile
from .player import Player, DEFAULT_PLAYER
from .tui.app import run_tui

app = typer.Typer(
    name="jellytui",
    help="Browse a Jellyfin server from your terminal and play with an external player.",
    add_completion=False,
    invoke_without_command=True,
)
console = Console()
logger = logging.getLogger(__name__)

class Options:
    player: str = DEFAULT_PLAYER

options = Options()

def version_callback(value: bool):
    if value:
        console.print(f"jellytui {__version__}")
        raise typer.Exit()

@app.callback()
def main(
    ctx: typer.Context,
    player: str = typer.Option(DEFAULT_PLAYER, "--player", "-p", envvar="JELLYTUI_PLAYER", help="Player executable"),
    debug: bool = typer.Option(False, "--debug", help="Log debug output to the log file"),
    version: bool = typer.Option(False, "--version", callback=version_callback, is_eager=True, help="Show the version"),
):
    """Starts the interactive browser when no command is given."""
    options.player = player
    log_path = logs.setup_logging(debug)
    logger.debug("logging to %s", log_path)
    if ctx.invoked_subcommand is None:
        tui()

@app.command()
def tui():
    """Start the full-screen browser."""
    profile = config.load_profile()
    try:
        asyncio.run(run_tui(profile, player=Player(options.player)))
    except KeyboardInterrupt:
        pass

def print_records(records: List[CatalogRecord], title: str):
    if not records:
        console.print(f"[dim]no {title.lower()} found[/dim]")
        return
    table = Table(title=title)
    table.add_column("ID", style="dim")
    table.add_column("Title")
    table.add_column("Type")
    for record in records:
        table.add_row(record.id, record.display_title, record.kind.value)
    console.print(table)

def run_query(fetch, title: str):
    """Runs one catalog call with a fresh client and prints the records."""
    profile = config.load_profile()

    async def _run():
        client = api.APIClient()
        try:
            with console.status(f"fetching {title.lower()}..."):
                return await fetch(client, profile)
        finally:
            await client.close()

    try:
        records = asyncio.run(_run())
    except JellyTUIError as e:
        console.print(f"[red]error: {e}[/red]")
        raise typer.Exit(1)
    print_records(records, title)

@app.command()
def movies():
    """List the movies on the server."""
    run_query(lambda client, profile: client.get_movies(profile), "Movies")

@app.command()
def shows():
    """List the tv shows on the server."""
    run_query(lambda client, profile: client.get_series(profile), "TV Shows")

@app.command()
def seasons(series_id: str = typer.Argument(..., help="Series ID")):
    """List the seasons of a show."""
    run_query(lambda client, profile: client.get_seasons(profile, series_id), "Seasons")

@app.command()
def episodes(season_id: str = typer.Argument(..., help="Season ID")):
    """List the episodes of a season, in episode order."""
    run_query(
        lambda client, profile: _sorted_episodes(client, profile, season_id),
        "Episodes",
    )

async def _sorted_episodes(client: api.APIClient, profile: SessionProfile, season_id: str) -> List[CatalogRecord]:
    records = await client.get_episodes(profile, season_id)
    return sorted(records, key=lambda r: r.sort_key)

@app.command()
def search(query: str = typer.Argument(..., help="Search query")):
    """Search for movies, shows and episodes."""
    if not query:
        console.print("[red]empty search query[/red]")
        raise typer.Exit(1)
    run_query(lambda client, profile: client.search(profile, query), f"Results for '{query}'")

@app.command()
def play(item_id: str = typer.Argument(..., help="Movie or episode ID to play")):
    """Play an item by ID with the external player."""
    profile = config.load_profile()
    record = CatalogRecord(id=item_id, title=item_id, kind=RecordKind.MOVIE,
                           stream_locator=api.stream_url(profile, item_id))
    try:
        Player(options.player).play(record)
    except JellyTUIError as e:
        console.print(f"[red]error: {e}[/red]")
        raise typer.Exit(1)
    console.print(f"[green]playing:[/green] {item_id}")

@app.command("config")
def configure(
    server: Optional[str] = typer.Option(None, "--server", "-s", help="Jellyfin server URL"),
    api_key: Optional[str] = typer.Option(None, "--api-key", "-k", help="Jellyfin API key"),
):
    """Show the connection profile, or update it with --server/--api-key."""
    profile = config.load_profile()
    if server is not None or api_key is not None:
        profile = SessionProfile(
            server_url=server if server is not None else profile.server_url,
            api_key=api_key if api_key is not None else profile.api_key,
        )
        try:
            config.save_profile(profile)
        except JellyTUIError as e:
            console.print(f"[red]error: {e}[/red]")
            raise typer.Exit(1)
        console.print("[green]profile saved.[/green]")

    table = Table(title="Jellyfin Connection")
    table.add_column("Property")
    table.add_column("Value")
    table.add_row("Server URL", profile.server_url)
    table.add_row("API Key", profile.api_key)
    table.add_row("Config file", str(config.config_file))
    console.print(table)

if __name__ == "__main__":
    app()
