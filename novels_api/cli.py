"""
CLI tool for running and inspecting the service.

Provides commands for starting the HTTP server, creating the database
tables and listing the mounted routes.
"""

import asyncio

import typer
import uvicorn
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from novels_api.exceptions import DatabaseError
from novels_api.settings import app_settings
from novels_api.storage.db import close_db, wait_and_init_db

# Initialize Typer app with help text
typer_app = typer.Typer(
    name="novels-api",
    help="Novels API - serve and manage the authors/novels/characters API",
    add_completion=False,
)
console = Console()


async def _init_db(max_retries: int | None = None) -> None:
    try:
        await wait_and_init_db(max_retries=max_retries)
    finally:
        await close_db()


@typer_app.command(name="serve")
def serve(
    host: str = typer.Option(
        app_settings.HOST, "--host", help="Interface to bind"
    ),
    port: int = typer.Option(
        app_settings.PORT, "--port", "-p", help="Port to listen on"
    ),
    reload: bool = typer.Option(
        False, "--reload", help="Reload on code changes (development)"
    ),
):
    """
    Check database connectivity, then serve the API with uvicorn.

    Exits with status 1 when the database cannot be reached.

    Example:
        novels-api serve --port 8080
    """
    try:
        asyncio.run(_init_db())
    except DatabaseError as ex:
        console.print(f"[red]✗ {ex.message}[/red]")
        raise typer.Exit(code=1)

    console.print(
        f"[green]✓ Connection established[/green] - listening on "
        f"[cyan]{host}:{port}[/cyan]"
    )
    uvicorn.run(
        "novels_api:application",
        factory=True,
        host=host,
        port=port,
        reload=reload,
    )


@typer_app.command(name="init-db")
def init_db(
    max_retries: int = typer.Option(
        app_settings.DB_INIT_MAX_RETRIES,
        "--max-retries",
        help="Connection attempts before giving up",
    ),
):
    """
    Create every missing table in the configured database.

    Example:
        novels-api init-db
    """
    try:
        asyncio.run(_init_db(max_retries=max_retries))
    except DatabaseError as ex:
        console.print(f"[red]✗ {ex.message}[/red]")
        raise typer.Exit(code=1)

    console.print("[green]✓ Database tables are up to date[/green]")


@typer_app.command(name="routes")
def routes():
    """
    Display a table of all mounted HTTP routes.

    Example:
        novels-api routes
    """
    from novels_api import application

    console.print()
    console.print(
        Panel.fit("[bold cyan]Mounted Routes[/bold cyan]", border_style="cyan")
    )
    console.print()

    table = Table("Method", "Path", "Summary", show_lines=True)
    for path, operations in application().openapi()["paths"].items():
        for method, operation in operations.items():
            table.add_row(
                method.upper(),
                f"[green]{path}[/green]",
                f"[yellow]{operation.get('summary', '')}[/yellow]",
            )

    console.print(table)
    console.print()


if __name__ == "__main__":
    typer_app()
