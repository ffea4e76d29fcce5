"""
CLI: ``storefront serve`` — start the API server.
"""

from __future__ import annotations

import os

import typer
import uvicorn

from storefront.cli.utils import console, resolve_database_url
from storefront.core.settings import get_settings

app = typer.Typer(no_args_is_help=True)


@app.command("start")
def start(
    host: str | None = typer.Option(None, "--host", "-h", help="Bind address"),
    port: int | None = typer.Option(None, "--port", "-p", help="Bind port"),
    reload: bool = typer.Option(False, "--reload", help="Auto-reload on changes"),
    database: str | None = typer.Option(None, "--database", "-d", help="Database URL or SQLite path"),
) -> None:
    """Start the storefront server (JSON API and rendered pages)."""
    settings = get_settings()
    host = host or settings.host
    port = port or settings.port
    if database:
        # The app factory reads settings from the environment, including in reload workers
        os.environ["STOREFRONT_DATABASE_URL"] = resolve_database_url(database)
        get_settings.cache_clear()

    console.print(f"[bold green]Starting storefront[/bold green] on {host}:{port}")
    uvicorn.run(
        "storefront.api:create_app",
        factory=True,
        host=host,
        port=port,
        reload=reload,
        log_level=settings.log_level.lower(),
    )
