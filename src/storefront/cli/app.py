"""
Root Typer application for the storefront CLI.
"""

from __future__ import annotations

import sys

import typer
from typer import Typer

from storefront import __version__
from storefront.cli.catalog import categories_app, products_app
from storefront.cli.db import app as db_app
from storefront.cli.serve import app as serve_app
from storefront.cli.site import app as site_app
from storefront.core.logging import configure_logging

app = Typer(
    name="storefront",
    help="storefront — catalog database, seed data and static pages.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"storefront {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool | None = typer.Option(
        None,
        "--version",
        "-V",
        help="Show version and exit.",
        callback=_version_callback,
        is_eager=True,
    ),
    log_level: str = typer.Option("WARNING", "--log-level", help="DEBUG, INFO, WARNING or ERROR"),
) -> None:
    """storefront CLI — manage the catalog database and generate pages."""
    # stdout carries command output (tables, --json); logs go to stderr
    configure_logging(level=log_level, json_format=False, stream=sys.stderr, cache_loggers=False)


app.add_typer(db_app, name="db", help="Database schema, migrations and seed data.")
app.add_typer(products_app, name="products", help="Browse products.")
app.add_typer(categories_app, name="categories", help="Browse categories.")
app.add_typer(site_app, name="site", help="Static page generation.")
app.add_typer(serve_app, name="serve", help="Start the HTTP server.")
