"""
CLI: ``storefront db`` — schema, migrations and seed data.
"""

from __future__ import annotations

import typer

from storefront.cli.utils import DATABASE_HELP, make_context, output_result, resolve_database_url
from storefront.ops.database import (
    check_database_health,
    get_table_counts,
    initialize_database,
    migrate_database,
)
from storefront.ops.requests import MigrateRequest, SeedRequest
from storefront.ops.seed import seed_database

app = typer.Typer(no_args_is_help=True)


@app.command()
def init(
    database: str | None = typer.Option(None, "--database", "-d", help=DATABASE_HELP),
    dry_run: bool = typer.Option(False, "--dry-run", help="Preview without changes"),
    json_out: bool = typer.Option(False, "--json", help="JSON output"),
) -> None:
    """Create the catalog tables directly from the models."""
    with make_context(database, dry_run=dry_run) as ctx:
        result = initialize_database(ctx)
    output_result(result, as_json=json_out, title="Database Init")


@app.command()
def migrate(
    database: str | None = typer.Option(None, "--database", "-d", help=DATABASE_HELP),
    revision: str = typer.Option("head", "--revision", "-r", help="Target Alembic revision"),
    json_out: bool = typer.Option(False, "--json"),
) -> None:
    """Apply Alembic migrations up to REVISION."""
    result = migrate_database(
        MigrateRequest(database_url=resolve_database_url(database), revision=revision)
    )
    output_result(result, as_json=json_out, title="Migration")


@app.command()
def seed(
    database: str | None = typer.Option(None, "--database", "-d", help=DATABASE_HELP),
    no_refresh: bool = typer.Option(
        False, "--no-refresh", help="Leave rows that already exist untouched"
    ),
    dry_run: bool = typer.Option(False, "--dry-run", help="Count creates/updates without writing"),
    json_out: bool = typer.Option(False, "--json"),
) -> None:
    """Upsert the sample categories and products by id."""
    with make_context(database, dry_run=dry_run) as ctx:
        result = seed_database(ctx, SeedRequest(refresh=not no_refresh))
    output_result(result, as_json=json_out, title="Seed")


@app.command()
def health(
    database: str | None = typer.Option(None, "--database", "-d", help=DATABASE_HELP),
    json_out: bool = typer.Option(False, "--json"),
) -> None:
    """Check database connectivity."""
    with make_context(database) as ctx:
        result = check_database_health(ctx)
    output_result(result, as_json=json_out, title="Database Health")


@app.command()
def tables(
    database: str | None = typer.Option(None, "--database", "-d", help=DATABASE_HELP),
    json_out: bool = typer.Option(False, "--json"),
) -> None:
    """Show row counts for the catalog tables."""
    with make_context(database) as ctx:
        result = get_table_counts(ctx)
    output_result(result, as_json=json_out, title="Table Counts")
