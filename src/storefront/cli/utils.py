"""
CLI utility helpers — output formatting and session management.
"""

from __future__ import annotations

import json
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import asdict
from typing import Any, NoReturn

import typer
from rich.console import Console
from rich.table import Table

from storefront.core.orm.session import (
    create_storefront_engine,
    session_scope,
    storefront_session_factory,
)
from storefront.core.settings import get_settings
from storefront.ops.context import OperationContext
from storefront.ops.result import OperationResult, PagedResult

console = Console()
err_console = Console(stderr=True)

DATABASE_HELP = "Database URL or SQLite file path (default: configured database_url)"


# ── Session helper ───────────────────────────────────────────────────────


def resolve_database_url(database: str | None = None) -> str:
    """``--database`` value → SQLAlchemy URL. Bare paths are SQLite files."""
    if not database:
        return get_settings().database_url
    if "://" in database:
        return database
    return f"sqlite:///{database}"


@contextmanager
def make_context(
    database: str | None = None,
    *,
    dry_run: bool = False,
) -> Iterator[OperationContext]:
    """Open an engine and session for one CLI command.

    The session commits when the block exits cleanly; the engine is
    disposed either way.
    """
    settings = get_settings()
    engine = create_storefront_engine(resolve_database_url(database), echo=settings.echo_sql)
    try:
        with session_scope(storefront_session_factory(engine)) as session:
            yield OperationContext(session=session, caller="cli", dry_run=dry_run)
    finally:
        engine.dispose()


# ── Output helpers ───────────────────────────────────────────────────────


def _to_dict(obj: Any) -> dict[str, Any]:
    """Convert dataclass / pydantic model / dict to plain dict."""
    if hasattr(obj, "model_dump"):
        return obj.model_dump()
    if hasattr(obj, "__dataclass_fields__"):
        return asdict(obj)
    if isinstance(obj, dict):
        return obj
    return {"value": str(obj)}


def fail(code: str, message: str) -> NoReturn:
    err_console.print(f"[bold red]Error[/bold red] ({code}): {message}")
    raise typer.Exit(code=1)


def fail_result(result: OperationResult, *, as_json: bool = False) -> NoReturn:
    """Report a failed result; with ``--json`` the error envelope also goes to stdout."""
    if as_json:
        console.print_json(json.dumps(result.to_dict(), default=str))
    err = result.error
    fail(err.code if err else "ERROR", err.message if err else "Unknown error")


def output_result(
    result: OperationResult,
    *,
    as_json: bool = False,
    title: str = "",
) -> None:
    """Render an ``OperationResult`` to the terminal."""
    if not result.success:
        fail_result(result, as_json=as_json)

    data = result.data

    if as_json:
        payload = _to_dict(data) if not isinstance(data, list | tuple) else [_to_dict(d) for d in data]
        console.print_json(json.dumps(payload, default=str))
        return

    if isinstance(data, list):
        if not data:
            console.print("[dim]No items.[/dim]")
            return
        _print_table(data, title=title)
    else:
        _print_dict(_to_dict(data), title=title)


def output_paged(
    result: PagedResult,
    *,
    as_json: bool = False,
    title: str = "",
    columns: tuple[str, ...] | None = None,
) -> None:
    """Render a ``PagedResult`` to the terminal with pagination info."""
    if not result.success:
        fail_result(result, as_json=as_json)

    items = result.data or []

    if as_json:
        payload = {
            "items": [_to_dict(d) for d in items],
            "total": result.total,
            "limit": result.limit,
            "offset": result.offset,
            "has_more": result.has_more,
        }
        console.print_json(json.dumps(payload, default=str))
        return

    if not items:
        console.print("[dim]No items.[/dim]")
        return

    _print_table(items, title=title, columns=columns)
    console.print(f"\n[dim]Showing {len(items)} of {result.total} (offset {result.offset})[/dim]")


# ── Private helpers ──────────────────────────────────────────────────────


def _cell(value: Any) -> str:
    if isinstance(value, list):
        return ", ".join(v.get("slug", str(v)) if isinstance(v, dict) else str(v) for v in value)
    return str(value)


def _print_table(items: list, *, title: str = "", columns: tuple[str, ...] | None = None) -> None:
    """Render a list of dataclasses/dicts as a Rich table."""
    cols = list(columns or _to_dict(items[0]))
    table = Table(title=title or None, show_lines=False, pad_edge=False)
    for col in cols:
        table.add_column(col, overflow="fold")
    for item in items:
        d = _to_dict(item)
        table.add_row(*(_cell(d.get(col)) for col in cols))
    console.print(table)


def _print_dict(data: dict[str, Any], *, title: str = "") -> None:
    """Render a single dict as key-value pairs."""
    if title:
        console.print(f"[bold]{title}[/bold]")
    for k, v in data.items():
        console.print(f"  [cyan]{k}[/cyan]: {_cell(v)}")
