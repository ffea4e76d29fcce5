"""
CLI: ``storefront site`` — static generation.
"""

from __future__ import annotations

from pathlib import Path

import typer

from storefront.cli.utils import DATABASE_HELP, console, fail, make_context
from storefront.core.errors import StorefrontError
from storefront.core.settings import get_settings
from storefront.site.builder import build_site
from storefront.site.renderer import PageRenderer

app = typer.Typer(no_args_is_help=True)


@app.command()
def build(
    out: Path | None = typer.Option(None, "--out", "-o", help="Output directory"),
    database: str | None = typer.Option(None, "--database", "-d", help=DATABASE_HELP),
) -> None:
    """Pre-render the listing page and every product page."""
    settings = get_settings()
    output_dir = out or Path(settings.site_output_dir)
    renderer = PageRenderer(store_name=settings.store_name, default_currency=settings.default_currency)
    try:
        with make_context(database) as ctx:
            result = build_site(
                ctx,
                renderer,
                output_dir,
                revalidate=settings.revalidate_seconds,
            )
    except StorefrontError as exc:
        fail(exc.category.value, exc.message)

    console.print(
        f"[bold green]Built {len(result.pages)} pages[/bold green] "
        f"into {result.output_dir} in {result.elapsed_ms:.0f} ms"
    )
    for route in result.pages:
        console.print(f"  {route}")
