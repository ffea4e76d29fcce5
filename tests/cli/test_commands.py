"""Tests for the storefront CLI via CliRunner against a temporary SQLite file."""

from __future__ import annotations

import json
from unittest.mock import patch

import pytest
from typer.testing import CliRunner

from storefront import __version__
from storefront.cli.app import app
from storefront.cli.utils import resolve_database_url

runner = CliRunner()


@pytest.fixture
def db_path(tmp_path) -> str:
    return str(tmp_path / "cli.db")


@pytest.fixture
def seeded_db(db_path) -> str:
    assert runner.invoke(app, ["db", "init", "-d", db_path]).exit_code == 0
    assert runner.invoke(app, ["db", "seed", "-d", db_path]).exit_code == 0
    return db_path


def _json(result) -> dict | list:
    assert result.exit_code == 0, result.output
    return json.loads(result.stdout)


class TestRoot:
    def test_version(self):
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.stdout

    def test_no_args_shows_help(self):
        result = runner.invoke(app, [])
        assert "db" in result.output


class TestResolveDatabaseUrl:
    def test_path_becomes_sqlite_url(self):
        assert resolve_database_url("shop.db") == "sqlite:///shop.db"

    def test_url_passes_through(self):
        url = "postgresql+psycopg://u:p@localhost/shop"
        assert resolve_database_url(url) == url


class TestDbCommands:
    def test_init(self, db_path):
        data = _json(runner.invoke(app, ["db", "init", "-d", db_path, "--json"]))
        assert data["tables_created"] == ["categories", "product_categories", "products"]

    def test_migrate(self, db_path):
        data = _json(runner.invoke(app, ["db", "migrate", "-d", db_path, "--json"]))
        assert data == {"revision": "head", "backend": "sqlite"}

    def test_seed_twice(self, db_path):
        runner.invoke(app, ["db", "migrate", "-d", db_path])
        first = _json(runner.invoke(app, ["db", "seed", "-d", db_path, "--json"]))
        second = _json(runner.invoke(app, ["db", "seed", "-d", db_path, "--json"]))
        assert first["products_created"] == 8
        assert second["products_created"] == 0
        assert second["products_updated"] == 8

    def test_seed_dry_run(self, db_path):
        runner.invoke(app, ["db", "init", "-d", db_path])
        data = _json(runner.invoke(app, ["db", "seed", "-d", db_path, "--dry-run", "--json"]))
        assert data["dry_run"] is True
        counts = _json(runner.invoke(app, ["db", "tables", "-d", db_path, "--json"]))
        assert {"table": "products", "count": 0} in counts

    def test_seed_without_schema_fails(self, db_path):
        result = runner.invoke(app, ["db", "seed", "-d", db_path])
        assert result.exit_code == 1
        assert "Error (INTERNAL)" in result.output

    def test_seed_dry_run_without_schema_fails(self, db_path):
        result = runner.invoke(app, ["db", "seed", "-d", db_path, "--dry-run"])
        assert result.exit_code == 1
        assert isinstance(result.exception, SystemExit)
        assert "Error (INTERNAL)" in result.output

    def test_migrate_unknown_revision(self, db_path):
        result = runner.invoke(app, ["db", "migrate", "-d", db_path, "--revision", "nope"])
        assert result.exit_code == 1
        assert isinstance(result.exception, SystemExit)
        assert "Error (VALIDATION_FAILED)" in result.output

    def test_json_output_not_mixed_with_logs(self, db_path):
        runner.invoke(app, ["db", "init", "-d", db_path])
        result = runner.invoke(app, ["--log-level", "INFO", "db", "seed", "-d", db_path, "--json"])
        assert _json(result)["products_created"] == 8
        assert "seed_completed" in result.stderr

    def test_tables(self, seeded_db):
        data = _json(runner.invoke(app, ["db", "tables", "-d", seeded_db, "--json"]))
        assert {"table": "categories", "count": 4} in data

    def test_health(self, seeded_db):
        data = _json(runner.invoke(app, ["db", "health", "-d", seeded_db, "--json"]))
        assert data["connected"] is True

    def test_tables_rich_output(self, seeded_db):
        result = runner.invoke(app, ["db", "tables", "-d", seeded_db])
        assert result.exit_code == 0
        assert "products" in result.stdout


class TestCatalogCommands:
    def test_products_list(self, seeded_db):
        data = _json(runner.invoke(app, ["products", "list", "-d", seeded_db, "--json"]))
        assert data["total"] == 8
        assert data["items"][0]["slug"] == "baseball-cap"

    def test_products_list_by_category(self, seeded_db):
        data = _json(
            runner.invoke(app, ["products", "list", "-c", "hoodies", "-d", seeded_db, "--json"])
        )
        assert [p["slug"] for p in data["items"]] == ["pullover-hoodie", "zip-hoodie"]

    @pytest.mark.parametrize("args", [["-n", "-1"], ["-n", "0"], ["--offset", "-5"]])
    def test_products_list_rejects_out_of_range_paging(self, seeded_db, args):
        result = runner.invoke(app, ["products", "list", "-d", seeded_db, *args])
        assert result.exit_code == 2

    def test_products_list_table(self, seeded_db):
        result = runner.invoke(app, ["products", "list", "-d", seeded_db])
        assert result.exit_code == 0
        assert "Showing 8 of 8" in result.stdout

    def test_products_show(self, seeded_db):
        data = _json(runner.invoke(app, ["products", "show", "mug", "-d", seeded_db, "--json"]))
        assert data["name"] == "Mug"

    def test_products_show_missing(self, seeded_db):
        result = runner.invoke(app, ["products", "show", "nope", "-d", seeded_db])
        assert result.exit_code == 1
        assert "Error (NOT_FOUND)" in result.output

    def test_products_show_missing_json_envelope(self, seeded_db):
        result = runner.invoke(app, ["products", "show", "nope", "-d", seeded_db, "--json"])
        assert result.exit_code == 1
        envelope = json.loads(result.stdout)
        assert envelope["success"] is False
        assert envelope["error"]["code"] == "NOT_FOUND"
        assert "Error (NOT_FOUND)" in result.stderr

    def test_products_invalid_sort(self, seeded_db):
        result = runner.invoke(app, ["products", "list", "--sort", "colour", "-d", seeded_db])
        assert result.exit_code == 1
        assert "VALIDATION_FAILED" in result.output

    def test_categories_list(self, seeded_db):
        data = _json(runner.invoke(app, ["categories", "list", "-d", seeded_db, "--json"]))
        assert [c["slug"] for c in data["items"]] == ["accessories", "drinkware", "hoodies", "shirts"]


class TestSiteAndServe:
    def test_site_build(self, seeded_db, tmp_path):
        out = tmp_path / "site"
        result = runner.invoke(app, ["site", "build", "--out", str(out), "-d", seeded_db])
        assert result.exit_code == 0, result.output
        assert "Built 9 pages" in result.stdout
        assert (out / "products" / "mug" / "index.html").exists()

    def test_site_build_without_schema(self, db_path, tmp_path):
        result = runner.invoke(app, ["site", "build", "--out", str(tmp_path / "site"), "-d", db_path])
        assert result.exit_code == 1
        assert "Error (DATABASE)" in result.output

    def test_serve_start(self):
        with patch("storefront.cli.serve.uvicorn.run") as run:
            result = runner.invoke(app, ["serve", "start", "--port", "9001"])
        assert result.exit_code == 0
        kwargs = run.call_args.kwargs
        assert run.call_args.args == ("storefront.api:create_app",)
        assert kwargs["factory"] is True
        assert kwargs["port"] == 9001
