"""
Tests for the CLI commands, run against a SQLite file per test.
"""

from __future__ import annotations

import json

import bcrypt
import pytest
from typer.testing import CliRunner

from attrmatrix import __version__
from attrmatrix.cli.app import app
from attrmatrix.core.database import create_matrix_engine, open_connection
from attrmatrix.core.schema import create_schema
from attrmatrix.ops.cells import set_cell
from attrmatrix.ops.columns import add_column
from attrmatrix.ops.context import OperationContext
from attrmatrix.ops.requests import AddColumnRequest, AddRowRequest, SetCellRequest
from attrmatrix.ops.rows import add_row

runner = CliRunner()


@pytest.fixture()
def db_url(tmp_path) -> str:
    return f"sqlite:///{tmp_path / 'cli.db'}"


@pytest.fixture()
def seeded_url(db_url) -> str:
    """Database with one row, one column and one non-zero cell."""
    engine = create_matrix_engine(db_url)
    create_schema(engine)
    with open_connection(engine) as conn:
        ctx = OperationContext(conn=conn, caller="test")
        add_column(ctx, AddColumnRequest(column_name="Speed"))
        add_row(ctx, AddRowRequest(name="Fire", annotation="hot"))
        set_cell(ctx, SetCellRequest(row_name="Fire", column_name="Speed", value=3))
    engine.dispose()
    return db_url


class TestRootApp:
    def test_help(self):
        result = runner.invoke(app, ["--help"])
        assert result.exit_code == 0
        assert "attrmatrix" in result.output

    def test_version(self):
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert f"attrmatrix {__version__}" in result.output

    def test_no_args_shows_help(self):
        result = runner.invoke(app, [])
        assert result.exit_code in (0, 2)

    @pytest.mark.parametrize("group, command", [("db", "init"), ("table", "show")])
    def test_subcommand_help(self, group, command):
        result = runner.invoke(app, [group, "--help"])
        assert result.exit_code == 0
        assert command in result.output


class TestDbCommands:
    def test_init(self, db_url):
        result = runner.invoke(app, ["db", "init", "-d", db_url, "--json"])
        assert result.exit_code == 0
        payload = json.loads(result.stdout)
        assert payload["tables_created"] == ["criteria", "formula", "attribute", "axis_setting"]

    def test_init_dry_run(self, db_url):
        result = runner.invoke(app, ["db", "init", "-d", db_url, "--dry-run", "--json"])
        assert result.exit_code == 0
        assert json.loads(result.stdout)["dry_run"] is True

    def test_health(self, db_url):
        runner.invoke(app, ["db", "init", "-d", db_url])
        result = runner.invoke(app, ["db", "health", "-d", db_url, "--json"])
        assert result.exit_code == 0
        payload = json.loads(result.stdout)
        assert payload["connected"] is True
        assert payload["table_count"] == 4


class TestTableCommands:
    def test_show_empty(self, db_url):
        result = runner.invoke(app, ["table", "show", "-d", db_url])
        assert result.exit_code == 0
        assert "Table is empty" in result.stdout

    def test_show(self, seeded_url):
        result = runner.invoke(app, ["table", "show", "-d", seeded_url])
        assert result.exit_code == 0
        assert "Fire" in result.stdout
        assert "Speed" in result.stdout

    def test_show_json(self, seeded_url):
        result = runner.invoke(app, ["table", "show", "-d", seeded_url, "--json"])
        assert result.exit_code == 0
        table = json.loads(result.stdout)
        assert table["columns"] == ["Speed"]
        assert table["rows"][0]["attributes"] == {"Speed": 3}

    def test_columns_json(self, seeded_url):
        result = runner.invoke(app, ["table", "columns", "-d", seeded_url, "--json"])
        assert result.exit_code == 0
        assert [c["name"] for c in json.loads(result.stdout)] == ["Speed"]


class TestTransferCommands:
    def test_export_stdout(self, seeded_url):
        result = runner.invoke(app, ["export", "-d", seeded_url])
        assert result.exit_code == 0
        document = json.loads(result.stdout)
        assert document["version"] == "1.0"
        assert document["data"]["rows"] == [
            {"name": "Fire", "annotation": "hot", "attributes": {"Speed": 3}}
        ]

    def test_export_to_file_then_import(self, seeded_url, tmp_path):
        out = tmp_path / "table.json"
        result = runner.invoke(app, ["export", "-d", seeded_url, "-o", str(out)])
        assert result.exit_code == 0
        assert out.exists()

        target = f"sqlite:///{tmp_path / 'other.db'}"
        result = runner.invoke(app, ["import", str(out), "-d", target, "--json"])
        assert result.exit_code == 0
        summary = json.loads(result.stdout)
        assert summary["columns_created"] == 1
        assert summary["rows_created"] == 1
        assert summary["cells_written"] == 1

        shown = runner.invoke(app, ["table", "show", "-d", target, "--json"])
        assert json.loads(shown.stdout)["rows"][0]["attributes"] == {"Speed": 3}

    def test_import_dry_run_writes_nothing(self, seeded_url, tmp_path):
        out = tmp_path / "table.json"
        runner.invoke(app, ["export", "-d", seeded_url, "-o", str(out)])

        target = f"sqlite:///{tmp_path / 'dry.db'}"
        result = runner.invoke(app, ["import", str(out), "-d", target, "--dry-run"])
        assert result.exit_code == 0
        shown = runner.invoke(app, ["table", "show", "-d", target, "--json"])
        assert json.loads(shown.stdout) == {"columns": [], "rows": []}

    def test_import_not_json(self, db_url, tmp_path):
        bad = tmp_path / "bad.json"
        bad.write_text("{oops", encoding="utf-8")
        result = runner.invoke(app, ["import", str(bad), "-d", db_url])
        assert result.exit_code == 1

    def test_import_invalid_document(self, db_url, tmp_path):
        bad = tmp_path / "bad.json"
        bad.write_text(json.dumps({"rows": "nope"}), encoding="utf-8")
        result = runner.invoke(app, ["import", str(bad), "-d", db_url])
        assert result.exit_code == 1

    def test_import_missing_file(self, db_url, tmp_path):
        result = runner.invoke(app, ["import", str(tmp_path / "absent.json"), "-d", db_url])
        assert result.exit_code == 2


class TestHashPassword:
    def test_hash(self):
        result = runner.invoke(app, ["hash-password", "--password", "s3cret"])
        assert result.exit_code == 0
        hashed = result.stdout.strip()
        assert bcrypt.checkpw(b"s3cret", hashed.encode())

    def test_prompt(self):
        result = runner.invoke(app, ["hash-password"], input="pw\npw\n")
        assert result.exit_code == 0


class TestServe:
    def test_require_auth_refuses_without_secrets(self, monkeypatch):
        from attrmatrix.core.settings import get_settings

        monkeypatch.delenv("ATTRMATRIX_JWT_SECRET", raising=False)
        monkeypatch.delenv("ATTRMATRIX_ADMIN_PASSWORD_HASH", raising=False)
        get_settings.cache_clear()
        try:
            result = runner.invoke(app, ["serve", "--require-auth"])
        finally:
            get_settings.cache_clear()
        assert result.exit_code == 1
