# ============================================================================
# CLI TESTS
# ============================================================================
# EPOCH: 1 - SCHEMA SCRIPT GENERATION
# STATUS: Tests - Command line entry point
# PURPOSE: Verify exit codes, written files and dry-run output
# CREATED: 15 OCT 2026
# ============================================================================
"""
CLI Tests

Run with:
    pytest tests/test_main.py -v
"""

import json

import pytest

import main
from generator.sections import CrudGenerator


def _definition(tmp_path):
    data = {
        "name": "Shop",
        "projectFolder": "shop",
        "database": {
            "dialect": "oracle",
            "tables": [
                {
                    "name": "orders",
                    "fields": [
                        {"name": "id", "type": "NUMBER", "isPrimaryKey": True},
                        {
                            "name": "customer_id",
                            "type": "NUMBER",
                            "isForeignKey": True,
                            "foreignKey": {"referencedTable": "customers", "referencedColumn": "id"},
                        },
                    ],
                },
                {
                    "name": "customers",
                    "fields": [
                        {"name": "id", "type": "NUMBER", "isPrimaryKey": True},
                        {"name": "name", "type": "VARCHAR2(100)"},
                    ],
                },
            ],
        },
    }
    path = tmp_path / "shop.json"
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


@pytest.fixture(autouse=True)
def _quiet_logging(monkeypatch):
    monkeypatch.setattr(main, "configure_logging", lambda **kwargs: None)


class TestMain:
    def test_generates_scripts(self, tmp_path, capsys):
        out = tmp_path / "out"
        code = main.main([str(_definition(tmp_path)), "--output", str(out), "--no-timestamps"])

        assert code == 0
        database = out / "shop" / "database"
        assert (database / "tables" / "001_customers.sql").exists()
        assert (database / "packages" / "002_p_orders.sql").exists()
        assert "[timestamp]" in (database / "views" / "002_orders_v.sql").read_text(encoding="utf-8")

        printed = capsys.readouterr().out
        assert "Creation order: customers → orders" in printed
        assert "Generated 8 scripts for 2 tables" in printed

    def test_dry_run(self, tmp_path, capsys):
        out = tmp_path / "out"
        code = main.main([str(_definition(tmp_path)), "-o", str(out), "--dry-run"])
        assert code == 0
        assert not out.exists()
        assert "[DRY RUN]" in capsys.readouterr().out

    def test_missing_definition(self, tmp_path):
        assert main.main([str(tmp_path / "nope.json")]) == 1

    def test_invalid_definition(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text(json.dumps({"name": "x", "database": {"tables": []}}), encoding="utf-8")
        assert main.main([str(path), "-o", str(tmp_path / "out")]) == 1

    def test_artifact_failures_exit_code(self, tmp_path, monkeypatch, capsys):
        def boom(self, table, context):
            raise RuntimeError("boom")

        monkeypatch.setattr(CrudGenerator, "_render", boom)
        code = main.main([str(_definition(tmp_path)), "-o", str(tmp_path / "out")])
        assert code == 2
        assert "2 artifact(s) failed" in capsys.readouterr().out
        assert (tmp_path / "out" / "shop" / "database" / "tables" / "002_orders.sql").exists()

    def test_unwritable_output(self, tmp_path):
        blocker = tmp_path / "out"
        blocker.write_text("not a directory", encoding="utf-8")
        assert main.main([str(_definition(tmp_path)), "-o", str(blocker)]) == main.EXIT_WRITE_FAILED

    def test_version(self, capsys):
        with pytest.raises(SystemExit) as exc:
            main.build_parser().parse_args(["--version"])
        assert exc.value.code == 0
        assert "schemaforge 1.0.0" in capsys.readouterr().out
