# ============================================================================
# DEFINITION SERVICE TESTS
# ============================================================================
# EPOCH: 1 - SCHEMA SCRIPT GENERATION
# STATUS: Tests - Definition loading
# PURPOSE: Verify JSON/YAML loading, accepted shapes and rejection rules
# CREATED: 15 OCT 2026
# ============================================================================
"""
Definition Service Tests

Tests for:
- JSON and YAML definition files
- Bare schema documents and database.type
- Rejection of malformed definitions
- Dangling foreign keys logged, not rejected
- describe_tables overview

Run with:
    pytest tests/test_definition_service.py -v
"""

import json
import logging

import pytest
import yaml

from core.contracts import Dialect
from services import DefinitionError, DefinitionService, describe_tables


# ============================================================================
# HELPERS
# ============================================================================

def _tables():
    return [
        {
            "name": "customers",
            "fields": [{"name": "id", "type": "NUMBER", "isPrimaryKey": True}],
            "referencedBy": ["orders"],
        },
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
            "referencingTo": ["customers"],
        },
    ]


def _project(**overrides):
    data = {
        "name": "Shop",
        "version": "2.0.0",
        "author": "Jane Roe",
        "projectFolder": "shop",
        "database": {"dialect": "oracle", "tables": _tables()},
    }
    data.update(overrides)
    return data


def _write_json(tmp_path, data, name="shop.json"):
    path = tmp_path / name
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


# ============================================================================
# LOADING
# ============================================================================

class TestLoad:
    def test_json(self, tmp_path):
        definition = DefinitionService().load(_write_json(tmp_path, _project()))
        assert definition.name == "Shop"
        assert definition.version == "2.0.0"
        assert definition.folder == "shop"
        assert definition.metadata.author == "Jane Roe"
        assert [t.name for t in definition.database.tables] == ["customers", "orders"]

    def test_yaml(self, tmp_path):
        path = tmp_path / "shop.yaml"
        path.write_text(yaml.safe_dump(_project()), encoding="utf-8")
        definition = DefinitionService().load(path)
        assert definition.database.dialect == Dialect.ORACLE
        assert len(definition.database.tables) == 2

    def test_bare_schema_uses_file_stem(self, tmp_path):
        path = _write_json(tmp_path, {"tables": _tables()}, name="inventory.json")
        definition = DefinitionService().load(path)
        assert definition.name == "inventory"
        assert definition.folder == "inventory"

    def test_database_type_accepted(self):
        data = _project(database={"type": "Oracle", "tables": _tables()})
        definition = DefinitionService().parse(data)
        assert definition.database.dialect == Dialect.ORACLE

    def test_folder_derived_from_name(self):
        data = _project(name="My Shop!", projectFolder=None)
        assert DefinitionService().parse(data).folder == "my_shop"

    def test_dangling_reference_only_logged(self, caplog):
        tables = _tables()
        tables[1]["fields"][1]["foreignKey"]["referencedTable"] = "ghosts"
        with caplog.at_level(logging.WARNING):
            definition = DefinitionService().parse(_project(database={"tables": tables}))
        assert len(definition.database.tables) == 2
        assert "orders.customer_id references unknown table 'ghosts'" in caplog.text


# ============================================================================
# REJECTION
# ============================================================================

class TestRejection:
    def test_missing_file(self, tmp_path):
        with pytest.raises(DefinitionError, match="not found"):
            DefinitionService().load(tmp_path / "missing.json")

    def test_unsupported_suffix(self, tmp_path):
        path = tmp_path / "shop.xml"
        path.write_text("<shop/>", encoding="utf-8")
        with pytest.raises(DefinitionError, match="Unsupported definition file type"):
            DefinitionService().load(path)

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "shop.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(DefinitionError, match="Invalid JSON"):
            DefinitionService().load(path)

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "shop.yaml"
        path.write_text("tables: [unclosed", encoding="utf-8")
        with pytest.raises(DefinitionError, match="Invalid YAML"):
            DefinitionService().load(path)

    def test_not_an_object(self):
        with pytest.raises(DefinitionError, match="expected object"):
            DefinitionService().parse([1, 2, 3])

    def test_missing_database(self):
        with pytest.raises(DefinitionError, match="database"):
            DefinitionService().parse({"name": "Shop"})

    def test_empty_tables(self):
        with pytest.raises(DefinitionError, match="at least one table"):
            DefinitionService().parse(_project(database={"tables": []}))

    def test_tables_not_a_list(self):
        with pytest.raises(DefinitionError, match="must be an array"):
            DefinitionService().parse(_project(database={"tables": "customers"}))

    def test_bad_project_folder(self):
        with pytest.raises(DefinitionError, match="Invalid projectFolder"):
            DefinitionService().parse(_project(projectFolder="../etc"))

    def test_unknown_dialect(self):
        with pytest.raises(DefinitionError, match="Unsupported dialect"):
            DefinitionService().parse(_project(database={"dialect": "db2", "tables": _tables()}))

    def test_field_without_type(self):
        tables = _tables()
        del tables[0]["fields"][0]["type"]
        with pytest.raises(DefinitionError, match="Invalid project definition"):
            DefinitionService().parse(_project(database={"tables": tables}))


# ============================================================================
# OVERVIEW
# ============================================================================

class TestDescribeTables:
    def test_rows(self):
        definition = DefinitionService().parse(_project())
        lines = describe_tables(definition.database.tables).splitlines()

        cells = [[c.strip() for c in line.split("|")] for line in lines]
        assert cells[0] == ["No", "Table Name", "Fields", "Referencing To", "Referenced By"]
        assert set(lines[1]) <= {"-", "+"}
        assert cells[2] == ["1", "customers", "1", "-", "orders"]
        assert cells[3] == ["2", "orders", "2", "customers", "-"]
