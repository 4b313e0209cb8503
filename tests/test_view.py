# ============================================================================
# VIEW GENERATOR TESTS
# ============================================================================
# EPOCH: 1 - SCHEMA SCRIPT GENERATION
# STATUS: Tests - Display view
# PURPOSE: Verify view layout, date formatting rule and view comments
# CREATED: 15 OCT 2026
# ============================================================================
"""
View Generator Tests

Run with:
    pytest tests/test_view.py -v
"""

import pytest

from core.config import Defaults
from core.models import FieldDefinition, SchemaDefinition, TableDefinition
from generator.sections import ViewGenerator
from generator.sections.base import GenerationContext


def _field(name, type_="NUMBER", **kwargs):
    return FieldDefinition.model_validate({"name": name, "type": type_, **kwargs})


def _orders():
    return TableDefinition(
        name="ORDERS",
        fields=[
            _field("ID", isPrimaryKey=True),
            _field("CREATED_AT", "TIMESTAMP"),
        ],
    )


def _context(table):
    return GenerationContext.create(
        SchemaDefinition(tables=[table]), defaults=Defaults().without_timestamps()
    )


# ============================================================================
# FORMATTING RULE
# ============================================================================

class TestFormattingRule:
    @pytest.mark.parametrize("name, type_, expected", [
        ("created_at", "TIMESTAMP", True),
        ("changed", "TIMESTAMP WITH TIME ZONE", True),
        ("birth", "DATE", True),
        ("approved_on", "VARCHAR2(20)", True),
        ("sent_at", "NUMBER", True),
        ("status", "VARCHAR2(20)", False),
        ("onion", "VARCHAR2(20)", False),
    ])
    def test_is_formatted(self, name, type_, expected):
        assert ViewGenerator().is_formatted(_field(name, type_)) is expected


class TestSelectExpression:
    def test_plain_first_column(self):
        expr = ViewGenerator().select_expression(_field("ID"), "YYYY-MM-DD", first=True)
        assert expr == "id"

    def test_plain_later_column_aligned(self):
        expr = ViewGenerator().select_expression(_field("NAME", "VARCHAR2(10)"), "YYYY-MM-DD", first=False)
        assert expr == " " * 10 + "name"

    def test_formatted_column(self):
        expr = ViewGenerator().select_expression(
            _field("CREATED_AT", "TIMESTAMP"), "YYYY-MM-DD HH24:MI:SS", first=False
        )
        assert expr == (
            "          TO_CHAR(\n"
            "             created_at,\n"
            "             'YYYY-MM-DD HH24:MI:SS'\n"
            "          ) AS created_at"
        )


# ============================================================================
# VIEW SECTION
# ============================================================================

class TestViewGenerator:
    def test_create_view(self):
        table = _orders()
        text = ViewGenerator().create_view(table, _context(table))
        assert text == (
            "CREATE OR REPLACE VIEW orders_v (\n"
            "   id,\n"
            "   created_at\n"
            ") AS\n"
            "   SELECT id,\n"
            "          TO_CHAR(\n"
            "             created_at,\n"
            "             'YYYY-MM-DD HH24:MI:SS'\n"
            "          ) AS created_at\n"
            "     FROM orders;"
        )

    def test_view_comments_fall_back_to_generated_text(self):
        table = TableDefinition(
            name="ORDERS",
            fields=[
                _field("ID", isPrimaryKey=True, comment="Order id"),
                _field("NOTE", "VARCHAR2(10)"),
            ],
        )
        text = ViewGenerator().view_comments(table)
        assert text == (
            "COMMENT ON TABLE orders_v IS\n"
            "   'View for orders table with formatted columns for display purposes';\n"
            "COMMENT ON COLUMN orders_v.id IS\n"
            "   'Order id';\n"
            "COMMENT ON COLUMN orders_v.note IS\n"
            "   'NOTE field from orders table';"
        )

    def test_section(self):
        table = _orders()
        section = ViewGenerator().generate(table, _context(table))
        assert section.name == "TABLE VIEWS"
        assert section.description == "Display view for ORDERS with formatted columns"
        assert section.body.startswith("CREATE OR REPLACE VIEW orders_v (")
        assert "COMMENT ON TABLE orders_v IS" in section.body

    def test_view_generated_without_primary_key(self):
        table = TableDefinition(name="log", fields=[_field("line", "VARCHAR2(200)")])
        assert ViewGenerator().generate(table, _context(table)) is not None
