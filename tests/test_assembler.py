# ============================================================================
# SCRIPT ASSEMBLER TESTS
# ============================================================================
# EPOCH: 1 - SCHEMA SCRIPT GENERATION
# STATUS: Tests - Artifact assembly
# PURPOSE: Verify header/footer banners, section joining and structure checks
# CREATED: 15 OCT 2026
# ============================================================================
"""
Script Assembler Tests

Run with:
    pytest tests/test_assembler.py -v
"""

import logging
from datetime import datetime, timezone

from core.config import Defaults
from core.models import FieldDefinition, ProjectMetadata, SchemaDefinition, TableDefinition
from core.schema.ddl_utils import SEPARATOR
from generator.assembler import ScriptAssembler
from generator.sections import CommentGenerator, ViewGenerator, table_script_generators
from generator.sections.base import GenerationContext


FIXED_TIME = datetime(2026, 10, 15, 9, 30, 0, tzinfo=timezone.utc)


def _orders():
    return TableDefinition(
        name="orders",
        fields=[
            FieldDefinition(name="id", type="NUMBER", is_primary_key=True, nullable=False),
            FieldDefinition(name="status", type="VARCHAR2(20)"),
        ],
    )


def _context(table, metadata=None, defaults=None):
    return GenerationContext.create(
        SchemaDefinition(tables=[table]),
        metadata=metadata,
        defaults=defaults,
        generated_at=FIXED_TIME,
    )


# ============================================================================
# HEADER / FOOTER
# ============================================================================

class TestHeader:
    def test_table_header_lines(self):
        table = _orders()
        header = ScriptAssembler().header("ORDERS", _context(table))
        assert header.splitlines() == [
            SEPARATOR,
            "-- SCHEMAFORGE ORACLE DATABASE SCRIPT",
            SEPARATOR,
            "-- Table: ORDERS",
            "-- Dialect: ORACLE",
            "-- Generated: 2026-10-15 09:30:00",
            "-- Author: Joe Doe",
            "-- License: MIT",
            "-- Description: Table creation script for ORDERS",
            SEPARATOR,
        ]

    def test_other_kinds_use_object_label(self):
        table = _orders()
        header = ScriptAssembler().header("ORDERS_V", _context(table), script_kind="VIEW")
        assert "-- Object: ORDERS_V" in header
        assert "-- Description: View creation script for ORDERS_V" in header

    def test_timestamp_placeholder(self):
        table = _orders()
        context = _context(table, defaults=Defaults().without_timestamps())
        header = ScriptAssembler().header("ORDERS", context)
        assert "-- Generated: [timestamp]" in header

    def test_metadata_overrides_defaults(self):
        table = _orders()
        context = _context(table, metadata=ProjectMetadata(author="Jane Roe", license="Apache-2.0"))
        header = ScriptAssembler().header("ORDERS", context)
        assert "-- Author: Jane Roe" in header
        assert "-- License: Apache-2.0" in header

    def test_blank_metadata_uses_defaults(self):
        table = _orders()
        context = _context(table, metadata=ProjectMetadata(author="", license=None))
        assert context.author == "Joe Doe"
        assert context.license == "MIT"

    def test_footer(self):
        assert ScriptAssembler().footer("P_ORDERS", "PACKAGE") == (
            f"{SEPARATOR}\n-- END OF SCRIPT FOR PACKAGE: P_ORDERS\n{SEPARATOR}"
        )


# ============================================================================
# ASSEMBLY
# ============================================================================

class TestAssemble:
    def test_table_script(self):
        table = _orders()
        script = ScriptAssembler().assemble(table, table_script_generators(), _context(table))

        assert script.object_name == "ORDERS"
        assert script.section_names == ["TABLE DEFINITION", "TABLE CONSTRAINTS"]
        assert script.warnings == []
        assert script.content.startswith(SEPARATOR + "\n-- SCHEMAFORGE ORACLE DATABASE SCRIPT")
        assert script.content.endswith(f"-- END OF SCRIPT FOR TABLE: ORDERS\n{SEPARATOR}\n")

    def test_sections_in_generator_order(self):
        table = _orders()
        content = ScriptAssembler().assemble(table, table_script_generators(), _context(table)).content
        assert content.index("-- TABLE DEFINITION") < content.index("-- TABLE CONSTRAINTS")

    def test_object_name_override(self):
        table = _orders()
        script = ScriptAssembler().assemble(
            table, [ViewGenerator()], _context(table), object_name="ORDERS_V", script_kind="VIEW"
        )
        assert "-- END OF SCRIPT FOR VIEW: ORDERS_V" in script.content

    def test_no_sections_returns_none(self):
        table = _orders()
        assert ScriptAssembler().assemble(table, [CommentGenerator()], _context(table)) is None

    def test_reproducible_without_timestamps(self):
        table = _orders()
        defaults = Defaults().without_timestamps()
        first = ScriptAssembler().assemble(
            table, table_script_generators(), GenerationContext.create(SchemaDefinition(tables=[table]), defaults=defaults)
        )
        second = ScriptAssembler().assemble(
            table, table_script_generators(), GenerationContext.create(SchemaDefinition(tables=[table]), defaults=defaults)
        )
        assert first.content == second.content


# ============================================================================
# STRUCTURE CHECK
# ============================================================================

class TestCheckStructure:
    def test_all_problems_reported(self, caplog):
        with caplog.at_level(logging.WARNING):
            warnings = ScriptAssembler().check_structure("CREATE TABLE X (\nA NUMBER\n);", "X")
        assert len(warnings) == 4
        assert "Script structure check (X)" in caplog.text

    def test_empty_text(self):
        warnings = ScriptAssembler().check_structure("")
        assert warnings == [
            "Script has fewer than two banner separator lines",
            "Script header is missing",
            "Script footer is missing",
        ]

    def test_well_formed_text(self):
        content = "\n".join([
            SEPARATOR,
            "-- SCHEMAFORGE ORACLE DATABASE SCRIPT",
            SEPARATOR,
            "CREATE TABLE X (",
            "    A NUMBER",
            ");",
            SEPARATOR,
            "-- END OF SCRIPT FOR TABLE: X",
            SEPARATOR,
        ])
        assert ScriptAssembler().check_structure(content) == []
