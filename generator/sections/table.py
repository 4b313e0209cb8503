# ============================================================================
# TABLE DEFINITION GENERATOR
# ============================================================================
# EPOCH: 1 - SCHEMA SCRIPT GENERATION
# STATUS: Section generator - CREATE TABLE
# PURPOSE: Emit the canonical create-table statement for one table
# CREATED: 15 OCT 2026
# ============================================================================
"""
Table Definition Generator

One line per field, in declaration order:

    CREATE TABLE ORDERS (
        ID                             NUMBER(10) NOT NULL,
        STATUS                         VARCHAR2(20) DEFAULT 'NEW',
        CREATED_AT                     TIMESTAMP DEFAULT SYSTIMESTAMP
    );

NOT NULL appears only for fields declared nullable = false.
"""

from typing import Optional

from core.models import FieldDefinition, TableDefinition
from core.schema.ddl_utils import LiteralFormatter
from generator.sections.base import GenerationContext, ScriptGenerator


class TableGenerator(ScriptGenerator):
    """Generates the TABLE DEFINITION section."""

    SECTION_NAME = "TABLE DEFINITION"
    SECTION_DESCRIPTION = "Creating table structure for {table}"

    def format_field(self, field: FieldDefinition, column_width: int = 30) -> str:
        """
        Format one column definition.

        Args:
            field: Field definition
            column_width: Width the field name is padded to

        Returns:
            "NAME<pad> TYPE [NOT NULL] [DEFAULT literal]"
        """
        line = f"{field.upper_name.ljust(column_width)} {field.type.upper()}"
        if field.nullable is False:
            line += " NOT NULL"
        if field.default_value is not None and field.default_value.strip():
            line += f" DEFAULT {LiteralFormatter.default_value(field.default_value)}"
        return line

    def _render(self, table: TableDefinition, context: GenerationContext) -> Optional[str]:
        indent = context.indent
        width = context.format.column_width
        columns = ",\n".join(
            f"{indent}{self.format_field(f, width)}" for f in table.fields
        )
        return f"CREATE TABLE {table.upper_name} (\n{columns}\n);"


__all__ = ["TableGenerator"]
