# ============================================================================
# VIEW GENERATOR
# ============================================================================
# EPOCH: 1 - SCHEMA SCRIPT GENERATION
# STATUS: Section generator - Display view
# PURPOSE: Read-oriented <table>_v view with formatted date/time columns
# CREATED: 15 OCT 2026
# ============================================================================
"""
View Generator

Emits one view per table exposing every field, lower-case identifiers:

    CREATE OR REPLACE VIEW orders_v (
       id,
       created_at
    ) AS
       SELECT id,
              TO_CHAR(
                 created_at,
                 'YYYY-MM-DD HH24:MI:SS'
              ) AS created_at
         FROM orders;

A column goes through TO_CHAR when its type contains "timestamp", its type
is a date type, or its name ends with _on / _at. The view and each of its
columns always get a COMMENT statement.
"""

from typing import Optional

from core.contracts import TypeCategory
from core.models import FieldDefinition, TableDefinition
from core.schema.ddl_utils import LiteralFormatter, ObjectNames
from generator.sections.base import GenerationContext, ScriptGenerator

# Fixed 3-space layout; independent of the configured indent
_I = "   "


class ViewGenerator(ScriptGenerator):
    """Generates the TABLE VIEWS section."""

    SECTION_NAME = "TABLE VIEWS"
    SECTION_DESCRIPTION = "Display view for {table} with formatted columns"

    def is_formatted(self, field: FieldDefinition) -> bool:
        """Check if the column is shown through the display date format."""
        if field.type_category in (TypeCategory.TIMESTAMP, TypeCategory.DATE):
            return True
        name = field.lower_name
        return name.endswith("_on") or name.endswith("_at")

    def select_expression(self, field: FieldDefinition, date_format: str, first: bool) -> str:
        lead = "" if first else " " * 10
        name = field.lower_name
        if not self.is_formatted(field):
            return f"{lead}{name}"
        return (
            f"{lead}TO_CHAR(\n"
            f"{' ' * 13}{name},\n"
            f"{' ' * 13}{LiteralFormatter.quote(date_format)}\n"
            f"{' ' * 10}) AS {name}"
        )

    def create_view(self, table: TableDefinition, context: GenerationContext) -> str:
        view = ObjectNames.view(table.name)
        date_format = context.format.display_date_format
        columns = ",\n".join(f"{_I}{f.lower_name}" for f in table.fields)
        selects = ",\n".join(
            self.select_expression(f, date_format, first=(i == 0))
            for i, f in enumerate(table.fields)
        )
        return (
            f"CREATE OR REPLACE VIEW {view} (\n"
            f"{columns}\n"
            f") AS\n"
            f"{_I}SELECT {selects}\n"
            f"{_I}  FROM {table.lower_name};"
        )

    def view_comments(self, table: TableDefinition) -> str:
        view = ObjectNames.view(table.name)
        description = (
            f"View for {table.lower_name} table with formatted columns for display purposes"
        )
        statements = [f"COMMENT ON TABLE {view} IS\n{_I}{LiteralFormatter.quote(description)};"]
        for f in table.fields:
            text = f.comment.strip() if f.comment and f.comment.strip() else (
                f"{f.name} field from {table.lower_name} table"
            )
            statements.append(
                f"COMMENT ON COLUMN {view}.{f.lower_name} IS\n{_I}{LiteralFormatter.quote(text)};"
            )
        return "\n".join(statements)

    def _render(self, table: TableDefinition, context: GenerationContext) -> Optional[str]:
        return f"{self.create_view(table, context)}\n\n{self.view_comments(table)}"


__all__ = ["ViewGenerator"]
