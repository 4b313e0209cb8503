# ============================================================================
# DATA GENERATOR
# ============================================================================
# EPOCH: 1 - SCHEMA SCRIPT GENERATION
# STATUS: Section generator - Seed rows
# PURPOSE: Fixed number of synthetic INSERT statements plus COMMIT
# CREATED: 15 OCT 2026
# ============================================================================
"""
Data Generator

Produces <row_count> INSERT statements for a table, then COMMIT. Only tables
with a primary key get seed data: foreign-key seed values point at row
indexes 1..row_count of the referenced table, which only exist when that
table was seeded the same way.

Columns filled by the database (live timestamp defaults, trigger-managed
fields) are omitted from the column list.
"""

import logging
from typing import List, Optional

from core.models import FieldDefinition, TableDefinition
from generator.sections.base import GenerationContext, ScriptGenerator
from generator.sections.values import SeedValueFactory

logger = logging.getLogger(__name__)


class DataGenerator(ScriptGenerator):
    """Generates the INITIAL DATA section."""

    SECTION_NAME = "INITIAL DATA"
    SECTION_DESCRIPTION = "Sample data rows for {table}"

    def seeded_fields(self, table: TableDefinition) -> List[FieldDefinition]:
        """Fields that appear in the INSERT column list."""
        return [f for f in table.fields if not SeedValueFactory.is_database_populated(f)]

    def insert_statement(
        self,
        table: TableDefinition,
        fields: List[FieldDefinition],
        values: List[str],
        indent: str,
    ) -> str:
        columns = ",\n".join(f"{indent}{f.upper_name}" for f in fields)
        literals = ",\n".join(f"{indent}{v}" for v in values)
        return (
            f"INSERT INTO {table.upper_name} (\n"
            f"{columns}\n"
            f") VALUES (\n"
            f"{literals}\n"
            f");"
        )

    def _render(self, table: TableDefinition, context: GenerationContext) -> Optional[str]:
        if not table.has_primary_key:
            logger.debug(f"No primary key on {table.name}; seed data skipped")
            return None

        fields = self.seeded_fields(table)
        if not fields:
            return None

        seed = context.defaults.seed
        factory = SeedValueFactory(context.schema, seed)
        statements = []
        for row in range(1, seed.row_count + 1):
            values = [factory.value(table, f, row) for f in fields]
            statements.append(self.insert_statement(table, fields, values, context.indent))

        statements.append("COMMIT;")
        return "\n\n".join(statements)


__all__ = ["DataGenerator"]
