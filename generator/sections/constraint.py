# ============================================================================
# CONSTRAINT GENERATOR
# ============================================================================
# EPOCH: 1 - SCHEMA SCRIPT GENERATION
# STATUS: Section generator - PK / FK / UNIQUE / CHECK
# PURPOSE: Emit named table constraints in a fixed order
# CREATED: 15 OCT 2026
# ============================================================================
"""
Constraint Generator

Emits, in this order:
    1. one PRIMARY KEY over every isPrimaryKey field      <T>_PK
    2. one FOREIGN KEY per valid FK field                 <T>_<REF>_FK
    3. one UNIQUE per unique field                        <T>_<F>_UK
    4. one CHECK per field with allowedValues             <T>_<F>_CK

When a table holds more than one FK to the same referenced table, those FK
names include the field: <T>_<F>_<REF>_FK.

FK fields whose reference is missing or points outside the schema are
skipped with a warning; the rest of the section is still produced.
"""

import logging
from collections import Counter
from typing import List, Optional

from core.models import FieldDefinition, TableDefinition
from core.schema.ddl_utils import ConstraintNames, LiteralFormatter
from generator.sections.base import GenerationContext, ScriptGenerator

logger = logging.getLogger(__name__)


class ConstraintGenerator(ScriptGenerator):
    """Generates the TABLE CONSTRAINTS section."""

    SECTION_NAME = "TABLE CONSTRAINTS"
    SECTION_DESCRIPTION = "Primary keys, foreign keys, unique constraints, and check constraints"

    def _alter(self, table: TableDefinition, name: str, clause: str, indent: str) -> str:
        return (
            f"ALTER TABLE {table.upper_name}\n"
            f"{indent}ADD CONSTRAINT {name}\n"
            f"{indent}{clause};"
        )

    def primary_key(self, table: TableDefinition, context: GenerationContext) -> Optional[str]:
        pk_fields = table.primary_keys
        if not pk_fields:
            return None
        columns = ", ".join(f.upper_name for f in pk_fields)
        name = ConstraintNames.primary_key(table.name, context.format.max_identifier_length)
        return "-- Primary Key Constraint\n" + self._alter(
            table, name, f"PRIMARY KEY ({columns})", context.indent
        )

    def foreign_keys(self, table: TableDefinition, context: GenerationContext) -> List[str]:
        # Referenced table -> number of FKs pointing at it (drives name collisions)
        targets = Counter(
            f.foreign_key.referenced_table.lower()
            for f in table.fields
            if f.is_foreign_key and f.foreign_key is not None
        )

        blocks = []
        for field in table.foreign_keys:
            problem = context.schema.reference_problem(table, field)
            if problem:
                logger.warning(f"Skipping foreign key constraint: {problem}")
                continue
            ref = field.foreign_key
            shared = targets[ref.referenced_table.lower()] > 1
            name = ConstraintNames.foreign_key(
                table.name,
                ref.referenced_table,
                field=field.name if shared else None,
                max_length=context.format.max_identifier_length,
            )
            clause = (
                f"FOREIGN KEY ({field.upper_name})\n"
                f"{context.indent}REFERENCES {ref.referenced_table.upper()}"
                f"({ref.referenced_column.upper()})"
            )
            blocks.append(
                f"-- Foreign Key Constraint for {field.upper_name}\n"
                + self._alter(table, name, clause, context.indent)
            )
        return blocks

    def unique(self, table: TableDefinition, field: FieldDefinition, context: GenerationContext) -> str:
        name = ConstraintNames.unique(table.name, field.name, context.format.max_identifier_length)
        return f"-- Unique Constraint for {field.upper_name}\n" + self._alter(
            table, name, f"UNIQUE ({field.upper_name})", context.indent
        )

    def check(self, table: TableDefinition, field: FieldDefinition, context: GenerationContext) -> str:
        name = ConstraintNames.check(table.name, field.name, context.format.max_identifier_length)
        literals = LiteralFormatter.value_list(field.allowed_values)
        listed = ", ".join(str(v) for v in field.allowed_values)
        return (
            f"-- Check Constraint for {field.upper_name}\n"
            f"-- Allowed values: {listed}\n"
            + self._alter(table, name, f"CHECK ({field.upper_name} IN ({literals}))", context.indent)
        )

    def _render(self, table: TableDefinition, context: GenerationContext) -> Optional[str]:
        blocks = []

        pk = self.primary_key(table, context)
        if pk:
            blocks.append(pk)

        blocks.extend(self.foreign_keys(table, context))

        for field in table.fields:
            if field.unique:
                blocks.append(self.unique(table, field, context))

        for field in table.fields:
            if field.has_allowed_values:
                blocks.append(self.check(table, field, context))

        if not blocks:
            return None
        return "\n\n".join(blocks)


__all__ = ["ConstraintGenerator"]
