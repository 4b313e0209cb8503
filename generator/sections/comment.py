# ============================================================================
# COMMENT GENERATOR
# ============================================================================
# EPOCH: 1 - SCHEMA SCRIPT GENERATION
# STATUS: Section generator - Column documentation
# PURPOSE: COMMENT ON COLUMN statements for commented fields
# CREATED: 15 OCT 2026
# ============================================================================
"""Comment Generator - one COMMENT ON COLUMN per field with a non-empty comment."""

from typing import Optional

from core.models import TableDefinition
from core.schema.ddl_utils import LiteralFormatter
from generator.sections.base import GenerationContext, ScriptGenerator


class CommentGenerator(ScriptGenerator):
    """Generates the DOCUMENTATION & COMMENTS section."""

    SECTION_NAME = "DOCUMENTATION & COMMENTS"
    SECTION_DESCRIPTION = "Field descriptions and documentation"

    def _render(self, table: TableDefinition, context: GenerationContext) -> Optional[str]:
        statements = [
            f"COMMENT ON COLUMN {table.upper_name}.{f.upper_name} IS "
            f"{LiteralFormatter.quote(f.comment.strip())};"
            for f in table.fields
            if f.comment and f.comment.strip()
        ]
        if not statements:
            return None
        return "\n".join(statements)


__all__ = ["CommentGenerator"]
