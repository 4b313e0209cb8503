# ============================================================================
# SCRIPT ASSEMBLER
# ============================================================================
# EPOCH: 1 - SCHEMA SCRIPT GENERATION
# STATUS: Core - Artifact text assembly
# PURPOSE: Header banner + sections + footer, with a structural self-check
# CREATED: 15 OCT 2026
# ============================================================================
"""
Script Assembler

Combines the sections produced for one table into one artifact:

    -- ============================================================
    -- SCHEMAFORGE ORACLE DATABASE SCRIPT
    -- ============================================================
    -- Table: ORDERS
    -- Dialect: ORACLE
    -- Generated: 2026-10-15 09:00:00
    -- Author: Joe Doe
    -- License: MIT
    -- Description: Table creation script for ORDERS
    -- ============================================================

    <section banner + body>        (one per non-empty section)

    -- ============================================================
    -- END OF SCRIPT FOR TABLE: ORDERS
    -- ============================================================

When no generator produces a section the artifact is not applicable and
assemble() returns None.

check_structure() reports structural problems as warnings (logged, never
raised), collecting all of them rather than stopping at the first.
"""

import logging
import re
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from core.models import Section, TableDefinition
from core.schema.ddl_utils import SEPARATOR, banner
from generator.sections.base import GenerationContext, ScriptGenerator

logger = logging.getLogger(__name__)

_CREATE_TABLE = re.compile(r"^\s*CREATE\s+TABLE\b", re.IGNORECASE | re.MULTILINE)
_INDENTED_LINE = re.compile(r"^[ \t]+\S", re.MULTILINE)


# ============================================================================
# RESULT
# ============================================================================

@dataclass
class AssembledScript:
    """
    Assembled artifact text plus the self-check findings.
    """
    object_name: str
    content: str
    sections: List[Section] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    @property
    def section_names(self) -> List[str]:
        return [s.name for s in self.sections]


# ============================================================================
# ASSEMBLER
# ============================================================================

class ScriptAssembler:
    """
    Builds complete script text for one artifact.

    Stateless; one instance can assemble every artifact of a run.
    """

    def header(
        self,
        object_name: str,
        context: GenerationContext,
        script_kind: str = "TABLE",
    ) -> str:
        label = "Table" if script_kind == "TABLE" else "Object"
        dialect = context.dialect.label
        lines = [
            f"SCHEMAFORGE {dialect} DATABASE SCRIPT",
            SEPARATOR[3:],
            f"{label}: {object_name}",
            f"Dialect: {dialect}",
            f"Generated: {context.timestamp}",
            f"Author: {context.author}",
            f"License: {context.license}",
            f"Description: {script_kind.capitalize()} creation script for {object_name}",
        ]
        return banner(lines)

    def footer(self, object_name: str, script_kind: str = "TABLE") -> str:
        return banner([f"END OF SCRIPT FOR {script_kind}: {object_name}"])

    def assemble(
        self,
        table: TableDefinition,
        generators: Sequence[ScriptGenerator],
        context: GenerationContext,
        object_name: Optional[str] = None,
        script_kind: str = "TABLE",
    ) -> Optional[AssembledScript]:
        """
        Run generators for a table and assemble the artifact text.

        Args:
            table: Table definition
            generators: Section generators, in section order
            context: Generation context
            object_name: Name shown in header/footer (default: upper-case table name)
            script_kind: TABLE, VIEW, DATA or PACKAGE

        Returns:
            AssembledScript, or None when no section applies
        """
        sections = []
        for generator in generators:
            section = generator.generate(table, context)
            if section is not None:
                sections.append(section)

        if not sections:
            return None

        name = object_name or table.upper_name
        parts = [self.header(name, context, script_kind)]
        parts.extend(s.render() for s in sections)
        parts.append(self.footer(name, script_kind))
        content = "\n\n".join(parts) + "\n"

        script = AssembledScript(object_name=name, content=content, sections=sections)
        script.warnings = self.check_structure(content, name)
        return script

    def check_structure(self, content: str, object_name: str = "") -> List[str]:
        """
        Structural self-check of assembled text.

        Args:
            content: Script text
            object_name: Name used in log messages

        Returns:
            List of warning messages (empty when well-formed)
        """
        warnings = []
        lines = content.splitlines()

        if sum(1 for line in lines if line.strip() == SEPARATOR) < 2:
            warnings.append("Script has fewer than two banner separator lines")

        if _CREATE_TABLE.search(content) and not _INDENTED_LINE.search(content):
            warnings.append("CREATE TABLE statement has no indented column lines")

        if "DATABASE SCRIPT" not in content:
            warnings.append("Script header is missing")

        if "END OF SCRIPT FOR" not in content:
            warnings.append("Script footer is missing")

        for warning in warnings:
            logger.warning(f"Script structure check ({object_name or 'unnamed'}): {warning}")

        return warnings


__all__ = [
    "AssembledScript",
    "ScriptAssembler",
]
