# ============================================================================
# SECTION GENERATOR BASE
# ============================================================================
# EPOCH: 1 - SCHEMA SCRIPT GENERATION
# STATUS: Core - Shared generator capability
# PURPOSE: ScriptGenerator ABC and the read-only GenerationContext
# CREATED: 15 OCT 2026
# ============================================================================
"""
Section Generator Base

Every section generator turns one table into one named script section, or
returns None when the section does not apply (no comments, no primary key,
no triggers). None is never an error.

Design:
  - ScriptGenerator ABC; subclasses declare SECTION_NAME / SECTION_DESCRIPTION
    as ClassVars and implement _render().
  - Run-wide data (schema, attribution, format options, run timestamp) lives in
    a frozen GenerationContext passed to every generate() call. Generators
    hold no per-run state, so one instance serves every table.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import ClassVar, Optional

from core.config import Defaults, FormatDefaults
from core.contracts import Dialect
from core.models import ProjectMetadata, SchemaDefinition, Section, TableDefinition

logger = logging.getLogger(__name__)


# ============================================================================
# CONTEXT
# ============================================================================

@dataclass(frozen=True)
class GenerationContext:
    """
    Read-only data shared by all generators for one run.

    metadata is already merged with configured defaults, so author and
    license are always set.
    """
    schema: SchemaDefinition
    metadata: ProjectMetadata
    defaults: Defaults = field(default_factory=Defaults)
    generated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @classmethod
    def create(
        cls,
        schema: SchemaDefinition,
        metadata: Optional[ProjectMetadata] = None,
        defaults: Optional[Defaults] = None,
        generated_at: Optional[datetime] = None,
    ) -> "GenerationContext":
        """
        Build a context, filling attribution from defaults.

        Args:
            schema: Validated schema
            metadata: Optional author/license from the project definition
            defaults: Configuration (default: built-in defaults)
            generated_at: Run timestamp (default: now, UTC)

        Returns:
            GenerationContext instance
        """
        defaults = defaults or Defaults()
        metadata = (metadata or ProjectMetadata()).with_defaults(
            author=defaults.metadata.author,
            license=defaults.metadata.license,
        )
        return cls(
            schema=schema,
            metadata=metadata,
            defaults=defaults,
            generated_at=generated_at or datetime.now(timezone.utc),
        )

    @property
    def dialect(self) -> Dialect:
        return self.schema.dialect

    @property
    def format(self) -> FormatDefaults:
        return self.defaults.format

    @property
    def indent(self) -> str:
        return self.defaults.format.indent

    @property
    def author(self) -> str:
        return self.metadata.author

    @property
    def license(self) -> str:
        return self.metadata.license

    @property
    def timestamp(self) -> str:
        """Header timestamp (YYYY-MM-DD HH:MM:SS) or placeholder when disabled."""
        if not self.defaults.format.include_timestamps:
            return "[timestamp]"
        return self.generated_at.strftime("%Y-%m-%d %H:%M:%S")


# ============================================================================
# BASE GENERATOR
# ============================================================================

class ScriptGenerator(ABC):
    """
    Base section generator.

    Subclasses set SECTION_NAME and SECTION_DESCRIPTION and implement
    _render(), returning the section body or None.
    """

    SECTION_NAME: ClassVar[str] = ""
    SECTION_DESCRIPTION: ClassVar[str] = ""

    @property
    def section_name(self) -> str:
        return self.SECTION_NAME

    def section_description(self, table: TableDefinition) -> str:
        """Description line under the section title ({table} is substituted)."""
        return self.SECTION_DESCRIPTION.format(table=table.upper_name)

    def generate(self, table: TableDefinition, context: GenerationContext) -> Optional[Section]:
        """
        Generate this section for one table.

        Args:
            table: Table definition
            context: Run-wide generation context

        Returns:
            Section, or None when the section does not apply to this table
        """
        body = self._render(table, context)
        if not body or not body.strip():
            logger.debug(f"{self.section_name}: nothing to generate for {table.name}")
            return None
        return Section(
            name=self.section_name,
            description=self.section_description(table),
            body=body,
        )

    @abstractmethod
    def _render(self, table: TableDefinition, context: GenerationContext) -> Optional[str]:
        """Return the section body for this table, or None."""
        ...


__all__ = [
    "GenerationContext",
    "ScriptGenerator",
]
