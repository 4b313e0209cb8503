# ============================================================================
# SECTION & ARTIFACT MODELS
# ============================================================================
# EPOCH: 1 - SCHEMA SCRIPT GENERATION
# STATUS: Core model - Generated output units
# PURPOSE: Named script sections and the file-sized artifacts built from them
# LAST_REVIEWED: 15 OCT 2026
# EXPORTS: Section, Artifact
# DEPENDENCIES: dataclasses
# ============================================================================
"""
Section and Artifact Models

Section  - one named chunk of generated text (e.g. "TABLE DEFINITION")
Artifact - one complete script (header + sections + footer), tagged with
           (category, sub_category, file_name, order) for the writer

Both are plain frozen dataclasses; they are produced in memory and handed
to the persistence layer, never parsed back.
"""

from dataclasses import dataclass, field
from typing import Tuple

from core.contracts import ArtifactCategory
from core.schema.ddl_utils import section_banner


@dataclass(frozen=True)
class Section:
    """One named script section."""
    name: str
    description: str
    body: str

    def render(self) -> str:
        """Section banner followed by the body."""
        return f"{section_banner(self.name, self.description)}\n\n{self.body.rstrip()}"


@dataclass(frozen=True)
class Artifact:
    """
    A complete script for one table.

    order is the table's 1-based position in the resolved sequence, so
    the writer can name files in creation order without re-sorting.
    """
    table_name: str
    category: ArtifactCategory
    sub_category: str
    file_name: str
    order: int
    content: str
    warnings: Tuple[str, ...] = field(default_factory=tuple)

    @property
    def relative_path(self) -> str:
        """Path below the database folder, e.g. tables/001_customers.sql."""
        return f"{self.category.value}/{self.order:03d}_{self.file_name}.sql"


__all__ = ["Section", "Artifact"]
