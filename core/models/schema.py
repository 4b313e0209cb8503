# ============================================================================
# SCHEMA & PROJECT MODELS
# ============================================================================
# EPOCH: 1 - SCHEMA SCRIPT GENERATION
# STATUS: Core model - Schema root and project wrapper
# PURPOSE: Table set for one dialect, plus project metadata from definition files
# LAST_REVIEWED: 15 OCT 2026
# EXPORTS: SchemaDefinition, ProjectMetadata, ProjectDefinition
# DEPENDENCIES: pydantic
# ============================================================================
"""
Schema and Project Models

SchemaDefinition is the root the generators read: a dialect and an ordered
table list. Table order in the file is not significant; the resolver
re-orders.

ProjectDefinition wraps a schema with the attribution and placement data
found in definition files:

    {
        "name": "shop",
        "projectFolder": "shop",
        "author": "Jane Roe",
        "database": {"dialect": "oracle", "tables": [...]}
    }
"""

import re
from typing import List, Optional, Tuple

from pydantic import BaseModel, Field, field_validator, model_validator

from core.contracts import Dialect
from core.models.field import FieldDefinition
from core.models.table import TableDefinition


class SchemaDefinition(BaseModel):
    """Dialect plus the full table set being compiled."""

    dialect: Dialect = Dialect.ORACLE
    tables: List[TableDefinition] = Field(default_factory=list)

    model_config = {"frozen": True, "populate_by_name": True}

    @field_validator("dialect", mode="before")
    @classmethod
    def parse_dialect(cls, v):
        if v is None:
            return Dialect.ORACLE
        return Dialect.parse(v)

    @model_validator(mode="after")
    def check_unique_tables(self):
        seen = set()
        for t in self.tables:
            key = t.name.lower()
            if key in seen:
                raise ValueError(f"Duplicate table '{t.name}' in schema")
            seen.add(key)
        return self

    def get_table(self, name: str) -> Optional[TableDefinition]:
        """Case-insensitive table lookup."""
        key = name.lower()
        for t in self.tables:
            if t.name.lower() == key:
                return t
        return None

    def find_reference(
        self, field: FieldDefinition
    ) -> Optional[Tuple[TableDefinition, FieldDefinition]]:
        """Resolve a FK field to its (table, column) target, or None."""
        if not field.is_foreign_key or field.foreign_key is None:
            return None
        table = self.get_table(field.foreign_key.referenced_table)
        if table is None:
            return None
        column = table.get_field(field.foreign_key.referenced_column)
        if column is None:
            return None
        return table, column

    def reference_problem(self, table: TableDefinition, field: FieldDefinition) -> Optional[str]:
        """Describe why a FK field cannot produce a constraint (None if valid)."""
        if not field.is_foreign_key:
            return None
        where = f"{table.name}.{field.name}"
        if field.foreign_key is None:
            return f"{where} is marked as foreign key but has no reference data"
        ref = field.foreign_key
        target = self.get_table(ref.referenced_table)
        if target is None:
            return f"{where} references unknown table '{ref.referenced_table}'"
        if target.get_field(ref.referenced_column) is None:
            return (
                f"{where} references unknown column "
                f"'{ref.referenced_table}.{ref.referenced_column}'"
            )
        return None

    def validate_references(self) -> List[str]:
        """
        Check every FK field against the schema.

        Returns list of problems (empty if valid). Problems are warnings:
        the affected constraints are skipped, generation continues.
        """
        problems = []
        for table in self.tables:
            for f in table.fields:
                problem = self.reference_problem(table, f)
                if problem:
                    problems.append(problem)
        return problems


class ProjectMetadata(BaseModel):
    """Attribution stamped into script headers and trigger comments."""

    author: Optional[str] = None
    license: Optional[str] = None

    model_config = {"frozen": True}

    def with_defaults(self, author: str, license: str) -> "ProjectMetadata":
        """Fill blank values from configured defaults."""
        return ProjectMetadata(
            author=self.author or author,
            license=self.license or license,
        )


class ProjectDefinition(BaseModel):
    """A definition file: project attributes plus the database schema."""

    name: str = Field(..., min_length=1)
    version: str = "1.0.0"
    description: Optional[str] = None
    author: Optional[str] = None
    license: Optional[str] = None
    project_folder: Optional[str] = Field(default=None, alias="projectFolder")
    database: SchemaDefinition

    model_config = {"frozen": True, "populate_by_name": True}

    @field_validator("version", mode="before")
    @classmethod
    def stringify_version(cls, v):
        return str(v) if v is not None else "1.0.0"

    @property
    def metadata(self) -> ProjectMetadata:
        return ProjectMetadata(author=self.author, license=self.license)

    @property
    def folder(self) -> str:
        """Output folder label; derived from the project name when not given."""
        if self.project_folder:
            return self.project_folder
        return re.sub(r"[^a-z0-9]+", "_", self.name.lower()).strip("_") or "project"


__all__ = [
    "SchemaDefinition",
    "ProjectMetadata",
    "ProjectDefinition",
]
