# ============================================================================
# TABLE MODEL
# ============================================================================
# EPOCH: 1 - SCHEMA SCRIPT GENERATION
# STATUS: Core model - Table definition
# PURPOSE: Ordered field list plus table-level dependency data
# LAST_REVIEWED: 15 OCT 2026
# EXPORTS: TableDefinition
# DEPENDENCIES: pydantic
# ============================================================================
"""
Table Model

A TableDefinition holds its fields in declaration order. That order is
significant: it is the column order of the CREATE TABLE statement, the view,
the seed inserts and the CRUD parameter lists.

referencingTo names the tables this table depends on; referencedBy is the
inverse and informational only.
"""

from typing import List, Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from core.models.field import FieldDefinition


class TableDefinition(BaseModel):
    """
    Definition of a single table.

    Immutable once loaded - the whole schema is read-only for a run.
    """

    name: str = Field(..., min_length=1, max_length=128)
    fields: List[FieldDefinition] = Field(..., min_length=1)
    referencing_to: List[str] = Field(default_factory=list, alias="referencingTo")
    referenced_by: List[str] = Field(default_factory=list, alias="referencedBy")

    model_config = {"frozen": True, "populate_by_name": True}

    @field_validator("name", mode="before")
    @classmethod
    def strip_name(cls, v):
        return v.strip() if isinstance(v, str) else v

    @field_validator("referencing_to", "referenced_by", mode="before")
    @classmethod
    def handle_string_input(cls, v):
        """Allow single string as shorthand for single-item list."""
        if v is None:
            return []
        if isinstance(v, str):
            return [v]
        return v

    @model_validator(mode="after")
    def check_unique_fields(self):
        seen = set()
        for f in self.fields:
            key = f.name.lower()
            if key in seen:
                raise ValueError(f"Duplicate field '{f.name}' in table '{self.name}'")
            seen.add(key)
        return self

    # =========================================================================
    # NAMING
    # =========================================================================

    @property
    def upper_name(self) -> str:
        return self.name.upper()

    @property
    def lower_name(self) -> str:
        return self.name.lower()

    # =========================================================================
    # FIELD ACCESS
    # =========================================================================

    @property
    def primary_keys(self) -> List[FieldDefinition]:
        return [f for f in self.fields if f.is_primary_key]

    @property
    def has_primary_key(self) -> bool:
        return any(f.is_primary_key for f in self.fields)

    @property
    def foreign_keys(self) -> List[FieldDefinition]:
        """Fields marked isForeignKey, with or without reference data."""
        return [f for f in self.fields if f.is_foreign_key]

    def get_field(self, name: str) -> Optional[FieldDefinition]:
        """Case-insensitive field lookup."""
        key = name.lower()
        for f in self.fields:
            if f.name.lower() == key:
                return f
        return None

    # =========================================================================
    # DEPENDENCIES
    # =========================================================================

    @property
    def dependencies(self) -> List[str]:
        """
        Tables that must exist before this one.

        referencingTo in declared order, then any FK target not already
        listed. Self references are dropped.
        """
        own = self.name.lower()
        seen = set()
        deps = []
        candidates = list(self.referencing_to) + [
            f.foreign_key.referenced_table
            for f in self.fields
            if f.is_foreign_key and f.foreign_key is not None
        ]
        for name in candidates:
            key = name.lower()
            if key == own or key in seen:
                continue
            seen.add(key)
            deps.append(name)
        return deps


__all__ = ["TableDefinition"]
