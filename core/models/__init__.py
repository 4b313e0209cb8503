# ============================================================================
# MODELS MODULE
# ============================================================================
# EPOCH: 1 - SCHEMA SCRIPT GENERATION
# STATUS: Model exports
# PURPOSE: Central export point for schema and artifact models
# LAST_REVIEWED: 15 OCT 2026
# ============================================================================
"""
Models Module - Central Export Point

Pydantic models for the schema definition (fields, tables, schema, project)
and dataclasses for generated output (sections, artifacts).

The schema is loaded once, validated whole, and immutable for the run.
"""

from core.models.field import FieldDefinition, ForeignKeyReference, FieldTrigger
from core.models.table import TableDefinition
from core.models.schema import SchemaDefinition, ProjectMetadata, ProjectDefinition
from core.models.artifact import Section, Artifact

__all__ = [
    # Field
    "FieldDefinition",
    "ForeignKeyReference",
    "FieldTrigger",
    # Table
    "TableDefinition",
    # Schema
    "SchemaDefinition",
    "ProjectMetadata",
    "ProjectDefinition",
    # Output
    "Section",
    "Artifact",
]
