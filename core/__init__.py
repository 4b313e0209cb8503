# ============================================================================
# CORE MODULE
# ============================================================================
# EPOCH: 1 - SCHEMA SCRIPT GENERATION
# STATUS: Core module initialization
# PURPOSE: Export core contracts, models, and DDL naming utilities
# LAST_REVIEWED: 15 OCT 2026
# ============================================================================

from core.contracts import Dialect, TriggerEvent, TypeCategory, ArtifactCategory, PipelineState
from core.models import (
    FieldDefinition,
    TableDefinition,
    SchemaDefinition,
    ProjectMetadata,
    ProjectDefinition,
    Section,
    Artifact,
)
from core.schema import LiteralFormatter, ConstraintNames, ObjectNames

__all__ = [
    # Enums
    "Dialect",
    "TriggerEvent",
    "TypeCategory",
    "ArtifactCategory",
    "PipelineState",
    # Models
    "FieldDefinition",
    "TableDefinition",
    "SchemaDefinition",
    "ProjectMetadata",
    "ProjectDefinition",
    "Section",
    "Artifact",
    # Schema
    "LiteralFormatter",
    "ConstraintNames",
    "ObjectNames",
]
