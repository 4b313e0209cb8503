# ============================================================================
# BASE CONTRACTS & ENUMS
# ============================================================================
# EPOCH: 1 - SCHEMA SCRIPT GENERATION
# STATUS: Foundation - Core enums shared by models and generators
# PURPOSE: Define dialect, trigger, artifact and pipeline enums
# LAST_REVIEWED: 15 OCT 2026
# EXPORTS: Dialect, TriggerEvent, TypeCategory, ArtifactCategory, PipelineState
# DEPENDENCIES: enum
# ============================================================================
"""
Base contracts for the schema script generator.

These enums cross every boundary:
- Definition files (JSON / YAML values)
- Generators (naming, value synthesis)
- Persistence (artifact categories -> directories)
"""

from enum import Enum
from typing import Tuple


# ============================================================================
# DIALECT
# ============================================================================

class Dialect(str, Enum):
    """Target SQL / procedural dialects."""
    ORACLE = "oracle"

    @property
    def label(self) -> str:
        """Upper-case label used in script banners."""
        return self.value.upper()

    @classmethod
    def parse(cls, value: str) -> "Dialect":
        """Case-insensitive lookup ("Oracle", "ORACLE", "oracle")."""
        if isinstance(value, Dialect):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            supported = ", ".join(d.value for d in cls)
            raise ValueError(f"Unsupported dialect '{value}' (supported: {supported})")


# ============================================================================
# TRIGGER EVENTS
# ============================================================================

class TriggerEvent(str, Enum):
    """
    Trigger firing events.

    Value format: <timing>_<operation>[_<operation>]
    """
    BEFORE_INSERT = "before_insert"
    BEFORE_UPDATE = "before_update"
    BEFORE_INSERT_UPDATE = "before_insert_update"
    AFTER_INSERT = "after_insert"
    AFTER_UPDATE = "after_update"
    AFTER_INSERT_UPDATE = "after_insert_update"

    @property
    def timing(self) -> str:
        """BEFORE or AFTER."""
        return self.value.split("_")[0].upper()

    @property
    def operations(self) -> Tuple[str, ...]:
        """Operations covered, e.g. ("INSERT", "UPDATE")."""
        return tuple(op.upper() for op in self.value.split("_")[1:])

    @property
    def abbreviation(self) -> str:
        """Timing + operation code used in trigger names (BI, BU, BIU, AI, AU, AIU)."""
        return self.timing[0] + "".join(op[0] for op in self.operations)

    @property
    def clause(self) -> str:
        """Firing clause, e.g. 'BEFORE INSERT OR UPDATE'."""
        return f"{self.timing} {' OR '.join(self.operations)}"


# ============================================================================
# TYPE CATEGORIES
# ============================================================================

class TypeCategory(str, Enum):
    """Coarse value shape of a column type (drives seed data and CRUD checks)."""
    TEXT = "text"
    NUMBER = "number"
    DATE = "date"
    TIMESTAMP = "timestamp"
    BOOLEAN = "boolean"
    OTHER = "other"

    def is_temporal(self) -> bool:
        """Check if values are dates or timestamps."""
        return self in (TypeCategory.DATE, TypeCategory.TIMESTAMP)


# ============================================================================
# ARTIFACTS & PIPELINE
# ============================================================================

class ArtifactCategory(str, Enum):
    """Artifact categories; each maps to one output directory."""
    TABLES = "tables"
    VIEWS = "views"
    DATA = "data"
    PACKAGES = "packages"


class PipelineState(str, Enum):
    """
    Pipeline driver states.

    State transitions:
        RESOLVING -> GENERATING -> DONE
    """
    RESOLVING = "resolving"      # Dependency resolver running
    GENERATING = "generating"    # Per-table artifact generation
    DONE = "done"                # Terminal

    def is_terminal(self) -> bool:
        """Check if this is a terminal state."""
        return self is PipelineState.DONE


__all__ = [
    "Dialect",
    "TriggerEvent",
    "TypeCategory",
    "ArtifactCategory",
    "PipelineState",
]
