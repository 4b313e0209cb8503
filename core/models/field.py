# ============================================================================
# FIELD MODEL
# ============================================================================
# EPOCH: 1 - SCHEMA SCRIPT GENERATION
# STATUS: Core model - Column definition
# PURPOSE: Typed representation of one table field and its options
# LAST_REVIEWED: 15 OCT 2026
# EXPORTS: FieldDefinition, ForeignKeyReference, FieldTrigger
# DEPENDENCIES: pydantic
# ============================================================================
"""
Field Model

A FieldDefinition is one column of a table definition, as read from the
project definition file. JSON keys are camelCase (isPrimaryKey, foreignKey,
allowedValues); Python attributes are snake_case. Both are accepted on input.

Derived properties (type category, max length, audit detection) are plain
properties so they never leak into model_dump().
"""

import re
from typing import List, Optional, Union

from pydantic import BaseModel, Field, field_validator

from core.contracts import TriggerEvent, TypeCategory
from core.schema.ddl_utils import LIVE_DEFAULT_KEYWORDS, normalize_keyword


AUDIT_NAME_PATTERN = re.compile(r"^(created|updated|modified)_(at|on|by|date)$")
_LENGTH_PATTERN = re.compile(r"\(\s*(\d+)\s*(?:char|byte)?\s*\)", re.IGNORECASE)


class ForeignKeyReference(BaseModel):
    """Target of a foreign key: referenced table and column."""

    referenced_table: str = Field(..., alias="referencedTable", min_length=1)
    referenced_column: str = Field(..., alias="referencedColumn", min_length=1)

    model_config = {"frozen": True, "populate_by_name": True}


class FieldTrigger(BaseModel):
    """
    Trigger-managed value for a field.

    The action is a dialect keyword (systimestamp, user, ...), a quoted
    literal, a number, or a raw PL/SQL expression.
    """

    enabled: bool = False
    event: TriggerEvent = TriggerEvent.BEFORE_UPDATE
    action: str = "systimestamp"
    condition: Optional[str] = None

    model_config = {"frozen": True, "populate_by_name": True}

    @field_validator("event", mode="before")
    @classmethod
    def default_event(cls, v):
        if v is None or v == "":
            return TriggerEvent.BEFORE_UPDATE
        if isinstance(v, str):
            return v.strip().lower()
        return v

    @field_validator("action", mode="before")
    @classmethod
    def default_action(cls, v):
        if v is None or (isinstance(v, str) and not v.strip()):
            return "systimestamp"
        return str(v).strip()

    @field_validator("condition", mode="before")
    @classmethod
    def blank_condition(cls, v):
        if v is None:
            return None
        v = str(v).strip()
        return v or None


class FieldDefinition(BaseModel):
    """One column of a table definition."""

    name: str = Field(..., min_length=1, max_length=128)
    type: str = Field(..., min_length=1, description="Dialect type, e.g. VARCHAR2(100)")
    nullable: bool = True
    is_primary_key: bool = Field(default=False, alias="isPrimaryKey")
    is_foreign_key: bool = Field(default=False, alias="isForeignKey")
    foreign_key: Optional[ForeignKeyReference] = Field(default=None, alias="foreignKey")
    unique: bool = False
    default_value: Optional[str] = Field(default=None, alias="default")
    allowed_values: Optional[List[Union[int, float, str]]] = Field(
        default=None, alias="allowedValues"
    )
    comment: Optional[str] = None
    trigger: Optional[FieldTrigger] = None

    model_config = {"frozen": True, "populate_by_name": True}

    @field_validator("name", "type", mode="before")
    @classmethod
    def strip_text(cls, v):
        return v.strip() if isinstance(v, str) else v

    @field_validator("default_value", mode="before")
    @classmethod
    def stringify_default(cls, v):
        # Numeric defaults arrive as JSON numbers
        if v is None or isinstance(v, str):
            return v
        if isinstance(v, bool):
            return "1" if v else "0"
        return str(v)

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
    # TYPE INSPECTION
    # =========================================================================

    @property
    def type_category(self) -> TypeCategory:
        """Classify the declared type into a coarse value shape."""
        t = self.type.lower()
        if "timestamp" in t:
            return TypeCategory.TIMESTAMP
        if t.startswith("date") or "datetime" in t:
            return TypeCategory.DATE
        if "bool" in t:
            return TypeCategory.BOOLEAN
        if any(k in t for k in ("char", "clob", "text", "string")):
            return TypeCategory.TEXT
        if any(k in t for k in ("number", "int", "decimal", "numeric", "float", "double", "real")):
            return TypeCategory.NUMBER
        return TypeCategory.OTHER

    @property
    def max_length(self) -> Optional[int]:
        """Declared maximum length for sized text types (VARCHAR2(100) -> 100)."""
        if self.type_category != TypeCategory.TEXT or "clob" in self.type.lower():
            return None
        match = _LENGTH_PATTERN.search(self.type)
        return int(match.group(1)) if match else None

    # =========================================================================
    # SYSTEM-MANAGED DETECTION
    # =========================================================================

    @property
    def has_live_default(self) -> bool:
        """Check if the default is a dialect timestamp keyword (SYSTIMESTAMP, ...)."""
        if not self.default_value:
            return False
        return normalize_keyword(self.default_value) in LIVE_DEFAULT_KEYWORDS

    @property
    def is_trigger_managed(self) -> bool:
        return self.trigger is not None and self.trigger.enabled

    @property
    def is_audit(self) -> bool:
        """Audit columns: created_at, updated_by, modified_on, ..."""
        return bool(AUDIT_NAME_PATTERN.match(self.lower_name))

    @property
    def is_system_managed(self) -> bool:
        """Populated by the database (audit name, trigger or live default)."""
        return self.is_audit or self.is_trigger_managed or self.has_live_default

    @property
    def has_allowed_values(self) -> bool:
        return bool(self.allowed_values)


__all__ = [
    "AUDIT_NAME_PATTERN",
    "FieldDefinition",
    "ForeignKeyReference",
    "FieldTrigger",
]
