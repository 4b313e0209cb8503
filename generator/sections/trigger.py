# ============================================================================
# TRIGGER GENERATOR
# ============================================================================
# EPOCH: 1 - SCHEMA SCRIPT GENERATION
# STATUS: Section generator - Row triggers
# PURPOSE: One trigger per (event, condition) group of trigger-enabled fields
# CREATED: 15 OCT 2026
# ============================================================================
"""
Trigger Generator

Fields with trigger.enabled are grouped by (event, condition), in first-seen
order. Each group becomes one row trigger that assigns every field in it.

Naming: <TABLE>_<ABBR>[_COND[n]]_TRG
    ABBR     BI, BU, BIU, AI, AU, AIU
    _COND    first conditioned group for an event
    _COND2   second conditioned group for the same event, and so on

Assigned value per field: a dialect keyword (SYSTIMESTAMP, SYSDATE, USER,
CURRENT_TIMESTAMP), a quoted literal, a number, or the action verbatim as a
PL/SQL expression.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from core.contracts import TriggerEvent
from core.models import FieldDefinition, TableDefinition
from core.schema.ddl_utils import ConstraintNames, LiteralFormatter
from generator.sections.base import GenerationContext, ScriptGenerator

logger = logging.getLogger(__name__)


@dataclass
class TriggerGroup:
    """Trigger-enabled fields sharing one (event, condition) pair."""
    event: TriggerEvent
    condition: Optional[str]
    condition_index: int = 0
    fields: List[FieldDefinition] = field(default_factory=list)


class TriggerGenerator(ScriptGenerator):
    """Generates the TABLE TRIGGERS section."""

    SECTION_NAME = "TABLE TRIGGERS"
    SECTION_DESCRIPTION = "Auto-generated triggers for field updates"

    def group_fields(self, table: TableDefinition) -> List[TriggerGroup]:
        """
        Group trigger-enabled fields by (event, condition).

        Args:
            table: Table definition

        Returns:
            Groups in first-seen order, with per-event condition numbering
        """
        groups: Dict[Tuple[TriggerEvent, Optional[str]], TriggerGroup] = {}
        conditioned: Dict[TriggerEvent, int] = {}

        for f in table.fields:
            if not f.is_trigger_managed:
                continue
            key = (f.trigger.event, f.trigger.condition)
            group = groups.get(key)
            if group is None:
                index = 0
                if f.trigger.condition:
                    conditioned[f.trigger.event] = conditioned.get(f.trigger.event, 0) + 1
                    index = conditioned[f.trigger.event]
                group = TriggerGroup(
                    event=f.trigger.event,
                    condition=f.trigger.condition,
                    condition_index=index,
                )
                groups[key] = group
            group.fields.append(f)

        return list(groups.values())

    def trigger_name(self, table: TableDefinition, group: TriggerGroup, max_length: int = 128) -> str:
        return ConstraintNames.trigger(
            table.name, group.event.abbreviation, group.condition_index, max_length
        )

    def format_condition(self, condition: str) -> str:
        """WHEN clause; kept verbatim if it already starts with WHEN."""
        if condition.upper().startswith("WHEN"):
            return condition
        if condition.startswith("(") and condition.endswith(")"):
            return f"WHEN {condition}"
        return f"WHEN ({condition})"

    def render_group(
        self,
        table: TableDefinition,
        group: TriggerGroup,
        context: GenerationContext,
    ) -> str:
        indent = context.indent
        name = self.trigger_name(table, group, context.format.max_identifier_length)

        if group.event.timing == "AFTER":
            logger.warning(
                f"Trigger {name} assigns :NEW values in an AFTER trigger; "
                f"Oracle only allows this in BEFORE triggers"
            )

        lines = [
            f"-- Trigger: {name}",
            f"-- Generated by SchemaForge {context.dialect.label} generator",
            f"-- Automatically updates: {', '.join(f.name for f in group.fields)}",
            f"-- Author: {context.author}",
            f"-- License: {context.license}",
            "",
            f"CREATE OR REPLACE TRIGGER {name}",
            f"{indent}{group.event.clause} ON {table.upper_name}",
            f"{indent}FOR EACH ROW",
        ]
        if group.condition:
            lines.append(f"{indent}{self.format_condition(group.condition)}")
        lines.append("BEGIN")

        for position, f in enumerate(group.fields):
            if position:
                lines.append("")
            value = LiteralFormatter.trigger_value(f.trigger.action)
            lines.append(f"{indent}-- Auto-update {f.upper_name}")
            lines.append(f"{indent}:NEW.{f.upper_name} := {value};")

        lines.append(f"END {name};")
        lines.append("/")
        return "\n".join(lines)

    def _render(self, table: TableDefinition, context: GenerationContext) -> Optional[str]:
        groups = self.group_fields(table)
        if not groups:
            return None
        return "\n\n".join(self.render_group(table, g, context) for g in groups)


__all__ = ["TriggerGroup", "TriggerGenerator"]
