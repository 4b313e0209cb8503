# ============================================================================
# SECTION GENERATORS
# ============================================================================
# EPOCH: 1 - SCHEMA SCRIPT GENERATION
# STATUS: Core - Section generator registry
# PURPOSE: Export section generators and the per-artifact generator groups
# CREATED: 15 OCT 2026
# ============================================================================
"""
Section Generators

Each generator consumes one table and produces one named section, or None
when the section does not apply.

Artifact composition:
    table script    TableGenerator, ConstraintGenerator, TriggerGenerator, CommentGenerator
    view script     ViewGenerator
    data script     DataGenerator
    package script  CrudGenerator
"""

from typing import List

from generator.sections.base import GenerationContext, ScriptGenerator
from generator.sections.table import TableGenerator
from generator.sections.constraint import ConstraintGenerator
from generator.sections.trigger import TriggerGenerator, TriggerGroup
from generator.sections.comment import CommentGenerator
from generator.sections.view import ViewGenerator
from generator.sections.values import STATUS_VOCABULARY, SeedValueFactory
from generator.sections.data import DataGenerator
from generator.sections.crud import CrudGenerator, CrudPlan


def table_script_generators() -> List[ScriptGenerator]:
    """Generators for the table script, in section order."""
    return [
        TableGenerator(),
        ConstraintGenerator(),
        TriggerGenerator(),
        CommentGenerator(),
    ]


__all__ = [
    "GenerationContext",
    "ScriptGenerator",
    "TableGenerator",
    "ConstraintGenerator",
    "TriggerGenerator",
    "TriggerGroup",
    "CommentGenerator",
    "ViewGenerator",
    "STATUS_VOCABULARY",
    "SeedValueFactory",
    "DataGenerator",
    "CrudGenerator",
    "CrudPlan",
    "table_script_generators",
]
