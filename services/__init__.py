# ============================================================================
# SERVICES MODULE
# ============================================================================
# EPOCH: 1 - SCHEMA SCRIPT GENERATION
# STATUS: Core - Input/output layer
# PURPOSE: Definition loading and script persistence around the pipeline
# CREATED: 15 OCT 2026
# ============================================================================
"""
Services Module

The generation core performs no I/O; these services sit on either side.

Usage:
    from services import DefinitionService, ScriptWriter

    definition = DefinitionService().load("shop.json")
    result = SchemaScriptPipeline(definition.database, definition.metadata).run()
    ScriptWriter("output").write(result.artifacts, definition.folder)
"""

from .definition_service import DefinitionError, DefinitionService, describe_tables
from .script_writer import ScriptWriter

__all__ = [
    "DefinitionError",
    "DefinitionService",
    "describe_tables",
    "ScriptWriter",
]
