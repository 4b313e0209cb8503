# ============================================================================
# GENERATOR MODULE
# ============================================================================
# EPOCH: 1 - SCHEMA SCRIPT GENERATION
# STATUS: Generator module initialization
# PURPOSE: Export the pipeline driver, assembler and engine components
# CREATED: 15 OCT 2026
# ============================================================================
"""
Generator Module

    engine/     dependency resolver, Jinja2 SQL renderer
    sections/   section generators (table, constraint, trigger, comment,
                view, data, crud)
    assembler   header + sections + footer per artifact
    pipeline    RESOLVING -> GENERATING -> DONE driver
"""

from generator.engine import DependencyResolver, ResolutionError, order_tables
from generator.assembler import AssembledScript, ScriptAssembler
from generator.pipeline import (
    ArtifactFailure,
    PipelineResult,
    PipelineStateError,
    SchemaScriptPipeline,
    run_pipeline,
)

__all__ = [
    "DependencyResolver",
    "ResolutionError",
    "order_tables",
    "AssembledScript",
    "ScriptAssembler",
    "ArtifactFailure",
    "PipelineResult",
    "PipelineStateError",
    "SchemaScriptPipeline",
    "run_pipeline",
]
