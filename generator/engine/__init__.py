# ============================================================================
# GENERATOR ENGINE
# ============================================================================
# EPOCH: 1 - SCHEMA SCRIPT GENERATION
# STATUS: Core - Engine components
# PURPOSE: Table ordering and SQL template rendering
# CREATED: 15 OCT 2026
# ============================================================================
"""
Generator Engine Components

- resolver: dependency-ordered table list (DFS topological sort)
- templates: Jinja2-based SQL text rendering
"""

from generator.engine.resolver import (
    ResolutionError,
    DependencyGraph,
    ResolutionResult,
    GraphBuilder,
    DependencyResolver,
    get_resolver,
    order_tables,
)
from generator.engine.templates import (
    SqlTemplateRenderer,
    TemplateRenderError,
    get_renderer,
)

__all__ = [
    # Resolver
    "ResolutionError",
    "DependencyGraph",
    "ResolutionResult",
    "GraphBuilder",
    "DependencyResolver",
    "get_resolver",
    "order_tables",
    # Templates
    "SqlTemplateRenderer",
    "TemplateRenderError",
    "get_renderer",
]
