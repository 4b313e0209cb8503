# ============================================================================
# SQL TEMPLATE ENGINE
# ============================================================================
# EPOCH: 1 - SCHEMA SCRIPT GENERATION
# STATUS: Core - Template rendering with Jinja2
# PURPOSE: Render PL/SQL package text from templates and precomputed context
# CREATED: 15 OCT 2026
# ============================================================================
"""
SQL Template Engine

Renders procedural SQL text (CRUD package specification and body) from
Jinja2 templates. Generators compute names, parameter lists and literals in
Python; templates only lay the text out.

Environment settings:
- autoescape off (output is SQL, not HTML)
- StrictUndefined so a missing context key fails loudly
- trim_blocks / lstrip_blocks so {% %} lines leave no blank lines behind

Filters:
- sql_quote   - 'text' with embedded quotes doubled
- sql_literal - numbers bare, strings quoted

Example:
    renderer = get_renderer()
    text = renderer.render("END {{ name }};", name="p_orders")
"""

import logging
from typing import Any, Dict, Optional

from jinja2 import (
    BaseLoader,
    Environment,
    StrictUndefined,
    Template,
    TemplateSyntaxError,
    UndefinedError,
)

from core.schema.ddl_utils import LiteralFormatter

logger = logging.getLogger(__name__)


class TemplateRenderError(RuntimeError):
    """Raised when a template cannot be compiled or rendered."""
    pass


class SqlTemplateRenderer:
    """
    Jinja2-based renderer for SQL text.

    Compiled templates are cached by source; the renderer can be reused
    across tables.
    """

    def __init__(self):
        """Initialize the renderer with a Jinja2 environment."""
        self._env = Environment(
            loader=BaseLoader(),
            autoescape=False,
            undefined=StrictUndefined,
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=False,
        )
        self._env.filters["sql_quote"] = LiteralFormatter.quote
        self._env.filters["sql_literal"] = LiteralFormatter.value
        self._cache: Dict[str, Template] = {}

    def _compile(self, source: str) -> Template:
        template = self._cache.get(source)
        if template is None:
            try:
                template = self._env.from_string(source)
            except TemplateSyntaxError as e:
                raise TemplateRenderError(f"Invalid template (line {e.lineno}): {e.message}")
            self._cache[source] = template
        return template

    def render(self, source: str, **context: Any) -> str:
        """
        Render a template source with the given context.

        Args:
            source: Jinja2 template text
            **context: Template variables

        Returns:
            Rendered text

        Raises:
            TemplateRenderError: If the template is invalid or a variable is missing
        """
        template = self._compile(source)
        try:
            return template.render(**context)
        except UndefinedError as e:
            raise TemplateRenderError(f"Failed to render template: {e}")


# ============================================================================
# CONVENIENCE FUNCTIONS
# ============================================================================

_renderer: Optional[SqlTemplateRenderer] = None


def get_renderer() -> SqlTemplateRenderer:
    """Get shared template renderer instance."""
    global _renderer
    if _renderer is None:
        _renderer = SqlTemplateRenderer()
    return _renderer


# ============================================================================
# EXPORTS
# ============================================================================

__all__ = [
    "SqlTemplateRenderer",
    "TemplateRenderError",
    "get_renderer",
]
