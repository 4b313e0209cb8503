# ============================================================================
# STRUCTURED LOGGING
# ============================================================================
# EPOCH: 1 - SCHEMA SCRIPT GENERATION
# STATUS: Core - Structured logging with context
# PURPOSE: Consistent, queryable logging across resolver, generators and CLI
# CREATED: 15 OCT 2026
# ============================================================================
"""
Structured Logging

Provides human-readable or JSON-formatted logging for the script pipeline.

Features:
- Component-based loggers
- Contextual fields (project, table, artifact)
- JSON output for log aggregation (--json-logs or LOG_FORMAT=json)
- Named checkpoints for pipeline state transitions

Usage:
    from core.logging import get_logger, log_context

    logger = get_logger("generator.pipeline")

    with log_context(table="ORDERS", artifact="packages"):
        logger.info("Generating CRUD package")
"""

import json
import logging
import os
import sys
import threading
from contextlib import contextmanager
from dataclasses import dataclass, field, asdict
from datetime import datetime, timezone
from typing import Any, Dict, Optional, TextIO, Union
from enum import Enum


class ComponentType(str, Enum):
    """Component types for logging categorization."""
    RESOLVER = "resolver"
    GENERATOR = "generator"
    ASSEMBLER = "assembler"
    PIPELINE = "pipeline"
    LOADER = "loader"
    WRITER = "writer"
    CLI = "cli"


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class LogContext:
    """
    Context for structured logging.

    Thread-local storage for contextual fields.
    """
    project: Optional[str] = None
    table: Optional[str] = None
    artifact: Optional[str] = None
    component: Optional[str] = None
    operation: Optional[str] = None
    extra: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dict, excluding None values."""
        result = {}
        for key, value in asdict(self).items():
            if value is not None and key != "extra":
                result[key] = value
        if self.extra:
            result.update(self.extra)
        return result


# Thread-local context storage
_context_stack = threading.local()


def _get_context_stack() -> list:
    """Get thread-local context stack."""
    if not hasattr(_context_stack, "stack"):
        _context_stack.stack = []
    return _context_stack.stack


def get_current_context() -> LogContext:
    """Get current logging context."""
    stack = _get_context_stack()
    if stack:
        return stack[-1]
    return LogContext()


@contextmanager
def log_context(**kwargs):
    """
    Context manager for adding logging context.

    Args:
        **kwargs: Context fields to add

    Example:
        with log_context(table="ORDERS", artifact="views"):
            logger.info("Generating view")
    """
    # Merge with parent context
    parent = get_current_context()
    new_context = LogContext(
        project=kwargs.get("project", parent.project),
        table=kwargs.get("table", parent.table),
        artifact=kwargs.get("artifact", parent.artifact),
        component=kwargs.get("component", parent.component),
        operation=kwargs.get("operation", parent.operation),
        extra={**parent.extra, **kwargs.get("extra", {})},
    )

    stack = _get_context_stack()
    stack.append(new_context)
    try:
        yield new_context
    finally:
        stack.pop()


class StructuredFormatter(logging.Formatter):
    """
    JSON formatter for structured logging.

    Outputs log records as JSON for easy parsing by log aggregators.
    """

    def __init__(
        self,
        include_timestamp: bool = True,
        include_level: bool = True,
        include_logger: bool = True,
        include_context: bool = True,
    ):
        super().__init__()
        self.include_timestamp = include_timestamp
        self.include_level = include_level
        self.include_logger = include_logger
        self.include_context = include_context

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON."""
        log_data: Dict[str, Any] = {}

        if self.include_timestamp:
            log_data["timestamp"] = _utc_now().isoformat().replace("+00:00", "Z")

        if self.include_level:
            log_data["level"] = record.levelname

        if self.include_logger:
            log_data["logger"] = record.name

        # Message
        log_data["message"] = record.getMessage()

        # Include context
        if self.include_context:
            context = get_current_context()
            context_dict = context.to_dict()
            if context_dict:
                log_data["context"] = context_dict

        # Include extra fields from record
        if hasattr(record, "extra") and record.extra:
            log_data["data"] = record.extra

        # Include exception info
        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        # Source location
        log_data["source"] = {
            "file": record.filename,
            "line": record.lineno,
            "function": record.funcName,
        }

        return json.dumps(log_data, default=str)


class HumanFormatter(logging.Formatter):
    """
    Human-readable formatter for terminals.

    Includes context fields inline for easy reading.
    """

    def format(self, record: logging.LogRecord) -> str:
        """Format log record for human reading."""
        # Base format
        timestamp = _utc_now().strftime("%Y-%m-%d %H:%M:%S")
        level = record.levelname.ljust(8)

        # Get context
        context = get_current_context()
        context_parts = []
        if context.table:
            context_parts.append(f"table={context.table}")
        if context.artifact:
            context_parts.append(f"artifact={context.artifact}")

        context_str = f" [{', '.join(context_parts)}]" if context_parts else ""

        # Message
        message = record.getMessage()

        # Extra data
        extra_str = ""
        if hasattr(record, "extra") and record.extra:
            extra_str = f" {record.extra}"

        # Format
        result = f"{timestamp} {level} {record.name}{context_str}: {message}{extra_str}"

        # Exception
        if record.exc_info:
            result += f"\n{self.formatException(record.exc_info)}"

        return result


class ContextLogger(logging.LoggerAdapter):
    """
    Logger adapter that includes context in log records.

    Automatically includes thread-local context in all log messages.
    """

    def process(self, msg, kwargs):
        """Process log record to include context."""
        # Get current context
        context = get_current_context()

        # Merge extra fields
        extra = kwargs.get("extra", {})
        extra.update(context.to_dict())
        if self.extra and self.extra.get("component"):
            extra.setdefault("component", self.extra["component"].value)

        # Store as attribute for formatter access
        kwargs["extra"] = {"extra": extra}

        return msg, kwargs


def get_logger(
    name: str,
    component: Optional[ComponentType] = None,
) -> ContextLogger:
    """
    Get a context-aware logger.

    Args:
        name: Logger name (e.g., "generator.pipeline")
        component: Optional component type for categorization

    Returns:
        ContextLogger instance
    """
    base_logger = logging.getLogger(name)
    adapter = ContextLogger(base_logger, {"component": component})
    return adapter


def configure_logging(
    level: Union[str, int] = "INFO",
    json_output: bool = False,
    stream: Optional[TextIO] = None,
) -> None:
    """
    Configure logging for the application.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR)
        json_output: Use JSON format (for log aggregation)
        stream: Output stream (default stderr, so stdout stays for scripts)
    """
    # Determine level
    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.INFO)

    # Choose formatter
    if json_output or os.getenv("LOG_FORMAT", "").lower() == "json":
        formatter = StructuredFormatter(include_context=True)
    else:
        formatter = HumanFormatter()

    # Configure root logger
    root = logging.getLogger()
    root.setLevel(level)

    # Remove existing handlers
    for handler in root.handlers[:]:
        root.removeHandler(handler)

    # Add stream handler
    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(formatter)
    root.addHandler(handler)


# ============================================================================
# CHECKPOINT LOGGING
# ============================================================================

def log_checkpoint(
    name: str,
    data: Optional[Dict[str, Any]] = None,
    logger: Optional[logging.Logger] = None,
) -> None:
    """
    Log a named checkpoint.

    Checkpoints are named markers for pipeline state transitions
    (resolving, generating, done) that can be grepped or queried.

    Args:
        name: Checkpoint name (e.g., "pipeline_resolving", "pipeline_done")
        data: Optional checkpoint data
        logger: Optional specific logger to use
    """
    if logger is None:
        logger = logging.getLogger("checkpoint")

    checkpoint_data = {
        "checkpoint": name,
        "timestamp": _utc_now().isoformat().replace("+00:00", "Z"),
    }

    context = get_current_context()
    if context.project:
        checkpoint_data["project"] = context.project
    if context.table:
        checkpoint_data["table"] = context.table

    if data:
        checkpoint_data["data"] = data

    logger.info(f"CHECKPOINT: {name}", extra={"extra": checkpoint_data})


# ============================================================================
# EXPORTS
# ============================================================================

__all__ = [
    "ComponentType",
    "LogContext",
    "StructuredFormatter",
    "HumanFormatter",
    "ContextLogger",
    "get_logger",
    "configure_logging",
    "log_context",
    "get_current_context",
    "log_checkpoint",
]
