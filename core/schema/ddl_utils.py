# ============================================================================
# DDL UTILITIES
# ============================================================================
# EPOCH: 1 - SCHEMA SCRIPT GENERATION
# STATUS: Core - DRY utilities for Oracle DDL text generation
# PURPOSE: Literal formatting, object/constraint naming and banner helpers
# LAST_REVIEWED: 15 OCT 2026
# EXPORTS: LiteralFormatter, ConstraintNames, ObjectNames, banner helpers
# DEPENDENCIES: zlib
# ============================================================================
"""
DDL Utilities - Shared Naming and Formatting Rules.

Every generator formats literals and names objects through this module so
that the table script, the view, the seed data and the CRUD package agree
on identifiers and quoting.

Names are pure functions of (table name, field name, kind): identical input
always yields identical constraint and trigger names.

Usage:
    from core.schema.ddl_utils import ConstraintNames, LiteralFormatter

    ConstraintNames.primary_key("orders")              # ORDERS_PK
    ConstraintNames.foreign_key("orders", "customers") # ORDERS_CUSTOMERS_FK
    LiteralFormatter.default_value("current timestamp")  # CURRENT_TIMESTAMP
    LiteralFormatter.default_value("O'Brien")            # 'O''Brien'
"""

import re
import zlib
from typing import Iterable, Optional, Union


# ============================================================================
# CONSTANTS
# ============================================================================

SEPARATOR = "-- " + "=" * 60

MAX_IDENTIFIER_LENGTH = 128

# Keyword spelling (lower, spaces -> underscores) -> canonical dialect keyword
DIALECT_KEYWORDS = {
    "systimestamp": "SYSTIMESTAMP",
    "sysdate": "SYSDATE",
    "user": "USER",
    "current_timestamp": "CURRENT_TIMESTAMP",
    "current_date": "CURRENT_DATE",
    "current_user": "USER",
    "localtimestamp": "LOCALTIMESTAMP",
    "sys_guid()": "SYS_GUID()",
}

# Defaults evaluated by the database at insert time (seed data omits them)
LIVE_DEFAULT_KEYWORDS = frozenset({
    "SYSTIMESTAMP",
    "SYSDATE",
    "CURRENT_TIMESTAMP",
    "CURRENT_DATE",
    "LOCALTIMESTAMP",
})

_NUMERIC = re.compile(r"^-?\d+(\.\d+)?$")


def normalize_keyword(value: str) -> Optional[str]:
    """
    Map a keyword spelling to its canonical dialect keyword.

    Args:
        value: Raw default/action text ("current timestamp", "SysDate", ...)

    Returns:
        Canonical keyword (e.g. "CURRENT_TIMESTAMP") or None if not a keyword
    """
    key = re.sub(r"\s+", "_", value.strip().lower())
    key = key.replace("_(", "(")
    return DIALECT_KEYWORDS.get(key)


# ============================================================================
# LITERAL FORMATTER
# ============================================================================

class LiteralFormatter:
    """
    Builder for SQL literal text.

    All methods are static and return plain strings.
    """

    @staticmethod
    def quote(text: str) -> str:
        """Wrap in single quotes, doubling embedded quotes."""
        return "'" + str(text).replace("'", "''") + "'"

    @staticmethod
    def is_quoted(text: str) -> bool:
        return len(text) >= 2 and text.startswith("'") and text.endswith("'")

    @staticmethod
    def is_numeric(text: str) -> bool:
        return bool(_NUMERIC.match(text.strip()))

    @staticmethod
    def default_value(value: str) -> str:
        """
        Format a column DEFAULT literal.

        Keywords pass unquoted and upper-cased, quoted strings verbatim,
        numbers bare, anything else becomes a quoted string.
        """
        keyword = normalize_keyword(value)
        if keyword:
            return keyword
        if LiteralFormatter.is_quoted(value):
            return value
        if LiteralFormatter.is_numeric(value):
            return value.strip()
        return LiteralFormatter.quote(value)

    @staticmethod
    def trigger_value(action: str) -> str:
        """
        Format the right-hand side of a trigger assignment.

        Keywords are canonicalized; literals and expressions pass verbatim.
        """
        keyword = normalize_keyword(action)
        if keyword:
            return keyword
        return action

    @staticmethod
    def value(value: Union[str, int, float]) -> str:
        """Numbers bare, everything else a quoted string."""
        if isinstance(value, bool):
            return "1" if value else "0"
        if isinstance(value, (int, float)):
            return str(value)
        return LiteralFormatter.quote(value)

    @staticmethod
    def value_list(values: Iterable[Union[str, int, float]]) -> str:
        """Comma-separated literal list in the given order."""
        return ", ".join(LiteralFormatter.value(v) for v in values)


# ============================================================================
# NAMING
# ============================================================================

def shorten_identifier(name: str, max_length: int = MAX_IDENTIFIER_LENGTH) -> str:
    """
    Fit an identifier into max_length characters.

    Over-long names are truncated and suffixed with a CRC32 of the full
    name, so distinct long names stay distinct and stable across runs.
    """
    if len(name) <= max_length:
        return name
    suffix = f"_{zlib.crc32(name.encode('utf-8')):08X}"
    return name[: max_length - len(suffix)] + suffix


class ConstraintNames:
    """
    Deterministic constraint and trigger names.

    Pattern: <TABLE>_<PART>_<KIND>, upper-case.
    """

    @staticmethod
    def primary_key(table: str, max_length: int = MAX_IDENTIFIER_LENGTH) -> str:
        return shorten_identifier(f"{table.upper()}_PK", max_length)

    @staticmethod
    def foreign_key(
        table: str,
        referenced_table: str,
        field: Optional[str] = None,
        max_length: int = MAX_IDENTIFIER_LENGTH,
    ) -> str:
        """
        FK name from table + referenced table.

        The field name is included when given; callers pass it when one
        table holds several FKs to the same referenced table.
        """
        parts = [table.upper()]
        if field:
            parts.append(field.upper())
        parts.append(referenced_table.upper())
        return shorten_identifier("_".join(parts) + "_FK", max_length)

    @staticmethod
    def unique(table: str, field: str, max_length: int = MAX_IDENTIFIER_LENGTH) -> str:
        return shorten_identifier(f"{table.upper()}_{field.upper()}_UK", max_length)

    @staticmethod
    def check(table: str, field: str, max_length: int = MAX_IDENTIFIER_LENGTH) -> str:
        return shorten_identifier(f"{table.upper()}_{field.upper()}_CK", max_length)

    @staticmethod
    def trigger(
        table: str,
        abbreviation: str,
        condition_index: int = 0,
        max_length: int = MAX_IDENTIFIER_LENGTH,
    ) -> str:
        """
        Trigger name: <TABLE>_<ABBR>[_COND[n]]_TRG.

        condition_index is 0 for unconditioned groups, 1 for the first
        conditioned group of an event ("_COND"), 2 for the next ("_COND2").
        """
        suffix = ""
        if condition_index == 1:
            suffix = "_COND"
        elif condition_index > 1:
            suffix = f"_COND{condition_index}"
        return shorten_identifier(f"{table.upper()}_{abbreviation}{suffix}_TRG", max_length)


class ObjectNames:
    """Derived object and artifact file names (lower-case)."""

    @staticmethod
    def view(table: str) -> str:
        return f"{table.lower()}_v"

    @staticmethod
    def data_file(table: str) -> str:
        return f"{table.lower()}_data"

    @staticmethod
    def package(table: str) -> str:
        return f"p_{table.lower()}"

    @staticmethod
    def table_file(table: str) -> str:
        return table.lower()


# ============================================================================
# BANNERS
# ============================================================================

def banner(lines: Iterable[str]) -> str:
    """Comment block framed by separator lines."""
    body = "\n".join(f"-- {line}" for line in lines)
    return f"{SEPARATOR}\n{body}\n{SEPARATOR}"


def section_banner(title: str, description: Optional[str] = None) -> str:
    """Section header: upper-case title plus optional description line."""
    lines = [title.upper()]
    if description:
        lines.append(description)
    return banner(lines)


# ============================================================================
# EXPORTS
# ============================================================================

__all__ = [
    'SEPARATOR',
    'MAX_IDENTIFIER_LENGTH',
    'DIALECT_KEYWORDS',
    'LIVE_DEFAULT_KEYWORDS',
    'normalize_keyword',
    'shorten_identifier',
    'LiteralFormatter',
    'ConstraintNames',
    'ObjectNames',
    'banner',
    'section_banner',
]
