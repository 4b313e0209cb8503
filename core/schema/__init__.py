# ============================================================================
# SCHEMA MODULE
# ============================================================================
# EPOCH: 1 - SCHEMA SCRIPT GENERATION
# STATUS: Core - Shared DDL naming and formatting
# PURPOSE: Export literal, naming and banner helpers used by all generators
# LAST_REVIEWED: 15 OCT 2026
# ============================================================================

from core.schema.ddl_utils import (
    SEPARATOR,
    MAX_IDENTIFIER_LENGTH,
    LIVE_DEFAULT_KEYWORDS,
    normalize_keyword,
    shorten_identifier,
    LiteralFormatter,
    ConstraintNames,
    ObjectNames,
    banner,
    section_banner,
)

__all__ = [
    "SEPARATOR",
    "MAX_IDENTIFIER_LENGTH",
    "LIVE_DEFAULT_KEYWORDS",
    "normalize_keyword",
    "shorten_identifier",
    "LiteralFormatter",
    "ConstraintNames",
    "ObjectNames",
    "banner",
    "section_banner",
]
