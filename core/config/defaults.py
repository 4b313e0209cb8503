# ============================================================================
# CONFIGURATION DEFAULTS
# ============================================================================
# EPOCH: 1 - SCHEMA SCRIPT GENERATION
# STATUS: Core - Default configuration values
# PURPOSE: Centralized defaults for script formatting, seed data, CRUD, metadata
# CREATED: 15 OCT 2026
# ============================================================================
"""
Configuration Defaults

Provides sensible defaults for script generation.
These can be overridden via SCHEMAFORGE_* environment variables (read by
the CLI only) or by passing a Defaults instance to the pipeline.

Design:
- Immutable dataclasses for defaults
- Environment variable overrides
- Type-safe access
"""

import os
from dataclasses import dataclass, field, replace
from datetime import date
from typing import Optional


ENV_PREFIX = "SCHEMAFORGE_"


def _env(name: str, default: str) -> str:
    return os.getenv(ENV_PREFIX + name, default)


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(ENV_PREFIX + name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


@dataclass(frozen=True)
class FormatDefaults:
    """
    Defaults for script layout.

    Controls indentation, column alignment and header stamping.
    """
    indent_size: int = 4
    column_width: int = 30               # Field name padding in CREATE TABLE
    include_timestamps: bool = True      # False -> "[timestamp]" in headers
    max_identifier_length: int = 128     # Oracle 12.2+ limit
    display_date_format: str = "YYYY-MM-DD HH24:MI:SS"

    @property
    def indent(self) -> str:
        return " " * self.indent_size

    @classmethod
    def from_env(cls) -> "FormatDefaults":
        """Create from environment variables."""
        return cls(
            indent_size=int(_env("INDENT_SIZE", "4")),
            include_timestamps=_env_bool("INCLUDE_TIMESTAMPS", True),
            max_identifier_length=int(_env("MAX_IDENTIFIER_LENGTH", "128")),
        )


@dataclass(frozen=True)
class SeedDefaults:
    """
    Defaults for seed data synthesis.

    row_count exceeds one default CRUD page so pagination can be exercised.
    FK values cycle through [1, row_count], matching the referenced PKs.
    """
    row_count: int = 22
    base_date: date = date(2024, 1, 1)   # Anchor for synthesized dates
    locale: str = "en_US"

    @classmethod
    def from_env(cls) -> "SeedDefaults":
        """Create from environment variables."""
        base = _env("SEED_BASE_DATE", "2024-01-01")
        return cls(
            row_count=int(_env("SEED_ROW_COUNT", "22")),
            base_date=date.fromisoformat(base),
            locale=_env("SEED_LOCALE", "en_US"),
        )


@dataclass(frozen=True)
class CrudDefaults:
    """
    Defaults for generated CRUD packages.

    Page size is clamped to [1, max_page_size] inside get_records.
    """
    default_page_size: int = 20
    max_page_size: int = 100
    default_sort_order: str = "ASC"
    default_search_type: str = "partial"

    @classmethod
    def from_env(cls) -> "CrudDefaults":
        """Create from environment variables."""
        return cls(
            default_page_size=int(_env("CRUD_PAGE_SIZE", "20")),
            max_page_size=int(_env("CRUD_MAX_PAGE_SIZE", "100")),
        )


@dataclass(frozen=True)
class MetadataDefaults:
    """
    Attribution used when the project definition leaves it blank.
    """
    author: str = "Joe Doe"
    license: str = "MIT"

    @classmethod
    def from_env(cls) -> "MetadataDefaults":
        """Create from environment variables."""
        return cls(
            author=_env("AUTHOR", "Joe Doe"),
            license=_env("LICENSE", "MIT"),
        )


# ============================================================================
# GLOBAL DEFAULTS INSTANCE
# ============================================================================

@dataclass(frozen=True)
class Defaults:
    """Container for all default configurations."""
    format: FormatDefaults = field(default_factory=FormatDefaults)
    seed: SeedDefaults = field(default_factory=SeedDefaults)
    crud: CrudDefaults = field(default_factory=CrudDefaults)
    metadata: MetadataDefaults = field(default_factory=MetadataDefaults)

    def without_timestamps(self) -> "Defaults":
        """Copy with header timestamps disabled (reproducible output)."""
        return replace(self, format=replace(self.format, include_timestamps=False))

    @classmethod
    def from_env(cls) -> "Defaults":
        """Create all defaults from environment variables."""
        return cls(
            format=FormatDefaults.from_env(),
            seed=SeedDefaults.from_env(),
            crud=CrudDefaults.from_env(),
            metadata=MetadataDefaults.from_env(),
        )


_defaults: Optional[Defaults] = None


def get_defaults() -> Defaults:
    """Get global defaults instance."""
    global _defaults
    if _defaults is None:
        _defaults = Defaults.from_env()
    return _defaults


def reset_defaults() -> None:
    """Reset defaults (for testing)."""
    global _defaults
    _defaults = None


# ============================================================================
# EXPORTS
# ============================================================================

__all__ = [
    "ENV_PREFIX",
    "FormatDefaults",
    "SeedDefaults",
    "CrudDefaults",
    "MetadataDefaults",
    "Defaults",
    "get_defaults",
    "reset_defaults",
]
