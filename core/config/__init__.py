# ============================================================================
# CONFIGURATION MODULE
# ============================================================================
# EPOCH: 1 - SCHEMA SCRIPT GENERATION
# STATUS: Core - Configuration and defaults
# PURPOSE: Centralized configuration management
# CREATED: 15 OCT 2026
# ============================================================================
"""
Configuration Module

Provides centralized configuration and defaults for script generation.
"""

from core.config.defaults import (
    FormatDefaults,
    SeedDefaults,
    CrudDefaults,
    MetadataDefaults,
    Defaults,
    get_defaults,
    reset_defaults,
)

__all__ = [
    "FormatDefaults",
    "SeedDefaults",
    "CrudDefaults",
    "MetadataDefaults",
    "Defaults",
    "get_defaults",
    "reset_defaults",
]
