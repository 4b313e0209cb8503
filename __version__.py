# ============================================================================
# VERSION - SCHEMAFORGE
# ============================================================================
# EPOCH: 1 - SCHEMA SCRIPT GENERATION
# ============================================================================
"""
Version information for SchemaForge.

This is the single source of truth for the application version.
Updated manually for each release.
"""
# Version format: major.minor.patch
__version__ = "1.0.0"
__version_info__ = tuple(int(x) for x in __version__.split("."))

# Build metadata
BUILD_DATE = "2026-10-15"

EPOCH = 1
CODENAME = "Schema Script Generator"
