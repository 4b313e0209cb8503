# ============================================================================
# DEFINITION SERVICE
# ============================================================================
# EPOCH: 1 - SCHEMA SCRIPT GENERATION
# STATUS: Service - Project definition loading
# PURPOSE: Load JSON/YAML definition files into validated models
# CREATED: 15 OCT 2026
# ============================================================================
"""
Definition Service

Loads a project definition file and validates it into a ProjectDefinition.

Accepted shapes:
    full project   {"name": ..., "projectFolder": ..., "database": {"dialect": ..., "tables": [...]}}
    bare schema    {"dialect": ..., "tables": [...]}   (project name = file stem)

"database.type" is accepted as a spelling of "database.dialect".

Malformed files (unreadable, bad JSON/YAML, model validation failures, no
tables, bad projectFolder) raise DefinitionError. Dangling foreign-key
references are only logged: the affected constraints are skipped during
generation.
"""

import json
import logging
import re
from pathlib import Path
from typing import Any, Dict, List, Union

import yaml
from pydantic import ValidationError

from core.models import ProjectDefinition, TableDefinition

logger = logging.getLogger(__name__)

SUPPORTED_SUFFIXES = (".json", ".yaml", ".yml")

_FOLDER_PATTERN = re.compile(r"^[A-Za-z0-9\-_]+$")


class DefinitionError(ValueError):
    """Raised when a definition file cannot be loaded or is invalid."""
    pass


class DefinitionService:
    """Service for loading project definition files."""

    def load(self, path: Union[str, Path]) -> ProjectDefinition:
        """
        Load and validate a definition file.

        Args:
            path: Path to a .json, .yaml or .yml file

        Returns:
            ProjectDefinition

        Raises:
            DefinitionError: If the file is missing, unparsable or invalid
        """
        path = Path(path)
        if not path.exists():
            raise DefinitionError(f"Definition file not found: {path}")
        if path.suffix.lower() not in SUPPORTED_SUFFIXES:
            raise DefinitionError(
                f"Unsupported definition file type '{path.suffix}' "
                f"(expected one of: {', '.join(SUPPORTED_SUFFIXES)})"
            )

        logger.info(f"Loading project definition: {path}")
        data = self._read(path)
        definition = self.parse(data, default_name=path.stem)

        logger.info(
            f"Loaded project '{definition.name}' with "
            f"{len(definition.database.tables)} tables"
        )
        return definition

    def _read(self, path: Path) -> Any:
        try:
            with open(path, encoding="utf-8") as f:
                if path.suffix.lower() == ".json":
                    return json.load(f)
                return yaml.safe_load(f)
        except json.JSONDecodeError as e:
            raise DefinitionError(f"Invalid JSON in {path}: {e}")
        except yaml.YAMLError as e:
            raise DefinitionError(f"Invalid YAML in {path}: {e}")
        except OSError as e:
            raise DefinitionError(f"Cannot read {path}: {e}")

    def parse(self, data: Any, default_name: str = "project") -> ProjectDefinition:
        """
        Validate already-parsed definition data.

        Args:
            data: Parsed JSON/YAML document
            default_name: Project name used for bare schema documents

        Returns:
            ProjectDefinition

        Raises:
            DefinitionError: If the data does not describe a valid project
        """
        if not isinstance(data, dict):
            raise DefinitionError(
                f"Invalid project definition: expected object, got {type(data).__name__}"
            )

        if "database" not in data and "tables" in data:
            data = {"name": default_name, "database": data}
        else:
            data = dict(data)

        database = data.get("database")
        if not isinstance(database, dict):
            raise DefinitionError("Missing or invalid field: database")
        if "dialect" not in database and "type" in database:
            database = {k: v for k, v in database.items() if k != "type"}
            database["dialect"] = data["database"]["type"]
            data["database"] = database

        errors = self.validate_shape(data)
        if errors:
            raise DefinitionError(f"Invalid project definition: {'; '.join(errors)}")

        try:
            definition = ProjectDefinition.model_validate(data)
        except ValidationError as e:
            raise DefinitionError(f"Invalid project definition: {e}")

        for warning in definition.database.validate_references():
            logger.warning(warning)

        return definition

    def validate_shape(self, data: Dict[str, Any]) -> List[str]:
        """
        Checks made before model validation.

        Returns:
            List of error messages (empty if valid)
        """
        errors = []
        tables = data["database"].get("tables")
        if not isinstance(tables, list):
            errors.append("Missing or invalid field: database.tables (must be an array)")
        elif not tables:
            errors.append("Database must have at least one table defined")

        folder = data.get("projectFolder", data.get("project_folder"))
        if isinstance(folder, str) and not _FOLDER_PATTERN.match(folder):
            errors.append(
                "Invalid projectFolder: must contain only letters, numbers, hyphens, and underscores"
            )
        return errors


def describe_tables(tables: List[TableDefinition]) -> str:
    """
    Plain-text overview of the tables in a definition.

    Columns: No, Table Name, Fields, Referencing To, Referenced By.
    """
    headers = ["No", "Table Name", "Fields", "Referencing To", "Referenced By"]
    rows = [
        [
            str(i),
            t.name,
            str(len(t.fields)),
            ", ".join(t.referencing_to) or "-",
            ", ".join(t.referenced_by) or "-",
        ]
        for i, t in enumerate(tables, start=1)
    ]
    widths = [max(len(r[c]) for r in [headers] + rows) for c in range(len(headers))]

    def line(cells: List[str]) -> str:
        return " | ".join(cell.ljust(w) for cell, w in zip(cells, widths)).rstrip()

    out = [line(headers), "-+-".join("-" * w for w in widths)]
    out.extend(line(r) for r in rows)
    return "\n".join(out)


__all__ = [
    "SUPPORTED_SUFFIXES",
    "DefinitionError",
    "DefinitionService",
    "describe_tables",
]
