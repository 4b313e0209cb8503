# ============================================================================
# SCRIPT WRITER
# ============================================================================
# EPOCH: 1 - SCHEMA SCRIPT GENERATION
# STATUS: Service - Artifact persistence
# PURPOSE: Write generated artifacts to the project output tree
# CREATED: 15 OCT 2026
# ============================================================================
"""
Script Writer

Layout:

    <output_root>/<project_folder>/database/<category>/NNN_<file_name>.sql

    output/shop/database/tables/001_customers.sql
    output/shop/database/views/001_customers_v.sql
    output/shop/database/data/002_orders_data.sql
    output/shop/database/packages/002_p_orders.sql

NNN is the table's 1-based position in the resolved creation order, so a
plain directory listing runs the scripts in a valid order.
"""

import logging
from pathlib import Path
from typing import Iterable, List, Union

from core.models import Artifact

logger = logging.getLogger(__name__)

DATABASE_DIR = "database"


class ScriptWriter:
    """Writes artifacts below an output root."""

    def __init__(self, output_root: Union[str, Path], dry_run: bool = False):
        """
        Initialize writer.

        Args:
            output_root: Base output directory
            dry_run: Compute paths and log them without touching the filesystem
        """
        self.output_root = Path(output_root)
        self.dry_run = dry_run

    def database_dir(self, project_folder: str) -> Path:
        return self.output_root / project_folder / DATABASE_DIR

    def path_for(self, artifact: Artifact, project_folder: str) -> Path:
        """Target file path for an artifact."""
        return self.database_dir(project_folder) / artifact.relative_path

    def write(self, artifacts: Iterable[Artifact], project_folder: str) -> List[Path]:
        """
        Write artifacts to disk.

        Args:
            artifacts: Generated artifacts
            project_folder: Project folder name below the output root

        Returns:
            Paths written (or that would be written in dry-run mode)
        """
        written = []
        for artifact in artifacts:
            path = self.path_for(artifact, project_folder)
            if self.dry_run:
                logger.info(f"[dry-run] Would write {path}")
            else:
                path.parent.mkdir(parents=True, exist_ok=True)
                path.write_text(artifact.content, encoding="utf-8")
                logger.debug(f"Wrote {path} ({len(artifact.content)} chars)")
            written.append(path)

        logger.info(
            f"{'Planned' if self.dry_run else 'Wrote'} {len(written)} scripts under "
            f"{self.database_dir(project_folder)}"
        )
        return written


__all__ = [
    "DATABASE_DIR",
    "ScriptWriter",
]
