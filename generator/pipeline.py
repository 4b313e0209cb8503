# ============================================================================
# PIPELINE DRIVER
# ============================================================================
# EPOCH: 1 - SCHEMA SCRIPT GENERATION
# STATUS: Core - Single-shot generation pipeline
# PURPOSE: Resolve table order, then generate every artifact table by table
# CREATED: 15 OCT 2026
# ============================================================================
"""
Pipeline Driver

State machine:

    RESOLVING  -> dependency resolver runs once over the schema tables
    GENERATING -> for each table in resolved order (i = 1..n):
                    table script  (table, constraints, triggers, comments)
                    view script
                    data script   (not applicable without a primary key)
                    package script (not applicable without a primary key)
    DONE       -> terminal; run() is single-shot

Every artifact of table i is produced before table i+1 starts. Each
artifact is generated inside its own error boundary: a failure is recorded
as an ArtifactFailure and logged, and the run continues with the next
artifact.

Usage:
    pipeline = SchemaScriptPipeline(schema, metadata)
    result = pipeline.run()
    for artifact in result.artifacts:
        print(artifact.relative_path)
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable, List, Optional, Sequence, Tuple

from core.config import Defaults
from core.contracts import ArtifactCategory, PipelineState
from core.logging import ComponentType, get_logger, log_checkpoint, log_context
from core.models import Artifact, ProjectMetadata, SchemaDefinition, TableDefinition
from core.schema.ddl_utils import ObjectNames
from generator.assembler import ScriptAssembler
from generator.engine.resolver import DependencyResolver
from generator.sections import (
    CrudGenerator,
    DataGenerator,
    GenerationContext,
    ScriptGenerator,
    ViewGenerator,
    table_script_generators,
)

logger = get_logger(__name__, ComponentType.PIPELINE)


class PipelineStateError(RuntimeError):
    """Raised when a pipeline is run more than once."""
    pass


# ============================================================================
# RESULT
# ============================================================================

@dataclass
class ArtifactFailure:
    """One artifact that raised during generation."""
    table: str
    category: ArtifactCategory
    error: str


@dataclass
class PipelineResult:
    """
    Outcome of one pipeline run.

    artifacts are in generation order: table by table, and within a table
    tables, views, data, packages.
    """
    state: PipelineState
    ordered_tables: List[str] = field(default_factory=list)
    artifacts: List[Artifact] = field(default_factory=list)
    failures: List[ArtifactFailure] = field(default_factory=list)
    cycles: List[str] = field(default_factory=list)
    explanation: str = ""

    @property
    def succeeded(self) -> bool:
        return not self.failures

    def artifacts_for(self, table: str) -> List[Artifact]:
        key = table.lower()
        return [a for a in self.artifacts if a.table_name.lower() == key]

    def artifacts_in(self, category: ArtifactCategory) -> List[Artifact]:
        return [a for a in self.artifacts if a.category == category]


# ============================================================================
# ARTIFACT PLAN
# ============================================================================

@dataclass(frozen=True)
class ArtifactSpec:
    """How one artifact category is produced for a table."""
    category: ArtifactCategory
    script_kind: str
    generators: Callable[[], Sequence[ScriptGenerator]]
    file_name: Callable[[str], str]
    object_name: Callable[[TableDefinition], str]


ARTIFACT_SPECS: Tuple[ArtifactSpec, ...] = (
    ArtifactSpec(
        category=ArtifactCategory.TABLES,
        script_kind="TABLE",
        generators=table_script_generators,
        file_name=ObjectNames.table_file,
        object_name=lambda t: t.upper_name,
    ),
    ArtifactSpec(
        category=ArtifactCategory.VIEWS,
        script_kind="VIEW",
        generators=lambda: [ViewGenerator()],
        file_name=ObjectNames.view,
        object_name=lambda t: ObjectNames.view(t.name).upper(),
    ),
    ArtifactSpec(
        category=ArtifactCategory.DATA,
        script_kind="DATA",
        generators=lambda: [DataGenerator()],
        file_name=ObjectNames.data_file,
        object_name=lambda t: t.upper_name,
    ),
    ArtifactSpec(
        category=ArtifactCategory.PACKAGES,
        script_kind="PACKAGE",
        generators=lambda: [CrudGenerator()],
        file_name=ObjectNames.package,
        object_name=lambda t: ObjectNames.package(t.name).upper(),
    ),
)


# ============================================================================
# PIPELINE
# ============================================================================

class SchemaScriptPipeline:
    """
    Drives one generation run over a schema.

    Sequential and single-threaded; performs no I/O. Artifacts are handed
    back in the result for a writer to persist.
    """

    def __init__(
        self,
        schema: SchemaDefinition,
        metadata: Optional[ProjectMetadata] = None,
        defaults: Optional[Defaults] = None,
        generated_at: Optional[datetime] = None,
    ):
        """
        Initialize pipeline.

        Args:
            schema: Validated schema
            metadata: Optional author/license attribution
            defaults: Configuration (default: built-in defaults)
            generated_at: Fixed run timestamp (default: now, UTC)
        """
        self.schema = schema
        self.context = GenerationContext.create(
            schema=schema,
            metadata=metadata,
            defaults=defaults,
            generated_at=generated_at,
        )
        self.resolver = DependencyResolver()
        self.assembler = ScriptAssembler()
        self.specs = ARTIFACT_SPECS
        self._state: Optional[PipelineState] = None

    @property
    def state(self) -> Optional[PipelineState]:
        return self._state

    def _transition(self, state: PipelineState, **data) -> None:
        self._state = state
        log_checkpoint(f"pipeline_{state.value}", data or None)

    def run(self) -> PipelineResult:
        """
        Execute the pipeline once.

        Returns:
            PipelineResult in state DONE

        Raises:
            PipelineStateError: If run() was already called
            ResolutionError: If the table list is malformed
        """
        if self._state is not None:
            raise PipelineStateError(
                f"Pipeline already run (state: {self._state.value}); create a new pipeline"
            )

        self._transition(PipelineState.RESOLVING, tables=len(self.schema.tables))
        resolution = self.resolver.resolve(self.schema.tables)
        logger.info(f"Resolved creation order: {', '.join(resolution.names)}")

        result = PipelineResult(
            state=PipelineState.GENERATING,
            ordered_tables=resolution.names,
            cycles=list(resolution.cycles),
            explanation=resolution.explanation,
        )

        self._transition(PipelineState.GENERATING, order=resolution.names)
        for order, table in enumerate(resolution.tables, start=1):
            with log_context(table=table.name):
                self._generate_table(table, order, result)

        self._transition(
            PipelineState.DONE,
            artifacts=len(result.artifacts),
            failures=len(result.failures),
        )
        result.state = PipelineState.DONE

        logger.info(
            f"Pipeline complete: {len(result.artifacts)} artifacts, "
            f"{len(result.failures)} failures"
        )
        return result

    def _generate_table(self, table: TableDefinition, order: int, result: PipelineResult) -> None:
        for spec in self.specs:
            with log_context(artifact=spec.category.value):
                try:
                    artifact = self.generate_artifact(table, order, spec)
                except Exception as e:
                    logger.error(
                        f"Failed to generate {spec.category.value} artifact for {table.name}: {e}",
                        exc_info=True,
                    )
                    result.failures.append(
                        ArtifactFailure(table=table.name, category=spec.category, error=str(e))
                    )
                    continue

                if artifact is None:
                    logger.warning(
                        f"{spec.category.value} artifact not applicable for {table.name}"
                    )
                    continue

                result.artifacts.append(artifact)
                logger.debug(f"Generated {artifact.relative_path}")

    def generate_artifact(
        self,
        table: TableDefinition,
        order: int,
        spec: ArtifactSpec,
    ) -> Optional[Artifact]:
        """
        Generate one artifact for one table.

        Args:
            table: Table definition
            order: 1-based position in the resolved order
            spec: Artifact category specification

        Returns:
            Artifact, or None when not applicable
        """
        script = self.assembler.assemble(
            table,
            spec.generators(),
            self.context,
            object_name=spec.object_name(table),
            script_kind=spec.script_kind,
        )
        if script is None:
            return None

        return Artifact(
            table_name=table.name,
            category=spec.category,
            sub_category=self.schema.dialect.value,
            file_name=spec.file_name(table.name),
            order=order,
            content=script.content,
            warnings=tuple(script.warnings),
        )


def run_pipeline(
    schema: SchemaDefinition,
    metadata: Optional[ProjectMetadata] = None,
    defaults: Optional[Defaults] = None,
) -> PipelineResult:
    """Convenience wrapper: build a pipeline and run it once."""
    return SchemaScriptPipeline(schema, metadata, defaults).run()


__all__ = [
    "PipelineStateError",
    "ArtifactFailure",
    "PipelineResult",
    "ArtifactSpec",
    "ARTIFACT_SPECS",
    "SchemaScriptPipeline",
    "run_pipeline",
]
