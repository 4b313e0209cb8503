# ============================================================================
# DEPENDENCY RESOLVER
# ============================================================================
# EPOCH: 1 - SCHEMA SCRIPT GENERATION
# STATUS: Core - Table creation order
# PURPOSE: Order tables so referenced tables are created before referencing ones
# CREATED: 15 OCT 2026
# ============================================================================
"""
Dependency Resolver

Depth-first topological sort over table dependencies (referencingTo plus
FK targets). For each table, every table it depends on is visited first,
then the table itself is appended.

Features:
- Dependency graph construction (case-insensitive names)
- Deterministic order: DFS visits in input order
- Cycle detection: warn, break the edge at the first re-visited table, continue
- References to tables outside the input are ignored

The resolver is stateless - it takes a table list and returns an order
plus an operator-facing explanation.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional, Sequence, Tuple

from core.models import TableDefinition

logger = logging.getLogger(__name__)


class ResolutionError(ValueError):
    """Raised when the table list cannot be ordered (empty or malformed)."""
    pass


# ============================================================================
# DATA STRUCTURES
# ============================================================================

@dataclass
class DependencyGraph:
    """
    Dependency graph for a table set.

    Keys are lower-case table names. A -> [B] means "A depends on B"
    (B must be created before A).
    """
    # Table key -> table definition, in input order
    nodes: Dict[str, TableDefinition] = field(default_factory=dict)

    # Table key -> keys of tables it depends on (present in the graph only)
    edges: Dict[str, List[str]] = field(default_factory=dict)

    # (table, referenced name) pairs pointing outside the input
    missing: List[Tuple[str, str]] = field(default_factory=list)

    def get_dependencies(self, key: str) -> List[str]:
        """Get keys of tables this table depends on."""
        return self.edges.get(key, [])

    def name_of(self, key: str) -> str:
        return self.nodes[key].name


@dataclass
class ResolutionResult:
    """Result of dependency resolution."""
    # Tables in creation order (a permutation of the input)
    tables: List[TableDefinition] = field(default_factory=list)

    # Tables re-visited while in progress (cycle members), first-seen order
    cycles: List[str] = field(default_factory=list)

    # Abandoned (table, dependency) edges
    broken_edges: List[Tuple[str, str]] = field(default_factory=list)

    # Operator-facing text describing the chosen order
    explanation: str = ""

    @property
    def names(self) -> List[str]:
        return [t.name for t in self.tables]

    @property
    def has_cycles(self) -> bool:
        return bool(self.cycles)


# ============================================================================
# GRAPH BUILDER
# ============================================================================

class GraphBuilder:
    """Builds dependency graph from table definitions."""

    def build(self, tables: Sequence[TableDefinition]) -> DependencyGraph:
        """
        Build dependency graph from tables.

        Args:
            tables: Table definitions in input order

        Returns:
            DependencyGraph instance

        Raises:
            ResolutionError: If the list is empty or names repeat
        """
        if not tables:
            raise ResolutionError("Cannot resolve an empty table list")

        graph = DependencyGraph()
        for table in tables:
            if not isinstance(table, TableDefinition):
                raise ResolutionError(f"Expected TableDefinition, got {type(table).__name__}")
            key = table.name.lower()
            if key in graph.nodes:
                raise ResolutionError(f"Duplicate table name: {table.name}")
            graph.nodes[key] = table

        for key, table in graph.nodes.items():
            deps = []
            for dep_name in table.dependencies:
                dep_key = dep_name.lower()
                if dep_key in graph.nodes:
                    deps.append(dep_key)
                else:
                    graph.missing.append((table.name, dep_name))
                    logger.debug(
                        f"Table {table.name} references {dep_name}, "
                        f"which is not in the schema; ignoring"
                    )
            graph.edges[key] = deps

        return graph


# ============================================================================
# DEPENDENCY RESOLVER
# ============================================================================

class DependencyResolver:
    """
    Orders tables for safe creation.

    Two marks per table: in progress (on the DFS stack) and done. Reaching an
    in-progress table means a cycle; the edge is abandoned with a warning and
    the walk continues, so every table is emitted exactly once.
    """

    def __init__(self):
        self.graph_builder = GraphBuilder()

    def order(self, tables: Sequence[TableDefinition]) -> List[TableDefinition]:
        """
        Order tables so dependencies come first.

        Args:
            tables: Table definitions in any order

        Returns:
            Permutation of the input in creation order
        """
        return self.resolve(tables).tables

    def resolve(self, tables: Sequence[TableDefinition]) -> ResolutionResult:
        """
        Order tables and explain the result.

        Args:
            tables: Table definitions in any order

        Returns:
            ResolutionResult with ordered tables, cycles and explanation

        Raises:
            ResolutionError: If the list is empty or names repeat
        """
        graph = self.graph_builder.build(tables)
        result = ResolutionResult()

        done: set = set()
        in_progress: set = set()
        ordered: List[str] = []

        for root in graph.nodes:
            if root in done:
                continue
            # Iterative DFS: (table key, remaining dependencies)
            in_progress.add(root)
            stack: List[Tuple[str, Iterator[str]]] = [
                (root, iter(graph.get_dependencies(root)))
            ]
            while stack:
                key, pending = stack[-1]
                descended = False
                for dep in pending:
                    if dep in done:
                        continue
                    if dep in in_progress:
                        self._record_cycle(graph, result, key, dep)
                        continue
                    in_progress.add(dep)
                    stack.append((dep, iter(graph.get_dependencies(dep))))
                    descended = True
                    break
                if not descended:
                    stack.pop()
                    in_progress.discard(key)
                    done.add(key)
                    ordered.append(key)

        result.tables = [graph.nodes[key] for key in ordered]
        result.explanation = self._explain(graph, result)

        logger.info(f"Resolved creation order for {len(ordered)} tables: {' -> '.join(result.names)}")
        return result

    def _record_cycle(
        self,
        graph: DependencyGraph,
        result: ResolutionResult,
        key: str,
        dep: str,
    ) -> None:
        """Log and record an abandoned edge key -> dep."""
        table_name = graph.name_of(key)
        dep_name = graph.name_of(dep)
        logger.warning(
            f"Circular dependency detected involving table: {dep_name} "
            f"(edge {table_name} -> {dep_name} ignored)"
        )
        if dep_name not in result.cycles:
            result.cycles.append(dep_name)
        result.broken_edges.append((table_name, dep_name))

    def _explain(self, graph: DependencyGraph, result: ResolutionResult) -> str:
        """Build the operator-facing explanation text."""
        lines = [f"Creation order: {' → '.join(result.names)}"]
        broken = set(result.broken_edges)

        for position, table in enumerate(result.tables, start=1):
            key = table.name.lower()
            deps = [
                graph.name_of(d) for d in graph.get_dependencies(key)
                if (table.name, graph.name_of(d)) not in broken
            ]
            if deps:
                lines.append(f"  {position}. {table.name} (after {', '.join(deps)})")
            else:
                lines.append(f"  {position}. {table.name} (no dependencies)")

        for table_name, dep_name in result.broken_edges:
            lines.append(
                f"  Cycle: {table_name} -> {dep_name} broken; "
                f"{dep_name} may be created after {table_name}"
            )
        for table_name, dep_name in graph.missing:
            lines.append(f"  Ignored: {table_name} -> {dep_name} (not in schema)")

        return "\n".join(lines)


# ============================================================================
# CONVENIENCE FUNCTIONS
# ============================================================================

_resolver: Optional[DependencyResolver] = None


def get_resolver() -> DependencyResolver:
    """Get shared resolver instance."""
    global _resolver
    if _resolver is None:
        _resolver = DependencyResolver()
    return _resolver


def order_tables(tables: Sequence[TableDefinition]) -> List[TableDefinition]:
    """
    Convenience function to order tables.

    Args:
        tables: Table definitions in any order

    Returns:
        Tables in creation order
    """
    return get_resolver().order(tables)


# ============================================================================
# EXPORTS
# ============================================================================

__all__ = [
    "ResolutionError",
    "DependencyGraph",
    "ResolutionResult",
    "GraphBuilder",
    "DependencyResolver",
    "get_resolver",
    "order_tables",
]
