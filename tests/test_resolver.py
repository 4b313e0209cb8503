# ============================================================================
# DEPENDENCY RESOLVER TESTS
# ============================================================================
# EPOCH: 1 - SCHEMA SCRIPT GENERATION
# STATUS: Tests - Table ordering
# PURPOSE: Verify topological order, cycle handling and explanations
# CREATED: 15 OCT 2026
# ============================================================================
"""
Dependency Resolver Tests

Tests for:
- Referenced tables come first
- Output is a permutation of the input
- Cycles terminate with a warning
- Missing references are ignored
- Malformed input raises ResolutionError

Run with:
    pytest tests/test_resolver.py -v
"""

import logging

import pytest

from core.models import TableDefinition
from generator.engine.resolver import (
    DependencyResolver,
    GraphBuilder,
    ResolutionError,
    order_tables,
)


# ============================================================================
# HELPERS
# ============================================================================

def _table(name, refs=(), fks=()):
    fields = [{"name": "id", "type": "NUMBER", "isPrimaryKey": True}]
    for target in fks:
        fields.append({
            "name": f"{target}_id",
            "type": "NUMBER",
            "isForeignKey": True,
            "foreignKey": {"referencedTable": target, "referencedColumn": "id"},
        })
    return TableDefinition.model_validate(
        {"name": name, "fields": fields, "referencingTo": list(refs)}
    )


def _names(tables):
    return [t.name for t in tables]


# ============================================================================
# ORDERING
# ============================================================================

class TestOrdering:
    def test_referenced_table_first(self):
        orders = _table("ORDERS", fks=["CUSTOMERS"])
        customers = _table("CUSTOMERS")
        assert _names(order_tables([orders, customers])) == ["CUSTOMERS", "ORDERS"]

    def test_referencing_to_without_foreign_key(self):
        orders = _table("orders", refs=["customers"])
        customers = _table("customers")
        assert _names(DependencyResolver().order([orders, customers])) == ["customers", "orders"]

    def test_chain(self):
        items = _table("order_items", fks=["orders", "products"])
        orders = _table("orders", fks=["customers"])
        products = _table("products")
        customers = _table("customers")
        ordered = _names(order_tables([items, orders, products, customers]))
        assert ordered.index("customers") < ordered.index("orders")
        assert ordered.index("orders") < ordered.index("order_items")
        assert ordered.index("products") < ordered.index("order_items")

    def test_independent_tables_keep_input_order(self):
        tables = [_table("b"), _table("c"), _table("a")]
        assert _names(order_tables(tables)) == ["b", "c", "a"]

    def test_result_is_permutation(self):
        tables = [
            _table("t1", fks=["t3"]),
            _table("t2", fks=["t1", "t3"]),
            _table("t3"),
            _table("t4", refs=["t2"]),
        ]
        ordered = order_tables(tables)
        assert sorted(_names(ordered)) == ["t1", "t2", "t3", "t4"]
        assert len(ordered) == len(tables)

    def test_dependencies_precede_dependents(self):
        tables = [
            _table("t1", fks=["t3"]),
            _table("t2", fks=["t1", "t3"]),
            _table("t3"),
            _table("t4", refs=["t2"]),
        ]
        position = {name: i for i, name in enumerate(_names(order_tables(tables)))}
        for table in tables:
            for dep in table.dependencies:
                assert position[dep] < position[table.name]

    def test_case_insensitive_references(self):
        orders = _table("orders", fks=["CUSTOMERS"])
        customers = _table("customers")
        assert _names(order_tables([orders, customers])) == ["customers", "orders"]

    def test_self_reference_is_not_a_cycle(self):
        employees = _table("employees", fks=["employees"])
        result = DependencyResolver().resolve([employees])
        assert result.names == ["employees"]
        assert not result.has_cycles


# ============================================================================
# CYCLES AND MISSING REFERENCES
# ============================================================================

class TestCycles:
    def test_two_table_cycle_terminates(self, caplog):
        a = _table("A", fks=["B"])
        b = _table("B", fks=["A"])

        with caplog.at_level(logging.WARNING):
            result = DependencyResolver().resolve([a, b])

        assert result.names == ["B", "A"]
        assert result.cycles == ["A"]
        assert result.broken_edges == [("B", "A")]
        assert "Circular dependency detected involving table: A" in caplog.text

    def test_three_table_cycle_emits_each_once(self):
        tables = [_table("x", fks=["y"]), _table("y", fks=["z"]), _table("z", fks=["x"])]
        result = DependencyResolver().resolve(tables)
        assert sorted(result.names) == ["x", "y", "z"]
        assert result.has_cycles

    def test_explanation_mentions_cycle(self):
        result = DependencyResolver().resolve([_table("A", fks=["B"]), _table("B", fks=["A"])])
        assert "Cycle: B -> A broken" in result.explanation

    def test_missing_reference_ignored(self):
        orders = _table("orders", fks=["ghosts"])
        result = DependencyResolver().resolve([orders])
        assert result.names == ["orders"]
        assert not result.has_cycles
        assert "Ignored: orders -> ghosts (not in schema)" in result.explanation


class TestExplanation:
    def test_creation_order_line(self):
        result = DependencyResolver().resolve([_table("ORDERS", fks=["CUSTOMERS"]), _table("CUSTOMERS")])
        lines = result.explanation.splitlines()
        assert lines[0] == "Creation order: CUSTOMERS → ORDERS"
        assert "  1. CUSTOMERS (no dependencies)" in lines
        assert "  2. ORDERS (after CUSTOMERS)" in lines


# ============================================================================
# MALFORMED INPUT
# ============================================================================

class TestMalformedInput:
    def test_empty_list(self):
        with pytest.raises(ResolutionError, match="empty"):
            DependencyResolver().resolve([])

    def test_duplicate_names(self):
        with pytest.raises(ResolutionError, match="Duplicate"):
            GraphBuilder().build([_table("orders"), _table("ORDERS")])

    def test_wrong_type(self):
        with pytest.raises(ResolutionError, match="Expected TableDefinition"):
            GraphBuilder().build([{"name": "orders"}])

    def test_resolution_error_is_value_error(self):
        assert issubclass(ResolutionError, ValueError)
