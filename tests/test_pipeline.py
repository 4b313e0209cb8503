# ============================================================================
# PIPELINE TESTS
# ============================================================================
# EPOCH: 1 - SCHEMA SCRIPT GENERATION
# STATUS: Tests - End-to-end generation
# PURPOSE: Verify artifact order, applicability, failure isolation and state
# CREATED: 15 OCT 2026
# ============================================================================
"""
Pipeline Tests

Tests for:
- Artifacts follow the resolved table order
- Tables without a primary key get only table and view scripts
- One failing artifact does not stop the run
- run() is single-shot
- Output is reproducible without timestamps

Run with:
    pytest tests/test_pipeline.py -v
"""

import logging

import pytest

from core.config import Defaults
from core.contracts import ArtifactCategory, PipelineState
from core.models import SchemaDefinition
from generator import PipelineStateError, ResolutionError, SchemaScriptPipeline, run_pipeline
from generator.sections import CrudGenerator


# ============================================================================
# HELPERS
# ============================================================================

def _schema(with_log=False):
    tables = [
        {
            "name": "orders",
            "fields": [
                {"name": "id", "type": "NUMBER", "isPrimaryKey": True, "nullable": False},
                {
                    "name": "customer_id",
                    "type": "NUMBER",
                    "isForeignKey": True,
                    "foreignKey": {"referencedTable": "customers", "referencedColumn": "id"},
                },
                {"name": "status", "type": "VARCHAR2(20)", "allowedValues": ["NEW", "SHIPPED"]},
                {"name": "created_at", "type": "TIMESTAMP", "default": "systimestamp"},
                {
                    "name": "updated_at",
                    "type": "TIMESTAMP",
                    "trigger": {"enabled": True, "event": "before_update", "action": "systimestamp"},
                },
            ],
        },
        {
            "name": "customers",
            "fields": [
                {"name": "id", "type": "NUMBER", "isPrimaryKey": True, "nullable": False},
                {"name": "name", "type": "VARCHAR2(100)", "comment": "Customer name"},
            ],
        },
    ]
    if with_log:
        tables.append({
            "name": "audit_log",
            "fields": [{"name": "message", "type": "VARCHAR2(400)"}],
        })
    return SchemaDefinition.model_validate({"tables": tables})


def _run(schema=None):
    pipeline = SchemaScriptPipeline(schema or _schema(), defaults=Defaults().without_timestamps())
    return pipeline.run()


# ============================================================================
# ORDER AND PATHS
# ============================================================================

class TestArtifactOrder:
    def test_resolved_order(self):
        result = _run()
        assert result.ordered_tables == ["customers", "orders"]
        assert result.state == PipelineState.DONE
        assert result.succeeded

    def test_relative_paths(self):
        result = _run()
        assert [a.relative_path for a in result.artifacts] == [
            "tables/001_customers.sql",
            "views/001_customers_v.sql",
            "data/001_customers_data.sql",
            "packages/001_p_customers.sql",
            "tables/002_orders.sql",
            "views/002_orders_v.sql",
            "data/002_orders_data.sql",
            "packages/002_p_orders.sql",
        ]

    def test_sub_category_is_dialect(self):
        result = _run()
        assert {a.sub_category for a in result.artifacts} == {"oracle"}

    def test_artifact_content(self):
        result = _run()
        table_script = result.artifacts_for("orders")[0]
        assert table_script.category == ArtifactCategory.TABLES
        assert "CREATE TABLE ORDERS (" in table_script.content
        assert "ORDERS_CUSTOMERS_FK" in table_script.content
        assert "CREATE OR REPLACE TRIGGER ORDERS_BU_TRG" in table_script.content
        assert table_script.warnings == ()

        package = result.artifacts_in(ArtifactCategory.PACKAGES)[1]
        assert "-- Object: P_ORDERS" in package.content
        assert "-- END OF SCRIPT FOR PACKAGE: P_ORDERS" in package.content

    def test_view_header_names_view(self):
        result = _run()
        view = result.artifacts_in(ArtifactCategory.VIEWS)[0]
        assert "-- Object: CUSTOMERS_V" in view.content

    def test_explanation(self):
        result = _run()
        assert result.explanation.startswith("Creation order: customers → orders")


# ============================================================================
# APPLICABILITY
# ============================================================================

class TestApplicability:
    def test_table_without_primary_key(self, caplog):
        with caplog.at_level(logging.WARNING):
            result = _run(_schema(with_log=True))

        categories = [a.category for a in result.artifacts_for("audit_log")]
        assert categories == [ArtifactCategory.TABLES, ArtifactCategory.VIEWS]
        assert "data artifact not applicable for audit_log" in caplog.text
        assert "packages artifact not applicable for audit_log" in caplog.text
        assert result.succeeded


# ============================================================================
# FAILURE ISOLATION
# ============================================================================

class TestFailureIsolation:
    def test_failing_artifact_recorded(self, monkeypatch, caplog):
        def boom(self, table, context):
            raise RuntimeError("template exploded")

        monkeypatch.setattr(CrudGenerator, "_render", boom)
        with caplog.at_level(logging.ERROR):
            result = _run()

        assert not result.succeeded
        assert [(f.table, f.category) for f in result.failures] == [
            ("customers", ArtifactCategory.PACKAGES),
            ("orders", ArtifactCategory.PACKAGES),
        ]
        assert result.failures[0].error == "template exploded"
        assert len(result.artifacts) == 6
        assert result.state == PipelineState.DONE
        assert "Failed to generate packages artifact for customers" in caplog.text


# ============================================================================
# STATE
# ============================================================================

class TestState:
    def test_single_shot(self):
        pipeline = SchemaScriptPipeline(_schema())
        assert pipeline.state is None
        pipeline.run()
        assert pipeline.state == PipelineState.DONE
        with pytest.raises(PipelineStateError):
            pipeline.run()

    def test_empty_schema_raises(self):
        with pytest.raises(ResolutionError):
            SchemaScriptPipeline(SchemaDefinition()).run()

    def test_run_pipeline_helper(self):
        result = run_pipeline(_schema(), defaults=Defaults().without_timestamps())
        assert len(result.artifacts) == 8


class TestReproducibility:
    def test_identical_output_without_timestamps(self):
        first = _run()
        second = _run()
        assert [a.content for a in first.artifacts] == [a.content for a in second.artifacts]
        assert "-- Generated: [timestamp]" in first.artifacts[0].content
