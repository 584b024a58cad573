"""Tests for isolated status and transition shape validators."""

from statusflow.validators.base import Severity
from statusflow.validators.orphan_detector import (
    check_isolated_statuses,
    check_transition_shapes,
)


class TestIsolatedStatuses:
    def test_connected_workflow(self, linear_model):
        assert check_isolated_statuses(linear_model.snapshot()).issues == []

    def test_detects_isolated_status(self, linear_model):
        linear_model.disconnect("e2")

        result = check_isolated_statuses(linear_model.snapshot())

        assert len(result.warnings) == 1
        assert result.warnings[0].code == "ISOLATED_STATUS"
        assert result.warnings[0].status == "Closed"

    def test_single_status_is_not_reported(self, model):
        model.add_node(1)

        assert check_isolated_statuses(model.snapshot()).issues == []


class TestTransitionShapes:
    def test_plain_workflow(self, linear_model):
        assert check_transition_shapes(linear_model.snapshot()).issues == []

    def test_self_loop_is_info(self, linear_model):
        linear_model.relabel_edge(linear_model.connect("n2", "n2"), "Ping")

        result = check_transition_shapes(linear_model.snapshot())

        assert result.is_valid
        assert [i.code for i in result.infos] == ["SELF_LOOP"]
        assert result.infos[0].severity == Severity.INFO
        assert "'Ping'" in result.infos[0].message
        assert "'In Progress'" in result.infos[0].message

    def test_parallel_transitions_are_info(self, linear_model):
        linear_model.connect("n1", "n2")
        linear_model.connect("n1", "n2")

        result = check_transition_shapes(linear_model.snapshot())

        assert result.is_valid
        assert not result.has_warnings
        assert [i.code for i in result.infos] == ["PARALLEL_TRANSITION"]
        assert result.infos[0].details["count"] == 3
