"""Tests for transition reconciliation."""

import pytest

from statusflow.catalog.statuses import StatusCatalog
from statusflow.graph.builder import build_model_from_document
from statusflow.graph.errors import DanglingReferenceError
from statusflow.graph.node_types import Edge, Node, WorkflowGraph
from statusflow.reconcile.reconciler import reconcile


class TestPartition:
    def test_unchanged_graph_has_no_changes(self, persisted_model):
        baseline = persisted_model.snapshot()

        change_set = reconcile(baseline, persisted_model.snapshot())

        assert change_set.is_empty
        assert change_set.is_valid

    def test_new_edge_is_created(self, persisted_model):
        baseline = persisted_model.snapshot()
        edge_id = persisted_model.connect("n1", "n3")
        persisted_model.relabel_edge(edge_id, "Skip")

        change_set = reconcile(baseline, persisted_model.snapshot())

        assert len(change_set.to_create) == 1
        created = change_set.to_create[0]
        assert created.edge_id == edge_id
        assert (created.from_status_id, created.to_status_id) == (1, 3)
        assert created.name == "Skip"
        assert change_set.to_update == []
        assert change_set.to_delete == []

    def test_every_unsaved_edge_is_created(self, linear_model):
        change_set = reconcile(WorkflowGraph(), linear_model.snapshot())

        assert [c.edge_id for c in change_set.to_create] == ["e1", "e2"]

    def test_renamed_edge_is_updated(self, persisted_model):
        baseline = persisted_model.snapshot()
        persisted_model.relabel_edge("e2", "Complete")

        change_set = reconcile(baseline, persisted_model.snapshot())

        assert len(change_set.to_update) == 1
        update = change_set.to_update[0]
        assert update.transition_id == 102
        assert update.name == "Complete"
        assert update.changes == ("name",)
        assert change_set.to_create == []

    def test_removed_edge_is_deleted(self, persisted_model):
        baseline = persisted_model.snapshot()
        persisted_model.disconnect("e3")

        change_set = reconcile(baseline, persisted_model.snapshot())

        assert [d.transition_id for d in change_set.to_delete] == [103]
        deleted = change_set.to_delete[0]
        assert (deleted.from_status_id, deleted.to_status_id) == (3, 1)
        assert deleted.name == "Reopen"

    def test_removed_node_deletes_its_transitions(self, persisted_model):
        baseline = persisted_model.snapshot()
        persisted_model.remove_node("n3")

        change_set = reconcile(baseline, persisted_model.snapshot())

        assert [d.transition_id for d in change_set.to_delete] == [102, 103]
        assert change_set.to_update == []

    def test_replaced_status_changes_endpoints(self, persisted_document):
        baseline = build_model_from_document(persisted_document).snapshot()

        edited = persisted_document.model_copy(deep=True)
        edited.workflow.workflow_edges[1].target_id = 1
        current = build_model_from_document(edited).snapshot()

        change_set = reconcile(baseline, current)

        assert len(change_set.to_update) == 1
        assert change_set.to_update[0].transition_id == 102
        assert change_set.to_update[0].changes == ("target",)

    def test_separately_built_models_compare_by_status(self, persisted_document):
        baseline = build_model_from_document(persisted_document).snapshot()
        current = build_model_from_document(persisted_document).snapshot()

        assert reconcile(baseline, current).is_empty

    def test_transition_unknown_to_baseline_is_updated(self):
        nodes = {"n1": Node("n1", 1, "TODO", "Open"), "n2": Node("n2", 2, "TODO", "Done")}
        current = WorkflowGraph(nodes=nodes, edges={"e1": Edge("e1", "n1", "n2", "Go", 55)})

        change_set = reconcile(WorkflowGraph(nodes=nodes), current)

        assert [u.transition_id for u in change_set.to_update] == [55]
        assert change_set.to_update[0].changes == ("name", "source", "target")


class TestIdempotence:
    def test_reconcile_twice_gives_equal_results(self, persisted_model):
        baseline = persisted_model.snapshot()
        persisted_model.relabel_edge("e1", "Begin")
        persisted_model.disconnect("e3")
        persisted_model.connect("n3", "n3")
        current = persisted_model.snapshot()

        assert reconcile(baseline, current) == reconcile(baseline, current)

    def test_inputs_are_not_modified(self, persisted_model):
        baseline = persisted_model.snapshot()
        persisted_model.disconnect("e1")
        current = persisted_model.snapshot()
        baseline_copy = WorkflowGraph(nodes=baseline.nodes, edges=baseline.edges)

        reconcile(baseline, current)

        assert baseline == baseline_copy


class TestDanglingReferences:
    def test_update_with_missing_endpoint_is_reported(self):
        nodes = {"n1": Node("n1", 1, "TODO", "Open"), "n2": Node("n2", 2, "TODO", "Done")}
        baseline = WorkflowGraph(nodes=nodes, edges={"e1": Edge("e1", "n1", "n2", "Go", 10)})
        current = WorkflowGraph(
            nodes={"n1": nodes["n1"]},
            edges={"e1": Edge("e1", "n1", "n2", "Go", 10)},
        )

        change_set = reconcile(baseline, current)

        assert [u.transition_id for u in change_set.to_update] == [10]
        assert not change_set.is_valid
        issue = change_set.issues.errors[0]
        assert issue.code == "DANGLING_REFERENCE"
        assert issue.transition == "e1"
        assert issue.details["node_id"] == "n2"

    def test_update_with_status_outside_catalog_is_reported(self, persisted_model):
        baseline = persisted_model.snapshot()
        persisted_model.relabel_edge("e1", "Begin")
        catalog = StatusCatalog.from_pairs([(1, "Open"), (3, "Closed")])

        change_set = reconcile(baseline, persisted_model.snapshot(), catalog)

        assert len(change_set.to_update) == 1
        assert change_set.issues.errors[0].details["status_id"] == 2

        with pytest.raises(DanglingReferenceError) as exc_info:
            change_set.raise_for_issues()
        assert exc_info.value.edge_id == "e1"
        assert exc_info.value.status_id == 2

    def test_unchanged_edges_are_not_checked(self, persisted_model):
        baseline = persisted_model.snapshot()
        catalog = StatusCatalog.from_pairs([(1, "Open")])

        change_set = reconcile(baseline, persisted_model.snapshot(), catalog)

        assert change_set.is_empty
        assert change_set.is_valid

    def test_raise_for_issues_without_issues(self, persisted_model):
        reconcile(persisted_model.snapshot(), persisted_model.snapshot()).raise_for_issues()
