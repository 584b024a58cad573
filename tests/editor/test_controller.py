"""Tests for GraphEditorController."""

import pytest

from statusflow.catalog.registry import CategoryRegistry
from statusflow.catalog.statuses import StatusCatalog
from statusflow.editor.controller import GraphEditorController
from statusflow.editor.state import ConfirmationKind, NoticeLevel
from statusflow.graph.workflow_graph import WorkflowGraphModel


@pytest.fixture
def controller(model):
    return GraphEditorController(model)


@pytest.fixture
def linear_controller(linear_model):
    return GraphEditorController(linear_model)


class TestAddNode:
    def test_add_node_with_default_category(self, controller):
        assert controller.choose_status(2)
        node_id = controller.confirm_add_node()

        node = controller.model.get_node(node_id)
        assert node.status_id == 2
        assert node.category == "TODO"
        assert controller.state.selected_node_id == node_id
        assert controller.state.pending_status_id is None

    def test_available_statuses_exclude_placed(self, controller):
        controller.choose_status(1)
        controller.confirm_add_node()

        assert [s.id for s in controller.available_statuses()] == [2, 3]

    def test_choosing_placed_status_is_rejected(self, controller):
        controller.choose_status(1)
        controller.confirm_add_node()

        assert not controller.choose_status(1)
        assert controller.state.notices[-1].level == NoticeLevel.ERROR
        assert controller.model.node_count() == 1

    def test_confirm_without_choice(self, controller):
        assert controller.confirm_add_node() is None
        assert controller.state.notices

    def test_cancel_add_node(self, controller):
        controller.choose_status(1)
        controller.cancel_add_node()

        assert controller.confirm_add_node() is None
        assert controller.model.node_count() == 0

    def test_disabled_without_categories(self, catalog):
        controller = GraphEditorController(WorkflowGraphModel(CategoryRegistry(), catalog))

        assert not controller.can_add_node
        assert not controller.choose_status(1)
        assert controller.model.node_count() == 0

    def test_disabled_when_everything_is_placed(self, linear_controller):
        assert not linear_controller.can_add_node

    def test_disabled_with_empty_catalog(self, registry):
        controller = GraphEditorController(WorkflowGraphModel(registry, StatusCatalog()))

        assert not controller.can_add_node


class TestCategoryPopover:
    def test_change_category_closes_popover(self, linear_controller):
        assert linear_controller.open_category_popover("n1")
        assert linear_controller.state.open_popover_node_id == "n1"

        assert linear_controller.change_category("n1", "COMPLETED")

        assert linear_controller.model.get_node("n1").category == "COMPLETED"
        assert linear_controller.state.open_popover_node_id is None

    def test_invalid_category_is_a_noop_with_notice(self, linear_controller):
        linear_controller.open_category_popover("n1")

        assert not linear_controller.change_category("n1", "NOPE")

        assert linear_controller.model.get_node("n1").category == "TODO"
        notice = linear_controller.state.notices[-1]
        assert notice.code == "INVALID_CATEGORY"
        assert "NOPE" in notice.message
        assert linear_controller.state.open_popover_node_id == "n1"

    def test_popover_for_unknown_node(self, linear_controller):
        assert not linear_controller.open_category_popover("n9")
        assert linear_controller.state.notices[-1].code == "NOT_FOUND"

    def test_set_initial(self, linear_controller):
        assert linear_controller.set_initial("n3")
        assert linear_controller.model.initial_node_id == "n3"


class TestConnect:
    def test_connect_selects_new_edge(self, linear_controller):
        linear_controller.select_node("n1")

        edge_id = linear_controller.connect("n3", "n1")

        assert edge_id == "e3"
        assert linear_controller.state.selected_edge_id == "e3"
        assert linear_controller.state.selected_node_id is None

    def test_connect_unknown_node(self, linear_controller):
        assert linear_controller.connect("n1", "n8") is None
        assert linear_controller.model.edge_count() == 2
        assert linear_controller.state.notices[-1].code == "NOT_FOUND"

    def test_relabel(self, linear_controller):
        assert linear_controller.relabel_edge("e1", "Begin")
        assert linear_controller.model.get_edge("e1").label == "Begin"


class TestDeleteEdge:
    def test_requires_confirmation(self, linear_controller):
        confirmation = linear_controller.request_delete_edge("e1")

        assert confirmation.kind == ConfirmationKind.DELETE_EDGE
        assert confirmation.message == "Delete 'Start'? This cannot be undone."
        assert linear_controller.model.has_edge("e1")

        assert linear_controller.confirm()
        assert not linear_controller.model.has_edge("e1")

    def test_unnamed_edge_message(self, linear_controller):
        edge_id = linear_controller.connect("n3", "n1")

        confirmation = linear_controller.request_delete_edge(edge_id)

        assert confirmation.message.startswith("Delete this transition?")

    def test_cancel_keeps_edge(self, linear_controller):
        linear_controller.request_delete_edge("e1")
        linear_controller.cancel_confirmation()

        assert not linear_controller.confirm()
        assert linear_controller.model.has_edge("e1")

    def test_confirm_clears_selection_of_deleted_edge(self, linear_controller):
        linear_controller.select_edge("e2")
        linear_controller.request_delete_edge("e2")
        linear_controller.confirm()

        assert linear_controller.state.selected_edge_id is None

    def test_unknown_edge(self, linear_controller):
        assert linear_controller.request_delete_edge("e9") is None
        assert linear_controller.state.confirmation is None


class TestRemoveNode:
    def test_confirmation_warns_about_transitions(self, linear_controller):
        confirmation = linear_controller.request_remove_node("n2")

        assert confirmation.kind == ConfirmationKind.REMOVE_NODE
        assert confirmation.affected_edge_ids == ("e1", "e2")
        assert "2 connected transition(s) will also be removed" in confirmation.message
        assert linear_controller.model.has_node("n2")

    def test_confirm_removes_node_and_transitions(self, linear_controller):
        linear_controller.select_node("n2")
        linear_controller.open_category_popover("n2")
        linear_controller.request_remove_node("n2")

        assert linear_controller.confirm()

        model = linear_controller.model
        assert not model.has_node("n2")
        assert model.edge_count() == 0
        assert linear_controller.state.selected_node_id is None
        assert linear_controller.state.open_popover_node_id is None

    def test_node_without_transitions(self, controller):
        controller.choose_status(1)
        node_id = controller.confirm_add_node()

        confirmation = controller.request_remove_node(node_id)

        assert confirmation.message == "Remove status 'Open' from the workflow?"

    def test_node_removed_before_confirming(self, linear_controller):
        linear_controller.request_remove_node("n2")
        linear_controller.model.remove_node("n2")

        assert not linear_controller.confirm()
        assert linear_controller.state.notices[-1].code == "NOT_FOUND"


class TestSelectionAndNotices:
    def test_select_unknown_node_clears_selection(self, linear_controller):
        linear_controller.select_edge("e1")
        linear_controller.select_node("n9")

        assert linear_controller.state.selected_node_id is None
        assert linear_controller.state.selected_edge_id is None

    def test_dismiss_notices(self, linear_controller):
        linear_controller.connect("n1", "n9")
        linear_controller.dismiss_notices()

        assert linear_controller.state.notices == []
