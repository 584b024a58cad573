"""Shared fixtures for tests."""

import logging
from pathlib import Path

import pytest

from statusflow.catalog.registry import CategoryRegistry
from statusflow.catalog.statuses import StatusCatalog
from statusflow.graph.builder import build_model_from_document
from statusflow.graph.workflow_graph import WorkflowGraphModel
from statusflow.schema.loader import parse_document_from_string


@pytest.fixture
def examples_dir() -> Path:
    """Return the path to the examples directory."""
    return Path(__file__).parent.parent / "examples"


@pytest.fixture
def registry() -> CategoryRegistry:
    return CategoryRegistry(["TODO", "PROGRESS", "COMPLETED"])


@pytest.fixture
def catalog() -> StatusCatalog:
    return StatusCatalog.from_pairs([(1, "Open"), (2, "In Progress"), (3, "Closed")])


@pytest.fixture
def model(registry, catalog) -> WorkflowGraphModel:
    """Return an empty model over the shared registry and catalog."""
    return WorkflowGraphModel(registry, catalog, name="Tasks")


@pytest.fixture
def linear_model(model) -> WorkflowGraphModel:
    """Return Open -> In Progress -> Closed, all transitions unsaved.

    Nodes are n1, n2, n3 and edges e1 (Start), e2 (Finish).
    """
    model.add_node(1)
    model.add_node(2, "PROGRESS")
    model.add_node(3, "COMPLETED")
    model.relabel_edge(model.connect("n1", "n2"), "Start")
    model.relabel_edge(model.connect("n2", "n3"), "Finish")
    return model


@pytest.fixture
def persisted_document_yaml() -> str:
    """Return a workflow document whose transitions all have server ids."""
    return """
categories: [TODO, PROGRESS, COMPLETED]
statuses:
  1: Open
  2: In Progress
  3: Closed
workflow:
  id: 7
  name: Tasks
  initialStatusId: 1
  statuses:
    - {status: 1, statusCategory: TODO}
    - {status: 2, statusCategory: PROGRESS}
    - {status: 3, statusCategory: COMPLETED}
  transitions:
    - {id: 101, name: Start}
    - {id: 102, name: Finish}
    - {id: 103, name: Reopen}
  workflowEdges:
    - {transitionId: 101, sourceId: 1, targetId: 2}
    - {transitionId: 102, sourceId: 2, targetId: 3}
    - {transitionId: 103, sourceId: 3, targetId: 1}
"""


@pytest.fixture
def persisted_document(persisted_document_yaml):
    return parse_document_from_string(persisted_document_yaml)


@pytest.fixture
def persisted_model(persisted_document) -> WorkflowGraphModel:
    """Return a model loaded from the server-shaped document.

    Nodes are n1 (Open), n2 (In Progress), n3 (Closed); edges e1/e2/e3 carry
    transition ids 101/102/103.
    """
    return build_model_from_document(persisted_document)


@pytest.fixture(autouse=True)
def restore_package_logger():
    """Undo any setup_logging() call made during a test."""
    logger = logging.getLogger("statusflow")
    level, handlers = logger.level, logger.handlers[:]
    yield
    logger.setLevel(level)
    logger.handlers[:] = handlers
