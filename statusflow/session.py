"""Editing sessions: load reference data, edit a graph, prepare a save."""

import asyncio
import logging
from dataclasses import dataclass
from typing import Any

from .catalog.client import AdminApiClient, load_category_registry, load_status_catalog
from .editor.controller import GraphEditorController
from .graph.builder import build_model
from .graph.node_types import WorkflowGraph
from .graph.workflow_graph import WorkflowGraphModel
from .reconcile.payload import build_save_payload
from .reconcile.reconciler import ChangeSet, reconcile
from .validators.base import ValidationResult
from .validators.runner import run_validators

logger = logging.getLogger(__name__)


@dataclass
class EditorSession:
    """One workflow being edited.

    ``baseline`` is the snapshot taken right after loading; it is assumed to
    still match the server when the session is saved.
    """

    model: WorkflowGraphModel
    controller: GraphEditorController
    baseline: WorkflowGraph
    workflow_id: int | None = None

    @property
    def name(self) -> str:
        return self.model.name

    def rename(self, name: str) -> None:
        self.model.name = name.strip()

    def change_set(self) -> ChangeSet:
        """Diff the edited graph against the baseline."""
        return reconcile(self.baseline, self.model.snapshot(), self.model.catalog)

    def validate(self) -> ValidationResult:
        return run_validators(self.model.snapshot(), self.model.registry, self.model.catalog)

    def prepare_save(self) -> tuple[ChangeSet, dict[str, Any]]:
        """Reconcile and build the save body.

        Raises:
            DanglingReferenceError: If a transition endpoint cannot be resolved.
        """
        change_set = self.change_set()
        payload = build_save_payload(
            self.name, self.model.snapshot(), change_set, self.workflow_id
        )
        logger.info(
            "Prepared save of workflow %s: %d create, %d update, %d delete",
            self.workflow_id if self.workflow_id is not None else "(new)",
            len(change_set.to_create),
            len(change_set.to_update),
            len(change_set.to_delete),
        )
        return change_set, payload


async def open_session(
    client: AdminApiClient,
    workflow_id: int | None = None,
) -> EditorSession:
    """Load reference data (and the workflow, in edit mode) and start a session.

    The category registry and status catalog are fetched concurrently. If
    either fails, it is logged and left empty, which disables adding
    statuses. In edit mode a failure to fetch the workflow itself is raised.

    Raises:
        CatalogLoadError: If the workflow to edit cannot be fetched.
        InvalidCategoryError: If the workflow has statuses but no category
            could be loaded.
    """
    registry, catalog = await asyncio.gather(
        load_category_registry(client),
        load_status_catalog(client),
    )

    if workflow_id is None:
        model = WorkflowGraphModel(registry, catalog)
    else:
        view = await client.fetch_workflow(workflow_id)
        model = build_model(view, registry, catalog)

    return EditorSession(
        model=model,
        controller=GraphEditorController(model),
        baseline=model.snapshot(),
        workflow_id=workflow_id,
    )
