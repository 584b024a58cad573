"""Pydantic models for server payloads and workflow documents."""

from pydantic import BaseModel, ConfigDict, Field, model_validator


class StatusDefinition(BaseModel):
    """A selectable status, as served by ``GET /statuses``."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: int
    name: str
    default_status: bool = Field(default=False, alias="defaultStatus")


class StatusRef(BaseModel):
    """The nested status reference inside a workflow status."""

    id: int
    name: str = ""


class WorkflowStatusView(BaseModel):
    """A status placed in a persisted workflow."""

    model_config = ConfigDict(populate_by_name=True)

    id: int | None = None
    status: StatusRef
    status_category: str | None = Field(default=None, alias="statusCategory")
    initial: bool = False

    @model_validator(mode="before")
    @classmethod
    def normalize_status(cls, data: dict) -> dict:
        """Accept ``status: 3`` as shorthand for ``status: {id: 3}``."""
        if isinstance(data, dict):
            status = data.get("status")
            if isinstance(status, int):
                data["status"] = {"id": status}
        return data


class TransitionView(BaseModel):
    """A persisted transition (id and display name)."""

    id: int
    name: str = ""


class WorkflowEdgeView(BaseModel):
    """Connection data for a persisted transition.

    ``source_id`` and ``target_id`` are status ids, not node ids.
    """

    model_config = ConfigDict(populate_by_name=True)

    id: int | None = None
    transition_id: int | None = Field(default=None, alias="transitionId")
    source_id: int = Field(alias="sourceId")
    target_id: int = Field(alias="targetId")
    name: str | None = None


class WorkflowView(BaseModel):
    """A workflow as served by ``GET /workflows/{id}``."""

    model_config = ConfigDict(populate_by_name=True)

    id: int | None = None
    name: str = ""
    initial_status_id: int | None = Field(default=None, alias="initialStatusId")
    statuses: list[WorkflowStatusView] = Field(default_factory=list)
    transitions: list[TransitionView] = Field(default_factory=list)
    workflow_edges: list[WorkflowEdgeView] = Field(
        default_factory=list, alias="workflowEdges"
    )

    def transition_name(self, transition_id: int | None) -> str:
        """Look up the display name of a persisted transition."""
        if transition_id is None:
            return ""
        for transition in self.transitions:
            if transition.id == transition_id:
                return transition.name
        return ""


class WorkflowDocument(BaseModel):
    """Root model for a workflow YAML document.

    Bundles the reference data (categories, statuses) with one workflow so
    that a document can be validated, diffed or exported offline.
    """

    categories: list[str] = Field(default_factory=list)
    statuses: list[StatusDefinition] = Field(default_factory=list)
    workflow: WorkflowView = Field(default_factory=WorkflowView)

    @model_validator(mode="before")
    @classmethod
    def normalize_document(cls, data: dict) -> dict:
        """Normalize shorthand status entries.

        ``statuses`` may be given as a mapping ``{1: Open, 2: Closed}`` or as a
        list of ``{id, name}`` mappings.
        """
        if not isinstance(data, dict):
            return data

        statuses = data.get("statuses")
        if isinstance(statuses, dict):
            data["statuses"] = [
                {"id": int(status_id), "name": name}
                for status_id, name in statuses.items()
            ]

        return data
