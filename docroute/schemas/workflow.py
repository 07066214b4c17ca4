"""Document workflow API schemas."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from docroute.application.dtos.workflow_step import WorkflowStepNode, WorkflowTree
from docroute.domain.enums import (
    DocumentStatus,
    ResolutionStatus,
    StepAction,
    StepStatus,
)


class RouteRequest(BaseModel):
    """Request body for sending, forwarding or returning a document."""

    to_user_id: str = Field(..., min_length=1, description="Assignee of the new step")
    action: str = Field(
        default="sent", description="One of: sent, forwarded, returned"
    )
    notes: str | None = Field(default=None, max_length=4000)
    parent_step_id: str | None = Field(
        default=None, description="Step this routing continues from"
    )


class StepResolveRequest(BaseModel):
    """Request body for resolving one workflow step."""

    resolution_status: str = Field(..., description="approved or rejected")
    resolution: str | None = Field(default=None, max_length=4000)
    notes: str | None = Field(default=None, max_length=4000)


class DocumentResolveRequest(StepResolveRequest):
    """Request body for resolving a document; step_id narrows to a single step."""

    step_id: str | None = None


class CancelRequest(BaseModel):
    """Request body for cancelling; omit step_id to cancel the whole workflow."""

    step_id: str | None = None


class WorkflowStepResponse(BaseModel):
    """Workflow step response."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    document_id: str
    parent_step_id: str | None
    from_user_id: str | None
    to_user_id: str | None
    action: StepAction
    step_status: StepStatus
    resolution_status: ResolutionStatus | None
    resolution: str | None
    notes: str | None
    is_expired: bool
    created_at: datetime
    completed_at: datetime | None


class WorkflowStepNodeResponse(WorkflowStepResponse):
    """Workflow step with its children (recursive)."""

    children: list[WorkflowStepNodeResponse] = Field(default_factory=list)

    @classmethod
    def from_node(cls, node: WorkflowStepNode) -> WorkflowStepNodeResponse:
        base = WorkflowStepResponse.model_validate(node.step).model_dump()
        return cls(
            **base,
            children=[cls.from_node(child) for child in node.children],
        )


class WorkflowTreeResponse(BaseModel):
    """Flat step list plus the routing forest for a document."""

    document_id: str
    steps: list[WorkflowStepResponse]
    tree: list[WorkflowStepNodeResponse]

    @classmethod
    def from_tree(cls, document_id: str, tree: WorkflowTree) -> WorkflowTreeResponse:
        return cls(
            document_id=document_id,
            steps=[WorkflowStepResponse.model_validate(s) for s in tree.steps],
            tree=[WorkflowStepNodeResponse.from_node(n) for n in tree.tree],
        )


class WorkflowPermissionsResponse(BaseModel):
    """What the current user may do on the document."""

    model_config = ConfigDict(from_attributes=True)

    can_resolve: bool
    can_cancel: bool
    can_cancel_all: bool


class ResolveOutcomeResponse(BaseModel):
    """Result of resolving a document."""

    model_config = ConfigDict(from_attributes=True)

    document_id: str
    resolution_status: ResolutionStatus
    steps_updated: int
    document_status: DocumentStatus


class CancelResponse(BaseModel):
    """Document status after a cancel."""

    document_id: str
    document_status: DocumentStatus
