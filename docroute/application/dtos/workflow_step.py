"""DTOs for document workflow steps (no dependency on ORM)."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

from docroute.domain.enums import (
    DocumentStatus,
    ResolutionStatus,
    StepAction,
    StepStatus,
)


@dataclass(frozen=True)
class WorkflowStepCreate:
    """Input for appending a workflow step (write-model). Repo persists and returns WorkflowStepResult."""

    document_id: str
    from_user_id: str | None
    to_user_id: str | None
    action: StepAction
    parent_step_id: str | None = None
    step_status: StepStatus = StepStatus.PENDING
    resolution_status: ResolutionStatus | None = None
    resolution: str | None = None
    notes: str | None = None
    completed_at: datetime | None = None


@dataclass(frozen=True)
class WorkflowStepCompletion:
    """Fields written when a pending step is closed out (resolve, forward, cancel)."""

    action: StepAction
    completed_at: datetime
    resolution_status: ResolutionStatus | None = None
    resolution: str | None = None
    notes: str | None = None


@dataclass(frozen=True)
class WorkflowStepResult:
    """Workflow step read-model (result of create, get, list, complete)."""

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

    @property
    def is_pending(self) -> bool:
        return self.step_status == StepStatus.PENDING

    def is_assigned_to(self, user_id: str) -> bool:
        """Return whether user_id is the assignee of this step."""
        return self.to_user_id is not None and self.to_user_id == user_id


@dataclass
class WorkflowStepNode:
    """A step with its materialized children. Transient; built for traversal and rendering."""

    step: WorkflowStepResult
    children: list[WorkflowStepNode] = field(default_factory=list)

    def count(self) -> int:
        """Return the number of nodes in this subtree (including self)."""
        return 1 + sum(child.count() for child in self.children)

    def iter_subtree(self):
        """Yield this node and all descendants depth-first, pre-order."""
        yield self
        for child in self.children:
            yield from child.iter_subtree()


@dataclass(frozen=True)
class WorkflowTree:
    """Flat steps plus the forest built from them."""

    steps: list[WorkflowStepResult]
    tree: list[WorkflowStepNode]


@dataclass(frozen=True)
class WorkflowPermissions:
    """What the acting user may do on a document right now (for UI action buttons)."""

    can_resolve: bool
    can_cancel: bool
    can_cancel_all: bool


@dataclass(frozen=True)
class ResolveOutcome:
    """Result of a document-level resolve."""

    document_id: str
    resolution_status: ResolutionStatus
    steps_updated: int
    document_status: DocumentStatus
