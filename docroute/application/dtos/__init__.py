"""Application DTOs (no ORM dependency)."""

from docroute.application.dtos.document import DocumentResult
from docroute.application.dtos.user import UserResult
from docroute.application.dtos.workflow_step import (
    ResolveOutcome,
    WorkflowPermissions,
    WorkflowStepCompletion,
    WorkflowStepCreate,
    WorkflowStepNode,
    WorkflowStepResult,
    WorkflowTree,
)

__all__ = [
    "DocumentResult",
    "ResolveOutcome",
    "UserResult",
    "WorkflowPermissions",
    "WorkflowStepCompletion",
    "WorkflowStepCreate",
    "WorkflowStepNode",
    "WorkflowStepResult",
    "WorkflowTree",
]
