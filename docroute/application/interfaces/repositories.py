"""Repository interfaces (ports) for the application layer.

Protocols define contracts that infrastructure implementations must fulfill (DIP).
All types reference application DTOs only; no infrastructure imports.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from docroute.application.dtos.document import DocumentResult
    from docroute.application.dtos.user import UserResult
    from docroute.application.dtos.workflow_step import (
        WorkflowStepCompletion,
        WorkflowStepCreate,
        WorkflowStepResult,
    )
    from docroute.domain.enums import DocumentStatus


# Document repository interface
class IDocumentRepository(Protocol):
    """Protocol for the registry document store as used by the workflow (DIP)."""

    async def get_by_id(self, document_id: str) -> DocumentResult | None:
        """Return document by ID, or None."""

    async def get_for_update(self, document_id: str) -> DocumentResult | None:
        """Return document by ID and hold a row lock on it until the transaction ends."""

    async def set_status(
        self, document_id: str, status: DocumentStatus, updated_by: str | None
    ) -> None:
        """Persist the derived status and who caused it."""


# Workflow step repository interface
class IWorkflowStepRepository(Protocol):
    """Protocol for workflow step persistence (append-mostly; steps are never deleted)."""

    async def create_step(self, data: WorkflowStepCreate) -> WorkflowStepResult:
        """Append a step and return it."""

    async def get_by_id(self, step_id: str) -> WorkflowStepResult | None:
        """Return step by ID, or None."""

    async def get_by_document(
        self, document_id: str, *, newest_first: bool = False
    ) -> list[WorkflowStepResult]:
        """Return all steps of a document (oldest first unless newest_first)."""

    async def get_by_parent(self, parent_step_id: str) -> list[WorkflowStepResult]:
        """Return direct children of a step."""

    async def get_pending_by_assignee(
        self, user_id: str, skip: int = 0, limit: int = 100
    ) -> list[WorkflowStepResult]:
        """Return pending steps assigned to user (newest first)."""

    async def complete_step(
        self, step_id: str, completion: WorkflowStepCompletion
    ) -> WorkflowStepResult:
        """Mark a pending step completed with the given fields; return updated step."""


# User repository interface
class IUserRepository(Protocol):
    """Protocol for user lookups (route target validation, current user)."""

    async def get_by_id(self, user_id: str) -> UserResult | None:
        """Return user by ID, or None."""
