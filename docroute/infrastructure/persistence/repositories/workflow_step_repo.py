"""Workflow step repository. Append-only step log; interface methods return application DTOs."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from docroute.application.dtos.workflow_step import (
    WorkflowStepCompletion,
    WorkflowStepCreate,
    WorkflowStepResult,
)
from docroute.domain.enums import ResolutionStatus, StepAction, StepStatus
from docroute.domain.exceptions import ResourceNotFoundException
from docroute.infrastructure.persistence.models.workflow_step import WorkflowStep
from docroute.infrastructure.persistence.repositories.base import BaseRepository
from docroute.shared.utils import ensure_utc


def _create_to_step(d: WorkflowStepCreate) -> WorkflowStep:
    """Map WorkflowStepCreate (write-model) to ORM WorkflowStep for persistence."""
    return WorkflowStep(
        document_id=d.document_id,
        parent_step_id=d.parent_step_id,
        from_user_id=d.from_user_id,
        to_user_id=d.to_user_id,
        action=d.action.value,
        step_status=d.step_status.value,
        resolution_status=d.resolution_status.value if d.resolution_status else None,
        resolution=d.resolution,
        notes=d.notes,
        is_expired=False,
        completed_at=d.completed_at,
    )


def _step_to_result(s: WorkflowStep) -> WorkflowStepResult:
    """Map ORM WorkflowStep to application WorkflowStepResult."""
    return WorkflowStepResult(
        id=s.id,
        document_id=s.document_id,
        parent_step_id=s.parent_step_id,
        from_user_id=s.from_user_id,
        to_user_id=s.to_user_id,
        action=StepAction(s.action),
        step_status=StepStatus(s.step_status),
        resolution_status=(
            ResolutionStatus(s.resolution_status) if s.resolution_status else None
        ),
        resolution=s.resolution,
        notes=s.notes,
        is_expired=s.is_expired,
        created_at=ensure_utc(s.created_at),
        completed_at=ensure_utc(s.completed_at),
    )


class WorkflowStepRepository(BaseRepository[WorkflowStep]):
    """Workflow step repository. Steps are created and completed, never deleted."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, WorkflowStep)

    async def create_step(self, data: WorkflowStepCreate) -> WorkflowStepResult:
        created = await self.create(_create_to_step(data))
        return _step_to_result(created)

    async def get_by_id(self, step_id: str) -> WorkflowStepResult | None:
        row = await self.get(step_id)
        return _step_to_result(row) if row else None

    async def get_by_document(
        self, document_id: str, *, newest_first: bool = False
    ) -> list[WorkflowStepResult]:
        """Return all steps of a document, oldest first unless newest_first."""
        order = (
            (WorkflowStep.created_at.desc(), WorkflowStep.id.desc())
            if newest_first
            else (WorkflowStep.created_at.asc(), WorkflowStep.id.asc())
        )
        result = await self.db.execute(
            select(WorkflowStep)
            .where(WorkflowStep.document_id == document_id)
            .order_by(*order)
        )
        return [_step_to_result(s) for s in result.scalars().all()]

    async def get_by_parent(self, parent_step_id: str) -> list[WorkflowStepResult]:
        result = await self.db.execute(
            select(WorkflowStep)
            .where(WorkflowStep.parent_step_id == parent_step_id)
            .order_by(WorkflowStep.created_at.asc(), WorkflowStep.id.asc())
        )
        return [_step_to_result(s) for s in result.scalars().all()]

    async def get_pending_by_assignee(
        self, user_id: str, skip: int = 0, limit: int = 100
    ) -> list[WorkflowStepResult]:
        """Return pending steps assigned to user_id, newest first."""
        result = await self.db.execute(
            select(WorkflowStep)
            .where(
                WorkflowStep.to_user_id == user_id,
                WorkflowStep.step_status == StepStatus.PENDING.value,
            )
            .order_by(WorkflowStep.created_at.desc(), WorkflowStep.id.desc())
            .offset(skip)
            .limit(limit)
        )
        return [_step_to_result(s) for s in result.scalars().all()]

    async def complete_step(
        self, step_id: str, completion: WorkflowStepCompletion
    ) -> WorkflowStepResult:
        """Close a step: status completed plus the completion fields. Raises if missing."""
        row = await self.get(step_id)
        if row is None:
            raise ResourceNotFoundException("workflow_step", step_id)
        row.step_status = StepStatus.COMPLETED.value
        row.action = completion.action.value
        row.completed_at = completion.completed_at
        if completion.resolution_status is not None:
            row.resolution_status = completion.resolution_status.value
        if completion.resolution is not None:
            row.resolution = completion.resolution
        if completion.notes is not None:
            row.notes = completion.notes
        await self.db.flush()
        return _step_to_result(row)
