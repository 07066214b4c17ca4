"""Workflow step API: per-step resolve and the current user's inbox."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request

from docroute.api.v1.dependencies import (
    get_current_user,
    get_workflow_service,
    get_workflow_service_for_write,
)
from docroute.application.dtos.user import UserResult
from docroute.application.use_cases.workflow import DocumentWorkflowService
from docroute.core.config import get_settings
from docroute.core.limiter import limit_writes
from docroute.schemas.workflow import StepResolveRequest, WorkflowStepResponse

router = APIRouter()


@router.get("/pending", response_model=list[WorkflowStepResponse])
async def list_pending_steps(
    current_user: Annotated[UserResult, Depends(get_current_user)],
    workflow: Annotated[DocumentWorkflowService, Depends(get_workflow_service)],
    skip: int = Query(0, ge=0),
    limit: int = Query(50, ge=1, le=1000),
):
    """Return pending steps assigned to the current user, newest first."""
    limit = min(limit, get_settings().pending_page_size_max)
    steps = await workflow.get_pending_for_user(current_user.id, skip=skip, limit=limit)
    return [WorkflowStepResponse.model_validate(s) for s in steps]


@router.post("/{step_id}/resolve", response_model=WorkflowStepResponse)
@limit_writes
async def resolve_step(
    request: Request,
    step_id: str,
    body: StepResolveRequest,
    current_user: Annotated[UserResult, Depends(get_current_user)],
    workflow: Annotated[
        DocumentWorkflowService, Depends(get_workflow_service_for_write)
    ],
):
    """Approve or reject one pending step."""
    step = await workflow.resolve(
        step_id=step_id,
        user_id=current_user.id,
        resolution_status=body.resolution_status,
        resolution=body.resolution,
        notes=body.notes,
    )
    return WorkflowStepResponse.model_validate(step)
