"""Document workflow API: thin routes delegating to DocumentWorkflowService."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request

from docroute.api.v1.dependencies import (
    get_current_user,
    get_workflow_service,
    get_workflow_service_for_write,
)
from docroute.application.dtos.user import UserResult
from docroute.application.use_cases.workflow import DocumentWorkflowService
from docroute.core.limiter import limit_writes
from docroute.schemas.workflow import (
    CancelRequest,
    CancelResponse,
    DocumentResolveRequest,
    ResolveOutcomeResponse,
    RouteRequest,
    WorkflowPermissionsResponse,
    WorkflowStepResponse,
    WorkflowTreeResponse,
)

router = APIRouter()


@router.get("/{document_id}/workflow", response_model=WorkflowTreeResponse)
async def get_workflow_tree(
    document_id: str,
    current_user: Annotated[UserResult, Depends(get_current_user)],
    workflow: Annotated[DocumentWorkflowService, Depends(get_workflow_service)],
):
    """Return all steps of the document and the routing forest built from them."""
    tree = await workflow.get_tree(document_id)
    return WorkflowTreeResponse.from_tree(document_id, tree)


@router.get(
    "/{document_id}/workflow/history", response_model=list[WorkflowStepResponse]
)
async def get_workflow_history(
    document_id: str,
    current_user: Annotated[UserResult, Depends(get_current_user)],
    workflow: Annotated[DocumentWorkflowService, Depends(get_workflow_service)],
):
    """Return the document's steps, newest first."""
    steps = await workflow.get_history(document_id)
    return [WorkflowStepResponse.model_validate(s) for s in steps]


@router.get(
    "/{document_id}/workflow/permissions",
    response_model=WorkflowPermissionsResponse,
)
async def get_workflow_permissions(
    document_id: str,
    current_user: Annotated[UserResult, Depends(get_current_user)],
    workflow: Annotated[DocumentWorkflowService, Depends(get_workflow_service)],
):
    """Return whether the current user may resolve or cancel the document."""
    permissions = await workflow.get_permissions(document_id, current_user.id)
    return WorkflowPermissionsResponse.model_validate(permissions)


@router.post(
    "/{document_id}/workflow", response_model=WorkflowStepResponse, status_code=201
)
@limit_writes
async def route_document(
    request: Request,
    document_id: str,
    body: RouteRequest,
    current_user: Annotated[UserResult, Depends(get_current_user)],
    workflow: Annotated[
        DocumentWorkflowService, Depends(get_workflow_service_for_write)
    ],
):
    """Send, forward or return the document to a user (creates a pending step)."""
    step = await workflow.route(
        document_id=document_id,
        from_user_id=current_user.id,
        to_user_id=body.to_user_id,
        action=body.action,
        notes=body.notes,
        parent_step_id=body.parent_step_id,
    )
    return WorkflowStepResponse.model_validate(step)


@router.post("/{document_id}/resolve", response_model=ResolveOutcomeResponse)
@limit_writes
async def resolve_document(
    request: Request,
    document_id: str,
    body: DocumentResolveRequest,
    current_user: Annotated[UserResult, Depends(get_current_user)],
    workflow: Annotated[
        DocumentWorkflowService, Depends(get_workflow_service_for_write)
    ],
):
    """Approve or reject the current user's pending work on the document."""
    outcome = await workflow.resolve_document(
        document_id=document_id,
        user_id=current_user.id,
        resolution_status=body.resolution_status,
        resolution=body.resolution,
        notes=body.notes,
        step_id=body.step_id,
    )
    return ResolveOutcomeResponse.model_validate(outcome)


@router.post("/{document_id}/cancel", response_model=CancelResponse)
@limit_writes
async def cancel_workflow(
    request: Request,
    document_id: str,
    body: CancelRequest,
    current_user: Annotated[UserResult, Depends(get_current_user)],
    workflow: Annotated[
        DocumentWorkflowService, Depends(get_workflow_service_for_write)
    ],
):
    """Cancel the whole workflow (creator only) or one branch (step_id)."""
    status = await workflow.cancel(document_id, body.step_id, current_user.id)
    return CancelResponse(document_id=document_id, document_status=status)
