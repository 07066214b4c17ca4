"""Pydantic request/response schemas for the API."""

from docroute.schemas.health import HealthResponse
from docroute.schemas.workflow import (
    CancelRequest,
    CancelResponse,
    DocumentResolveRequest,
    ResolveOutcomeResponse,
    RouteRequest,
    StepResolveRequest,
    WorkflowPermissionsResponse,
    WorkflowStepNodeResponse,
    WorkflowStepResponse,
    WorkflowTreeResponse,
)

__all__ = [
    "CancelRequest",
    "CancelResponse",
    "DocumentResolveRequest",
    "HealthResponse",
    "ResolveOutcomeResponse",
    "RouteRequest",
    "StepResolveRequest",
    "WorkflowPermissionsResponse",
    "WorkflowStepNodeResponse",
    "WorkflowStepResponse",
    "WorkflowTreeResponse",
]
