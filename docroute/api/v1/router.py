"""API v1 router aggregation.

Includes all endpoint modules with consistent prefix and tags. All routes
use dependencies from docroute.api.v1.dependencies (no manual repo/service construction).
"""

from fastapi import APIRouter

from docroute.api.v1.endpoints import document_workflow, health, workflow_steps

api_router = APIRouter()

api_router.include_router(health.router, prefix="/health", tags=["health"])
api_router.include_router(
    document_workflow.router, prefix="/documents", tags=["document-workflow"]
)
api_router.include_router(
    workflow_steps.router, prefix="/workflow-steps", tags=["workflow-steps"]
)
