"""Presentation-layer dependency injection (composition root).

Provides FastAPI Depends() for DB sessions, the acting user and the document
workflow service. Services are built from infrastructure implementations here;
routes depend only on these dependencies, not on infra directly.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends, HTTPException
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from docroute.application.dtos.user import UserResult
from docroute.application.services.authorization_service import AuthorizationService
from docroute.application.use_cases.workflow import DocumentWorkflowService
from docroute.core.config import get_settings
from docroute.infrastructure.persistence.database import (
    get_db,
    get_db_transactional,
)
from docroute.infrastructure.persistence.repositories import (
    DocumentRepository,
    UserRepository,
    WorkflowStepRepository,
)
from docroute.infrastructure.security.jwt import verify_token
from docroute.infrastructure.services import PermissionResolver
from docroute.shared.context import set_current_user


async def get_user_repo(
    db: Annotated[AsyncSession, Depends(get_db)],
) -> UserRepository:
    """User repository for token subject lookup."""
    return UserRepository(db)


def _build_workflow_service(db: AsyncSession) -> DocumentWorkflowService:
    """Wire repositories and the permission oracle on one session."""
    settings = get_settings()
    return DocumentWorkflowService(
        document_repo=DocumentRepository(db),
        step_repo=WorkflowStepRepository(db),
        permission_oracle=AuthorizationService(PermissionResolver(db)),
        user_repo=UserRepository(db),
        resolve_any_permission=settings.resolve_any_permission,
    )


async def get_workflow_service(
    db: Annotated[AsyncSession, Depends(get_db)],
) -> DocumentWorkflowService:
    """DocumentWorkflowService for read operations (tree, history, inbox, permissions)."""
    return _build_workflow_service(db)


async def get_workflow_service_for_write(
    db: Annotated[AsyncSession, Depends(get_db_transactional)],
) -> DocumentWorkflowService:
    """DocumentWorkflowService for route/resolve/cancel (one transaction per request)."""
    return _build_workflow_service(db)


_http_bearer = HTTPBearer(auto_error=False)


async def get_current_user_optional(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(_http_bearer)],
    user_repo: Annotated[UserRepository, Depends(get_user_repo)],
) -> UserResult | None:
    """Return current user from JWT if present; else None."""
    if not credentials:
        return None
    try:
        user_id = verify_token(credentials.credentials)
    except ValueError:
        return None
    user = await user_repo.get_by_id(user_id)
    if not user or not user.is_active:
        return None
    set_current_user(user.id)
    return user


async def get_current_user(
    current_user: Annotated[UserResult | None, Depends(get_current_user_optional)],
) -> UserResult:
    """Return current user from JWT; raise 401 if missing or invalid."""
    if current_user is None:
        raise HTTPException(status_code=401, detail="Not authenticated")
    return current_user
