"""Persistence repositories. Re-exports for dependency injection."""

from docroute.infrastructure.persistence.repositories.base import BaseRepository
from docroute.infrastructure.persistence.repositories.document_repo import (
    DocumentRepository,
)
from docroute.infrastructure.persistence.repositories.user_repo import UserRepository
from docroute.infrastructure.persistence.repositories.workflow_step_repo import (
    WorkflowStepRepository,
)

__all__ = [
    "BaseRepository",
    "DocumentRepository",
    "UserRepository",
    "WorkflowStepRepository",
]
