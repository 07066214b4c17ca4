"""Application layer: interfaces, services, use cases.

Depends only on domain and protocol definitions (DIP).
Infrastructure implements the interfaces (repositories, permission resolver).
"""

from docroute.application.interfaces import (
    IDocumentRepository,
    IPermissionOracle,
    IPermissionResolver,
    IUserRepository,
    IWorkflowStepRepository,
)
from docroute.application.services.authorization_service import AuthorizationService
from docroute.application.use_cases.workflow import DocumentWorkflowService

__all__ = [
    "AuthorizationService",
    "DocumentWorkflowService",
    "IDocumentRepository",
    "IPermissionOracle",
    "IPermissionResolver",
    "IUserRepository",
    "IWorkflowStepRepository",
]
