"""ORM models. Import here so Base.metadata sees every table."""

from docroute.infrastructure.persistence.models.document import Document
from docroute.infrastructure.persistence.models.permission import (
    Permission,
    RolePermission,
    UserRole,
)
from docroute.infrastructure.persistence.models.role import Role
from docroute.infrastructure.persistence.models.user import User
from docroute.infrastructure.persistence.models.workflow_step import WorkflowStep

__all__ = [
    "Document",
    "Permission",
    "Role",
    "RolePermission",
    "User",
    "UserRole",
    "WorkflowStep",
]
