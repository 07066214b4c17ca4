"""Application services: status derivation, routing tree, workflow authorization, permission checks."""

from docroute.application.services.authorization_service import AuthorizationService
from docroute.application.services.document_status import derive_status
from docroute.application.services.workflow_authorization import (
    CancelRights,
    can_cancel,
    can_resolve,
)
from docroute.application.services.workflow_tree import build_tree, find_node

__all__ = [
    "AuthorizationService",
    "CancelRights",
    "build_tree",
    "can_cancel",
    "can_resolve",
    "derive_status",
    "find_node",
]
