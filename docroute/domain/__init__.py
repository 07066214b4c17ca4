"""Domain layer: enums and exceptions.

No dependencies on infrastructure or presentation. Used by application
and infrastructure layers.
"""

from docroute.domain.enums import (
    DocumentStatus,
    ResolutionStatus,
    StepAction,
    StepStatus,
)
from docroute.domain.exceptions import (
    AuthenticationException,
    AuthorizationException,
    DocrouteException,
    InvalidWorkflowActionException,
    ResourceNotFoundException,
    SqlNotConfiguredException,
    ValidationException,
    WorkflowConflictException,
)

__all__ = [
    "AuthenticationException",
    "AuthorizationException",
    "DocrouteException",
    "DocumentStatus",
    "InvalidWorkflowActionException",
    "ResolutionStatus",
    "ResourceNotFoundException",
    "SqlNotConfiguredException",
    "StepAction",
    "StepStatus",
    "ValidationException",
    "WorkflowConflictException",
]
