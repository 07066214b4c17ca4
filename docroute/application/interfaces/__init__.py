"""Application interfaces (ports): repository and service protocols.

Define contracts for infrastructure implementations (DIP).
No runtime imports from docroute.infrastructure or docroute.api.
"""

from docroute.application.interfaces.repositories import (
    IDocumentRepository,
    IUserRepository,
    IWorkflowStepRepository,
)
from docroute.application.interfaces.services import (
    IPermissionOracle,
    IPermissionResolver,
)

__all__ = [
    "IDocumentRepository",
    "IPermissionOracle",
    "IPermissionResolver",
    "IUserRepository",
    "IWorkflowStepRepository",
]
