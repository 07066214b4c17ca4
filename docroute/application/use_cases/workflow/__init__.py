"""Document workflow use cases: routing, resolution, cancellation, tree and inbox queries."""

from docroute.application.use_cases.workflow.document_workflow import (
    DEFAULT_RESOLVE_ANY_PERMISSION,
    DocumentWorkflowService,
)

__all__ = ["DEFAULT_RESOLVE_ANY_PERMISSION", "DocumentWorkflowService"]
