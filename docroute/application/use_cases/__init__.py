"""Application use cases: one entry point per workflow."""

from docroute.application.use_cases.workflow import DocumentWorkflowService

__all__ = ["DocumentWorkflowService"]
