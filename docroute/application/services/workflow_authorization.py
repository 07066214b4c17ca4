"""Who may resolve or cancel a document right now.

Pure predicates over the document, its steps, and the acting user. The
resolve-any override is resolved by the caller (PermissionOracle) and passed
in as a boolean, so these checks need no database.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from docroute.application.dtos.document import DocumentResult
from docroute.application.dtos.workflow_step import WorkflowStepResult


@dataclass(frozen=True)
class CancelRights:
    """Cancel decision: can_cancel_all covers the whole tree, can_cancel only own pending branches."""

    can_cancel: bool
    can_cancel_all: bool


def has_pending_assignment(steps: Iterable[WorkflowStepResult], user_id: str) -> bool:
    """Return True if user_id is the assignee of at least one pending step."""
    return any(s.is_pending and s.is_assigned_to(user_id) for s in steps)


def can_resolve(
    document: DocumentResult,
    steps: Iterable[WorkflowStepResult],
    user_id: str,
    has_resolve_any_permission: bool,
) -> bool:
    """Return True if the user holds the override, authored the document, or has pending work on it."""
    if has_resolve_any_permission:
        return True
    if document.is_created_by(user_id):
        return True
    return has_pending_assignment(steps, user_id)


def can_cancel(
    document: DocumentResult,
    steps: Iterable[WorkflowStepResult],
    user_id: str,
) -> CancelRights:
    """Return cancel rights: the creator may cancel everything, an assignee only their own pending branch."""
    is_creator = document.is_created_by(user_id)
    return CancelRights(
        can_cancel=is_creator or has_pending_assignment(steps, user_id),
        can_cancel_all=is_creator,
    )
