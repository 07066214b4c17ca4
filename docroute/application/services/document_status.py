"""Derives a document's lifecycle status from its workflow steps.

The status is recomputed from the full step history after every mutation
instead of being moved along a stored transition table. Rules, in order:

1. No steps: keep the current status (draft, registered, ...).
2. A cancellation exists and every step is completed: cancelled.
3. Every step is completed: resolved, whatever the branch outcomes were.
4. Some step is pending:
   - distributed when no pending step carries a resolution and no step
     anywhere was rejected;
   - in_work otherwise.

All-rejected and all-approved trees both derive ``resolved``; the outcome
remains visible per step through resolution_status.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Protocol

from docroute.domain.enums import (
    DocumentStatus,
    ResolutionStatus,
    StepAction,
    StepStatus,
)


class _StepLike(Protocol):
    """Minimal step shape for status derivation."""

    action: StepAction
    step_status: StepStatus
    resolution_status: ResolutionStatus | None


def derive_status(
    steps: Iterable[_StepLike], current_status: DocumentStatus
) -> DocumentStatus:
    """Return the document status implied by steps. Pure and total; never raises.

    Args:
        steps: All workflow steps of the document.
        current_status: Stored document status, returned when steps do not decide.

    Returns:
        The derived DocumentStatus.
    """
    step_list = list(steps)
    if not step_list:
        return current_status

    pending = [s for s in step_list if s.step_status != StepStatus.COMPLETED]
    has_cancellation = any(s.action == StepAction.CANCELLED for s in step_list)

    if not pending:
        if has_cancellation:
            return DocumentStatus.CANCELLED
        return DocumentStatus.RESOLVED

    has_rejection = any(s.action == StepAction.REJECTED for s in step_list)
    pending_unresolved = all(s.resolution_status is None for s in pending)
    if pending_unresolved and not has_rejection:
        return DocumentStatus.DISTRIBUTED
    return DocumentStatus.IN_WORK
