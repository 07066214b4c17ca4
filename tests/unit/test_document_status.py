"""Unit tests for derive_status (document status from workflow steps)."""

from datetime import UTC, datetime

import pytest

from docroute.application.dtos import WorkflowStepResult
from docroute.application.services.document_status import derive_status
from docroute.domain.enums import (
    DocumentStatus,
    ResolutionStatus,
    StepAction,
    StepStatus,
)

_NOW = datetime(2026, 3, 2, 10, 30, tzinfo=UTC)


def _step(
    step_id: str,
    action: StepAction,
    step_status: StepStatus,
    parent_step_id: str | None = None,
    resolution_status: ResolutionStatus | None = None,
) -> WorkflowStepResult:
    return WorkflowStepResult(
        id=step_id,
        document_id="doc-1",
        parent_step_id=parent_step_id,
        from_user_id="registrar",
        to_user_id="alice",
        action=action,
        step_status=step_status,
        resolution_status=resolution_status,
        resolution=None,
        notes=None,
        is_expired=False,
        created_at=_NOW,
        completed_at=_NOW if step_status == StepStatus.COMPLETED else None,
    )


def test_no_steps_keeps_current_status() -> None:
    assert derive_status([], DocumentStatus.REGISTERED) == DocumentStatus.REGISTERED
    assert derive_status([], DocumentStatus.DRAFT) == DocumentStatus.DRAFT


def test_single_completed_step_is_resolved() -> None:
    steps = [_step("A", StepAction.SENT, StepStatus.COMPLETED)]
    assert derive_status(steps, DocumentStatus.REGISTERED) == DocumentStatus.RESOLVED


def test_pending_child_without_resolution_is_distributed() -> None:
    steps = [
        _step("A", StepAction.SENT, StepStatus.COMPLETED),
        _step("B", StepAction.FORWARDED, StepStatus.PENDING, parent_step_id="A"),
    ]
    assert derive_status(steps, DocumentStatus.REGISTERED) == DocumentStatus.DISTRIBUTED


def test_pending_step_carrying_resolution_is_in_work() -> None:
    steps = [
        _step("A", StepAction.SENT, StepStatus.COMPLETED),
        _step(
            "B",
            StepAction.FORWARDED,
            StepStatus.PENDING,
            parent_step_id="A",
            resolution_status=ResolutionStatus.APPROVED,
        ),
    ]
    assert derive_status(steps, DocumentStatus.REGISTERED) == DocumentStatus.IN_WORK


def test_all_completed_with_cancellation_is_cancelled() -> None:
    steps = [
        _step("A", StepAction.SENT, StepStatus.COMPLETED),
        _step("B", StepAction.CANCELLED, StepStatus.COMPLETED, parent_step_id="A"),
    ]
    assert derive_status(steps, DocumentStatus.DISTRIBUTED) == DocumentStatus.CANCELLED


def test_pending_step_with_cancellation_elsewhere_is_not_cancelled() -> None:
    steps = [
        _step("A", StepAction.SENT, StepStatus.COMPLETED),
        _step("B", StepAction.CANCELLED, StepStatus.COMPLETED, parent_step_id="A"),
        _step("C", StepAction.FORWARDED, StepStatus.PENDING, parent_step_id="A"),
    ]
    assert derive_status(steps, DocumentStatus.DISTRIBUTED) == DocumentStatus.DISTRIBUTED


def test_approval_of_last_pending_step_is_resolved() -> None:
    steps = [
        _step("A", StepAction.SENT, StepStatus.COMPLETED),
        _step(
            "B",
            StepAction.APPROVED,
            StepStatus.COMPLETED,
            parent_step_id="A",
            resolution_status=ResolutionStatus.APPROVED,
        ),
    ]
    assert derive_status(steps, DocumentStatus.DISTRIBUTED) == DocumentStatus.RESOLVED


def test_rejection_with_sibling_still_pending_is_in_work() -> None:
    steps = [
        _step("A", StepAction.SENT, StepStatus.COMPLETED),
        _step(
            "B",
            StepAction.REJECTED,
            StepStatus.COMPLETED,
            parent_step_id="A",
            resolution_status=ResolutionStatus.REJECTED,
        ),
        _step("C", StepAction.FORWARDED, StepStatus.PENDING, parent_step_id="A"),
    ]
    assert derive_status(steps, DocumentStatus.DISTRIBUTED) == DocumentStatus.IN_WORK


def test_all_rejected_is_resolved() -> None:
    steps = [
        _step(
            "A",
            StepAction.REJECTED,
            StepStatus.COMPLETED,
            resolution_status=ResolutionStatus.REJECTED,
        ),
        _step(
            "B",
            StepAction.REJECTED,
            StepStatus.COMPLETED,
            parent_step_id="A",
            resolution_status=ResolutionStatus.REJECTED,
        ),
    ]
    assert derive_status(steps, DocumentStatus.IN_WORK) == DocumentStatus.RESOLVED


@pytest.mark.parametrize("current", list(DocumentStatus))
def test_result_ignores_current_status_once_steps_exist(current: DocumentStatus) -> None:
    steps = [
        _step("A", StepAction.SENT, StepStatus.COMPLETED),
        _step("B", StepAction.FORWARDED, StepStatus.PENDING, parent_step_id="A"),
    ]
    assert derive_status(steps, current) == DocumentStatus.DISTRIBUTED


def test_step_order_does_not_matter() -> None:
    steps = [
        _step("C", StepAction.FORWARDED, StepStatus.PENDING, parent_step_id="A"),
        _step(
            "B",
            StepAction.REJECTED,
            StepStatus.COMPLETED,
            parent_step_id="A",
            resolution_status=ResolutionStatus.REJECTED,
        ),
        _step("A", StepAction.SENT, StepStatus.COMPLETED),
    ]
    forward = derive_status(steps, DocumentStatus.REGISTERED)
    backward = derive_status(list(reversed(steps)), DocumentStatus.REGISTERED)
    assert forward == backward == DocumentStatus.IN_WORK


def test_accepts_generator_input() -> None:
    steps = (
        s
        for s in [
            _step("A", StepAction.SENT, StepStatus.COMPLETED),
            _step("B", StepAction.SENT, StepStatus.PENDING, parent_step_id="A"),
        ]
    )
    assert derive_status(steps, DocumentStatus.REGISTERED) == DocumentStatus.DISTRIBUTED


@pytest.mark.parametrize("current", list(DocumentStatus))
def test_derivation_is_idempotent(current: DocumentStatus) -> None:
    steps = [
        _step("A", StepAction.SENT, StepStatus.COMPLETED),
        _step("B", StepAction.REJECTED, StepStatus.COMPLETED, parent_step_id="A"),
        _step("C", StepAction.FORWARDED, StepStatus.PENDING, parent_step_id="A"),
    ]
    once = derive_status(steps, current)
    assert derive_status(steps, once) == once
