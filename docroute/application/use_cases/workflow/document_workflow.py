"""Document workflow operations: route, resolve, cancel, and tree/inbox queries.

The only component with side effects. Each mutating operation locks the
document row, writes steps, re-derives the status from the full step set and
writes it back; all of it runs in the caller's transaction (get_db_transactional),
so the step writes and the status write commit or roll back together.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from docroute.application.dtos.workflow_step import (
    ResolveOutcome,
    WorkflowPermissions,
    WorkflowStepCompletion,
    WorkflowStepCreate,
    WorkflowStepResult,
    WorkflowTree,
)
from docroute.application.services.document_status import derive_status
from docroute.application.services.workflow_authorization import (
    can_cancel,
    can_resolve,
)
from docroute.application.services.workflow_tree import build_tree, find_node
from docroute.domain.enums import (
    DocumentStatus,
    ResolutionStatus,
    StepAction,
    StepStatus,
)
from docroute.domain.exceptions import (
    AuthorizationException,
    InvalidWorkflowActionException,
    ResourceNotFoundException,
    ValidationException,
    WorkflowConflictException,
)
from docroute.shared.telemetry.logging import get_logger
from docroute.shared.utils.datetime import utc_now

if TYPE_CHECKING:
    from docroute.application.dtos.document import DocumentResult
    from docroute.application.interfaces.repositories import (
        IDocumentRepository,
        IUserRepository,
        IWorkflowStepRepository,
    )
    from docroute.application.interfaces.services import IPermissionOracle

logger = get_logger(__name__)

DEFAULT_RESOLVE_ANY_PERMISSION = "general_register:resolve_any"

_ROUTING_ACTION_VALUES = [a.value for a in StepAction if a.is_routing]


def _parse_routing_action(action: StepAction | str) -> StepAction:
    """Return action as StepAction; raise InvalidWorkflowActionException unless it is sent/forwarded/returned."""
    try:
        parsed = StepAction(action)
    except ValueError:
        raise InvalidWorkflowActionException(str(action), _ROUTING_ACTION_VALUES) from None
    if not parsed.is_routing:
        raise InvalidWorkflowActionException(parsed.value, _ROUTING_ACTION_VALUES)
    return parsed


def _parse_resolution(resolution_status: ResolutionStatus | str) -> ResolutionStatus:
    try:
        return ResolutionStatus(resolution_status)
    except ValueError:
        raise InvalidWorkflowActionException(
            str(resolution_status), ResolutionStatus.values()
        ) from None


def _require_open(document: DocumentResult, operation: str) -> None:
    """Raise WorkflowConflictException when the document is resolved, cancelled or archived."""
    if document.status.is_terminal:
        raise WorkflowConflictException(
            f"Cannot {operation} document in status '{document.status.value}'",
            document_id=document.id,
            document_status=document.status.value,
        )


class DocumentWorkflowService:
    """Applies routing actions to a document and keeps its derived status in sync."""

    def __init__(
        self,
        document_repo: IDocumentRepository,
        step_repo: IWorkflowStepRepository,
        permission_oracle: IPermissionOracle,
        *,
        user_repo: IUserRepository | None = None,
        resolve_any_permission: str = DEFAULT_RESOLVE_ANY_PERMISSION,
    ) -> None:
        self.document_repo = document_repo
        self.step_repo = step_repo
        self.permission_oracle = permission_oracle
        self.user_repo = user_repo
        self.resolve_any_permission = resolve_any_permission

    # ---- helpers ----

    async def _get_document(self, document_id: str) -> DocumentResult:
        document = await self.document_repo.get_by_id(document_id)
        if document is None:
            raise ResourceNotFoundException("document", document_id)
        return document

    async def _lock_document(self, document_id: str) -> DocumentResult:
        """Load the document with a row lock; serializes writers on the same document."""
        document = await self.document_repo.get_for_update(document_id)
        if document is None:
            raise ResourceNotFoundException("document", document_id)
        return document

    async def _has_resolve_any(self, user_id: str) -> bool:
        return await self.permission_oracle.has_permission(
            user_id, self.resolve_any_permission
        )

    async def _validate_target_user(self, to_user_id: str | None) -> None:
        if to_user_id is None or self.user_repo is None:
            return
        user = await self.user_repo.get_by_id(to_user_id)
        if user is None or not user.is_active:
            raise ValidationException(
                f"Target user not found or inactive: {to_user_id}", field="to_user_id"
            )

    async def _complete(
        self,
        step: WorkflowStepResult,
        action: StepAction,
        *,
        resolution_status: ResolutionStatus | None = None,
        resolution: str | None = None,
        notes: str | None = None,
    ) -> WorkflowStepResult:
        return await self.step_repo.complete_step(
            step.id,
            WorkflowStepCompletion(
                action=action,
                completed_at=utc_now(),
                resolution_status=resolution_status,
                resolution=resolution,
                notes=notes if notes is not None else step.notes,
            ),
        )

    async def _sync_status(
        self, document: DocumentResult, updated_by: str | None
    ) -> DocumentStatus:
        """Re-derive status from all steps and persist it. Returns the new status."""
        steps = await self.step_repo.get_by_document(document.id)
        new_status = derive_status(steps, document.status)
        await self.document_repo.set_status(document.id, new_status, updated_by)
        if new_status != document.status:
            logger.info(
                "Document %s status %s -> %s (user_id=%s)",
                document.id,
                document.status.value,
                new_status.value,
                updated_by,
            )
        return new_status

    # ---- commands ----

    async def route(
        self,
        document_id: str,
        from_user_id: str | None,
        to_user_id: str | None,
        action: StepAction | str,
        notes: str | None = None,
        parent_step_id: str | None = None,
    ) -> WorkflowStepResult:
        """Send, forward or return the document to a user; creates a pending step.

        When parent_step_id names a pending step assigned to from_user_id, that
        step is closed: routing on from one's own work item hands it on.

        Raises:
            InvalidWorkflowActionException: action is not sent/forwarded/returned.
            ResourceNotFoundException: document or parent step missing.
            ValidationException: target user unknown or inactive.
            WorkflowConflictException: document is resolved, cancelled or archived.
        """
        routing_action = _parse_routing_action(action)
        document = await self._lock_document(document_id)
        _require_open(document, "route")

        parent: WorkflowStepResult | None = None
        if parent_step_id is not None:
            parent = await self.step_repo.get_by_id(parent_step_id)
            if parent is None or parent.document_id != document_id:
                raise ResourceNotFoundException("workflow_step", parent_step_id)
        await self._validate_target_user(to_user_id)

        if (
            parent is not None
            and from_user_id is not None
            and parent.is_pending
            and parent.is_assigned_to(from_user_id)
        ):
            await self._complete(parent, parent.action)

        step = await self.step_repo.create_step(
            WorkflowStepCreate(
                document_id=document_id,
                parent_step_id=parent_step_id,
                from_user_id=from_user_id,
                to_user_id=to_user_id,
                action=routing_action,
                notes=notes,
            )
        )
        logger.info(
            "Routed document %s: step %s %s from %s to %s (parent=%s)",
            document_id,
            step.id,
            routing_action.value,
            from_user_id,
            to_user_id,
            parent_step_id,
        )
        await self._sync_status(document, from_user_id)
        return step

    async def resolve(
        self,
        step_id: str,
        user_id: str,
        resolution_status: ResolutionStatus | str,
        resolution: str | None = None,
        notes: str | None = None,
    ) -> WorkflowStepResult:
        """Close one pending step with an approval or rejection.

        Raises:
            ResourceNotFoundException: step (or its document) missing.
            AuthorizationException: user may not resolve this document, or the
                step is assigned to someone else and user is neither the creator
                nor a holder of the resolve-any permission.
            WorkflowConflictException: step already completed, or document closed.
        """
        outcome = _parse_resolution(resolution_status)
        step = await self.step_repo.get_by_id(step_id)
        if step is None:
            raise ResourceNotFoundException("workflow_step", step_id)

        document = await self._lock_document(step.document_id)
        steps = await self.step_repo.get_by_document(document.id)
        has_override = await self._has_resolve_any(user_id)
        if not can_resolve(document, steps, user_id, has_override):
            raise AuthorizationException(resource="document", action="resolve")

        current = next((s for s in steps if s.id == step_id), step)
        if not (
            has_override
            or current.is_assigned_to(user_id)
            or document.is_created_by(user_id)
        ):
            raise AuthorizationException(resource="workflow_step", action="resolve")
        if not current.is_pending:
            raise WorkflowConflictException(
                f"Workflow step already completed: {step_id}", step_id=step_id
            )
        _require_open(document, "resolve")

        updated = await self._complete(
            current,
            outcome.to_action(),
            resolution_status=outcome,
            resolution=resolution,
            notes=notes,
        )
        logger.info(
            "Resolved step %s of document %s as %s (user_id=%s)",
            step_id,
            document.id,
            outcome.value,
            user_id,
        )
        await self._sync_status(document, user_id)
        return updated

    async def resolve_document(
        self,
        document_id: str,
        user_id: str,
        resolution_status: ResolutionStatus | str,
        resolution: str | None = None,
        notes: str | None = None,
        step_id: str | None = None,
    ) -> ResolveOutcome:
        """Resolve the user's work on a document.

        With step_id, resolves that step (it must belong to the document).
        Without, resolves every pending step assigned to the user; when there is
        none, the creator or a holder of the resolve-any permission records a
        completed self-resolution step instead.
        """
        outcome = _parse_resolution(resolution_status)
        if step_id is not None:
            step = await self.step_repo.get_by_id(step_id)
            if step is None or step.document_id != document_id:
                raise ResourceNotFoundException("workflow_step", step_id)
            await self.resolve(step_id, user_id, outcome, resolution, notes)
            document = await self._get_document(document_id)
            return ResolveOutcome(
                document_id=document_id,
                resolution_status=outcome,
                steps_updated=1,
                document_status=document.status,
            )

        document = await self._lock_document(document_id)
        steps = await self.step_repo.get_by_document(document_id)
        has_override = await self._has_resolve_any(user_id)
        if not can_resolve(document, steps, user_id, has_override):
            raise AuthorizationException(resource="document", action="resolve")
        _require_open(document, "resolve")

        own_pending = [s for s in steps if s.is_pending and s.is_assigned_to(user_id)]
        if own_pending:
            for pending_step in own_pending:
                await self._complete(
                    pending_step,
                    outcome.to_action(),
                    resolution_status=outcome,
                    resolution=resolution,
                    notes=notes,
                )
            steps_updated = len(own_pending)
        else:
            await self.step_repo.create_step(
                WorkflowStepCreate(
                    document_id=document_id,
                    from_user_id=user_id,
                    to_user_id=user_id,
                    action=outcome.to_action(),
                    step_status=StepStatus.COMPLETED,
                    resolution_status=outcome,
                    resolution=resolution,
                    notes=notes,
                    completed_at=utc_now(),
                )
            )
            steps_updated = 1
        logger.info(
            "Resolved document %s as %s: %d step(s) (user_id=%s)",
            document_id,
            outcome.value,
            steps_updated,
            user_id,
        )
        new_status = await self._sync_status(document, user_id)
        return ResolveOutcome(
            document_id=document_id,
            resolution_status=outcome,
            steps_updated=steps_updated,
            document_status=new_status,
        )

    async def cancel(
        self, document_id: str, step_id: str | None, user_id: str
    ) -> DocumentStatus:
        """Cancel the whole document (step_id None, creator only) or one branch.

        Branch cancel closes the step and its pending descendants; the user must
        be the step's assignee (or the document's creator). Returns the
        document status after the cancel.

        Raises:
            ResourceNotFoundException: document or step missing.
            AuthorizationException: user may not cancel this document or branch.
            WorkflowConflictException: document closed, or step already completed.
        """
        document = await self._lock_document(document_id)
        steps = await self.step_repo.get_by_document(document_id)
        rights = can_cancel(document, steps, user_id)

        if step_id is None:
            if not rights.can_cancel_all:
                raise AuthorizationException(resource="document", action="cancel")
            _require_open(document, "cancel")
            targets = [s for s in steps if s.is_pending]
            if not targets:
                await self.step_repo.create_step(
                    WorkflowStepCreate(
                        document_id=document_id,
                        from_user_id=user_id,
                        to_user_id=None,
                        action=StepAction.CANCELLED,
                        step_status=StepStatus.COMPLETED,
                        completed_at=utc_now(),
                    )
                )
        else:
            node = find_node(build_tree(steps), step_id)
            if node is None:
                raise ResourceNotFoundException("workflow_step", step_id)
            if not rights.can_cancel or not (
                rights.can_cancel_all or node.step.is_assigned_to(user_id)
            ):
                raise AuthorizationException(resource="workflow_step", action="cancel")
            if not node.step.is_pending:
                raise WorkflowConflictException(
                    f"Workflow step already completed: {step_id}", step_id=step_id
                )
            _require_open(document, "cancel")
            targets = [n.step for n in node.iter_subtree() if n.step.is_pending]

        for target in targets:
            await self._complete(target, StepAction.CANCELLED)
        logger.info(
            "Cancelled %s of document %s: %d pending step(s) closed (user_id=%s)",
            f"branch {step_id}" if step_id else "workflow",
            document_id,
            len(targets),
            user_id,
        )
        return await self._sync_status(document, user_id)

    # ---- queries ----

    async def get_tree(self, document_id: str) -> WorkflowTree:
        """Return the document's steps and the routing forest built from them."""
        await self._get_document(document_id)
        steps = await self.step_repo.get_by_document(document_id)
        return build_tree(steps)

    async def get_history(self, document_id: str) -> list[WorkflowStepResult]:
        """Return the document's steps, newest first."""
        await self._get_document(document_id)
        return await self.step_repo.get_by_document(document_id, newest_first=True)

    async def get_pending_for_user(
        self, user_id: str, skip: int = 0, limit: int = 100
    ) -> list[WorkflowStepResult]:
        """Return the user's inbox: pending steps assigned to them, newest first."""
        return await self.step_repo.get_pending_by_assignee(user_id, skip=skip, limit=limit)

    async def get_permissions(
        self, document_id: str, user_id: str
    ) -> WorkflowPermissions:
        """Return resolve/cancel rights of user on the document."""
        document = await self._get_document(document_id)
        steps = await self.step_repo.get_by_document(document_id)
        has_override = await self._has_resolve_any(user_id)
        rights = can_cancel(document, steps, user_id)
        return WorkflowPermissions(
            can_resolve=can_resolve(document, steps, user_id, has_override),
            can_cancel=rights.can_cancel,
            can_cancel_all=rights.can_cancel_all,
        )
