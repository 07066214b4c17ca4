"""Integration tests for workflow repositories and PermissionResolver. Require Postgres (db_session)."""

import uuid

import pytest
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from docroute.application.dtos import WorkflowStepCompletion, WorkflowStepCreate
from docroute.application.services.authorization_service import AuthorizationService
from docroute.application.use_cases.workflow import DocumentWorkflowService
from docroute.domain.enums import (
    DocumentStatus,
    ResolutionStatus,
    StepAction,
    StepStatus,
)
from docroute.infrastructure.persistence.models import (
    Document,
    Permission,
    Role,
    RolePermission,
    User,
    UserRole,
    WorkflowStep,
)
from docroute.infrastructure.persistence.repositories import (
    DocumentRepository,
    UserRepository,
    WorkflowStepRepository,
)
from docroute.infrastructure.services import PermissionResolver
from docroute.shared.utils import utc_now


async def _user(db: AsyncSession, name: str) -> User:
    suffix = uuid.uuid4().hex[:8]
    user = User(username=f"{name}-{suffix}", email=f"{name}-{suffix}@example.org")
    db.add(user)
    await db.flush()
    return user


async def _document(db: AsyncSession, created_by: str) -> Document:
    doc = Document(
        registration_number=f"GR-{uuid.uuid4().hex[:10]}",
        subject="Request for land title",
        status=DocumentStatus.REGISTERED.value,
        created_by=created_by,
    )
    db.add(doc)
    await db.flush()
    return doc


@pytest.mark.requires_db
async def test_document_repo_lock_and_status(db_session: AsyncSession) -> None:
    registrar = await _user(db_session, "registrar")
    doc = await _document(db_session, registrar.id)
    repo = DocumentRepository(db_session)

    locked = await repo.get_for_update(doc.id)
    assert locked is not None
    assert locked.status == DocumentStatus.REGISTERED
    assert locked.created_by == registrar.id

    updated = await repo.set_status(doc.id, DocumentStatus.DISTRIBUTED, registrar.id)
    assert updated.status == DocumentStatus.DISTRIBUTED
    assert updated.updated_by == registrar.id
    assert (await repo.get_by_id(doc.id)).status == DocumentStatus.DISTRIBUTED
    assert await repo.get_by_id("missing") is None


@pytest.mark.requires_db
async def test_step_repo_create_list_complete(db_session: AsyncSession) -> None:
    registrar = await _user(db_session, "registrar")
    alice = await _user(db_session, "alice")
    doc = await _document(db_session, registrar.id)
    repo = WorkflowStepRepository(db_session)

    root = await repo.create_step(
        WorkflowStepCreate(
            document_id=doc.id,
            from_user_id=registrar.id,
            to_user_id=alice.id,
            action=StepAction.SENT,
        )
    )
    child = await repo.create_step(
        WorkflowStepCreate(
            document_id=doc.id,
            from_user_id=alice.id,
            to_user_id=registrar.id,
            action=StepAction.RETURNED,
            parent_step_id=root.id,
        )
    )
    assert root.step_status == StepStatus.PENDING
    assert root.is_expired is False
    assert root.created_at is not None

    oldest_first = await repo.get_by_document(doc.id)
    newest_first = await repo.get_by_document(doc.id, newest_first=True)
    assert [s.id for s in oldest_first] == [root.id, child.id]
    assert [s.id for s in newest_first] == [child.id, root.id]
    assert [s.id for s in await repo.get_by_parent(root.id)] == [child.id]
    assert [s.id for s in await repo.get_pending_by_assignee(alice.id)] == [root.id]

    done = await repo.complete_step(
        root.id,
        WorkflowStepCompletion(
            action=StepAction.APPROVED,
            completed_at=utc_now(),
            resolution_status=ResolutionStatus.APPROVED,
            resolution="Agreed",
        ),
    )
    assert done.step_status == StepStatus.COMPLETED
    assert done.action == StepAction.APPROVED
    assert done.resolution_status == ResolutionStatus.APPROVED
    assert done.completed_at is not None
    assert await repo.get_pending_by_assignee(alice.id) == []


@pytest.mark.requires_db
async def test_permission_resolver_reads_active_roles(db_session: AsyncSession) -> None:
    auditor = await _user(db_session, "auditor")
    suffix = uuid.uuid4().hex[:8]
    role = Role(code=f"auditor-{suffix}", name="Auditor", is_active=True)
    perm = Permission(
        code=f"general_register:resolve_any_{suffix}",
        resource="general_register",
        action=f"resolve_any_{suffix}",
    )
    db_session.add_all([role, perm])
    await db_session.flush()
    db_session.add_all(
        [
            RolePermission(role_id=role.id, permission_id=perm.id),
            UserRole(user_id=auditor.id, role_id=role.id),
        ]
    )
    await db_session.flush()

    auth = AuthorizationService(PermissionResolver(db_session))
    assert await auth.has_permission(auditor.id, perm.code)

    role.is_active = False
    await db_session.flush()
    assert not await auth.has_permission(auditor.id, perm.code)


@pytest.mark.requires_db
async def test_service_round_trip_on_postgres(db_session: AsyncSession) -> None:
    registrar = await _user(db_session, "registrar")
    alice = await _user(db_session, "alice")
    doc = await _document(db_session, registrar.id)
    svc = DocumentWorkflowService(
        document_repo=DocumentRepository(db_session),
        step_repo=WorkflowStepRepository(db_session),
        permission_oracle=AuthorizationService(PermissionResolver(db_session)),
        user_repo=UserRepository(db_session),
    )

    step = await svc.route(doc.id, registrar.id, alice.id, "sent")
    assert (await svc.get_tree(doc.id)).steps[0].id == step.id

    outcome = await svc.resolve_document(doc.id, alice.id, "approved")
    assert outcome.document_status == DocumentStatus.RESOLVED
    assert (await DocumentRepository(db_session).get_by_id(doc.id)).status == (
        DocumentStatus.RESOLVED
    )


class _FailingStatusRepository(DocumentRepository):
    """Document repository whose status write always fails."""

    async def set_status(self, document_id, status, updated_by):
        raise RuntimeError("status write failed")


@pytest.mark.requires_db
async def test_failed_status_write_rolls_back_step(db_session: AsyncSession) -> None:
    registrar = await _user(db_session, "registrar")
    alice = await _user(db_session, "alice")
    doc = await _document(db_session, registrar.id)
    svc = DocumentWorkflowService(
        document_repo=_FailingStatusRepository(db_session),
        step_repo=WorkflowStepRepository(db_session),
        permission_oracle=AuthorizationService(PermissionResolver(db_session)),
    )

    with pytest.raises(RuntimeError, match="status write failed"):
        async with db_session.begin_nested():
            await svc.route(doc.id, registrar.id, alice.id, "sent")

    step_count = await db_session.scalar(
        select(func.count()).select_from(WorkflowStep).where(WorkflowStep.document_id == doc.id)
    )
    assert step_count == 0
    assert (await DocumentRepository(db_session).get_by_id(doc.id)).status == (
        DocumentStatus.REGISTERED
    )
