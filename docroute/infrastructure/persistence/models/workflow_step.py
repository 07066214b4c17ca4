"""WorkflowStep ORM model. One routing, resolution or cancellation event on a document."""

from datetime import datetime

import sqlalchemy as sa
from sqlalchemy import Boolean, DateTime, ForeignKey, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.sql import func

from docroute.domain.enums import ResolutionStatus, StepAction, StepStatus
from docroute.infrastructure.persistence.database import Base
from docroute.infrastructure.persistence.models.mixins import (
    CuidMixin,
    in_values_check,
)
from docroute.shared.utils import utc_now


class WorkflowStep(CuidMixin, Base):
    """Workflow step. Table: general_register_workflow.

    Steps form a forest per document through parent_step_id. Rows are never
    deleted; pending steps are closed by setting step_status and completed_at.
    """

    __tablename__ = "general_register_workflow"

    document_id: Mapped[str] = mapped_column(
        String,
        ForeignKey("general_register.id", ondelete="CASCADE"),
        nullable=False,
    )
    parent_step_id: Mapped[str | None] = mapped_column(
        String,
        ForeignKey("general_register_workflow.id", ondelete="SET NULL"),
        nullable=True,
    )
    from_user_id: Mapped[str | None] = mapped_column(
        String, ForeignKey("app_user.id", ondelete="SET NULL"), nullable=True
    )
    to_user_id: Mapped[str | None] = mapped_column(
        String, ForeignKey("app_user.id", ondelete="SET NULL"), nullable=True
    )
    action: Mapped[str] = mapped_column(String, nullable=False)
    step_status: Mapped[str] = mapped_column(
        String, nullable=False, default=StepStatus.PENDING.value
    )
    resolution_status: Mapped[str | None] = mapped_column(String, nullable=True)
    resolution: Mapped[str | None] = mapped_column(Text, nullable=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    is_expired: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False, server_default=sa.text("false")
    )
    # Set client-side; server now() is constant within a transaction.
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utc_now,
        server_default=func.now(),
        nullable=False,
    )
    completed_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )

    __table_args__ = (
        Index("ix_gr_workflow_document", "document_id", "created_at"),
        Index("ix_gr_workflow_assignee_status", "to_user_id", "step_status"),
        Index("ix_gr_workflow_parent", "parent_step_id"),
        in_values_check("action", StepAction.values(), "gr_workflow_action_check"),
        in_values_check(
            "step_status", StepStatus.values(), "gr_workflow_step_status_check"
        ),
        sa.CheckConstraint(
            "resolution_status IS NULL OR resolution_status IN ({})".format(
                ", ".join("'{}'".format(v) for v in ResolutionStatus.values())
            ),
            name="gr_workflow_resolution_status_check",
        ),
    )
