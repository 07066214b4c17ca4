"""Document ORM model. Registered correspondence routed through the workflow."""

from sqlalchemy import ForeignKey, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from docroute.domain.enums import DocumentStatus
from docroute.infrastructure.persistence.database import Base
from docroute.infrastructure.persistence.models.mixins import (
    CuidTimestampModel,
    in_values_check,
)


class Document(CuidTimestampModel, Base):
    """Document entity. Table: general_register.

    status is written by the workflow service once the document has steps.
    """

    __tablename__ = "general_register"

    registration_number: Mapped[str | None] = mapped_column(
        String, nullable=True, unique=True
    )
    subject: Mapped[str | None] = mapped_column(Text, nullable=True)
    status: Mapped[str] = mapped_column(
        String, nullable=False, default=DocumentStatus.REGISTERED.value
    )
    created_by: Mapped[str] = mapped_column(
        String, ForeignKey("app_user.id"), nullable=False, index=True
    )
    updated_by: Mapped[str | None] = mapped_column(
        String, ForeignKey("app_user.id", ondelete="SET NULL"), nullable=True
    )

    __table_args__ = (
        Index("ix_general_register_status", "status"),
        in_values_check(
            "status", DocumentStatus.values(), "general_register_status_check"
        ),
    )
