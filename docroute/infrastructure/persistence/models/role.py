"""Role ORM model. Roles group permissions (e.g. registrar, clerk)."""

from sqlalchemy import Boolean, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from docroute.infrastructure.persistence.database import Base
from docroute.infrastructure.persistence.models.mixins import CuidTimestampModel


class Role(CuidTimestampModel, Base):
    """Role. Table: role. Unique code."""

    __tablename__ = "role"

    code: Mapped[str] = mapped_column(String, nullable=False, unique=True)
    name: Mapped[str] = mapped_column(String, nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
