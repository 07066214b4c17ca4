"""User ORM model. Senders, assignees and resolvers of workflow steps."""

from sqlalchemy import Boolean, String, text
from sqlalchemy.orm import Mapped, mapped_column

from docroute.infrastructure.persistence.database import Base
from docroute.infrastructure.persistence.models.mixins import CuidTimestampModel


class User(CuidTimestampModel, Base):
    """User model. Table: app_user. Unique username and email."""

    __tablename__ = "app_user"

    username: Mapped[str] = mapped_column(String, nullable=False, unique=True)
    email: Mapped[str] = mapped_column(String, nullable=False, unique=True)
    full_name: Mapped[str | None] = mapped_column(String, nullable=True)
    is_active: Mapped[bool] = mapped_column(
        Boolean, nullable=False, server_default=text("true")
    )
