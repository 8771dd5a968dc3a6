"""User account and registration request models."""

from datetime import datetime
from enum import Enum

from sqlalchemy import String, Text, func
from sqlalchemy import Enum as SQLEnum
from sqlalchemy.orm import Mapped, mapped_column

from tote_inventory.extensions import db


class UserRole(str, Enum):
    ADMIN = "ADMIN"
    USER = "USER"


class PendingUserStatus(str, Enum):
    PENDING = "PENDING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"


class User(db.Model):  # type: ignore[name-defined]
    """Account that can be recorded as the actor of a movement."""

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    role: Mapped[UserRole] = mapped_column(
        SQLEnum(
            UserRole,
            name="user_role",
            values_callable=lambda enum_cls: [r.value for r in enum_cls],
            native_enum=False,
        ),
        nullable=False,
        default=UserRole.USER,
    )
    created_at: Mapped[datetime] = mapped_column(
        nullable=False, server_default=func.now()
    )

    def __repr__(self) -> str:
        return f"<User {self.email} ({self.role.value})>"


class PendingUser(db.Model):  # type: ignore[name-defined]
    """Registration request awaiting an administrator decision."""

    __tablename__ = "pending_users"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    reason: Mapped[str | None] = mapped_column(Text, nullable=True)
    status: Mapped[PendingUserStatus] = mapped_column(
        SQLEnum(
            PendingUserStatus,
            name="pending_user_status",
            values_callable=lambda enum_cls: [s.value for s in enum_cls],
            native_enum=False,
        ),
        nullable=False,
        default=PendingUserStatus.PENDING,
        index=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        nullable=False, server_default=func.now()
    )
    processed_at: Mapped[datetime | None] = mapped_column(nullable=True)

    def __repr__(self) -> str:
        return f"<PendingUser {self.email} ({self.status.value})>"
