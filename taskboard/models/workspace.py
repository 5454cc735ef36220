"""Workspace and membership models."""

from __future__ import annotations

import enum
from uuid import UUID

from sqlalchemy import Enum as SAEnum
from sqlalchemy import ForeignKey, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from taskboard.db import GUID, Base, TimestampMixin, UUIDPrimaryKeyMixin
from taskboard.db.types import enum_values

from .user import User


class WorkspaceRole(str, enum.Enum):
    """Role a member holds inside a workspace."""

    OWNER = "OWNER"
    ADMIN = "ADMIN"
    MEMBER = "MEMBER"


class Workspace(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    """Tenant boundary grouping projects and members."""

    __tablename__ = "workspaces"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    owner_id: Mapped[UUID] = mapped_column(
        GUID(), ForeignKey("users.id", ondelete="RESTRICT"), nullable=False
    )
    memberships: Mapped[list[WorkspaceMember]] = relationship(
        "WorkspaceMember",
        back_populates="workspace",
    )


class WorkspaceMember(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    """Assignment of a user to a workspace with a role."""

    __tablename__ = "workspace_members"
    __table_args__ = (
        UniqueConstraint("workspace_id", "user_id", name="workspace_members_workspace_user_key"),
    )

    workspace_id: Mapped[UUID] = mapped_column(
        GUID(), ForeignKey("workspaces.id", ondelete="RESTRICT"), nullable=False, index=True
    )
    user_id: Mapped[UUID] = mapped_column(
        GUID(), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    role: Mapped[WorkspaceRole] = mapped_column(
        SAEnum(
            WorkspaceRole,
            name="workspace_role",
            native_enum=False,
            values_callable=enum_values,
            length=20,
        ),
        nullable=False,
        default=WorkspaceRole.MEMBER,
    )
    workspace: Mapped[Workspace] = relationship("Workspace", back_populates="memberships")
    user: Mapped[User] = relationship(User, lazy="joined")


__all__ = ["Workspace", "WorkspaceMember", "WorkspaceRole"]
