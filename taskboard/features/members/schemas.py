"""Membership request and response bodies."""

from __future__ import annotations

from datetime import datetime
from uuid import UUID

from taskboard.common.schema import BaseSchema, EmailAddress
from taskboard.models import User, WorkspaceMember, WorkspaceRole


class MemberAdd(BaseSchema):
    email: EmailAddress
    role: WorkspaceRole = WorkspaceRole.MEMBER


class MemberRoleUpdate(BaseSchema):
    role: WorkspaceRole


class MemberOut(BaseSchema):
    user_id: UUID
    email: str
    name: str
    role: WorkspaceRole
    joined_at: datetime

    @classmethod
    def build(cls, membership: WorkspaceMember, user: User | None = None) -> MemberOut:
        user = user or membership.user
        return cls(
            user_id=membership.user_id,
            email=user.email,
            name=user.name,
            role=membership.role,
            joined_at=membership.created_at,
        )


class MemberResponse(BaseSchema):
    message: str
    member: MemberOut


class MemberListResponse(BaseSchema):
    members: list[MemberOut]


__all__ = [
    "MemberAdd",
    "MemberListResponse",
    "MemberOut",
    "MemberResponse",
    "MemberRoleUpdate",
]
