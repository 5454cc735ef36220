"""Workspace role rules shared by every workspace-scoped service."""

from __future__ import annotations

from collections.abc import Iterable

from taskboard.common.errors import PermissionDeniedError
from taskboard.models import WorkspaceMember, WorkspaceRole

MANAGER_ROLES: frozenset[WorkspaceRole] = frozenset(
    {WorkspaceRole.OWNER, WorkspaceRole.ADMIN}
)
ALL_ROLES: frozenset[WorkspaceRole] = frozenset(WorkspaceRole)


def is_manager(role: WorkspaceRole) -> bool:
    return role in MANAGER_ROLES


def require_role(
    membership: WorkspaceMember,
    allowed: Iterable[WorkspaceRole],
    *,
    message: str,
) -> WorkspaceMember:
    """Return ``membership`` when its role is in ``allowed``; raise otherwise."""

    if membership.role not in frozenset(allowed):
        raise PermissionDeniedError(message)
    return membership


def grantable_roles(actor_role: WorkspaceRole) -> frozenset[WorkspaceRole]:
    """Roles ``actor_role`` may assign when inviting or re-assigning members.

    OWNER is never grantable; only the owner may hand out ADMIN.
    """

    if actor_role is WorkspaceRole.OWNER:
        return frozenset({WorkspaceRole.ADMIN, WorkspaceRole.MEMBER})
    if actor_role is WorkspaceRole.ADMIN:
        return frozenset({WorkspaceRole.MEMBER})
    return frozenset()


def can_remove_member(
    actor: WorkspaceMember, target: WorkspaceMember
) -> bool:
    """Whether ``actor`` may remove ``target`` from the workspace."""

    if target.role is WorkspaceRole.OWNER:
        return False
    if actor.user_id == target.user_id:
        return True
    if actor.role is WorkspaceRole.OWNER:
        return True
    return actor.role is WorkspaceRole.ADMIN and target.role is WorkspaceRole.MEMBER


__all__ = [
    "ALL_ROLES",
    "MANAGER_ROLES",
    "can_remove_member",
    "grantable_roles",
    "is_manager",
    "require_role",
]
