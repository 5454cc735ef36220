from __future__ import annotations

from typing import Annotated
from uuid import UUID

from fastapi import Depends, Path

from taskboard.db import SessionDep

from .service import MembersService

MemberUserIdPath = Annotated[UUID, Path(description="User identifier of the member")]


def get_members_service(session: SessionDep) -> MembersService:
    return MembersService(session=session)


MembersServiceDep = Annotated[MembersService, Depends(get_members_service)]

__all__ = ["MemberUserIdPath", "MembersServiceDep", "get_members_service"]
