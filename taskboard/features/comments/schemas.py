from __future__ import annotations

from datetime import datetime
from uuid import UUID

from taskboard.common.schema import BaseSchema
from taskboard.models import Comment, User


class CommentCreate(BaseSchema):
    content: str | None = None


class CommentUpdate(BaseSchema):
    content: str | None = None


class CommentAuthor(BaseSchema):
    id: UUID
    name: str
    email: str


class CommentOut(BaseSchema):
    id: UUID
    task_id: UUID
    content: str
    author: CommentAuthor
    created_at: datetime
    updated_at: datetime

    @classmethod
    def build(cls, comment: Comment, author: User | None = None) -> CommentOut:
        author = author or comment.author
        return cls(
            id=comment.id,
            task_id=comment.task_id,
            content=comment.content,
            author=CommentAuthor.model_validate(author),
            created_at=comment.created_at,
            updated_at=comment.updated_at,
        )


class CommentMutationResponse(BaseSchema):
    message: str
    comment: CommentOut


class CommentListResponse(BaseSchema):
    comments: list[CommentOut]


__all__ = [
    "CommentAuthor",
    "CommentCreate",
    "CommentListResponse",
    "CommentMutationResponse",
    "CommentOut",
    "CommentUpdate",
]
