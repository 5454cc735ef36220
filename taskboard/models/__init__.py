"""ORM models; importing this package registers every table on ``metadata``."""

from .comment import Comment
from .project import Project
from .task import Task, TaskPriority, TaskStatus
from .user import User
from .workspace import Workspace, WorkspaceMember, WorkspaceRole

__all__ = [
    "Comment",
    "Project",
    "Task",
    "TaskPriority",
    "TaskStatus",
    "User",
    "Workspace",
    "WorkspaceMember",
    "WorkspaceRole",
]
