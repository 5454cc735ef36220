"""Initial Taskboard schema: users, workspaces, members, projects, tasks, comments."""

from __future__ import annotations

import sqlalchemy as sa
from alembic import op

revision = "0001_initial_schema"
down_revision = None
branch_labels = None
depends_on = None

WORKSPACE_ROLE = sa.Enum(
    "OWNER", "ADMIN", "MEMBER", name="workspace_role", native_enum=False, length=20
)
TASK_STATUS = sa.Enum(
    "TODO", "IN_PROGRESS", "DONE", name="task_status", native_enum=False, length=20
)
TASK_PRIORITY = sa.Enum(
    "LOW", "MEDIUM", "HIGH", name="task_priority", native_enum=False, length=20
)


def _id_column(name: str = "id", **kwargs) -> sa.Column:
    return sa.Column(name, sa.CHAR(length=36), **kwargs)


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
    ]


def upgrade() -> None:
    op.create_table(
        "users",
        _id_column(primary_key=True),
        sa.Column("email", sa.String(length=320), nullable=False, unique=True),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("password_hash", sa.String(length=255), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        *_timestamps(),
    )

    op.create_table(
        "workspaces",
        _id_column(primary_key=True),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        _id_column("owner_id", nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(["owner_id"], ["users.id"], ondelete="RESTRICT"),
    )

    op.create_table(
        "workspace_members",
        _id_column(primary_key=True),
        _id_column("workspace_id", nullable=False),
        _id_column("user_id", nullable=False),
        sa.Column("role", WORKSPACE_ROLE, nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(["workspace_id"], ["workspaces.id"], ondelete="RESTRICT"),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.UniqueConstraint(
            "workspace_id", "user_id", name="workspace_members_workspace_user_key"
        ),
    )
    op.create_index(
        "workspace_members_workspace_id_idx", "workspace_members", ["workspace_id"]
    )
    op.create_index("workspace_members_user_id_idx", "workspace_members", ["user_id"])

    op.create_table(
        "projects",
        _id_column(primary_key=True),
        _id_column("workspace_id", nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        _id_column("created_by", nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(["workspace_id"], ["workspaces.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["created_by"], ["users.id"], ondelete="RESTRICT"),
    )
    op.create_index("projects_workspace_id_idx", "projects", ["workspace_id"])

    op.create_table(
        "tasks",
        _id_column(primary_key=True),
        _id_column("project_id", nullable=False),
        sa.Column("title", sa.String(length=255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("status", TASK_STATUS, nullable=False),
        sa.Column("priority", TASK_PRIORITY, nullable=False),
        sa.Column("due_date", sa.DateTime(timezone=True), nullable=True),
        _id_column("assignee_id", nullable=True),
        _id_column("created_by", nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(["project_id"], ["projects.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["assignee_id"], ["users.id"], ondelete="SET NULL"),
        sa.ForeignKeyConstraint(["created_by"], ["users.id"], ondelete="RESTRICT"),
    )
    op.create_index("tasks_project_id_idx", "tasks", ["project_id"])

    op.create_table(
        "comments",
        _id_column(primary_key=True),
        _id_column("task_id", nullable=False),
        _id_column("author_id", nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(["task_id"], ["tasks.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["author_id"], ["users.id"], ondelete="RESTRICT"),
    )
    op.create_index("comments_task_id_idx", "comments", ["task_id"])


def downgrade() -> None:
    op.drop_table("comments")
    op.drop_table("tasks")
    op.drop_table("projects")
    op.drop_table("workspace_members")
    op.drop_table("workspaces")
    op.drop_table("users")
