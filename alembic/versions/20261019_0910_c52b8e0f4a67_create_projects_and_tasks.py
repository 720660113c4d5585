"""create_projects_and_tasks

Revision ID: c52b8e0f4a67
Revises: 8a4e2d6c1b93
Create Date: 2026-10-19 09:10:00

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import UUID

revision: str = 'c52b8e0f4a67'
down_revision: Union[str, None] = '8a4e2d6c1b93'
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        'projects',
        sa.Column('id', UUID(as_uuid=True), primary_key=True, server_default=sa.text('gen_random_uuid()')),
        sa.Column('workspace_id', UUID(as_uuid=True), sa.ForeignKey('workspaces.id', ondelete='CASCADE'), nullable=False),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('image_url', sa.String(length=2048), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    )
    op.create_index('ix_projects_workspace_id', 'projects', ['workspace_id'])

    op.execute(
        "CREATE TYPE task_status AS ENUM "
        "('BACKLOG', 'TODO', 'IN_PROGRESS', 'IN_REVIEW', 'DONE')"
    )
    # assignee_id holds a member id and carries no foreign key
    op.execute("""
        CREATE TABLE tasks (
            id UUID PRIMARY KEY DEFAULT gen_random_uuid(),
            workspace_id UUID NOT NULL REFERENCES workspaces(id) ON DELETE CASCADE,
            project_id UUID NOT NULL REFERENCES projects(id) ON DELETE CASCADE,
            assignee_id UUID NOT NULL,
            name VARCHAR(256) NOT NULL,
            description TEXT,
            due_date DATE NOT NULL,
            status task_status NOT NULL,
            position INTEGER NOT NULL,
            created_at TIMESTAMPTZ NOT NULL DEFAULT now(),
            updated_at TIMESTAMPTZ NOT NULL DEFAULT now()
        )
    """)
    op.execute("CREATE INDEX ix_tasks_workspace_id ON tasks(workspace_id)")
    op.execute("CREATE INDEX ix_tasks_project_id ON tasks(project_id)")
    op.execute("CREATE INDEX ix_tasks_assignee_id ON tasks(assignee_id)")
    op.execute(
        "CREATE INDEX idx_tasks_workspace_status_position "
        "ON tasks(workspace_id, status, position)"
    )
    op.execute("CREATE INDEX idx_tasks_workspace_created_at ON tasks(workspace_id, created_at DESC)")


def downgrade() -> None:
    op.execute("DROP TABLE IF EXISTS tasks")
    op.execute("DROP TYPE IF EXISTS task_status")
    op.drop_index('ix_projects_workspace_id', table_name='projects')
    op.drop_table('projects')
