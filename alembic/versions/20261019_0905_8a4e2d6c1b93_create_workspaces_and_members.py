"""create_workspaces_and_members

Revision ID: 8a4e2d6c1b93
Revises: 3f1c9a2b7d10
Create Date: 2026-10-19 09:05:00

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import UUID

revision: str = '8a4e2d6c1b93'
down_revision: Union[str, None] = '3f1c9a2b7d10'
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create workspaces and members tables with the member_role enum."""
    op.create_table(
        'workspaces',
        sa.Column('id', UUID(as_uuid=True), primary_key=True, server_default=sa.text('gen_random_uuid()')),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('user_id', UUID(as_uuid=True), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('image_url', sa.String(length=2048), nullable=True),
        sa.Column('invite_code', sa.String(length=32), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    )
    op.create_index('ix_workspaces_user_id', 'workspaces', ['user_id'])

    op.create_table(
        'members',
        sa.Column('id', UUID(as_uuid=True), primary_key=True, server_default=sa.text('gen_random_uuid()')),
        sa.Column('workspace_id', UUID(as_uuid=True), sa.ForeignKey('workspaces.id', ondelete='CASCADE'), nullable=False),
        sa.Column('user_id', UUID(as_uuid=True), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('role', sa.Enum('ADMIN', 'MEMBER', name='member_role'), nullable=False),
        sa.Column('joined_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.UniqueConstraint('workspace_id', 'user_id', name='uq_members_workspace_user'),
    )
    op.create_index('ix_members_workspace_id', 'members', ['workspace_id'])
    op.create_index('ix_members_user_id', 'members', ['user_id'])


def downgrade() -> None:
    """Drop members and workspaces tables."""
    op.drop_index('ix_members_user_id', table_name='members')
    op.drop_index('ix_members_workspace_id', table_name='members')
    op.drop_table('members')
    sa.Enum(name='member_role').drop(op.get_bind(), checkfirst=True)
    op.drop_index('ix_workspaces_user_id', table_name='workspaces')
    op.drop_table('workspaces')
