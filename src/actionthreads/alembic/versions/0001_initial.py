"""initial: users, threads, transcripts and action points

Revision ID: 0001_initial
Revises:
Create Date: 2026-10-17
"""
from __future__ import annotations
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = '0001_initial'
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        'users',
        sa.Column('id', sa.Uuid(as_uuid=True), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.text('CURRENT_TIMESTAMP')),
        sa.PrimaryKeyConstraint('id', name='pk_users'),
    )
    op.create_index('ix_users_email', 'users', ['email'], unique=True)

    op.create_table(
        'thread',
        sa.Column('id', sa.Uuid(as_uuid=True), nullable=False),
        sa.Column('user_id', sa.Uuid(as_uuid=True), nullable=False),
        sa.Column('name', sa.String(length=20), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.text('CURRENT_TIMESTAMP')),
        sa.PrimaryKeyConstraint('id', name='pk_thread'),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], name='fk_thread_user_id_users', ondelete='CASCADE'),
        # names are unique per owner
        sa.UniqueConstraint('user_id', 'name', name='uq_thread_user_id_name'),
    )
    op.create_index('ix_thread_user_id', 'thread', ['user_id'])
    op.create_index('ix_thread_created_at', 'thread', ['created_at'])

    op.create_table(
        'transcript',
        sa.Column('id', sa.Uuid(as_uuid=True), nullable=False),
        sa.Column('thread_id', sa.Uuid(as_uuid=True), nullable=False),
        sa.Column('content', sa.Text(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.text('CURRENT_TIMESTAMP')),
        sa.PrimaryKeyConstraint('id', name='pk_transcript'),
        sa.ForeignKeyConstraint(['thread_id'], ['thread.id'], name='fk_transcript_thread_id_thread', ondelete='CASCADE'),
    )
    op.create_index('ix_transcript_thread_id', 'transcript', ['thread_id'])

    op.create_table(
        'action_point',
        sa.Column('id', sa.Uuid(as_uuid=True), nullable=False),
        sa.Column('thread_id', sa.Uuid(as_uuid=True), nullable=False),
        sa.Column('title', sa.String(length=255), nullable=False),
        sa.Column('is_completed', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.text('CURRENT_TIMESTAMP')),
        sa.PrimaryKeyConstraint('id', name='pk_action_point'),
        sa.ForeignKeyConstraint(['thread_id'], ['thread.id'], name='fk_action_point_thread_id_thread', ondelete='CASCADE'),
    )
    op.create_index('ix_action_point_thread_id', 'action_point', ['thread_id'])


def downgrade() -> None:
    op.drop_index('ix_action_point_thread_id', table_name='action_point')
    op.drop_table('action_point')
    op.drop_index('ix_transcript_thread_id', table_name='transcript')
    op.drop_table('transcript')
    op.drop_index('ix_thread_created_at', table_name='thread')
    op.drop_index('ix_thread_user_id', table_name='thread')
    op.drop_table('thread')
    op.drop_index('ix_users_email', table_name='users')
    op.drop_table('users')
