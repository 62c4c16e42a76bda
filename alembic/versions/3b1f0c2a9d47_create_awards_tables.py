"""create awards tables

Revision ID: 3b1f0c2a9d47
Revises: 
Create Date: 2026-10-19 10:02:11.418233

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3b1f0c2a9d47'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        'users',
        sa.Column('id', sa.String(), primary_key=True),
        sa.Column('username', sa.String(), nullable=False),
        sa.Column('email', sa.String(), nullable=False),
        sa.Column('hashed_password', sa.String(), nullable=False),
        sa.Column('role', sa.String(), nullable=False, server_default='user'),
        sa.Column('is_active', sa.Boolean(), server_default=sa.true()),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index('ix_users_username', 'users', ['username'], unique=True)
    op.create_index('ix_users_email', 'users', ['email'], unique=True)

    op.create_table(
        'categories',
        sa.Column('id', sa.String(), primary_key=True),
        sa.Column('name', sa.String(100), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('voting_enabled', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('allow_multiple_votes', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('max_nominees', sa.Integer(), nullable=False, server_default='10'),
        sa.Column('display_order', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('year', sa.Integer(), nullable=False),
        sa.Column('created_by', sa.String(), sa.ForeignKey('users.id', ondelete='SET NULL'), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.CheckConstraint('max_nominees >= 1', name='ck_categories_max_nominees_positive'),
    )

    op.create_table(
        'media_uploads',
        sa.Column('id', sa.String(), primary_key=True),
        sa.Column('user_id', sa.String(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('filename', sa.String(), nullable=False),
        sa.Column('original_filename', sa.String(), nullable=False),
        sa.Column('file_path', sa.String(), nullable=False),
        sa.Column('media_type', sa.Enum('photo', 'video', name='mediakind'), nullable=False),
        sa.Column('file_size', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('description', sa.Text(), nullable=False, server_default=''),
        sa.Column('status', sa.Enum('pending', 'approved', 'rejected', name='mediastatus'),
                  nullable=False, server_default='pending'),
        sa.Column('admin_notes', sa.Text(), nullable=True),
        sa.Column('reviewed_by', sa.String(), sa.ForeignKey('users.id', ondelete='SET NULL'), nullable=True),
        sa.Column('reviewed_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index('ix_media_uploads_user_id', 'media_uploads', ['user_id'])
    op.create_index('ix_media_uploads_status', 'media_uploads', ['status'])

    op.create_table(
        'nominees',
        sa.Column('id', sa.String(), primary_key=True),
        sa.Column('name', sa.String(100), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('category_id', sa.String(), sa.ForeignKey('categories.id'), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('display_order', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('image_url', sa.String(), nullable=True),
        sa.Column('video_url', sa.String(), nullable=True),
        sa.Column('media_type', sa.String(), nullable=False, server_default='none'),
        # 업로드 삭제 시 자동 해제하지 않으므로 FK 없음
        sa.Column('linked_media_id', sa.String(), nullable=True),
        sa.Column('original_filename', sa.String(), nullable=True),
        sa.Column('file_size', sa.Integer(), nullable=True),
        sa.Column('mime_type', sa.String(), nullable=True),
        sa.Column('uploaded_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('created_by', sa.String(), sa.ForeignKey('users.id', ondelete='SET NULL'), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index('ix_nominees_category_id', 'nominees', ['category_id'])
    op.create_index('ix_nominees_linked_media_id', 'nominees', ['linked_media_id'])

    op.create_table(
        'votes',
        sa.Column('id', sa.String(), primary_key=True),
        sa.Column('user_id', sa.String(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('category_id', sa.String(), sa.ForeignKey('categories.id'), nullable=False),
        sa.Column('nominee_id', sa.String(), sa.ForeignKey('nominees.id'), nullable=False),
        sa.Column('is_exclusive', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('ip_address', sa.String(), nullable=False, server_default='unknown'),
        sa.Column('user_agent', sa.String(), nullable=False, server_default='unknown'),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index('ix_votes_user_id', 'votes', ['user_id'])
    op.create_index('ix_votes_nominee_id', 'votes', ['nominee_id'])
    op.create_index('idx_votes_category_nominee', 'votes', ['category_id', 'nominee_id'])
    # 1인 1표 카테고리 중복 투표 방지 (복수 투표 표는 제외)
    op.create_index(
        'uq_votes_user_category_exclusive',
        'votes',
        ['user_id', 'category_id'],
        unique=True,
        postgresql_where=sa.text('is_exclusive'),
        sqlite_where=sa.text('is_exclusive = 1'),
    )


def downgrade() -> None:
    # 역순 삭제
    op.drop_index('uq_votes_user_category_exclusive', table_name='votes')
    op.drop_index('idx_votes_category_nominee', table_name='votes')
    op.drop_index('ix_votes_nominee_id', table_name='votes')
    op.drop_index('ix_votes_user_id', table_name='votes')
    op.drop_table('votes')
    op.drop_index('ix_nominees_linked_media_id', table_name='nominees')
    op.drop_index('ix_nominees_category_id', table_name='nominees')
    op.drop_table('nominees')
    op.drop_index('ix_media_uploads_status', table_name='media_uploads')
    op.drop_index('ix_media_uploads_user_id', table_name='media_uploads')
    op.drop_table('media_uploads')
    op.drop_table('categories')
    op.drop_index('ix_users_email', table_name='users')
    op.drop_index('ix_users_username', table_name='users')
    op.drop_table('users')
    sa.Enum(name='mediastatus').drop(op.get_bind(), checkfirst=True)
    sa.Enum(name='mediakind').drop(op.get_bind(), checkfirst=True)
