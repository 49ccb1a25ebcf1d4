"""initial_schema

Revision ID: a0b1c2d3e4f5
Revises:
Create Date: 2026-10-18 10:00:00.000000

사용자, 역할, 권한, 팀 테이블 생성.
자연 키(roles.code, permissions.code, app_users.username)는 retired = false
행 사이에서만 고유하도록 부분 유니크 인덱스로 보장.
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = 'a0b1c2d3e4f5'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

ACTIVE_ROWS = sa.text('retired = false')


def _lifecycle_columns() -> list[sa.Column]:
    return [
        sa.Column('retired', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
    ]


def upgrade() -> None:
    op.create_table(
        'permissions',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('code', sa.String(100), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        *_lifecycle_columns(),
    )
    op.create_table(
        'roles',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('code', sa.String(100), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        *_lifecycle_columns(),
    )
    op.create_table(
        'app_users',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('username', sa.String(100), nullable=False),
        sa.Column('password_hash', sa.String(255), nullable=False),
        *_lifecycle_columns(),
    )
    op.create_table(
        'teams',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('name', sa.String(255), nullable=False),
        *_lifecycle_columns(),
    )

    # 조인 테이블 (Join tables)
    op.create_table(
        'role_permissions',
        sa.Column('role_id', sa.Integer(), sa.ForeignKey('roles.id', ondelete='CASCADE'), primary_key=True),
        sa.Column('permission_id', sa.Integer(), sa.ForeignKey('permissions.id', ondelete='CASCADE'), primary_key=True),
    )
    op.create_table(
        'user_roles',
        sa.Column('app_user_id', sa.Integer(), sa.ForeignKey('app_users.id', ondelete='CASCADE'), primary_key=True),
        sa.Column('role_id', sa.Integer(), sa.ForeignKey('roles.id', ondelete='CASCADE'), primary_key=True),
    )
    op.create_table(
        'team_members',
        sa.Column('team_id', sa.Integer(), sa.ForeignKey('teams.id', ondelete='CASCADE'), primary_key=True),
        sa.Column('app_user_id', sa.Integer(), sa.ForeignKey('app_users.id', ondelete='CASCADE'), primary_key=True),
    )

    # 활성 행 사이의 자연 키 고유성 (Natural keys unique among active rows)
    op.create_index('uq_permissions_code_active', 'permissions', ['code'], unique=True, postgresql_where=ACTIVE_ROWS)
    op.create_index('uq_roles_code_active', 'roles', ['code'], unique=True, postgresql_where=ACTIVE_ROWS)
    op.create_index('uq_app_users_username_active', 'app_users', ['username'], unique=True, postgresql_where=ACTIVE_ROWS)


def downgrade() -> None:
    op.drop_index('uq_app_users_username_active', table_name='app_users')
    op.drop_index('uq_roles_code_active', table_name='roles')
    op.drop_index('uq_permissions_code_active', table_name='permissions')
    op.drop_table('team_members')
    op.drop_table('user_roles')
    op.drop_table('role_permissions')
    op.drop_table('teams')
    op.drop_table('app_users')
    op.drop_table('roles')
    op.drop_table('permissions')
