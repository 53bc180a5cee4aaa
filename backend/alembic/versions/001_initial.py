"""Initial migration - users, projects, paths, waypoints

Revision ID: 001_initial
Revises:
Create Date: 2026-10-18

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '001_initial'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # Create users table
    op.create_table(
        'users',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('emp_id', sa.String(50), nullable=False),
        sa.Column('name', sa.String(100), nullable=True),
        sa.Column('email', sa.String(255), nullable=True),
        sa.Column('mobile_no', sa.String(20), nullable=True),
        sa.Column('image', sa.String(500), nullable=True),
        sa.Column('role', sa.String(20), nullable=False, server_default='employee'),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
    )
    op.create_index('ix_users_emp_id', 'users', ['emp_id'], unique=True)

    # Create projects table
    op.create_table(
        'projects',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('project_id', sa.String(100), nullable=False),
        sa.Column('circle', sa.String(100), nullable=False),
        sa.Column('division', sa.String(100), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('created_by_id', sa.String(36), sa.ForeignKey('users.id'), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=True),
    )
    op.create_index('ix_projects_project_id', 'projects', ['project_id'], unique=True)

    # Employees assigned to projects
    op.create_table(
        'project_employees',
        sa.Column('project_id', sa.Integer(), sa.ForeignKey('projects.id', ondelete='CASCADE'), primary_key=True),
        sa.Column('user_id', sa.String(36), sa.ForeignKey('users.id', ondelete='CASCADE'), primary_key=True),
    )

    # Create paths table
    op.create_table(
        'paths',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('project_id', sa.Integer(), sa.ForeignKey('projects.id', ondelete='CASCADE'), nullable=False),
        sa.Column('position', sa.Integer(), nullable=False),
        sa.Column('owner_id', sa.String(36), sa.ForeignKey('users.id'), nullable=False),
        sa.UniqueConstraint('project_id', 'position'),
    )
    op.create_index('ix_paths_project_id', 'paths', ['project_id'])
    op.create_index('ix_paths_owner_id', 'paths', ['owner_id'])

    # Create waypoints table
    op.create_table(
        'waypoints',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('path_id', sa.Integer(), sa.ForeignKey('paths.id', ondelete='CASCADE'), nullable=False),
        sa.Column('position', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('distance_from_previous', sa.Float(), nullable=True),
        sa.Column('latitude', sa.Float(), nullable=False),
        sa.Column('longitude', sa.Float(), nullable=False),
        sa.Column('route_type', sa.String(50), nullable=False),
        sa.Column('route_starting_point', sa.String(255), nullable=False),
        sa.Column('route_ending_point', sa.String(255), nullable=False),
        sa.Column('is_start', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('is_end', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('image', sa.String(500), nullable=True),
        sa.Column('pole_details', sa.JSON(), nullable=False),
        sa.Column('gps_details', sa.JSON(), nullable=False),
        sa.Column('timestamp', sa.DateTime(), nullable=False),
        sa.Column('created_by_id', sa.String(36), sa.ForeignKey('users.id'), nullable=False),
        sa.Column('path_owner_id', sa.String(36), sa.ForeignKey('users.id'), nullable=True),
        sa.UniqueConstraint('path_id', 'position'),
    )
    op.create_index('ix_waypoints_path_id', 'waypoints', ['path_id'])
    op.create_index('ix_waypoints_created_by_id', 'waypoints', ['created_by_id'])


def downgrade() -> None:
    op.drop_index('ix_waypoints_created_by_id', table_name='waypoints')
    op.drop_index('ix_waypoints_path_id', table_name='waypoints')
    op.drop_table('waypoints')
    op.drop_index('ix_paths_owner_id', table_name='paths')
    op.drop_index('ix_paths_project_id', table_name='paths')
    op.drop_table('paths')
    op.drop_table('project_employees')
    op.drop_index('ix_projects_project_id', table_name='projects')
    op.drop_table('projects')
    op.drop_index('ix_users_emp_id', table_name='users')
    op.drop_table('users')
