"""initial

Revision ID: 001_initial
Revises:
Create Date: 2026-10-19
"""

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers
revision = '001_initial'
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    # Users table
    op.create_table(
        'users',
        sa.Column('id', postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column('email', sa.String(255), nullable=False),
        sa.Column('hashed_password', sa.String(255), nullable=False),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default='true'),
        sa.Column('created_at', sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(), nullable=False, server_default=sa.func.now()),
    )
    op.create_index('ix_users_email', 'users', ['email'], unique=True)

    # Sandbox environments table
    op.create_table(
        'sandbox_environments',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('user_id', postgresql.UUID(as_uuid=True), nullable=True),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default='true'),
        sa.Column('created_at', sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(), nullable=False, server_default=sa.func.now()),
    )
    op.create_index('ix_sandbox_environments_user_id', 'sandbox_environments', ['user_id'])
    op.create_foreign_key('fk_sandbox_environments_user_id', 'sandbox_environments', 'users', ['user_id'], ['id'], ondelete='SET NULL')

    # Sandbox API endpoints table
    op.create_table(
        'sandbox_api_endpoints',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('environment_id', sa.Integer(), nullable=False),
        sa.Column('api_type', sa.String(50), nullable=False),
        sa.Column('path', sa.String(1000), nullable=False),
        sa.Column('method', sa.String(10), nullable=False, server_default='GET'),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(), nullable=False, server_default=sa.func.now()),
    )
    op.create_index('ix_sandbox_api_endpoints_environment_id', 'sandbox_api_endpoints', ['environment_id'])
    op.create_index(
        'ix_sandbox_api_endpoints_lookup',
        'sandbox_api_endpoints',
        ['environment_id', 'api_type', 'method', 'path'],
    )
    op.create_foreign_key('fk_sandbox_api_endpoints_environment_id', 'sandbox_api_endpoints', 'sandbox_environments', ['environment_id'], ['id'], ondelete='CASCADE')

    # Sandbox test scenarios table
    op.create_table(
        'sandbox_test_scenarios',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('endpoint_id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('type', sa.String(20), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('request_conditions', postgresql.JSONB(), nullable=True),
        sa.Column('response_data', postgresql.JSONB(), nullable=False),
        sa.Column('status_code', sa.Integer(), nullable=False, server_default='200'),
        sa.Column('delay_ms', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('is_default', sa.Boolean(), nullable=False, server_default='false'),
        sa.Column('created_at', sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(), nullable=False, server_default=sa.func.now()),
    )
    op.create_index('ix_sandbox_test_scenarios_endpoint_id', 'sandbox_test_scenarios', ['endpoint_id'])
    op.create_foreign_key('fk_sandbox_test_scenarios_endpoint_id', 'sandbox_test_scenarios', 'sandbox_api_endpoints', ['endpoint_id'], ['id'], ondelete='CASCADE')

    # Sandbox logs table
    op.create_table(
        'sandbox_logs',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('environment_id', sa.Integer(), nullable=False),
        sa.Column('endpoint_id', sa.Integer(), nullable=True),
        sa.Column('scenario_id', sa.Integer(), nullable=True),
        sa.Column('request_method', sa.String(10), nullable=False),
        sa.Column('request_path', sa.String(2000), nullable=False),
        sa.Column('request_headers', postgresql.JSONB(), nullable=True),
        sa.Column('request_body', postgresql.JSONB(), nullable=True),
        sa.Column('response_status', sa.Integer(), nullable=False),
        sa.Column('response_body', postgresql.JSONB(), nullable=True),
        sa.Column('duration', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('timestamp', sa.DateTime(), nullable=False, server_default=sa.func.now()),
    )
    op.create_index('ix_sandbox_logs_environment_id', 'sandbox_logs', ['environment_id'])
    op.create_index('ix_sandbox_logs_timestamp', 'sandbox_logs', ['timestamp'])
    op.create_foreign_key('fk_sandbox_logs_environment_id', 'sandbox_logs', 'sandbox_environments', ['environment_id'], ['id'], ondelete='CASCADE')
    op.create_foreign_key('fk_sandbox_logs_endpoint_id', 'sandbox_logs', 'sandbox_api_endpoints', ['endpoint_id'], ['id'], ondelete='SET NULL')
    op.create_foreign_key('fk_sandbox_logs_scenario_id', 'sandbox_logs', 'sandbox_test_scenarios', ['scenario_id'], ['id'], ondelete='SET NULL')


def downgrade() -> None:
    # Drop tables in reverse order of creation (respecting foreign key dependencies)
    op.drop_table('sandbox_logs')
    op.drop_table('sandbox_test_scenarios')
    op.drop_table('sandbox_api_endpoints')
    op.drop_table('sandbox_environments')
    op.drop_table('users')
