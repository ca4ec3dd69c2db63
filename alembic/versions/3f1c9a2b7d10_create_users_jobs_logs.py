"""Create users, jobs and logs tables

Revision ID: 3f1c9a2b7d10
Revises:
Create Date: 2026-10-19 09:12:04.518233

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# Revision identifiers used by Alembic
revision: str = '3f1c9a2b7d10'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    # Accounts
    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('email', sa.String(), nullable=False),
        sa.Column('password_hash', sa.String(), nullable=False),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('role', sa.String(), nullable=False),
        sa.Column('party_name', sa.String(), nullable=True),
        sa.Column('transporter_name', sa.String(), nullable=True),
        sa.Column('phone', sa.String(), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=True),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=True),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_users_id'), 'users', ['id'], unique=False)
    op.create_index(op.f('ix_users_email'), 'users', ['email'], unique=True)
    op.create_index(op.f('ix_users_role'), 'users', ['role'], unique=False)

    # Shipments
    op.create_table(
        'jobs',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('date', sa.DateTime(), nullable=False),
        sa.Column('job_number', sa.String(), nullable=False),
        sa.Column('invoice_number', sa.String(), nullable=False),
        sa.Column('party_name', sa.String(), nullable=False),
        sa.Column('container_type', sa.String(length=8), nullable=False),
        sa.Column('shipping_line', sa.String(), nullable=False),
        sa.Column('destination', sa.String(), nullable=False),
        sa.Column('vessel', sa.String(), nullable=True),
        sa.Column('truck', sa.String(), nullable=False),
        sa.Column('container_numbers', sa.JSON(), nullable=False),
        sa.Column('port', sa.String(), nullable=False),
        sa.Column('cut_off_date', sa.DateTime(), nullable=False),
        sa.Column('etd', sa.DateTime(), nullable=False),
        sa.Column('vehicle_atd', sa.DateTime(), nullable=True),
        sa.Column('vehicle_arrv', sa.DateTime(), nullable=True),
        sa.Column('transporter', sa.String(), nullable=False),
        sa.Column('remarks', sa.Text(), nullable=True),
        sa.Column('cell_number', sa.String(), nullable=True),
        sa.Column('status', sa.String(length=20), nullable=False),
        sa.Column('assigned_vendor', sa.String(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=True),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=True),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_jobs_id'), 'jobs', ['id'], unique=False)
    op.create_index(op.f('ix_jobs_date'), 'jobs', ['date'], unique=False)
    op.create_index(op.f('ix_jobs_invoice_number'), 'jobs', ['invoice_number'], unique=False)
    op.create_index(op.f('ix_jobs_party_name'), 'jobs', ['party_name'], unique=False)
    op.create_index(op.f('ix_jobs_destination'), 'jobs', ['destination'], unique=False)
    op.create_index(op.f('ix_jobs_transporter'), 'jobs', ['transporter'], unique=False)
    op.create_index(op.f('ix_jobs_status'), 'jobs', ['status'], unique=False)
    op.create_index(op.f('ix_jobs_assigned_vendor'), 'jobs', ['assigned_vendor'], unique=False)
    op.create_index('ix_jobs_party_status', 'jobs', ['party_name', 'status'], unique=False)
    op.create_index('ix_jobs_transporter_status', 'jobs', ['transporter', 'status'], unique=False)
    op.create_index('ix_jobs_date_status', 'jobs', ['date', 'status'], unique=False)

    # Audit trail
    op.create_table(
        'logs',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('ts', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=True),
        sa.Column('user_id', sa.Integer(), nullable=True),
        sa.Column('action', sa.String(length=50), nullable=True),
        sa.Column('resource', sa.String(length=50), nullable=True),
        sa.Column('status', sa.String(length=20), nullable=True),
        sa.Column('ip', sa.String(length=64), nullable=True),
        sa.Column('meta', sa.JSON(), nullable=True),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_logs_id'), 'logs', ['id'], unique=False)
    op.create_index(op.f('ix_logs_ts'), 'logs', ['ts'], unique=False)
    op.create_index(op.f('ix_logs_action'), 'logs', ['action'], unique=False)
    op.create_index(op.f('ix_logs_resource'), 'logs', ['resource'], unique=False)
    op.create_index(op.f('ix_logs_status'), 'logs', ['status'], unique=False)


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index(op.f('ix_logs_status'), table_name='logs')
    op.drop_index(op.f('ix_logs_resource'), table_name='logs')
    op.drop_index(op.f('ix_logs_action'), table_name='logs')
    op.drop_index(op.f('ix_logs_ts'), table_name='logs')
    op.drop_index(op.f('ix_logs_id'), table_name='logs')
    op.drop_table('logs')

    op.drop_index('ix_jobs_date_status', table_name='jobs')
    op.drop_index('ix_jobs_transporter_status', table_name='jobs')
    op.drop_index('ix_jobs_party_status', table_name='jobs')
    op.drop_index(op.f('ix_jobs_assigned_vendor'), table_name='jobs')
    op.drop_index(op.f('ix_jobs_status'), table_name='jobs')
    op.drop_index(op.f('ix_jobs_transporter'), table_name='jobs')
    op.drop_index(op.f('ix_jobs_destination'), table_name='jobs')
    op.drop_index(op.f('ix_jobs_party_name'), table_name='jobs')
    op.drop_index(op.f('ix_jobs_invoice_number'), table_name='jobs')
    op.drop_index(op.f('ix_jobs_date'), table_name='jobs')
    op.drop_index(op.f('ix_jobs_id'), table_name='jobs')
    op.drop_table('jobs')

    op.drop_index(op.f('ix_users_role'), table_name='users')
    op.drop_index(op.f('ix_users_email'), table_name='users')
    op.drop_index(op.f('ix_users_id'), table_name='users')
    op.drop_table('users')
