"""create users, health_metrics and ai_insights tables

Revision ID: 3f1c2a9d7e10
Revises:
Create Date: 2025-11-02 10:14:52.118302
"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = '3f1c2a9d7e10'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('phone', sa.String(length=40), nullable=True),
        sa.Column('password_hash', sa.String(length=255), nullable=False),
        sa.Column('last_login', sa.DateTime(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_users_email', 'users', ['email'], unique=True)

    op.create_table(
        'health_metrics',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('date', sa.Date(), nullable=False),

        sa.Column('heart_rate', sa.Integer(), nullable=True),    # bpm
        sa.Column('steps', sa.Integer(), nullable=True),
        sa.Column('sleep_hours', sa.Float(), nullable=True),
        sa.Column('sugar_level', sa.Float(), nullable=True),     # mg/dL
        sa.Column('bp_systolic', sa.Float(), nullable=True),
        sa.Column('bp_diastolic', sa.Float(), nullable=True),
        sa.Column('weight', sa.Float(), nullable=True),          # kg
        sa.Column('notes', sa.String(length=500), nullable=True),

        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('user_id', 'date', name='uq_health_metrics_user_date'),
    )
    op.create_index('ix_health_metrics_user_id', 'health_metrics', ['user_id'])
    op.create_index('ix_health_metrics_date', 'health_metrics', ['date'])

    op.create_table(
        'ai_insights',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('query', sa.Text(), nullable=False),
        sa.Column('ai_response', sa.Text(), nullable=False),
        sa.Column('risk_score', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('category', sa.String(length=20), nullable=False, server_default='general'),
        sa.Column('metadata', sa.JSON(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.PrimaryKeyConstraint('id'),
        sa.CheckConstraint('risk_score >= 0 AND risk_score <= 100', name='ck_ai_insights_risk_score'),
    )
    op.create_index('ix_ai_insights_user_id', 'ai_insights', ['user_id'])
    op.create_index('ix_ai_insights_created_at', 'ai_insights', ['created_at'])
    op.create_index('ix_ai_insights_user_created', 'ai_insights', ['user_id', 'created_at'])


def downgrade():
    op.drop_table('ai_insights')
    op.drop_table('health_metrics')
    op.drop_index('ix_users_email', table_name='users')
    op.drop_table('users')
