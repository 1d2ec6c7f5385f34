"""Initial schema

Revision ID: 001
Revises:
Create Date: 2026-10-17
"""
from alembic import op
import sqlalchemy as sa

# revision identifiers
revision = '001'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table('named_configuration',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=120), nullable=False),
        sa.Column('goal', sa.String(length=64), nullable=False),
        sa.Column('assets', sa.JSON(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_named_configuration_name', 'named_configuration', ['name'], unique=True)


def downgrade():
    op.drop_index('ix_named_configuration_name', table_name='named_configuration')
    op.drop_table('named_configuration')
