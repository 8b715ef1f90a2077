"""create_todos_table

Revision ID: 4b7e2c91d0a3
Revises:
Create Date: 2026-10-19 09:12:44.381207

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = '4b7e2c91d0a3'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create the todos table."""
    op.create_table('todos',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('task', sa.Text(), nullable=False),
        sa.Column('completed', sa.Boolean(), server_default=sa.false(), nullable=False),
        sa.Column('priority', sa.Integer(), server_default='1', nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('due_date', sa.Date(), nullable=True),
        sa.Column(
            'tags',
            sa.JSON().with_variant(postgresql.JSONB(), 'postgresql'),
            server_default='[]',
            nullable=False,
        ),
        sa.Column('assigned_to', sa.Text(), nullable=True),
        sa.Column('category', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_todos_created_at', 'todos', ['created_at'], unique=False)


def downgrade() -> None:
    """Drop the todos table."""
    op.drop_index('ix_todos_created_at', table_name='todos')
    op.drop_table('todos')
