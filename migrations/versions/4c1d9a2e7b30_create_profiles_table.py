"""create_profiles_table

Revision ID: 4c1d9a2e7b30
Revises:
Create Date: 2026-10-19 09:12:44.301822

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '4c1d9a2e7b30'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create the profiles table with its unique email constraint."""
    op.create_table('profiles',
        sa.Column('id', sa.UUID(), nullable=False),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('email', name='uq_profiles_email'),
    )
    op.create_index('ix_profiles_created_at', 'profiles', ['created_at'], unique=False)


def downgrade() -> None:
    """Drop the profiles table."""
    op.drop_index('ix_profiles_created_at', table_name='profiles')
    op.drop_table('profiles')
