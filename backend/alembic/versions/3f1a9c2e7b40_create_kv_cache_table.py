"""create kv_cache table

Revision ID: 3f1a9c2e7b40
Revises:
Create Date: 2026-10-16 09:00:00.000000
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = '3f1a9c2e7b40'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # The app creates the table itself on first use of the database backend
    if 'kv_cache' in sa.inspect(op.get_bind()).get_table_names():
        return
    op.create_table(
        'kv_cache',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('cache_key', sa.String(255), nullable=False),
        sa.Column('value_text', sa.Text(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_kv_cache_cache_key', 'kv_cache', ['cache_key'], unique=True)


def downgrade() -> None:
    op.drop_index('ix_kv_cache_cache_key', table_name='kv_cache')
    op.drop_table('kv_cache')
