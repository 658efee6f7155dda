"""create groups and songs tables

Revision ID: 0001
Revises:
Create Date: 2024-10-19 12:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '0001'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        'groups',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('group', sa.String(length=255), nullable=False),
    )
    op.create_index('idx_groups_group', 'groups', ['group'])

    op.create_table(
        'songs',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('group_id', sa.Integer(), sa.ForeignKey('groups.id'), nullable=False),
        sa.Column('song', sa.String(length=255), nullable=False),
        sa.Column('text', sa.Text(), nullable=False, server_default=''),
        sa.Column('release_date', sa.String(length=32), nullable=False, server_default=''),
        sa.Column('link', sa.Text(), nullable=False, server_default=''),
    )
    op.create_index('idx_songs_group_id', 'songs', ['group_id'])


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index('idx_songs_group_id', table_name='songs')
    op.drop_table('songs')
    op.drop_index('idx_groups_group', table_name='groups')
    op.drop_table('groups')
