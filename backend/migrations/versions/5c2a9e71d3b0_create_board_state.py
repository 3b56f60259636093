"""create board_state snapshot table

Revision ID: 5c2a9e71d3b0
Revises:
Create Date: 2026-10-19 00:00:00
"""

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '5c2a9e71d3b0'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    bind = op.get_bind()
    insp = sa.inspect(bind)
    # Servers started with AUTO_CREATE_TABLES may have created it already
    if 'board_state' in insp.get_table_names():
        return
    op.create_table(
        'board_state',
        sa.Column('member', sa.String(length=128), primary_key=True),
        sa.Column('board', sa.Text(), nullable=False),
        sa.Column('selected_indices', sa.Text(), nullable=False, server_default='[]'),
        sa.Column('prediction', sa.Text(), nullable=True),
        sa.Column('updated_at', sa.Float(), nullable=True),
    )


def downgrade():
    op.drop_table('board_state')
