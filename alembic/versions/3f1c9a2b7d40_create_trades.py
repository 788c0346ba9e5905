"""Create trades table

Revision ID: 3f1c9a2b7d40
Revises:
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3f1c9a2b7d40'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        'trades',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('user_id', sa.String(100), nullable=False),
        sa.Column('mode', sa.String(10), nullable=False),
        sa.Column('pair', sa.String(30), nullable=False),
        sa.Column('direction', sa.String(10), nullable=True),
        sa.Column('leverage', sa.Float(), nullable=True),
        sa.Column('margin', sa.Float(), nullable=False),
        sa.Column('entry_price', sa.Float(), nullable=False),
        sa.Column('stop_loss', sa.Float(), nullable=True),
        sa.Column('take_profit', sa.Float(), nullable=True),
        sa.Column('close_price', sa.Float(), nullable=True),
        sa.Column('pnl', sa.Float(), nullable=True),
        sa.Column('pnl_percent', sa.Float(), nullable=True),
        sa.Column('status', sa.String(20), nullable=False, server_default='OPEN'),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('closed_at', sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index('ix_trades_user_id', 'trades', ['user_id'])
    op.create_index('ix_trades_pair', 'trades', ['pair'])
    op.create_index('ix_trades_status', 'trades', ['status'])
    op.create_index('ix_trades_created_at', 'trades', ['created_at'])


def downgrade() -> None:
    op.drop_index('ix_trades_created_at', table_name='trades')
    op.drop_index('ix_trades_status', table_name='trades')
    op.drop_index('ix_trades_pair', table_name='trades')
    op.drop_index('ix_trades_user_id', table_name='trades')
    op.drop_table('trades')
