"""create team, question, game_state and bid tables

Revision ID: 5c2d9e7a1b40
Revises:
Create Date: 2026-02-03 10:00:00.000000

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '5c2d9e7a1b40'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    bind = op.get_bind()
    insp = sa.inspect(bind)
    existing_tables = set(insp.get_table_names())

    if 'team' not in existing_tables:
        op.create_table(
            'team',
            sa.Column('id', sa.Integer(), nullable=False),
            sa.Column('name', sa.String(length=64), nullable=False),
            sa.Column('balance', sa.Integer(), nullable=False, server_default='10000'),
            sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
            sa.Column('has_spun', sa.Boolean(), nullable=False, server_default=sa.false()),
            sa.PrimaryKeyConstraint('id'),
        )
        op.create_index('ix_team_name', 'team', ['name'], unique=True)

    if 'question' not in existing_tables:
        op.create_table(
            'question',
            sa.Column('id', sa.Integer(), nullable=False),
            sa.Column('question_text', sa.Text(), nullable=False),
            sa.Column('option_a', sa.String(length=256), nullable=False),
            sa.Column('option_b', sa.String(length=256), nullable=False),
            sa.Column('option_c', sa.String(length=256), nullable=False),
            sa.Column('option_d', sa.String(length=256), nullable=False),
            sa.Column('correct_option', sa.String(length=1), nullable=False),
            sa.Column('explanation', sa.Text(), nullable=True),
            sa.PrimaryKeyConstraint('id'),
        )

    if 'game_state' not in existing_tables:
        op.create_table(
            'game_state',
            sa.Column('id', sa.Integer(), nullable=False),
            sa.Column('current_round', sa.Integer(), nullable=False, server_default='1'),
            sa.Column('current_question_id', sa.Integer(), nullable=True),
            sa.Column('phase', sa.String(length=32), nullable=False, server_default='lobby'),
            sa.Column('is_bidding_open', sa.Boolean(), nullable=False, server_default=sa.false()),
            sa.Column('bidding_ends_at', sa.Float(), nullable=True),
            sa.Column('active_team_id', sa.Integer(), nullable=True),
            sa.Column('winning_bid_amount', sa.Integer(), nullable=True),
            sa.ForeignKeyConstraint(['current_question_id'], ['question.id']),
            sa.PrimaryKeyConstraint('id'),
        )

    if 'bid' not in existing_tables:
        op.create_table(
            'bid',
            sa.Column('id', sa.Integer(), nullable=False),
            sa.Column('team_id', sa.Integer(), nullable=False),
            sa.Column('round_number', sa.Integer(), nullable=False),
            sa.Column('amount', sa.Integer(), nullable=False),
            sa.Column('created_at', sa.Float(), nullable=False),
            sa.ForeignKeyConstraint(['team_id'], ['team.id']),
            sa.PrimaryKeyConstraint('id'),
        )
        op.create_index('ix_bid_team_id', 'bid', ['team_id'], unique=False)
        op.create_index('ix_bid_round_number', 'bid', ['round_number'], unique=False)


def downgrade():
    op.drop_index('ix_bid_round_number', table_name='bid')
    op.drop_index('ix_bid_team_id', table_name='bid')
    op.drop_table('bid')
    op.drop_table('game_state')
    op.drop_table('question')
    op.drop_index('ix_team_name', table_name='team')
    op.drop_table('team')
