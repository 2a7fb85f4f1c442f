"""Initial migration: create user, generated_deck and deck tables

Revision ID: 001_weekly_words
Revises: 
Create Date: 2026-10-18 00:00:00.000000

"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = '001_weekly_words'
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    # Create user table
    op.create_table(
        'user',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('username', sa.String(), nullable=False),
        sa.Column('password', sa.String(), nullable=False),
        sa.Column('name', sa.String(), nullable=False, server_default=''),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_user_username'), 'user', ['username'], unique=True)

    # Create generated_deck table (cards embedded as JSON)
    op.create_table(
        'generated_deck',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('week', sa.Integer(), nullable=False),
        sa.Column('created', sa.DateTime(), nullable=False),
        sa.Column('cards', sa.JSON(), nullable=False),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_generated_deck_week'), 'generated_deck', ['week'], unique=True)

    # Create deck table (per-user instance of a generated deck)
    op.create_table(
        'deck',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('generated_deck_id', sa.Integer(), nullable=False),
        sa.Column('deck_name', sa.String(), nullable=False),
        sa.Column('deck_review_total', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('deck_highest_accuracy', sa.Float(), nullable=False, server_default='0'),
        sa.Column('deck_average_accuracy', sa.Float(), nullable=False, server_default='0'),
        sa.Column('deck_fastest_time', sa.Float(), nullable=False, server_default='0'),
        sa.Column('deck_average_time', sa.Float(), nullable=False, server_default='0'),
        sa.ForeignKeyConstraint(['user_id'], ['user.id'], ),
        sa.ForeignKeyConstraint(['generated_deck_id'], ['generated_deck.id'], ),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('user_id', 'generated_deck_id', name='uq_deck_user_generated_deck')
    )
    op.create_index(op.f('ix_deck_user_id'), 'deck', ['user_id'], unique=False)


def downgrade() -> None:
    op.drop_index(op.f('ix_deck_user_id'), table_name='deck')
    op.drop_table('deck')
    op.drop_index(op.f('ix_generated_deck_week'), table_name='generated_deck')
    op.drop_table('generated_deck')
    op.drop_index(op.f('ix_user_username'), table_name='user')
    op.drop_table('user')
