"""Initial schema: decks, cards, review sessions and card reviews

Revision ID: 001_initial_schema
Revises:
Create Date: 2025-11-20 00:00:00.000000

"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = '001_initial_schema'
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    """
    Create decks, cards, review_sessions and card_reviews tables.
    """
    op.create_table(
        'decks',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('user_id', sa.String(), nullable=False),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('description', sa.String(), nullable=False, server_default=''),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint('id', name='decks_pkey'),
        sa.CheckConstraint("length(trim(name)) > 0", name='decks_name_not_blank')
    )
    op.create_index(op.f('ix_decks_user_id'), 'decks', ['user_id'], unique=False)

    op.create_table(
        'cards',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('deck_id', sa.Uuid(), nullable=False),
        sa.Column('user_id', sa.String(), nullable=False),
        sa.Column('question', sa.String(), nullable=False),
        sa.Column('answer', sa.String(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(['deck_id'], ['decks.id'], name='cards_deck_id_fkey'),
        sa.PrimaryKeyConstraint('id', name='cards_pkey')
    )
    op.create_index(op.f('ix_cards_deck_id'), 'cards', ['deck_id'], unique=False)
    op.create_index(op.f('ix_cards_user_id'), 'cards', ['user_id'], unique=False)

    op.create_table(
        'review_sessions',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('deck_id', sa.Uuid(), nullable=False),
        sa.Column('user_id', sa.String(), nullable=False),
        sa.Column('started_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('ended_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('duration_seconds', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('total_cards', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('easy_count', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('medium_count', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('hard_count', sa.Integer(), nullable=False, server_default='0'),
        sa.ForeignKeyConstraint(['deck_id'], ['decks.id'], name='review_sessions_deck_id_fkey'),
        sa.PrimaryKeyConstraint('id', name='review_sessions_pkey'),
        sa.CheckConstraint('duration_seconds >= 0', name='review_sessions_duration_check'),
        sa.CheckConstraint(
            'easy_count + medium_count + hard_count = total_cards',
            name='review_sessions_counts_check'
        )
    )
    op.create_index(op.f('ix_review_sessions_deck_id'), 'review_sessions', ['deck_id'], unique=False)
    op.create_index(op.f('ix_review_sessions_user_id'), 'review_sessions', ['user_id'], unique=False)
    op.create_index(op.f('ix_review_sessions_started_at'), 'review_sessions', ['started_at'], unique=False)

    op.create_table(
        'card_reviews',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('session_id', sa.Uuid(), nullable=False),
        sa.Column('card_id', sa.Uuid(), nullable=False),
        sa.Column('rating', sa.String(length=10), nullable=False),
        sa.Column('reviewed_at', sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(['session_id'], ['review_sessions.id'], name='card_reviews_session_id_fkey'),
        sa.PrimaryKeyConstraint('id', name='card_reviews_pkey'),
        sa.CheckConstraint(
            "rating IN ('easy', 'medium', 'hard')",
            name='card_reviews_rating_check'
        )
    )
    op.create_index(op.f('ix_card_reviews_session_id'), 'card_reviews', ['session_id'], unique=False)
    op.create_index(op.f('ix_card_reviews_card_id'), 'card_reviews', ['card_id'], unique=False)


def downgrade() -> None:
    """
    Drop all tables in reverse dependency order.
    """
    op.drop_index(op.f('ix_card_reviews_card_id'), table_name='card_reviews')
    op.drop_index(op.f('ix_card_reviews_session_id'), table_name='card_reviews')
    op.drop_table('card_reviews')

    op.drop_index(op.f('ix_review_sessions_started_at'), table_name='review_sessions')
    op.drop_index(op.f('ix_review_sessions_user_id'), table_name='review_sessions')
    op.drop_index(op.f('ix_review_sessions_deck_id'), table_name='review_sessions')
    op.drop_table('review_sessions')

    op.drop_index(op.f('ix_cards_user_id'), table_name='cards')
    op.drop_index(op.f('ix_cards_deck_id'), table_name='cards')
    op.drop_table('cards')

    op.drop_index(op.f('ix_decks_user_id'), table_name='decks')
    op.drop_table('decks')
