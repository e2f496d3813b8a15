"""
Models package - imports all models so they register with SQLModel metadata.
"""
# Import enums first
from revi.models.enums import Rating

# Import all models
from revi.models.deck import Deck
from revi.models.card import Card
from revi.models.review_session import ReviewSession
from revi.models.card_review import CardReview

__all__ = [
    'Rating',
    'Deck',
    'Card',
    'ReviewSession',
    'CardReview',
]
