"""
Model enums.
"""
from enum import Enum


class Rating(str, Enum):
    """Difficulty rating a user assigns to a card during a review session."""
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"
