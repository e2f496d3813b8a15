"""
User-scoped store access for decks, cards and review sessions.

A StudyStore is built per request for exactly one authenticated user and every
query it issues is filtered on that user's id. Handles are never shared between
requests.
"""
# pyright: reportAttributeAccessIssue=false
# pyright: reportCallIssue=false
# pyright: reportArgumentType=false
import logging
import uuid
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from sqlalchemy import delete, func
from sqlmodel import Session, select

from revi.core.exceptions import NotFoundError, ValidationError
from revi.models import Card, CardReview, Deck, ReviewSession
from revi.utils.time_utils import utcnow

logger = logging.getLogger(__name__)


class StudyStore:
    """Typed query wrappers scoped to a single user."""

    def __init__(self, session: Session, user_id: str):
        if not user_id:
            raise ValueError("StudyStore requires a user id")
        self.session = session
        self.user_id = user_id

    # ------------------------------------------------------------------
    # Decks
    # ------------------------------------------------------------------

    def list_decks(self) -> List[Deck]:
        """All of the user's decks, newest first."""
        query = (
            select(Deck)
            .where(Deck.user_id == self.user_id)
            .order_by(Deck.created_at.desc())  # type: ignore
        )
        return list(self.session.exec(query).all())

    def get_deck(self, deck_id: uuid.UUID) -> Deck:
        """Fetch one deck, raising NotFoundError if it is absent or owned by someone else."""
        deck = self.session.exec(
            select(Deck).where(Deck.id == deck_id, Deck.user_id == self.user_id)
        ).first()
        if not deck:
            raise NotFoundError("Deck not found")
        return deck

    def create_deck(self, name: Optional[str], description: Optional[str] = None) -> Deck:
        name = (name or "").strip()
        if not name:
            raise ValidationError("Deck name is required")

        deck = Deck(user_id=self.user_id, name=name, description=description or "")
        self.session.add(deck)
        self.session.commit()
        self.session.refresh(deck)

        logger.info(f"Created deck {deck.id} for user {self.user_id}")
        return deck

    def delete_decks(self, deck_ids: Iterable[uuid.UUID]) -> int:
        """
        Delete decks and everything that depends on them.

        Deletion order respects foreign keys:
        1. CardReviews of the decks' sessions
        2. ReviewSessions of the decks
        3. Cards of the decks
        4. The decks themselves

        Ids that do not belong to the user are ignored. Returns the number of
        decks removed.
        """
        owned_ids = list(self.session.exec(
            select(Deck.id).where(
                Deck.id.in_(list(deck_ids)),  # type: ignore[attr-defined]
                Deck.user_id == self.user_id
            )
        ).all())
        if not owned_ids:
            return 0

        session_ids = select(ReviewSession.id).where(
            ReviewSession.deck_id.in_(owned_ids),  # type: ignore[attr-defined]
            ReviewSession.user_id == self.user_id
        )
        self.session.exec(
            delete(CardReview).where(CardReview.session_id.in_(session_ids))  # type: ignore[attr-defined]
        )
        self.session.exec(
            delete(ReviewSession).where(
                ReviewSession.deck_id.in_(owned_ids),  # type: ignore[attr-defined]
                ReviewSession.user_id == self.user_id
            )
        )
        self.session.exec(
            delete(Card).where(Card.deck_id.in_(owned_ids))  # type: ignore[attr-defined]
        )
        self.session.exec(
            delete(Deck).where(
                Deck.id.in_(owned_ids),  # type: ignore[attr-defined]
                Deck.user_id == self.user_id
            )
        )
        self.session.commit()

        logger.info(f"Deleted {len(owned_ids)} deck(s) with dependents for user {self.user_id}")
        return len(owned_ids)

    def delete_deck(self, deck_id: uuid.UUID) -> None:
        """Delete a single deck; NotFoundError if the user does not own it."""
        self.get_deck(deck_id)
        self.delete_decks([deck_id])

    # ------------------------------------------------------------------
    # Cards
    # ------------------------------------------------------------------

    def list_cards(self, deck_id: uuid.UUID) -> List[Card]:
        """Cards of one deck, oldest first."""
        query = (
            select(Card)
            .where(Card.deck_id == deck_id, Card.user_id == self.user_id)
            .order_by(Card.created_at.asc())  # type: ignore
        )
        return list(self.session.exec(query).all())

    def count_cards(self) -> int:
        """Number of cards across all of the user's decks."""
        deck_ids = select(Deck.id).where(Deck.user_id == self.user_id)
        return self.session.exec(
            select(func.count(Card.id)).where(Card.deck_id.in_(deck_ids))  # type: ignore[attr-defined]
        ).one()

    def _get_card(self, card_id: uuid.UUID) -> Card:
        card = self.session.exec(
            select(Card).where(Card.id == card_id, Card.user_id == self.user_id)
        ).first()
        if not card:
            raise NotFoundError("Card not found")
        return card

    def create_card(self, deck_id: Optional[uuid.UUID], question: Optional[str], answer: Optional[str]) -> Card:
        if not deck_id or not (question or "").strip() or not (answer or "").strip():
            raise ValidationError("deck_id, question, and answer are required")

        # Only the owner may add cards to a deck
        self.get_deck(deck_id)

        card = Card(deck_id=deck_id, user_id=self.user_id, question=question, answer=answer)
        self.session.add(card)
        self.session.commit()
        self.session.refresh(card)

        logger.info(f"Created card {card.id} in deck {deck_id}")
        return card

    def update_card(self, card_id: uuid.UUID, question: Optional[str], answer: Optional[str]) -> Card:
        card = self._get_card(card_id)

        if question is not None:
            if not question.strip():
                raise ValidationError("question must not be empty")
            card.question = question
        if answer is not None:
            if not answer.strip():
                raise ValidationError("answer must not be empty")
            card.answer = answer
        card.updated_at = utcnow()

        self.session.add(card)
        self.session.commit()
        self.session.refresh(card)
        return card

    def delete_card(self, card_id: uuid.UUID) -> None:
        card = self._get_card(card_id)
        self.session.delete(card)
        self.session.commit()

    # ------------------------------------------------------------------
    # Review sessions
    # ------------------------------------------------------------------

    def add_review_session(self, review_session: ReviewSession) -> ReviewSession:
        """Persist a finished review session for this user."""
        review_session.user_id = self.user_id
        self.session.add(review_session)
        self.session.commit()
        self.session.refresh(review_session)
        return review_session

    def add_card_reviews(self, card_reviews: Sequence[CardReview]) -> None:
        """Persist per-card ratings. The caller decides what a failure here means."""
        if not card_reviews:
            return
        self.session.add_all(card_reviews)
        self.session.commit()

    def rollback(self) -> None:
        self.session.rollback()

    def list_review_sessions(self) -> List[ReviewSession]:
        """All of the user's sessions, most recent start first."""
        query = (
            select(ReviewSession)
            .where(ReviewSession.user_id == self.user_id)
            .order_by(ReviewSession.started_at.desc().nulls_last())  # type: ignore
        )
        return list(self.session.exec(query).all())

    def list_history(self) -> List[Tuple[ReviewSession, Optional[str]]]:
        """Sessions joined with their deck name, most recent start first."""
        query = (
            select(ReviewSession, Deck.name)
            .outerjoin(Deck, Deck.id == ReviewSession.deck_id)
            .where(ReviewSession.user_id == self.user_id)
            .order_by(ReviewSession.started_at.desc().nulls_last())  # type: ignore
        )
        return [(row[0], row[1]) for row in self.session.exec(query).all()]

    def recent_sessions_for_deck(self, deck_id: uuid.UUID, limit: Optional[int] = None) -> List[ReviewSession]:
        """Sessions for one deck, most recent start first."""
        query = (
            select(ReviewSession)
            .where(ReviewSession.deck_id == deck_id, ReviewSession.user_id == self.user_id)
            .order_by(ReviewSession.started_at.desc().nulls_last())  # type: ignore
        )
        if limit is not None:
            query = query.limit(limit)
        return list(self.session.exec(query).all())

    def previous_session(self, deck_id: uuid.UUID, exclude_session_id: uuid.UUID) -> Optional[ReviewSession]:
        """Most recent session for the deck other than the given one."""
        query = (
            select(ReviewSession)
            .where(
                ReviewSession.deck_id == deck_id,
                ReviewSession.user_id == self.user_id,
                ReviewSession.id != exclude_session_id
            )
            .order_by(ReviewSession.started_at.desc().nulls_last())  # type: ignore
            .limit(1)
        )
        return self.session.exec(query).first()

    # ------------------------------------------------------------------
    # Account
    # ------------------------------------------------------------------

    def delete_all_user_data(self) -> Dict[str, int]:
        """
        Delete every row owned by the user.

        Returns:
            Dict with counts of deleted items:
            {
                'card_reviews_deleted': int,
                'review_sessions_deleted': int,
                'cards_deleted': int,
                'decks_deleted': int
            }
        """
        session_ids = select(ReviewSession.id).where(ReviewSession.user_id == self.user_id)
        card_reviews = self.session.exec(
            delete(CardReview).where(CardReview.session_id.in_(session_ids))  # type: ignore[attr-defined]
        )
        review_sessions = self.session.exec(
            delete(ReviewSession).where(ReviewSession.user_id == self.user_id)
        )
        cards = self.session.exec(delete(Card).where(Card.user_id == self.user_id))
        decks = self.session.exec(delete(Deck).where(Deck.user_id == self.user_id))
        self.session.commit()

        counts = {
            'card_reviews_deleted': card_reviews.rowcount,
            'review_sessions_deleted': review_sessions.rowcount,
            'cards_deleted': cards.rowcount,
            'decks_deleted': decks.rowcount,
        }
        logger.info(f"Deleted all data for user {self.user_id}: {counts}")
        return counts
