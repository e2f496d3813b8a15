"""
Flashcard generation from raw text using an LLM.
"""
from revi.core.config import settings
from revi.core.exceptions import UpstreamError
from revi.schemas.generation import Flashcard
from revi.services.llm_helpers import call_openrouter_api
from revi.services.prompt_helpers import (
    generate_flashcard_prompt,
    generate_flashcard_system_instruction,
)
from revi.utils.text_utils import extract_json_object, is_non_empty_string
import logging
from typing import Any, List, Optional

logger = logging.getLogger(__name__)

FALLBACK_FLASHCARD = Flashcard(
    question="Error: Could not generate flashcards with any AI model",
    answer=(
        "All AI models failed. Please check your internet connection and try again, "
        "or create flashcards manually."
    ),
)


class FlashcardGenerationService:
    """
    Generates question/answer pairs by trying a fixed, ordered list of models.

    Each model is tried at most once, in order. The first model that returns a
    parseable, non-empty card set wins. If every model fails the caller gets a
    single sentinel card instead of an exception.
    """

    def __init__(self, models: Optional[List[str]] = None):
        self.models = list(models) if models is not None else list(settings.flashcard_models)

        logger.info(f"FlashcardGenerationService initialized with {len(self.models)} model(s)")
        if not settings.openrouter_api_key:
            logger.warning("OpenRouter API key not configured. Flashcard generation will return the fallback card.")

    @staticmethod
    def _parse_flashcards(content: str) -> List[Flashcard]:
        """
        Extract valid flashcards from a model response.

        Raises:
            ValueError: If the response has no JSON object or no 'flashcards' list
        """
        parsed = extract_json_object(content)
        raw_cards: Any = parsed.get("flashcards")
        if not isinstance(raw_cards, list):
            raise ValueError("Response is missing a 'flashcards' list")

        return [
            Flashcard(question=card["question"], answer=card["answer"])
            for card in raw_cards
            if isinstance(card, dict)
            and is_non_empty_string(card.get("question"))
            and is_non_empty_string(card.get("answer"))
        ]

    def generate(self, text: str, num_cards: int) -> List[Flashcard]:
        """
        Generate up to num_cards flashcards from text.

        Args:
            text: Source material (callers validate the minimum length)
            num_cards: Maximum number of cards to return

        Returns:
            List of flashcards, never empty
        """
        logger.info(f"Starting flashcard generation: text length {len(text)}, {num_cards} card(s) requested")

        prompt = generate_flashcard_prompt(text, num_cards)
        system_instruction = generate_flashcard_system_instruction()

        for index, model_name in enumerate(self.models, start=1):
            logger.info(f"Trying model {index}/{len(self.models)}: {model_name}")

            try:
                content = call_openrouter_api(prompt, model_name, system_instruction)
            except UpstreamError as e:
                logger.warning(str(e))
                continue

            try:
                cards = self._parse_flashcards(content)
            except ValueError as e:
                logger.warning(f"Invalid response from {model_name}: {str(e)}")
                logger.debug(f"Response text: {content[:500]}")
                continue

            if not cards:
                logger.warning(f"No valid cards from {model_name}, trying next model")
                continue

            logger.info(f"Generated {len(cards)} valid card(s) using {model_name}")
            return cards[:num_cards]

        logger.error("All flashcard models exhausted")
        return [FALLBACK_FLASHCARD.model_copy()]


flashcard_service = FlashcardGenerationService()
