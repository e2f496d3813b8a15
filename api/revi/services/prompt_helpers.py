"""
Helper functions for generating LLM prompts.
"""
from revi.core.config import settings


def generate_flashcard_system_instruction() -> str:
    """System message shared by every flashcard generation call."""
    return "You are a flashcard generator. Return only JSON with no markdown formatting."


def generate_flashcard_prompt(text: str, num_cards: int) -> str:
    """
    Build the user prompt asking for num_cards question/answer pairs.

    The source text is truncated to settings.llm_max_input_chars characters.

    Args:
        text: Source material
        num_cards: Number of flashcards to request

    Returns:
        Prompt string
    """
    source = text[:settings.llm_max_input_chars]
    return f"""You are an expert educational assistant. Generate exactly {num_cards} flashcard question-answer pairs from the following text.

CRITICAL: Return ONLY valid JSON in this exact format with no other text:
{{
  "flashcards": [
    {{ "question": "What is...", "answer": "..." }},
    {{ "question": "How does...", "answer": "..." }}
  ]
}}

Rules:
- Focus on key concepts, definitions, and important facts
- Questions should be clear and specific
- Answers should be concise (1-3 sentences)
- Cover different aspects of the material
- Return ONLY the JSON, no markdown, no explanations

Text to analyze:
{source}

Return JSON only:"""
