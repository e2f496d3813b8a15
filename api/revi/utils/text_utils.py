"""
Text utility functions.
"""
import json
from typing import Any, Dict


def extract_json_object(text: str) -> Dict[str, Any]:
    """
    Parse the JSON object embedded in an LLM response.

    The LLM might wrap the object in markdown code blocks or prose, so only the
    substring between the first '{' and the last '}' is parsed.

    Args:
        text: Raw response text

    Returns:
        Parsed JSON object

    Raises:
        ValueError: If no object is present or it is not valid JSON
    """
    if not text:
        raise ValueError("Empty response")

    start = text.find('{')
    end = text.rfind('}')
    if start == -1 or end < start:
        raise ValueError("No JSON object found in response")

    parsed = json.loads(text[start:end + 1])
    if not isinstance(parsed, dict):
        raise ValueError("Response JSON is not an object")
    return parsed


def is_non_empty_string(value: Any) -> bool:
    """True for a string with at least one non-whitespace character."""
    return isinstance(value, str) and len(value.strip()) > 0
