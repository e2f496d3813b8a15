"""
Helper functions for LLM API calls.
"""
import requests
import logging
from typing import Optional
from revi.core.config import settings
from revi.core.exceptions import UpstreamError

logger = logging.getLogger(__name__)


def call_openrouter_api(prompt: str, model_name: str, system_instruction: Optional[str] = None) -> str:
    """
    Call an OpenRouter-compatible chat completions endpoint with one model.

    Args:
        prompt: The user prompt to send to the LLM
        model_name: Model identifier (e.g. 'meta-llama/llama-3.2-3b-instruct:free')
        system_instruction: Optional system message sent before the prompt

    Returns:
        The text content of the first choice (may be empty)

    Raises:
        UpstreamError: If the API key is missing, the request fails, or the
                       endpoint answers with a non-success status
    """
    api_key = settings.openrouter_api_key
    if not api_key:
        raise UpstreamError("OpenRouter API key not configured")

    messages = []
    if system_instruction:
        messages.append({"role": "system", "content": system_instruction})
    messages.append({"role": "user", "content": prompt})

    payload = {
        "model": model_name,
        "messages": messages,
        "temperature": settings.llm_temperature,
    }

    try:
        response = requests.post(
            f"{settings.openrouter_base_url.rstrip('/')}/chat/completions",
            json=payload,
            headers={
                "Authorization": f"Bearer {api_key}",
                "Content-Type": "application/json",
                "X-Title": "Revi Flashcard App",
            },
            timeout=settings.llm_timeout_seconds
        )
    except requests.exceptions.RequestException as e:
        raise UpstreamError(f"OpenRouter request failed for {model_name}: {str(e)}") from e

    if not response.ok:
        raise UpstreamError(
            f"Model {model_name} failed with status {response.status_code}: {response.text[:200]}"
        )

    try:
        data = response.json()
    except ValueError as e:
        raise UpstreamError(f"Model {model_name} returned a non-JSON body") from e

    if not isinstance(data, dict):
        raise UpstreamError(f"Model {model_name} returned an unexpected body: {type(data).__name__}")

    choices = data.get("choices") or []
    if not isinstance(choices, list):
        raise UpstreamError(f"Model {model_name} returned malformed choices")
    if not choices:
        return ""

    choice = choices[0]
    message = choice.get("message") if isinstance(choice, dict) else None
    if message is None:
        return ""
    if not isinstance(message, dict):
        raise UpstreamError(f"Model {model_name} returned a malformed message")

    content = message.get("content")
    return content.strip() if isinstance(content, str) else ""
