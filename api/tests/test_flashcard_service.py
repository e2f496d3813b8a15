import json

import pytest
import requests

from revi.core.config import settings
from revi.core.exceptions import UpstreamError
from revi.services import flashcard_service as flashcard_module
from revi.services.flashcard_service import FALLBACK_FLASHCARD, FlashcardGenerationService
from revi.services.llm_helpers import call_openrouter_api
from revi.services.prompt_helpers import generate_flashcard_prompt

SOURCE_TEXT = (
    "Mitochondria are membrane-bound organelles that generate most of the chemical "
    "energy needed to power the cell's biochemical reactions."
)


def _cards_json(count):
    return json.dumps({
        "flashcards": [
            {"question": f"Question {i}?", "answer": f"Answer {i}."}
            for i in range(1, count + 1)
        ]
    })


class FakeModels:
    """Scripted model responses keyed by model name; records call order."""

    def __init__(self, responses):
        self.responses = responses
        self.calls = []

    def __call__(self, prompt, model_name, system_instruction=None):
        self.calls.append(model_name)
        result = self.responses[model_name]
        if isinstance(result, Exception):
            raise result
        return result


@pytest.fixture
def fake_models(monkeypatch):
    def _install(responses):
        fake = FakeModels(responses)
        monkeypatch.setattr(flashcard_module, "call_openrouter_api", fake)
        return fake
    return _install


def test_first_successful_model_wins(fake_models):
    fake = fake_models({
        "model-a": UpstreamError("Model model-a failed with status 429"),
        "model-b": "Sure! Here you go:\n" + _cards_json(3),
        "model-c": _cards_json(1),
    })
    service = FlashcardGenerationService(models=["model-a", "model-b", "model-c"])

    cards = service.generate(SOURCE_TEXT, 5)

    assert fake.calls == ["model-a", "model-b"]
    assert [card.question for card in cards] == ["Question 1?", "Question 2?", "Question 3?"]


def test_invalid_json_and_empty_results_fall_through(fake_models):
    fake = fake_models({
        "model-a": "not json at all",
        "model-b": json.dumps({"flashcards": [{"question": "", "answer": "x"}, {"question": "q"}]}),
        "model-c": json.dumps({"cards": []}),
        "model-d": _cards_json(2),
    })
    service = FlashcardGenerationService(models=["model-a", "model-b", "model-c", "model-d"])

    cards = service.generate(SOURCE_TEXT, 10)

    assert fake.calls == ["model-a", "model-b", "model-c", "model-d"]
    assert len(cards) == 2


def test_result_truncated_to_requested_count(fake_models):
    fake_models({"model-a": _cards_json(8)})
    service = FlashcardGenerationService(models=["model-a"])

    cards = service.generate(SOURCE_TEXT, 5)

    assert len(cards) == 5
    assert cards[-1].question == "Question 5?"


def test_markdown_fenced_response_is_parsed(fake_models):
    fake_models({"model-a": "```json\n" + _cards_json(2) + "\n```"})
    service = FlashcardGenerationService(models=["model-a"])

    assert len(service.generate(SOURCE_TEXT, 10)) == 2


def test_all_models_failing_returns_sentinel_card(fake_models):
    fake = fake_models({
        "model-a": UpstreamError("timeout"),
        "model-b": "{}",
    })
    service = FlashcardGenerationService(models=["model-a", "model-b"])

    cards = service.generate(SOURCE_TEXT, 10)

    assert fake.calls == ["model-a", "model-b"]
    assert len(cards) == 1
    assert cards[0].question == FALLBACK_FLASHCARD.question
    assert cards[0].question.startswith("Error:")


def test_prompt_truncates_long_text():
    long_text = "a" * (settings.llm_max_input_chars + 500)
    prompt = generate_flashcard_prompt(long_text, 7)

    assert "Generate exactly 7 flashcard" in prompt
    assert "a" * settings.llm_max_input_chars in prompt
    assert "a" * (settings.llm_max_input_chars + 1) not in prompt


class FakeResponse:
    def __init__(self, status_code=200, payload=None, text=""):
        self.status_code = status_code
        self.ok = 200 <= status_code < 300
        self._payload = payload
        self.text = text

    def json(self):
        if self._payload is None:
            raise ValueError("No JSON body")
        return self._payload


def test_call_openrouter_api_returns_first_choice(monkeypatch):
    captured = {}

    def fake_post(url, json=None, headers=None, timeout=None):
        captured["url"] = url
        captured["json"] = json
        captured["headers"] = headers
        return FakeResponse(payload={"choices": [{"message": {"content": "  {\"flashcards\": []}  "}}]})

    monkeypatch.setattr(requests, "post", fake_post)

    content = call_openrouter_api("prompt", "model-a", "system")

    assert content == '{"flashcards": []}'
    assert captured["url"].endswith("/chat/completions")
    assert captured["json"]["model"] == "model-a"
    assert captured["json"]["messages"][0] == {"role": "system", "content": "system"}
    assert captured["headers"]["Authorization"] == f"Bearer {settings.openrouter_api_key}"


def test_call_openrouter_api_raises_on_error_status(monkeypatch):
    monkeypatch.setattr(requests, "post", lambda *args, **kwargs: FakeResponse(status_code=429, text="rate limited"))

    with pytest.raises(UpstreamError):
        call_openrouter_api("prompt", "model-a")


def test_call_openrouter_api_raises_on_network_error(monkeypatch):
    def fake_post(*args, **kwargs):
        raise requests.exceptions.ConnectionError("unreachable")

    monkeypatch.setattr(requests, "post", fake_post)

    with pytest.raises(UpstreamError):
        call_openrouter_api("prompt", "model-a")


def test_call_openrouter_api_without_key(monkeypatch):
    monkeypatch.setattr(settings, "openrouter_api_key", "")

    with pytest.raises(UpstreamError):
        call_openrouter_api("prompt", "model-a")


def test_missing_key_yields_sentinel(monkeypatch):
    monkeypatch.setattr(settings, "openrouter_api_key", "")
    service = FlashcardGenerationService(models=["model-a"])

    cards = service.generate(SOURCE_TEXT, 3)

    assert cards == [FALLBACK_FLASHCARD]


@pytest.mark.parametrize("payload", [[], "oops", 42, {"choices": "none"}, {"choices": [{"message": ["x"]}]}])
def test_call_openrouter_api_rejects_malformed_bodies(monkeypatch, payload):
    monkeypatch.setattr(requests, "post", lambda *args, **kwargs: FakeResponse(payload=payload))

    with pytest.raises(UpstreamError):
        call_openrouter_api("prompt", "model-a")


@pytest.mark.parametrize("payload", [
    {"choices": []},
    {"choices": ["not a choice"]},
    {"choices": [{"message": {"content": None}}]},
])
def test_call_openrouter_api_empty_content(monkeypatch, payload):
    monkeypatch.setattr(requests, "post", lambda *args, **kwargs: FakeResponse(payload=payload))

    assert call_openrouter_api("prompt", "model-a") == ""


def test_non_object_bodies_fall_back_to_sentinel(monkeypatch):
    monkeypatch.setattr(requests, "post", lambda *args, **kwargs: FakeResponse(payload=[]))
    service = FlashcardGenerationService(models=["model-a", "model-b"])

    cards = service.generate("x" * 80, 5)

    assert cards == [FALLBACK_FLASHCARD]
