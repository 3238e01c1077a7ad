"""
Tests for structured output parsing, the OpenAI generator and configuration.

The OpenAI client is replaced by a stub; no network calls are made.
"""

from types import SimpleNamespace

import pytest
from openai import OpenAIError

from tripsearch.config import SearchConfig
from tripsearch.search.schemas import DiningList
from tripsearch.shared.errors import GenerationError, SchemaValidationError
from tripsearch.shared.llm.client import (
    OpenAIGenerator,
    build_system_message,
    create_openai_client,
)
from tripsearch.shared.llm.parsing import extract_json_from_response, parse_structured


class _StubCompletions:
    def __init__(self, content=None, error=None):
        self.content = content
        self.error = error
        self.requests = []

    def create(self, **kwargs):
        self.requests.append(kwargs)
        if self.error is not None:
            raise self.error
        message = SimpleNamespace(content=self.content)
        return SimpleNamespace(choices=[SimpleNamespace(message=message)])


def _make_client(content=None, error=None):
    completions = _StubCompletions(content=content, error=error)
    return SimpleNamespace(chat=SimpleNamespace(completions=completions)), completions


DINING_JSON = (
    '{"restaurants": [{"name": "Ramiro", "location": {"name": "Anjos"}, '
    '"vibe_score": 91, "meal_types": ["dinner"], "price_level": 3}]}'
)


class TestExtractJson:
    """Tests for extract_json_from_response."""

    def test_raw_json(self):
        assert extract_json_from_response('{"a": 1}') == '{"a": 1}'

    def test_code_block(self):
        raw = 'Here you go:\n```json\n{"a": 1}\n```\nEnjoy!'
        assert extract_json_from_response(raw) == '{"a": 1}'

    def test_leading_and_trailing_prose(self):
        raw = 'Sure! {"a": {"b": 2}} Hope that helps.'
        assert extract_json_from_response(raw) == '{"a": {"b": 2}}'

    def test_braces_inside_strings(self):
        raw = '{"note": "use } carefully \\" {"} trailing'
        assert extract_json_from_response(raw) == '{"note": "use } carefully \\" {"}'

    def test_empty_response_raises(self):
        with pytest.raises(GenerationError):
            extract_json_from_response("   ")


class TestParseStructured:
    """Tests for parse_structured."""

    def test_valid_payload(self):
        parsed = parse_structured(DINING_JSON, DiningList)
        assert parsed.restaurants[0].name == "Ramiro"
        assert parsed.restaurants[0].vibe_score == 91

    def test_schema_violation(self):
        with pytest.raises(SchemaValidationError):
            parse_structured('{"restaurants": [{"name": "No location"}]}', DiningList)

    def test_malformed_json(self):
        with pytest.raises(SchemaValidationError):
            parse_structured('{"restaurants": [', DiningList)

    def test_schema_violation_is_a_generation_error(self):
        with pytest.raises(GenerationError):
            parse_structured("{}", _CityDiningList)


class _CityDiningList(DiningList):
    """Schema with a required field, for violation tests."""

    city: str


class TestOpenAIGenerator:
    """Tests for OpenAIGenerator.generate with a stubbed client."""

    def test_generate_returns_schema_instance(self):
        client, completions = _make_client(content=DINING_JSON)
        result = OpenAIGenerator(client, model="test-model").generate(
            "Find dinner spots", DiningList, system="You are a food expert."
        )

        assert isinstance(result, DiningList)
        [request] = completions.requests
        assert request["model"] == "test-model"
        assert request["response_format"] == {"type": "json_object"}
        assert request["messages"][0]["role"] == "system"
        assert "You are a food expert." in request["messages"][0]["content"]
        assert request["messages"][1] == {"role": "user", "content": "Find dinner spots"}

    def test_api_error_becomes_generation_error(self):
        client, _ = _make_client(error=OpenAIError("quota exceeded"))
        with pytest.raises(GenerationError):
            OpenAIGenerator(client).generate("Find dinner spots", DiningList)

    def test_empty_content_becomes_generation_error(self):
        client, _ = _make_client(content=None)
        with pytest.raises(GenerationError):
            OpenAIGenerator(client).generate("Find dinner spots", DiningList)

    def test_system_message_embeds_schema(self):
        message = build_system_message(None, DiningList)
        assert "JSON Schema" in message
        assert "restaurants" in message

    def test_missing_api_key(self, monkeypatch):
        monkeypatch.delenv("OPENAI_API_KEY", raising=False)
        with pytest.raises(ValueError):
            create_openai_client()


class TestSearchConfig:
    """Tests for SearchConfig.from_env."""

    def test_defaults(self, monkeypatch):
        for name in ("MODEL", "LODGING_COUNT", "RERANK"):
            monkeypatch.delenv(f"TRIPSEARCH_{name}", raising=False)
        config = SearchConfig.from_env()

        assert config.lodging_count == 10
        assert config.activity_count == 15
        assert config.dining_count == 12
        assert config.rerank is False

    def test_env_overrides(self, monkeypatch):
        monkeypatch.setenv("TRIPSEARCH_MODEL", "gpt-test")
        monkeypatch.setenv("TRIPSEARCH_LODGING_COUNT", "4")
        monkeypatch.setenv("TRIPSEARCH_RERANK", "true")
        config = SearchConfig.from_env()

        assert config.model == "gpt-test"
        assert config.lodging_count == 4
        assert config.rerank is True
