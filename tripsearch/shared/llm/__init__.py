"""Generative service boundary and its OpenAI implementation."""

from tripsearch.shared.llm.client import (
    GenerativeService,
    OpenAIGenerator,
    create_openai_client,
    call_llm,
)
from tripsearch.shared.llm.parsing import extract_json_from_response, parse_structured

__all__ = [
    "GenerativeService",
    "OpenAIGenerator",
    "create_openai_client",
    "call_llm",
    "extract_json_from_response",
    "parse_structured",
]
