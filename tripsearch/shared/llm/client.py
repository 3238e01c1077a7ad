"""
OpenAI-backed generative service with retry logic.

Provides the ``GenerativeService`` boundary used by every pipeline stage
and an OpenAI implementation of it. Transport failures are retried with
tenacity; anything that still fails surfaces as a ``GenerationError``.
"""

import json
import logging
import os
from typing import List, Dict, Optional, Protocol, Type, TypeVar

from openai import (
    OpenAI,
    APIConnectionError,
    APITimeoutError,
    InternalServerError,
    OpenAIError,
    RateLimitError,
)
from pydantic import BaseModel
from tenacity import (
    retry,
    stop_after_attempt,
    wait_exponential,
    retry_if_exception_type,
)
from dotenv import load_dotenv

from tripsearch.shared.errors import GenerationError
from tripsearch.shared.llm.parsing import parse_structured

load_dotenv()


logger = logging.getLogger(__name__)

T = TypeVar("T", bound=BaseModel)

DEFAULT_MODEL = "gpt-4.1-mini"

# Transient errors worth another attempt
RETRYABLE_ERRORS = (
    APIConnectionError,
    APITimeoutError,
    RateLimitError,
    InternalServerError,
)

STRUCTURED_OUTPUT_INSTRUCTIONS = """Respond with a single JSON object only, no prose and no markdown.
The JSON object MUST conform to this JSON Schema:
{schema}"""


class GenerativeService(Protocol):
    """Anything that turns an instruction into a schema-conforming object."""

    def generate(
        self,
        instruction: str,
        schema: Type[T],
        system: Optional[str] = None,
    ) -> T:
        ...


def create_openai_client(
    api_key: Optional[str] = None,
    timeout: float = 60.0,
) -> OpenAI:
    """
    Create an OpenAI client.

    Uses OPENAI_API_KEY when no key is passed. The caller owns the client
    and passes it to ``OpenAIGenerator``.
    """
    api_key = api_key or os.environ.get("OPENAI_API_KEY")
    if not api_key:
        raise ValueError(
            "OPENAI_API_KEY environment variable is not set. "
            "Please set it to your OpenAI API key."
        )
    return OpenAI(api_key=api_key, timeout=timeout)


@retry(
    stop=stop_after_attempt(3),
    wait=wait_exponential(multiplier=1, min=2, max=10),
    retry=retry_if_exception_type(RETRYABLE_ERRORS),
    reraise=True,
)
def call_llm(
    messages: List[Dict[str, str]],
    client: OpenAI,
    model: str = DEFAULT_MODEL,
    json_mode: bool = True,
) -> str:
    """
    Call the OpenAI Chat Completion API with automatic retries.

    Args:
        messages: List of message dicts with 'role' and 'content' keys
        client: OpenAI client instance
        model: Model identifier to use (default: gpt-4.1-mini)
        json_mode: Request a JSON object response

    Returns:
        The assistant's response content as a string.

    Raises:
        Exception: If all retry attempts fail.
    """
    kwargs = {}
    if json_mode:
        kwargs["response_format"] = {"type": "json_object"}

    response = client.chat.completions.create(
        model=model,
        messages=messages,
        **kwargs,
    )

    content = response.choices[0].message.content
    return (content or "").strip()


def build_system_message(system: Optional[str], schema: Type[BaseModel]) -> str:
    """Append the structured-output instructions for ``schema`` to a system prompt."""
    schema_text = json.dumps(schema.model_json_schema(), indent=2)
    instructions = STRUCTURED_OUTPUT_INSTRUCTIONS.format(schema=schema_text)
    if system:
        return f"{system}\n\n{instructions}"
    return instructions


class OpenAIGenerator:
    """
    ``GenerativeService`` implementation on top of OpenAI chat completions.

    Every failure (transport, empty output, malformed JSON, schema
    violation) is raised as ``GenerationError`` so callers can treat it
    uniformly.
    """

    def __init__(self, client: OpenAI, model: str = DEFAULT_MODEL):
        self.client = client
        self.model = model

    def generate(
        self,
        instruction: str,
        schema: Type[T],
        system: Optional[str] = None,
    ) -> T:
        messages = [
            {"role": "system", "content": build_system_message(system, schema)},
            {"role": "user", "content": instruction},
        ]

        try:
            raw = call_llm(messages, client=self.client, model=self.model)
        except OpenAIError as e:
            raise GenerationError(f"Generation request failed: {e}") from e

        logger.debug(
            f"[llm] Received {len(raw)} chars for schema={schema.__name__}, model={self.model}"
        )
        return parse_structured(raw, schema)
