"""
Structured output parsing.

Extracts JSON from raw LLM responses (raw JSON or markdown code blocks)
and validates it against a pydantic schema.
"""

import re
from typing import Optional, Type, TypeVar

from pydantic import BaseModel, ValidationError

from tripsearch.shared.errors import GenerationError, SchemaValidationError


T = TypeVar("T", bound=BaseModel)

_CODE_BLOCK_PATTERN = re.compile(r"```(?:json)?\s*([\s\S]*?)```")


def extract_json_from_response(raw_response: str) -> str:
    """
    Extract JSON content from an LLM response.

    Handles multiple formats:
    - Raw JSON
    - JSON in markdown code blocks (```json ... ```)
    - JSON with leading/trailing prose or whitespace

    Args:
        raw_response: Raw LLM response string

    Returns:
        Cleaned JSON string ready for parsing

    Raises:
        GenerationError: If the response is empty
    """
    content = (raw_response or "").strip()
    if not content:
        raise GenerationError("Empty response from generative service")

    match = _CODE_BLOCK_PATTERN.search(content)
    if match:
        content = match.group(1).strip()

    # Skip any leading prose before the first object/array
    starts = [i for i in (content.find("{"), content.find("[")) if i >= 0]
    if starts:
        content = content[min(starts):]

    open_char = content[:1]
    close_char = {"{": "}", "[": "]"}.get(open_char)
    if close_char is None:
        return content

    depth = 0
    in_string = False
    escaped = False
    for i, char in enumerate(content):
        if in_string:
            if escaped:
                escaped = False
            elif char == "\\":
                escaped = True
            elif char == '"':
                in_string = False
            continue
        if char == '"':
            in_string = True
        elif char == open_char:
            depth += 1
        elif char == close_char:
            depth -= 1
            if depth == 0:
                return content[: i + 1]

    # No clear boundary, let the JSON parser report the problem
    return content


def parse_structured(raw_response: Optional[str], schema: Type[T]) -> T:
    """
    Parse a raw response into an instance of ``schema``.

    Raises:
        GenerationError: If the response is empty
        SchemaValidationError: If the JSON is malformed or does not conform
    """
    payload = extract_json_from_response(raw_response or "")
    try:
        return schema.model_validate_json(payload)
    except ValidationError as e:
        raise SchemaValidationError(
            f"Response does not match {schema.__name__}: {e.error_count()} error(s)"
        ) from e
