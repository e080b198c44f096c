"""
Parsing of model completions into ExtractedIdentity records.

The model is asked for a bare JSON object but often wraps it in prose
("Here is the result: {...}"). ``find_json_object`` isolates the object
with a greedy bracket match: everything from the first ``{`` to the last
``}``. Prose that itself contains braces will break this match.
"""

import json
import logging

from pydantic import ValidationError

# Handle both package imports and standalone imports
try:
    from ...models import ExtractedIdentity
except ImportError:
    from models import ExtractedIdentity

from .exceptions import MalformedExtraction

logger = logging.getLogger(__name__)


def find_json_object(text: str) -> str:
    """
    Return the substring most likely to hold a JSON object.

    Args:
        text: Raw completion text.

    Returns:
        Text from the first "{" to the last "}" inclusive, or the whole
        text when no such span exists.
    """
    start = text.find("{")
    end = text.rfind("}")
    if start == -1 or end < start:
        return text
    return text[start : end + 1]


def parse_identity(text: str) -> ExtractedIdentity:
    """
    Parse a completion text into an ExtractedIdentity.

    Missing fields are left as None. A null value counts as missing.

    Raises:
        MalformedExtraction: If no JSON object can be parsed, or a field
            holds something other than a string or number.
    """
    candidate = find_json_object(text)

    try:
        data = json.loads(candidate)
    except json.JSONDecodeError as e:
        logger.error("Failed to parse extraction response (%d chars)", len(text))
        raise MalformedExtraction(f"Invalid JSON in extraction response: {e}") from e

    if not isinstance(data, dict):
        raise MalformedExtraction(
            f"Expected a JSON object, got {type(data).__name__}"
        )

    try:
        return ExtractedIdentity.model_validate(data)
    except ValidationError as e:
        raise MalformedExtraction(
            f"Extraction response has invalid fields: {e.error_count()} error(s)"
        ) from e
