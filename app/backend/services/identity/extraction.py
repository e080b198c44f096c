"""
Identity extraction from ID document photos.

Sends the validated photo to an OpenAI vision model in a single
chat-completions request and parses the answer into an ExtractedIdentity.
There is exactly one attempt per photo: the client is built with
``max_retries=0`` and no explicit timeout, so the SDK transport default
applies.
"""

import logging
from typing import Any

from openai import APIConnectionError, APIStatusError, AsyncOpenAI
from openai.types.chat import ChatCompletion

# Handle both package imports and standalone imports
try:
    from ...models import NOT_FOUND, ExtractedIdentity, ImagePayload
except ImportError:
    from models import NOT_FOUND, ExtractedIdentity, ImagePayload

from .exceptions import EmptyResponse, MissingCredential, TransportError
from .parsing import parse_identity

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "gpt-4o"


# =============================================================================
# Extraction Prompt
# =============================================================================

IDENTITY_EXTRACTION_PROMPT = f"""Look at this photo of an identity document and extract the following fields:

- firstName: the holder's first (given) name
- lastName: the holder's last (family) name
- idNumber: the personal identification number
- serialNumber: the serial number of the document itself

Respond with ONLY a JSON object using exactly these keys, for example:
{{"firstName": "...", "lastName": "...", "idNumber": "...", "serialNumber": "..."}}

If a field is not present or cannot be read clearly, use "{NOT_FOUND}" as its value.
Do not add any other keys or any text outside the JSON object."""


def build_extraction_messages(payload: ImagePayload) -> list[dict[str, Any]]:
    """Build the single user turn: instruction text plus the photo."""
    return [
        {
            "role": "user",
            "content": [
                {"type": "text", "text": IDENTITY_EXTRACTION_PROMPT},
                {
                    "type": "image_url",
                    "image_url": {"url": payload.data_url},
                },
            ],
        }
    ]


# =============================================================================
# Main Extraction Functions
# =============================================================================


async def _request_identity(
    client: AsyncOpenAI,
    payload: ImagePayload,
    model: str,
) -> ExtractedIdentity:
    """Send the completion request and parse its content."""
    logger.info(
        "Requesting identity extraction with %s for %s photo (%d bytes)",
        model,
        payload.mime_type,
        payload.size_bytes,
    )

    try:
        response = await client.chat.completions.create(
            model=model,
            messages=build_extraction_messages(payload),
        )
    except APIStatusError as e:
        raise TransportError(e.status_code, e.response.reason_phrase) from e
    except APIConnectionError as e:
        raise TransportError(None, str(e)) from e

    # Non-JSON bodies (e.g. a gateway error page) come back as plain text
    if not isinstance(response, ChatCompletion):
        raise EmptyResponse(
            f"Unexpected response body from OpenAI: {type(response).__name__}"
        )

    content = None
    if response.choices:
        message = response.choices[0].message
        content = message.content if message is not None else None
    if not isinstance(content, str) or not content.strip():
        raise EmptyResponse("Empty response from OpenAI")

    identity = parse_identity(content)

    missing = identity.missing_fields()
    if missing:
        logger.info("Extraction finished; fields not found: %s", ", ".join(missing))
    else:
        logger.info("Extraction finished; all fields found")
    return identity


async def extract_identity(
    payload: ImagePayload,
    *,
    api_key: str | None,
    model: str = DEFAULT_MODEL,
    client: AsyncOpenAI | None = None,
    base_url: str | None = None,
) -> ExtractedIdentity:
    """
    Extract identity fields from a validated photo.

    Args:
        payload: Photo accepted by ``validate_photo``.
        api_key: OpenAI API key. Checked before anything is sent.
        model: OpenAI model to use (must support vision).
        client: Pre-built client. When omitted, one is created for this
            call and closed afterwards.
        base_url: Alternative API base URL for the created client.

    Returns:
        ExtractedIdentity with the fields the model returned.

    Raises:
        MissingCredential: If no API key is configured.
        TransportError: If the API answers with a non-2xx status or cannot be reached.
        EmptyResponse: If the completion has no message content.
        MalformedExtraction: If the content holds no usable JSON object.
    """
    if not api_key:
        raise MissingCredential(
            "OpenAI API key not provided. Set OPENAI_API_KEY environment variable."
        )

    if client is not None:
        return await _request_identity(client, payload, model)

    async with AsyncOpenAI(api_key=api_key, base_url=base_url, max_retries=0) as owned_client:
        return await _request_identity(owned_client, payload, model)
