"""
Identity extraction package for captured ID photos.

This package is split into:
- validation: Data URL checks and size limits
- extraction: OpenAI request construction and the outbound call
- parsing: Recovery of the JSON object from the model's answer
- exceptions: Error kinds raised by each stage

``process_photo`` runs the two stages in order. A photo is either
accepted with its extracted identity or rejected by the first stage
that raises.
"""

import logging

from fastapi import Depends
from openai import AsyncOpenAI

# Handle both package imports and standalone imports
try:
    from ...config import Settings, get_settings
    from ...models import ExtractedIdentity, ImagePayload, PhotoUploadResponse
except ImportError:
    from config import Settings, get_settings
    from models import ExtractedIdentity, ImagePayload, PhotoUploadResponse

from .exceptions import (
    EmptyResponse,
    IdentityExtractionError,
    IdentityServiceError,
    InvalidFormat,
    MalformedExtraction,
    MissingCredential,
    MissingPayload,
    PayloadTooLarge,
    PhotoValidationError,
    TransportError,
)
from .extraction import (
    DEFAULT_MODEL,
    IDENTITY_EXTRACTION_PROMPT,
    build_extraction_messages,
    extract_identity,
)
from .parsing import find_json_object, parse_identity
from .validation import MAX_PHOTO_SIZE, estimate_decoded_size, validate_photo

logger = logging.getLogger(__name__)

__all__ = [
    "IdentityExtractor",
    "get_identity_extractor",
    "process_photo",
    "validate_photo",
    "estimate_decoded_size",
    "extract_identity",
    "build_extraction_messages",
    "find_json_object",
    "parse_identity",
    "IDENTITY_EXTRACTION_PROMPT",
    "MAX_PHOTO_SIZE",
    "IdentityServiceError",
    "PhotoValidationError",
    "MissingPayload",
    "InvalidFormat",
    "PayloadTooLarge",
    "IdentityExtractionError",
    "MissingCredential",
    "TransportError",
    "EmptyResponse",
    "MalformedExtraction",
]


# =============================================================================
# IdentityExtractor Class
# =============================================================================


class IdentityExtractor:
    """
    Extracts identity fields from photos with an OpenAI vision model.

    Holds its configuration explicitly so callers and tests decide which
    credential, model and client are used.
    """

    def __init__(
        self,
        api_key: str | None,
        model: str = DEFAULT_MODEL,
        base_url: str | None = None,
        client: AsyncOpenAI | None = None,
    ):
        """
        Initialize the extractor.

        Args:
            api_key: OpenAI API key. A missing key fails at extraction time.
            model: OpenAI model to use (must support vision).
            base_url: Alternative API base URL.
            client: Pre-built AsyncOpenAI client, mainly for tests.
        """
        self.api_key = api_key
        self.model = model
        self.base_url = base_url
        self.client = client

    @classmethod
    def from_settings(cls, settings: Settings) -> "IdentityExtractor":
        return cls(
            api_key=settings.openai_api_key,
            model=settings.openai_model,
            base_url=settings.openai_base_url,
        )

    async def extract(self, payload: ImagePayload) -> ExtractedIdentity:
        """Extract identity fields from a validated photo."""
        return await extract_identity(
            payload,
            api_key=self.api_key,
            model=self.model,
            client=self.client,
            base_url=self.base_url,
        )


def get_identity_extractor(
    settings: Settings = Depends(get_settings),
) -> IdentityExtractor:
    """Build an extractor from the current settings (FastAPI dependency)."""
    return IdentityExtractor.from_settings(settings)


# =============================================================================
# Pipeline
# =============================================================================


async def process_photo(
    photo: str | None,
    extractor: IdentityExtractor,
    max_size: int = MAX_PHOTO_SIZE,
) -> PhotoUploadResponse:
    """
    Validate a photo data URL and extract the identity it shows.

    Args:
        photo: Submitted data URL.
        extractor: Extractor used once the photo is accepted.
        max_size: Largest accepted decoded size in bytes.

    Returns:
        PhotoUploadResponse with the suggested file name, size and fields.

    Raises:
        PhotoValidationError: If the photo is rejected. Nothing is sent upstream.
        IdentityExtractionError: If extraction fails.
    """
    payload = validate_photo(photo, max_size=max_size)

    logger.info(
        "Photo received: type=%s size=%d base64_length=%d",
        payload.mime_type,
        payload.size_bytes,
        len(payload.raw_base64),
    )

    identity = await extractor.extract(payload)

    return PhotoUploadResponse(
        file_name=payload.file_name,
        file_size=payload.size_bytes,
        extracted_data=identity,
    )
