"""
Validation of submitted photos.

Photos arrive as data URLs (``data:image/<subtype>;base64,<data>``). The
validator checks the prefix, estimates the decoded size from the base64
length and enforces the upload limit. It does not decode the image.
"""

import re

# Handle both package imports and standalone imports
try:
    from ...models import ImagePayload
except ImportError:
    from models import ImagePayload

from .exceptions import InvalidFormat, MissingPayload, PayloadTooLarge

MAX_PHOTO_SIZE = 10 * 1024 * 1024  # 10MB

_DATA_URL_RE = re.compile(
    r"data:image/(?P<subtype>[\w.+-]+);(?P<encoding>[^,]+),(?P<data>.*)",
    re.DOTALL,
)
_SUBTYPE_RE = re.compile(r"data:image/([\w.+-]+)")


def estimate_decoded_size(base64_data: str) -> int:
    """
    Estimate the decoded byte size of a base64 string.

    Every 4 encoded characters carry 3 bytes; padding is not subtracted.
    The result is rounded down rather than to the nearest byte, so a
    13,981,014-character payload counts as exactly 10MB (10,485,760) and
    passes the limit, where rounding would give 10,485,761 and reject it.
    """
    return len(base64_data) * 3 // 4


def _parse_subtype(data_url: str) -> str:
    match = _SUBTYPE_RE.match(data_url)
    if match is None:
        return "unknown"
    return match.group(1)


def validate_photo(payload: str | None, max_size: int = MAX_PHOTO_SIZE) -> ImagePayload:
    """
    Validate a photo data URL.

    Args:
        payload: The submitted data URL string.
        max_size: Largest accepted decoded size in bytes (inclusive).

    Returns:
        ImagePayload describing the accepted photo.

    Raises:
        MissingPayload: If nothing was submitted.
        InvalidFormat: If the string is not an image data URL.
        PayloadTooLarge: If the estimated decoded size exceeds ``max_size``.
    """
    if not payload:
        raise MissingPayload()

    match = _DATA_URL_RE.fullmatch(payload)
    if match is None:
        raise InvalidFormat()

    raw_base64 = match.group("data")
    size_bytes = estimate_decoded_size(raw_base64)
    if size_bytes > max_size:
        raise PayloadTooLarge(size_bytes, max_size)

    return ImagePayload(
        mime_subtype=_parse_subtype(payload),
        size_bytes=size_bytes,
        raw_base64=raw_base64,
        data_url=payload,
    )
