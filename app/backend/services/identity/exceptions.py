"""
Shared exceptions for the identity extraction pipeline.

Validation errors are client mistakes (HTTP 400). Extraction errors come
from configuration or the upstream model API (HTTP 500); their detail is
logged while callers only see ``public_message``.
"""


class IdentityServiceError(Exception):
    """Base class for all pipeline failures."""

    status_code = 500
    public_message = "Failed to upload photo"


# =============================================================================
# Validation
# =============================================================================


def _format_limit(max_size: int) -> str:
    if max_size % (1024 * 1024) == 0:
        return f"{max_size // (1024 * 1024)}MB"
    return f"{max_size} bytes"


class PhotoValidationError(IdentityServiceError):
    """Raised when a submitted photo is rejected before extraction."""

    status_code = 400
    public_message = "Invalid photo"

    def __init__(self, message: str | None = None):
        super().__init__(message or self.public_message)
        self.public_message = message or self.public_message


class MissingPayload(PhotoValidationError):
    public_message = "No photo provided"


class InvalidFormat(PhotoValidationError):
    public_message = "Invalid image data"


class PayloadTooLarge(PhotoValidationError):
    """Raised when the decoded image exceeds the size limit."""

    public_message = "Image size must be less than 10MB"

    def __init__(self, size_bytes: int | None, max_size: int):
        self.size_bytes = size_bytes
        self.max_size = max_size
        super().__init__(f"Image size must be less than {_format_limit(max_size)}")


# =============================================================================
# Extraction
# =============================================================================


class IdentityExtractionError(IdentityServiceError):
    """Raised when identity extraction fails."""

    public_message = "Failed to extract data from photo"


class MissingCredential(IdentityExtractionError):
    public_message = "Extraction service is not configured"


class TransportError(IdentityExtractionError):
    """Raised when the model API answers with a non-2xx status or is unreachable."""

    def __init__(self, status: int | None, status_text: str):
        self.status = status
        self.status_text = status_text
        if status is None:
            super().__init__(f"Model API request failed: {status_text}")
        else:
            super().__init__(f"Model API returned {status} {status_text}")


class EmptyResponse(IdentityExtractionError):
    """Raised when the completion carries no message content."""

    pass


class MalformedExtraction(IdentityExtractionError):
    """Raised when the completion text does not hold a usable JSON object."""

    pass
