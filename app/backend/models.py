"""
Pydantic models for the ID photo extraction pipeline.

Defines the validated image payload, the extracted identity record,
and the request/response shapes of the HTTP API.
"""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

NOT_FOUND = "Not Found"
"""Sentinel the model is asked to return for absent or unreadable fields."""


# =============================================================================
# Pipeline Models
# =============================================================================


class ImagePayload(BaseModel):
    """
    A photo submitted as a data URL that passed validation.

    Attributes:
        mime_subtype: Image subtype parsed from the data URL prefix (e.g. "jpeg").
        size_bytes: Decoded size estimated from the base64 length.
        raw_base64: The encoded image data after the comma.
        data_url: The full data URL, forwarded unchanged to the model.
    """

    model_config = ConfigDict(frozen=True)

    # Restricted to MIME token characters since it ends up in file_name
    mime_subtype: str = Field(
        ..., min_length=1, pattern=r"^[\w.+-]+$", examples=["jpeg", "png"]
    )
    size_bytes: int = Field(..., ge=0)
    raw_base64: str = Field(..., repr=False)
    data_url: str = Field(..., repr=False)

    @property
    def mime_type(self) -> str:
        """Full MIME type, e.g. "image/jpeg"."""
        return f"image/{self.mime_subtype}"

    @property
    def file_name(self) -> str:
        """Suggested file name for the captured photo."""
        return f"captured_photo.{self.mime_subtype}"


class ExtractedIdentity(BaseModel):
    """
    Identity fields read from an ID document photo.

    Each field holds the extracted value or the "Not Found" sentinel.
    Fields the model left out of its answer stay None.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        # ID and serial numbers sometimes come back as JSON numbers
        coerce_numbers_to_str=True,
        extra="ignore",
    )

    first_name: str | None = Field(default=None, description="Given name")
    last_name: str | None = Field(default=None, description="Family name")
    id_number: str | None = Field(default=None, description="Personal ID number")
    serial_number: str | None = Field(
        default=None, description="Serial number of the document itself"
    )

    def missing_fields(self) -> list[str]:
        """Names of fields that are absent or carry the sentinel."""
        return [
            name
            for name, value in self.model_dump().items()
            if value is None or value == NOT_FOUND
        ]


# =============================================================================
# API Response Models
# =============================================================================


class PhotoUploadResponse(BaseModel):
    """Response for a photo that was validated and processed."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    success: bool = True
    message: str = Field(default="Photo processed successfully!")
    file_name: str = Field(..., examples=["captured_photo.jpeg"])
    file_size: int = Field(..., ge=0, description="Estimated decoded size in bytes")
    extracted_data: ExtractedIdentity


class ErrorResponse(BaseModel):
    """Error body returned for rejected uploads."""

    error: str


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = Field(default="healthy")
    version: str = Field(default="1.0.0")
