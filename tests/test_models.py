"""Tests for Pydantic models."""

import pytest
from pydantic import ValidationError

from app.backend.models import (
    NOT_FOUND,
    ExtractedIdentity,
    ImagePayload,
    PhotoUploadResponse,
)


class TestImagePayload:
    """Tests for ImagePayload model."""

    def test_derived_names(self):
        """Test MIME type and suggested file name."""
        payload = ImagePayload(
            mime_subtype="png", size_bytes=3, raw_base64="AAAA", data_url="data:image/png;base64,AAAA"
        )
        assert payload.mime_type == "image/png"
        assert payload.file_name == "captured_photo.png"

    def test_repr_hides_image_data(self):
        """Test that the encoded image is kept out of reprs and logs."""
        payload = ImagePayload(
            mime_subtype="png", size_bytes=3, raw_base64="QUJD", data_url="data:image/png;base64,QUJD"
        )
        assert "QUJD" not in repr(payload)

    def test_frozen(self):
        """Test that payloads cannot be modified after validation."""
        payload = ImagePayload(
            mime_subtype="png", size_bytes=3, raw_base64="AAAA", data_url="data:image/png;base64,AAAA"
        )
        with pytest.raises(ValidationError):
            payload.size_bytes = 0

    def test_path_like_subtype_rejected(self):
        """Test that subtypes cannot carry path separators into file_name."""
        with pytest.raises(ValidationError):
            ImagePayload(
                mime_subtype="../x", size_bytes=3, raw_base64="AAAA", data_url="data:image/../x;base64,AAAA"
            )

    def test_negative_size_rejected(self):
        """Test that sizes cannot be negative."""
        with pytest.raises(ValidationError):
            ImagePayload(mime_subtype="png", size_bytes=-1, raw_base64="", data_url="")


class TestExtractedIdentity:
    """Tests for ExtractedIdentity model."""

    def test_accepts_camel_case_keys(self):
        """Test validation from the model's JSON keys."""
        identity = ExtractedIdentity.model_validate(
            {"firstName": "Jane", "lastName": "Doe", "idNumber": "X1", "serialNumber": "S1"}
        )
        assert identity.first_name == "Jane"
        assert identity.serial_number == "S1"

    def test_serializes_with_camel_case_keys(self):
        """Test that API output uses camelCase."""
        identity = ExtractedIdentity(first_name="Jane", id_number=NOT_FOUND)
        assert identity.model_dump(by_alias=True) == {
            "firstName": "Jane",
            "lastName": None,
            "idNumber": "Not Found",
            "serialNumber": None,
        }

    def test_structural_equality(self):
        """Test that records with the same fields are equal."""
        assert ExtractedIdentity(first_name="A") == ExtractedIdentity(firstName="A")
        assert ExtractedIdentity(first_name="A") != ExtractedIdentity(first_name="B")

    def test_missing_fields(self):
        """Test reporting of absent and sentinel fields."""
        identity = ExtractedIdentity(
            first_name="Jane", last_name=NOT_FOUND, id_number="X1"
        )
        assert identity.missing_fields() == ["last_name", "serial_number"]


class TestPhotoUploadResponse:
    """Tests for PhotoUploadResponse model."""

    def test_response_shape(self):
        """Test the JSON keys returned to the front end."""
        response = PhotoUploadResponse(
            file_name="captured_photo.jpeg",
            file_size=300,
            extracted_data=ExtractedIdentity(first_name="Jane"),
        )
        data = response.model_dump(by_alias=True)

        assert data["success"] is True
        assert data["message"] == "Photo processed successfully!"
        assert data["fileName"] == "captured_photo.jpeg"
        assert data["fileSize"] == 300
        assert data["extractedData"]["firstName"] == "Jane"
