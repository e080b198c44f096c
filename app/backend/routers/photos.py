"""
Router for ID photo upload and identity extraction.

Handles:
- Captured photo upload (data URL form field) with identity extraction
"""

import logging

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

# Handle both package imports and standalone imports
try:
    from ..config import Settings, get_settings
    from ..models import ErrorResponse, PhotoUploadResponse
    from ..services.identity import (
        IdentityExtractor,
        IdentityServiceError,
        InvalidFormat,
        PayloadTooLarge,
        get_identity_extractor,
        process_photo,
    )
except ImportError:
    from config import Settings, get_settings
    from models import ErrorResponse, PhotoUploadResponse
    from services.identity import (
        IdentityExtractor,
        IdentityServiceError,
        InvalidFormat,
        PayloadTooLarge,
        get_identity_extractor,
        process_photo,
    )

logger = logging.getLogger(__name__)

router = APIRouter(prefix="", tags=["photos"])

PHOTO_FIELD = "photo"


@router.post(
    "/upload-photo",
    response_model=PhotoUploadResponse,
    responses={
        status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse},
        status.HTTP_500_INTERNAL_SERVER_ERROR: {"model": ErrorResponse},
    },
)
async def upload_photo(
    request: Request,
    settings: Settings = Depends(get_settings),
    extractor: IdentityExtractor = Depends(get_identity_extractor),
):
    """
    Upload a captured ID photo and extract the holder's identity.

    Expects a form field ``photo`` holding a ``data:image/...;base64,...``
    string. Returns the suggested file name, the estimated size and the
    extracted first name, last name, ID number and serial number.
    """
    try:
        form = await request.form(max_part_size=settings.max_form_part_size)
    except StarletteHTTPException as e:
        logger.info("Could not parse photo form: %s", e.detail)
        # Starlette reports multipart errors as HTTP 400 with a text detail
        if "maximum size" in str(e.detail):
            raise PayloadTooLarge(None, settings.max_photo_size_bytes) from e
        raise InvalidFormat() from e

    try:
        photo = form.get(PHOTO_FIELD)
        if photo is not None and not isinstance(photo, str):
            raise InvalidFormat()

        return await process_photo(
            photo,
            extractor,
            max_size=settings.max_photo_size_bytes,
        )
    except IdentityServiceError:
        raise
    except Exception:
        logger.exception("Error uploading photo")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=ErrorResponse(error="Failed to upload photo").model_dump(),
        )
    finally:
        await form.close()
