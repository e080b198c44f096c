"""
FastAPI application for the ID photo extraction service.

Provides endpoints for:
- Uploading a captured ID photo and extracting identity fields
- Health checks
"""

import logging

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

# Handle both package imports (when running as module) and standalone imports (uvicorn main:app)
try:
    from .config import get_settings
    from .models import ErrorResponse, HealthResponse
    from .routers import photos
    from .services.identity import IdentityExtractionError, PhotoValidationError
except ImportError:
    import sys
    from pathlib import Path
    # Add parent directory to path for standalone imports
    backend_dir = Path(__file__).parent
    if str(backend_dir) not in sys.path:
        sys.path.insert(0, str(backend_dir))
    from config import get_settings
    from models import ErrorResponse, HealthResponse
    from routers import photos
    from services.identity import IdentityExtractionError, PhotoValidationError

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler for startup/shutdown."""
    logger.info("Starting ID Photo Extraction Service...")
    settings = get_settings()
    if not settings.openai_api_key:
        # Not fatal: the key is checked again for every extraction
        logger.warning(
            "OPENAI_API_KEY is not set. Photo extraction requests will fail until it is configured."
        )
    logger.info("Using model %s", settings.openai_model)
    yield
    logger.info("Shutting down ID Photo Extraction Service...")


# Create FastAPI application
app = FastAPI(
    title="ID Photo Extraction API",
    description="Identity field extraction from captured ID photos using AI",
    version="1.0.0",
    lifespan=lifespan,
)

# Configure CORS for frontend development
app.add_middleware(
    CORSMiddleware,
    allow_origins=get_settings().cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# =============================================================================
# Health Endpoints
# =============================================================================


@app.get("/", response_model=HealthResponse)
async def root() -> HealthResponse:
    """Root endpoint - health check."""
    return HealthResponse(status="healthy")


@app.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Health check endpoint."""
    return HealthResponse(status="healthy")


# =============================================================================
# Include Routers
# =============================================================================

app.include_router(photos.router)


# =============================================================================
# Exception Handlers
# =============================================================================


@app.exception_handler(PhotoValidationError)
async def photo_validation_error_handler(request: Request, exc: PhotoValidationError):
    """Handle rejected photos."""
    logger.info("Photo rejected: %s", exc)
    return JSONResponse(
        status_code=exc.status_code,
        content=ErrorResponse(error=exc.public_message).model_dump(),
    )


@app.exception_handler(IdentityExtractionError)
async def identity_extraction_error_handler(request: Request, exc: IdentityExtractionError):
    """Handle extraction failures. Details are logged, not returned."""
    logger.error("Identity extraction failed (%s): %s", type(exc).__name__, exc)
    return JSONResponse(
        status_code=exc.status_code,
        content=ErrorResponse(error=exc.public_message).model_dump(),
    )


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Return framework HTTP errors (404, 405, ...) in the same error shape."""
    return JSONResponse(
        status_code=exc.status_code,
        content=ErrorResponse(error=str(exc.detail)).model_dump(),
        headers=exc.headers,
    )
