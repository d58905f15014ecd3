"""
FastAPI application for documentary credit drafting.

Provides endpoints for:
- Extracting text from uploaded trade-finance PDFs
- Generating SWIFT MT700 documentary credit drafts
- Downloading drafts as formatted text files

Every error response has the shape ``{"error": "<message>"}``.
"""

import logging

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from . import __version__
from .config import get_settings
from .errors import ai_error_response, safe_error_message
from .models import HealthResponse
from .routers import drafts, extraction
from .services.ai import AIServiceError, get_drafting_service
from .services.pdf_service import get_pdf_service

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler for startup/shutdown."""
    logger.info("Starting Documentary Credit Drafting Service...")
    settings = get_settings()
    if settings.debug:
        logging.getLogger().setLevel(logging.DEBUG)
    # Initialize services on startup
    get_pdf_service()
    get_drafting_service()
    logger.info("Services initialized successfully")
    yield
    logger.info("Shutting down Documentary Credit Drafting Service...")


# Create FastAPI application
app = FastAPI(
    title="Documentary Credit Drafting API",
    description="MT700 documentary credit drafts from trade-finance PDFs",
    version=__version__,
    lifespan=lifespan,
)

# Configure CORS for frontend development
app.add_middleware(
    CORSMiddleware,
    allow_origins=[
        "http://localhost:3000",  # Next.js dev server
        "http://127.0.0.1:3000",
        "http://localhost:5173",  # Vite development server
        "http://127.0.0.1:5173",
    ],
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
    return HealthResponse(
        status="healthy",
        version=__version__,
        message="Documentary Credit Drafting API is running",
    )


@app.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Health check endpoint."""
    return HealthResponse(status="healthy", version=__version__, message="Service is healthy")


# =============================================================================
# Include Routers
# =============================================================================

app.include_router(extraction.router)
app.include_router(drafts.router)


# =============================================================================
# Exception Handlers
# =============================================================================


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Render HTTP errors as {"error": ...}."""
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": safe_error_message(exc.detail, "Request failed")},
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    """Handle malformed request bodies as validation errors (400)."""
    messages = [
        f"{'.'.join(str(part) for part in error.get('loc', ()))}: {error.get('msg', 'invalid')}"
        for error in exc.errors()
    ]
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": "Invalid request: " + "; ".join(messages)},
    )


@app.exception_handler(AIServiceError)
async def ai_service_error_handler(request: Request, exc: AIServiceError):
    """Handle AI service errors: 408 for timeouts, 500 otherwise."""
    status_code, message = ai_error_response(exc)
    logger.error("AI service error (%d): %s", status_code, exc)
    return JSONResponse(status_code=status_code, content={"error": message})


@app.exception_handler(Exception)
async def unexpected_error_handler(request: Request, exc: Exception):
    """Last-resort handler for errors that escaped the routers."""
    logger.exception("Unhandled error")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": safe_error_message(exc, "Internal server error")},
    )
