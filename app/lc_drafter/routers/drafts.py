"""
Router for MT700 draft endpoints.

Handles:
- Draft generation from extracted text
- Plain-text download of a finished draft
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import PlainTextResponse

from ..errors import safe_error_message
from ..models import (
    DownloadDraftRequest,
    ErrorResponse,
    GenerateDraftRequest,
    GenerateDraftResponse,
)
from ..services.ai import AIServiceError, DraftingService, get_drafting_service
from ..services.export import format_draft_for_export, sanitize_export_filename

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api",
    tags=["drafts"],
    responses={
        400: {"model": ErrorResponse, "description": "Validation error"},
        500: {"model": ErrorResponse, "description": "Unexpected error"},
    },
)


@router.post(
    "/generate-draft",
    response_model=GenerateDraftResponse,
    responses={408: {"model": ErrorResponse, "description": "Generation timed out"}},
)
async def generate_draft(
    request: GenerateDraftRequest,
    drafting_service: Annotated[DraftingService, Depends(get_drafting_service)],
) -> GenerateDraftResponse:
    """
    Generate a documentary credit draft in MT700 format.

    The model's raw output is post-processed before it is returned, so field
    formats and fixed values are always enforced.
    """
    extracted_text = (request.extracted_text or "").strip()
    if not extracted_text:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="No extracted text provided",
        )

    try:
        draft_text = await drafting_service.generate_draft(extracted_text)
    except AIServiceError:
        raise
    except Exception as e:
        logger.exception("Unexpected error generating draft")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=safe_error_message(e, "Failed to generate documentary credit draft"),
        )

    logger.info("Generated draft of %d characters", len(draft_text))
    return GenerateDraftResponse(draft_text=draft_text)


@router.post("/download-draft", response_class=PlainTextResponse)
async def download_draft(request: DownloadDraftRequest) -> PlainTextResponse:
    """Return a draft as a formatted text file attachment."""
    if not request.draft_text or not request.draft_text.strip():
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="No draft text provided",
        )

    filename = sanitize_export_filename(request.file_name)
    return PlainTextResponse(
        content=format_draft_for_export(request.draft_text),
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
