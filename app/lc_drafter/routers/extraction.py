"""
Router for PDF text extraction.

Handles:
- PDF upload validation (presence, MIME type, size, header)
- Text extraction through the drafting service
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile, status

from ..errors import safe_error_message
from ..models import ErrorResponse, ExtractPdfResponse
from ..services.ai import AIServiceError, DraftingService, get_drafting_service
from ..services.pdf_service import PDFService, PDFValidationError, get_pdf_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["extraction"])


@router.post(
    "/extract-pdf",
    response_model=ExtractPdfResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Missing, non-PDF, empty or oversized file"},
        408: {"model": ErrorResponse, "description": "Extraction timed out"},
        500: {"model": ErrorResponse, "description": "Extraction failed"},
    },
)
async def extract_pdf(
    drafting_service: Annotated[DraftingService, Depends(get_drafting_service)],
    pdf_service: Annotated[PDFService, Depends(get_pdf_service)],
    file: Annotated[UploadFile | None, File(description="PDF file to extract")] = None,
) -> ExtractPdfResponse:
    """
    Extract text from an uploaded trade-finance PDF.

    Timeouts surface as 408 and exhausted retries as 408/500 through the
    application exception handlers.
    """
    if file is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="No file provided",
        )

    try:
        if not pdf_service.is_pdf_content_type(file.content_type):
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="File must be a PDF",
            )

        try:
            pdf_bytes = pdf_service.validate_pdf(await file.read())
        except PDFValidationError as e:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=str(e),
            )

        filename = file.filename or "document.pdf"
        page_count = pdf_service.get_page_count(pdf_bytes)
        logger.info(
            "Processing PDF: %s (%d bytes, %s pages)",
            filename,
            len(pdf_bytes),
            page_count if page_count is not None else "unknown",
        )

        extracted_text = await drafting_service.extract_text(pdf_bytes, filename)
        return ExtractPdfResponse(extracted_text=extracted_text, page_count=page_count)

    except (HTTPException, AIServiceError):
        raise
    except Exception as e:
        logger.exception("Unexpected error processing PDF")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=safe_error_message(e, "Failed to process PDF"),
        )
    finally:
        await file.close()
