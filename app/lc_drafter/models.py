"""
Pydantic models for the documentary credit drafting API.

JSON payloads use camelCase keys (``extractedText``, ``draftText``) for the
browser client; Python code may populate models by field name as well.
"""

from pydantic import BaseModel, ConfigDict, Field


class _CamelModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


# =============================================================================
# Extraction
# =============================================================================


class ExtractPdfResponse(_CamelModel):
    """Response after extracting text from an uploaded PDF."""

    extracted_text: str = Field(
        ...,
        alias="extractedText",
        description="Free-form text extracted from the PDF",
    )
    page_count: int | None = Field(
        default=None,
        alias="pageCount",
        ge=1,
        description="Number of pages in the PDF, when it could be determined",
    )


# =============================================================================
# Draft Generation
# =============================================================================


class GenerateDraftRequest(_CamelModel):
    """Request to generate an MT700 draft from extracted text."""

    extracted_text: str | None = Field(
        default=None,
        alias="extractedText",
        description="Text previously returned by /api/extract-pdf",
    )


class GenerateDraftResponse(_CamelModel):
    """Final, post-processed MT700 draft."""

    draft_text: str = Field(
        ...,
        alias="draftText",
        description="MT700 draft after deterministic formatting",
        examples=[":27:1/1\n:40A:IRREVOCABLE\n:20:INPUT THE LC NUMBER HERE"],
    )


class DownloadDraftRequest(_CamelModel):
    """Request to download a draft as a text file."""

    draft_text: str | None = Field(
        default=None,
        alias="draftText",
        description="Draft text to export",
    )
    file_name: str | None = Field(
        default=None,
        alias="fileName",
        max_length=255,
        description="Suggested download file name",
    )


# =============================================================================
# Common
# =============================================================================


class ErrorResponse(BaseModel):
    """Error payload returned for every failed request."""

    error: str = Field(..., description="Human-readable error message")


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = Field(default="healthy")
    version: str = Field(default="1.0.0")
    message: str = Field(default="Service is running")
