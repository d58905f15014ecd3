"""
PDF upload validation and inspection.

Validates uploaded PDF bytes before they are sent to the model and reads the
page count with pdf2image (poppler) for logging and the API response.
"""

import logging
from typing import BinaryIO

logger = logging.getLogger(__name__)

DEFAULT_MAX_BYTES = 15 * 1024 * 1024


def _format_size(num_bytes: int) -> str:
    if num_bytes >= 1024 * 1024 and num_bytes % (1024 * 1024) == 0:
        return f"{num_bytes // (1024 * 1024)}MB"
    return f"{num_bytes} byte"


class PDFValidationError(Exception):
    """Raised when an uploaded file is not an acceptable PDF."""

    pass


class PDFService:
    """
    Service for PDF upload checks.

    Uses pdf2image (backed by poppler) to inspect PDF metadata.
    """

    def __init__(self, max_bytes: int = DEFAULT_MAX_BYTES):
        """
        Initialize the PDF service.

        Args:
            max_bytes: Largest accepted upload, in bytes.
        """
        self.max_bytes = max_bytes

    @staticmethod
    def _read_bytes(file_bytes: bytes | BinaryIO) -> bytes:
        if hasattr(file_bytes, "read"):
            return file_bytes.read()
        return file_bytes

    @staticmethod
    def is_pdf_content_type(content_type: str | None) -> bool:
        """Whether a declared MIME type names a PDF."""
        return bool(content_type) and "pdf" in content_type.lower()

    def validate_pdf(self, file_bytes: bytes | BinaryIO) -> bytes:
        """
        Check that uploaded bytes are a PDF within the size limit and not empty.

        Args:
            file_bytes: PDF file as bytes or file-like object.

        Returns:
            The PDF bytes.

        Raises:
            PDFValidationError: If the file is too large, empty, or lacks a PDF header.
        """
        pdf_bytes = self._read_bytes(file_bytes)

        if len(pdf_bytes) > self.max_bytes:
            raise PDFValidationError(f"File size exceeds the {_format_size(self.max_bytes)} limit")

        if not pdf_bytes:
            raise PDFValidationError("Empty PDF file provided")

        # Validate PDF magic bytes
        if not pdf_bytes[:4] == b"%PDF":
            raise PDFValidationError("Invalid PDF file: does not start with PDF header")

        return pdf_bytes

    def get_page_count(self, file_bytes: bytes | BinaryIO) -> int | None:
        """
        Get the total number of pages in a PDF.

        Args:
            file_bytes: PDF file as bytes or file-like object.

        Returns:
            Number of pages, or None if it could not be determined
            (for example when poppler is not installed).
        """
        from pdf2image import pdfinfo_from_bytes

        pdf_bytes = self._read_bytes(file_bytes)

        try:
            info = pdfinfo_from_bytes(pdf_bytes)
            return int(info.get("Pages", 0)) or None
        except Exception as e:
            logger.warning("Could not get page count: %s", e)
            return None


# =============================================================================
# Singleton Factory
# =============================================================================

_pdf_service: PDFService | None = None


def get_pdf_service() -> PDFService:
    """Get or create the PDF service singleton."""
    global _pdf_service
    if _pdf_service is None:
        from ..config import get_settings

        _pdf_service = PDFService(max_bytes=get_settings().max_upload_bytes)
    return _pdf_service
