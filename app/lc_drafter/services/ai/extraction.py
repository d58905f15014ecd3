"""
PDF text extraction for trade-finance documents.

Sends the raw PDF to the model as a file content part and returns the
free-form text it extracts. Timeouts and retries are applied by the caller.
"""

import base64
import logging
from typing import Any

from .exceptions import AIServiceError

logger = logging.getLogger(__name__)


# =============================================================================
# Extraction Prompt
# =============================================================================

EXTRACTION_PROMPT = """Extract all text from this PDF document. This document contains information for a documentary credit (Letter of Credit) following UCP 600 guidelines.

Extract all fields and data, including:
- Applicant and beneficiary details (names and full addresses)
- Issuing, advising and confirming bank details
- Amount and currency, including any tolerance
- Date and place of expiry
- Payment terms (sight, usance, deferred payment, negotiation)
- Required documents
- Shipment details (ports, places of dispatch and delivery, latest shipment date, partial shipments, transhipment)
- Description of goods and/or services, including Incoterms
- Charges, period for presentation and confirmation instructions
- Any additional conditions or instructions

Format the extracted data clearly with appropriate labels for each field.
Do not invent values that are not present in the document."""


def _pdf_to_data_url(pdf_bytes: bytes) -> str:
    """Encode PDF bytes as a base64 data URL for the API."""
    encoded = base64.b64encode(pdf_bytes).decode("utf-8")
    return f"data:application/pdf;base64,{encoded}"


def _build_extraction_messages(pdf_bytes: bytes, filename: str) -> list[dict[str, Any]]:
    return [
        {
            "role": "user",
            "content": [
                {"type": "text", "text": EXTRACTION_PROMPT},
                {
                    "type": "file",
                    "file": {
                        "filename": filename,
                        "file_data": _pdf_to_data_url(pdf_bytes),
                    },
                },
            ],
        }
    ]


async def extract_pdf_text(
    pdf_bytes: bytes,
    client: Any,  # AsyncOpenAI client
    model: str = "gpt-4.1",
    filename: str = "document.pdf",
) -> str:
    """
    Extract free-form text from a PDF in a single model call.

    Args:
        pdf_bytes: Raw PDF content.
        client: AsyncOpenAI client instance.
        model: Model name to use (must accept PDF file input).
        filename: Original filename, passed through to the API.

    Returns:
        Extracted text.

    Raises:
        AIServiceError: If the call fails or the model returns no text.
    """
    logger.info("Extracting text from '%s' (%d bytes) with %s", filename, len(pdf_bytes), model)

    try:
        response = await client.chat.completions.create(
            model=model,
            messages=_build_extraction_messages(pdf_bytes, filename),
        )
    except Exception as e:
        raise AIServiceError(f"PDF extraction failed: {e}") from e

    content = response.choices[0].message.content
    if not content or not content.strip():
        raise AIServiceError("Empty response from model during PDF extraction")

    logger.info("Extracted %d characters from '%s'", len(content), filename)
    return content
