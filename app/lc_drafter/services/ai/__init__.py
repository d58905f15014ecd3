"""
AI service package for documentary credit drafting.

This package provides modular AI functionality split into:
- extraction: PDF to text extraction
- generation: MT700 draft generation
- resilience: timeout racing and retry with backoff

The DraftingService class ties these together with the configured time
budgets and runs generated drafts through the post-processing pipeline.
"""

import logging
from typing import Any

from ...config import Settings, get_settings
from ..postprocessing import postprocess_draft
from .exceptions import AIServiceError, AITimeoutError, RetryExhaustedError
from .extraction import EXTRACTION_PROMPT, extract_pdf_text
from .generation import build_generation_prompt, generate_raw_draft
from .resilience import RetryOutcome, backoff_delay, retry_with_backoff, run_with_timeout

logger = logging.getLogger(__name__)

__all__ = [
    "AIServiceError",
    "AITimeoutError",
    "DraftingService",
    "EXTRACTION_PROMPT",
    "RetryExhaustedError",
    "RetryOutcome",
    "backoff_delay",
    "build_generation_prompt",
    "extract_pdf_text",
    "generate_raw_draft",
    "get_drafting_service",
    "retry_with_backoff",
    "run_with_timeout",
]

EXTRACTION_STAGE = "extraction"
GENERATION_STAGE = "generation"


# =============================================================================
# Mock Responses
# =============================================================================

MOCK_EXTRACTED_TEXT = """APPLICANT: MOCK IMPORTS LLC, 1 MARKET STREET, DUBAI, UAE
BENEFICIARY: MOCK EXPORTS LTD, 2 FACTORY ROAD, SHENZHEN, CHINA
AMOUNT: USD 25,000.00
EXPIRY: 2025-06-30 IN CHINA
PAYMENT TERMS: AT SIGHT BY NEGOTIATION
PARTIAL SHIPMENTS: NOT ALLOWED
TRANSHIPMENT: ALLOWED
DOCUMENTS: COMMERCIAL INVOICE, PACKING LIST, BILL OF LADING"""

MOCK_RAW_DRAFT = """Here is the documentary credit draft:
```
:27:1/1
:40A:IRREVOCABLE
:20:MOCK-LC-001
:31C:2025-01-14
:40E:UCP LATEST VERSION
:31D:250630 IN CHINA
:50:MOCK IMPORTS LLC
.1 MARKET STREET, DUBAI, UAE
:59:MOCK EXPORTS LTD
.2 FACTORY ROAD, SHENZHEN, CHINA
:32B:USD25000.00
:41D:ANY BANK BY NEGOTIATION
:42C:AT SIGHT
:43P:NOT ALLOWED
:43T:ALLOWED
:46A:1. COMMERCIAL INVOICE

.2. PACKING LIST

.3. BILL OF LADING
:47A:DEVELOPMENT MODE: MOCK DRAFT
:71D:ALL CHARGES OUTSIDE ISSUING BANK FOR BENEFICIARY
:48:21 DAYS
:49:CONFIRM
:72Z:SUBJECT TO UCP 600
```"""


# =============================================================================
# DraftingService Class
# =============================================================================


class DraftingService:
    """
    Service for LLM-backed documentary credit drafting.

    Wraps the two outbound model calls:
    - PDF text extraction (timeout + bounded retry with exponential backoff)
    - MT700 draft generation (timeout, single attempt)

    Configuration is injected through a Settings instance; the service never
    reads the environment itself.
    """

    def __init__(self, settings: Settings, client: Any | None = None):
        """
        Initialize the drafting service.

        Args:
            settings: Application settings (API key, model, time budgets).
            client: Optional pre-built AsyncOpenAI-compatible client. When given
                it is used as-is, even without an API key.
        """
        self.settings = settings
        self.model = settings.openai_model
        self._client = client
        self.use_mock = client is None and not settings.openai_api_key

        if self.use_mock:
            logger.warning(
                "Drafting service running in MOCK MODE. Set OPENAI_API_KEY in .env for real drafting."
            )

    @property
    def client(self):
        """Lazy-load the OpenAI client."""
        if self._client is None:
            if not self.settings.openai_api_key:
                raise AIServiceError(
                    "OpenAI API key not provided. Set OPENAI_API_KEY environment variable."
                )
            from openai import AsyncOpenAI

            # Retries are handled by this service, not the SDK
            self._client = AsyncOpenAI(api_key=self.settings.openai_api_key, max_retries=0)
        return self._client

    async def extract_text(self, pdf_bytes: bytes, filename: str = "document.pdf") -> str:
        """
        Extract text from a PDF with timeout and retry.

        Args:
            pdf_bytes: Raw PDF content (already validated by the caller).
            filename: Original filename, for logging and the API.

        Returns:
            Extracted free-form text.

        Raises:
            RetryExhaustedError: If every attempt failed or timed out.
        """
        if self.use_mock:
            logger.info("Extracting text (MOCK MODE) for: %s", filename)
            return MOCK_EXTRACTED_TEXT

        settings = self.settings

        def attempt():
            return run_with_timeout(
                extract_pdf_text(pdf_bytes, self.client, self.model, filename),
                settings.extraction_timeout_seconds,
                EXTRACTION_STAGE,
            )

        outcome = await retry_with_backoff(
            attempt,
            max_retries=settings.extraction_max_retries,
            initial_delay=settings.retry_initial_delay_seconds,
            max_delay=settings.retry_max_delay_seconds,
            description="PDF extraction",
        )
        logger.info("PDF extraction for '%s' completed in %d attempt(s)", filename, outcome.attempts)
        return outcome.value

    async def generate_raw_draft(self, extracted_text: str) -> str:
        """Single generation attempt under the generation timeout; no retry."""
        if self.use_mock:
            logger.info("Generating draft (MOCK MODE)")
            return MOCK_RAW_DRAFT

        return await run_with_timeout(
            generate_raw_draft(extracted_text, self.client, self.model),
            self.settings.generation_timeout_seconds,
            GENERATION_STAGE,
        )

    async def generate_draft(self, extracted_text: str) -> str:
        """
        Generate the final MT700 draft for extracted text.

        The raw model output is passed through the post-processing pipeline,
        which never raises.

        Raises:
            AITimeoutError: If generation exceeds its time budget.
            AIServiceError: If the model call fails.
        """
        raw_draft = await self.generate_raw_draft(extracted_text)
        return postprocess_draft(raw_draft)


# =============================================================================
# Singleton Factory
# =============================================================================

_drafting_service: DraftingService | None = None


def get_drafting_service() -> DraftingService:
    """Get or create the drafting service singleton."""
    global _drafting_service
    if _drafting_service is None:
        _drafting_service = DraftingService(get_settings())
    return _drafting_service
