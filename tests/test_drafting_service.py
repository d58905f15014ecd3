"""Tests for the drafting service with fake OpenAI clients."""

import pytest

from app.lc_drafter.services.ai import (
    EXTRACTION_PROMPT,
    MOCK_EXTRACTED_TEXT,
    AIServiceError,
    AITimeoutError,
    DraftingService,
    RetryExhaustedError,
    build_generation_prompt,
)


class TestDraftingServiceInit:
    """Tests for DraftingService configuration."""

    def test_mock_mode_without_api_key(self, make_settings):
        """Test the service falls back to mock mode without an API key."""
        service = DraftingService(make_settings())
        assert service.use_mock is True

    def test_real_mode_with_api_key(self, make_settings):
        """Test an API key disables mock mode and sets the model."""
        service = DraftingService(make_settings(openai_api_key="sk-test", openai_model="gpt-4o"))
        assert service.use_mock is False
        assert service.model == "gpt-4o"

    def test_injected_client_is_used(self, make_settings, make_fake_client):
        """Test an injected client bypasses mock mode even without a key."""
        fake = make_fake_client([])
        service = DraftingService(make_settings(), client=fake)
        assert service.use_mock is False
        assert service.client is fake

    def test_client_requires_api_key(self, make_settings):
        """Test accessing the client without a key raises AIServiceError."""
        service = DraftingService(make_settings())
        with pytest.raises(AIServiceError, match="API key"):
            _ = service.client


class TestExtractText:
    """Tests for PDF text extraction with retry."""

    @pytest.mark.asyncio
    async def test_sends_pdf_as_file_part(self, make_settings, make_fake_client, sample_pdf_bytes):
        """Test the PDF is sent as a base64 file part with the extraction prompt."""
        fake = make_fake_client(["APPLICANT: ACME"])
        service = DraftingService(make_settings(), client=fake)

        text = await service.extract_text(sample_pdf_bytes, "lc.pdf")

        assert text == "APPLICANT: ACME"
        assert len(fake.calls) == 1
        content = fake.calls[0]["messages"][0]["content"]
        assert content[0] == {"type": "text", "text": EXTRACTION_PROMPT}
        assert content[1]["type"] == "file"
        assert content[1]["file"]["filename"] == "lc.pdf"
        assert content[1]["file"]["file_data"].startswith("data:application/pdf;base64,")

    @pytest.mark.asyncio
    async def test_retries_until_success(self, make_settings, make_fake_client, sample_pdf_bytes):
        """Test two failures then a success returns the third attempt's text."""
        fake = make_fake_client([RuntimeError("503"), RuntimeError("502"), "EXTRACTED"])
        service = DraftingService(make_settings(), client=fake)

        assert await service.extract_text(sample_pdf_bytes) == "EXTRACTED"
        assert len(fake.calls) == 3

    @pytest.mark.asyncio
    async def test_fails_after_three_attempts(self, make_settings, make_fake_client, sample_pdf_bytes):
        """Test persistent failures raise with attempt count and last error."""
        fake = make_fake_client([RuntimeError("e1"), RuntimeError("e2"), RuntimeError("e3")])
        service = DraftingService(make_settings(), client=fake)

        with pytest.raises(RetryExhaustedError) as exc_info:
            await service.extract_text(sample_pdf_bytes)

        assert "3 attempts" in str(exc_info.value)
        assert "e3" in str(exc_info.value)
        assert len(fake.calls) == 3

    @pytest.mark.asyncio
    async def test_empty_response_is_retried(self, make_settings, make_fake_client, sample_pdf_bytes):
        """Test an empty model response counts as a failed attempt."""
        fake = make_fake_client(["", "   ", "TEXT"])
        service = DraftingService(make_settings(), client=fake)

        assert await service.extract_text(sample_pdf_bytes) == "TEXT"
        assert len(fake.calls) == 3

    @pytest.mark.asyncio
    async def test_timeouts_exhaust_retries(self, make_settings, make_fake_client, hang, sample_pdf_bytes):
        """Test attempts that all time out end in a timed-out retry error."""
        fake = make_fake_client([hang(), hang(), hang()])
        service = DraftingService(make_settings(extraction_timeout_seconds=0.02), client=fake)

        with pytest.raises(RetryExhaustedError) as exc_info:
            await service.extract_text(sample_pdf_bytes)

        assert exc_info.value.timed_out
        assert len(fake.calls) == 3

    @pytest.mark.asyncio
    async def test_configured_retry_count(self, make_settings, make_fake_client, sample_pdf_bytes):
        """Test extraction_max_retries controls the number of attempts."""
        fake = make_fake_client([RuntimeError("down")])
        service = DraftingService(make_settings(extraction_max_retries=0), client=fake)

        with pytest.raises(RetryExhaustedError) as exc_info:
            await service.extract_text(sample_pdf_bytes)
        assert exc_info.value.attempts == 1

    @pytest.mark.asyncio
    async def test_mock_mode(self, mock_drafting_service, sample_pdf_bytes):
        """Test mock mode returns canned text."""
        assert await mock_drafting_service.extract_text(sample_pdf_bytes) == MOCK_EXTRACTED_TEXT


class TestGenerateDraft:
    """Tests for draft generation."""

    @pytest.mark.asyncio
    async def test_generated_draft_is_post_processed(self, make_settings, make_fake_client, raw_llm_draft):
        """Test the raw model draft is run through the pipeline."""
        fake = make_fake_client([raw_llm_draft])
        service = DraftingService(make_settings(), client=fake)

        draft = await service.generate_draft("APPLICANT: ACME")

        assert draft.startswith(":27:1/1")
        assert ":20:INPUT THE LC NUMBER HERE" in draft
        assert ":31C:250114" in draft
        assert ":49:WITHOUT" in draft
        assert "```" not in draft

    @pytest.mark.asyncio
    async def test_prompt_embeds_extracted_text(self, make_settings, make_fake_client):
        """Test the user prompt contains the extracted text and field catalogue."""
        fake = make_fake_client([":27:1/1"])
        service = DraftingService(make_settings(), client=fake)

        await service.generate_draft("BENEFICIARY: XYZ LTD")

        user_prompt = fake.calls[0]["messages"][1]["content"]
        assert user_prompt == build_generation_prompt("BENEFICIARY: XYZ LTD")
        assert "BENEFICIARY: XYZ LTD" in user_prompt
        assert ":46A: Documents Required" in user_prompt

    @pytest.mark.asyncio
    async def test_no_retry_on_failure(self, make_settings, make_fake_client):
        """Test a single failed attempt fails generation."""
        fake = make_fake_client([RuntimeError("overloaded"), ":27:1/1"])
        service = DraftingService(make_settings(), client=fake)

        with pytest.raises(AIServiceError, match="overloaded"):
            await service.generate_draft("text")
        assert len(fake.calls) == 1

    @pytest.mark.asyncio
    async def test_timeout(self, make_settings, make_fake_client, hang):
        """Test generation beyond its budget raises a generation timeout."""
        fake = make_fake_client([hang()])
        service = DraftingService(make_settings(generation_timeout_seconds=0.02), client=fake)

        with pytest.raises(AITimeoutError) as exc_info:
            await service.generate_draft("text")
        assert exc_info.value.stage == "generation"

    @pytest.mark.asyncio
    async def test_empty_response(self, make_settings, make_fake_client):
        """Test an empty generation response is an error."""
        service = DraftingService(make_settings(), client=make_fake_client([""]))
        with pytest.raises(AIServiceError, match="Empty response"):
            await service.generate_draft("text")

    @pytest.mark.asyncio
    async def test_mock_mode_draft(self, mock_drafting_service):
        """Test the mock draft flows through post-processing."""
        draft = await mock_drafting_service.generate_draft("anything")

        assert draft.startswith(":27:1/1")
        assert ":20:INPUT THE LC NUMBER HERE" in draft
        assert ":32B:USD25000,00" in draft
        assert ":43P:PROHIBITED" in draft
        assert ":46A:1. COMMERCIAL INVOICE\n.\n2. PACKING LIST" in draft
        assert ":49:WITHOUT" in draft
        assert draft.endswith(":72Z:SUBJECT TO UCP 600")
