"""Pytest configuration and fixtures."""

import asyncio
from types import SimpleNamespace
from typing import Any, Callable, Generator

import pytest
from fastapi.testclient import TestClient

from app.lc_drafter.config import Settings
from app.lc_drafter.main import app
from app.lc_drafter.services.ai import DraftingService, get_drafting_service
from app.lc_drafter.services.pdf_service import PDFService, get_pdf_service


class Hang:
    """Scripted response that sleeps longer than any test timeout."""

    def __init__(self, seconds: float = 5.0):
        self.seconds = seconds


class FakeCompletions:
    """Stand-in for ``client.chat.completions`` replaying scripted results."""

    def __init__(self, results: list[Any]):
        self.results = list(results)
        self.calls: list[dict[str, Any]] = []

    async def create(self, **kwargs: Any) -> Any:
        self.calls.append(kwargs)
        result = self.results.pop(0)
        if isinstance(result, Hang):
            await asyncio.sleep(result.seconds)
            result = "late response"
        if isinstance(result, Exception):
            raise result
        message = SimpleNamespace(content=result)
        return SimpleNamespace(choices=[SimpleNamespace(message=message)])


class FakeOpenAIClient:
    """Minimal AsyncOpenAI look-alike exposing ``chat.completions.create``."""

    def __init__(self, results: list[Any]):
        self.completions = FakeCompletions(results)
        self.chat = SimpleNamespace(completions=self.completions)

    @property
    def calls(self) -> list[dict[str, Any]]:
        return self.completions.calls


@pytest.fixture
def make_settings() -> Callable[..., Settings]:
    """Build isolated settings that ignore the environment's API key and .env file."""

    def _make(**overrides: Any) -> Settings:
        values: dict[str, Any] = {
            "openai_api_key": None,
            "retry_initial_delay_seconds": 0.0,
            "retry_max_delay_seconds": 0.0,
        }
        values.update(overrides)
        return Settings(_env_file=None, **values)

    return _make


@pytest.fixture
def make_fake_client() -> Callable[[list[Any]], FakeOpenAIClient]:
    """Factory for fake OpenAI clients with scripted responses."""
    return FakeOpenAIClient


@pytest.fixture
def hang() -> type[Hang]:
    """Marker type for a response that never arrives in time."""
    return Hang


@pytest.fixture
def mock_drafting_service(make_settings) -> DraftingService:
    """Drafting service in MOCK MODE (no API key, no client)."""
    return DraftingService(make_settings())


@pytest.fixture
def drafting_service_override() -> Generator[Callable[[DraftingService], None], None, None]:
    """Swap the drafting service used by the API for the duration of a test."""

    def _override(service: DraftingService) -> None:
        app.dependency_overrides[get_drafting_service] = lambda: service

    yield _override
    app.dependency_overrides.pop(get_drafting_service, None)


@pytest.fixture
def client(
    mock_drafting_service: DraftingService,
) -> Generator[TestClient, None, None]:
    """Create a test client for the FastAPI application."""
    app.dependency_overrides[get_drafting_service] = lambda: mock_drafting_service
    app.dependency_overrides[get_pdf_service] = lambda: PDFService(max_bytes=4096)
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def sample_pdf_bytes() -> bytes:
    """
    Create a minimal valid PDF for testing.

    This is a minimal PDF structure that should be recognized as a valid PDF.
    """
    # Minimal valid PDF structure
    pdf_content = b"""%PDF-1.4
1 0 obj
<< /Type /Catalog /Pages 2 0 R >>
endobj
2 0 obj
<< /Type /Pages /Kids [3 0 R] /Count 1 >>
endobj
3 0 obj
<< /Type /Page /Parent 2 0 R /MediaBox [0 0 612 792] /Contents 4 0 R >>
endobj
4 0 obj
<< /Length 44 >>
stream
BT
/F1 12 Tf
100 700 Td
(Test) Tj
ET
endstream
endobj
xref
0 5
0000000000 65535 f
0000000009 00000 n
0000000058 00000 n
0000000115 00000 n
0000000214 00000 n
trailer
<< /Size 5 /Root 1 0 R >>
startxref
306
%%EOF"""
    return pdf_content


@pytest.fixture
def invalid_file_bytes() -> bytes:
    """Create invalid (non-PDF) file bytes for testing."""
    return b"This is not a PDF file"


@pytest.fixture
def raw_llm_draft() -> str:
    """Raw model output with preamble, loose formats and a trailing fence."""
    return (
        "Some preamble\n"
        ":27:1/1\n"
        ":20:ABC123\n"
        ":31C:2025-01-14\n"
        ":43P:partial shipment not allowed\n"
        ":49:confirmed\n"
        ":72Z:end```"
    )
