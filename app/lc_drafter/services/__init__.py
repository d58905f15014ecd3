"""
Services package for the documentary credit drafting application.

Contains:
- pdf_service: PDF upload validation and page counting
- ai: OpenAI integration for text extraction and draft generation
- postprocessing: deterministic MT700 formatting of generated drafts
- export: plain-text layout of drafts for download
"""

from .ai import DraftingService
from .pdf_service import PDFService

__all__ = ["DraftingService", "PDFService"]
