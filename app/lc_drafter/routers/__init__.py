"""
Routers package for FastAPI endpoints.

Organized by domain:
- extraction: PDF upload and text extraction
- drafts: MT700 draft generation and download
"""

from . import drafts, extraction

__all__ = ["drafts", "extraction"]
