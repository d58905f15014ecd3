"""
Documentary Credit Drafting Backend Application.

A FastAPI service that extracts trade-finance details from PDF documents and
drafts SWIFT MT700 documentary credits using AI (OpenAI), with deterministic
post-processing of the generated draft.
"""

__version__ = "1.0.0"
