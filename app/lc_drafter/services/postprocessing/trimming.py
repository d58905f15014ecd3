"""
Document boundary cleanup for raw LLM drafts.

Handles:
- Discarding any preamble before the first ``:27:`` tag
- Removing trailing markdown code fences left by the model
"""

import re

from .mt700 import START_TAG

# First :27: occurrence through end of string
_DOCUMENT_START = re.compile(rf":{START_TAG}:[\s\S]*")

# Three or more backticks, optionally followed by whitespace, at end of text
_TRAILING_FENCE = re.compile(r"`{3,}\s*$")


def trim_to_document_start(text: str) -> str:
    """
    Drop everything before the first ``:27:`` tag.

    If no ``:27:`` tag is present the text is returned unchanged, on the
    assumption that the model already produced a clean start. Content after
    ``:72Z:`` is not removed.
    """
    match = _DOCUMENT_START.search(text)
    if match is None:
        return text
    return match.group(0)


def strip_trailing_fences(text: str) -> str:
    """Remove a trailing run of backticks and any trailing whitespace."""
    return _TRAILING_FENCE.sub("", text).rstrip()
