"""
Continuation-line normalization for MT700 drafts.

The long narrative fields 46A and 47A mark blank lines in their body with a
lone ``.``; every other field carries no dot markers at all.
"""

import re

from .mt700 import segment_tag, split_segments
from .trimming import strip_trailing_fences

DOTTED_FIELDS = frozenset({"46A", "47A"})

BLANK_LINE_MARKER = "."

_LINE_BREAK = re.compile(r"(\r?\n)")

# Run of blank or whitespace-only lines closing a segment
_TRAILING_BLANK_LINES = re.compile(r"(?:\r?\n[^\S\r\n]*)+$")


def _strip_one_dot(line: str) -> str:
    return line[1:] if line.startswith(".") else line


def _split_trailing_blank_lines(segment: str) -> tuple[str, str]:
    """Split a segment into its content and the line breaks that close it."""
    match = _TRAILING_BLANK_LINES.search(segment)
    if match is None:
        return segment, ""
    return segment[:match.start()], "".join(_LINE_BREAK.findall(match.group(0)))


def _normalize_dotted_segment(segment: str) -> str:
    content, trailing = _split_trailing_blank_lines(segment)
    parts = _LINE_BREAK.split(content)

    # parts alternates line, break, line, ...; the first line is the tag line
    for i in range(2, len(parts), 2):
        stripped = _strip_one_dot(parts[i].strip()).strip()
        # A lone "." is itself a blank placeholder and stays one
        parts[i] = stripped if stripped else BLANK_LINE_MARKER

    return "".join(parts) + trailing


def _normalize_plain_segment(segment: str) -> str:
    return "\n".join(_strip_one_dot(line) for line in segment.split("\n"))


def normalize_continuation_lines(text: str) -> str:
    """
    Rewrite field bodies into the continuation convention.

    For 46A/47A the tag line is kept verbatim; each later line is trimmed and
    loses one leading dot, and blank lines become ``.``. For every other
    segment one leading dot is stripped from each line and blank lines stay
    blank. Trailing code fences are removed from the result.

    Args:
        text: Draft text after field formatting.

    Returns:
        Normalized draft text.
    """
    normalized = []
    for segment in split_segments(text):
        if segment_tag(segment) in DOTTED_FIELDS:
            normalized.append(_normalize_dotted_segment(segment))
        else:
            normalized.append(_normalize_plain_segment(segment))

    return strip_trailing_fences("".join(normalized))
