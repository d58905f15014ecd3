"""
Plain-text export of documentary credit drafts.

Lays out a draft for download: section headers are spaced and underlined,
blank lines are dropped and a UCP 600 footer is appended.
"""

import re

DEFAULT_EXPORT_FILENAME = "documentary-credit-draft.txt"

UCP_600_FOOTER = (
    "-" * 40
    + "\n"
    + "This Documentary Credit is subject to the Uniform Customs and Practice\n"
    + "for Documentary Credits, 2007 Revision, ICC Publication No. 600\n"
)

_HEADER_PATTERN = re.compile(r"^[A-Z\s]{3,}:?$")
_TAG_LINE_PATTERN = re.compile(r"^:\d{2}[A-Z]?:")


def is_section_header(line: str) -> bool:
    """All-caps lines and lines ending in ':' are headers; MT700 tag lines are not."""
    if _TAG_LINE_PATTERN.match(line):
        return False
    return bool(_HEADER_PATTERN.match(line)) or line.endswith(":")


def format_draft_for_export(content: str) -> str:
    """
    Lay out draft text for a downloadable text file.

    Args:
        content: Final draft text.

    Returns:
        Formatted text ending with the UCP 600 footer.
    """
    formatted = ""
    for line in content.split("\n"):
        stripped = line.strip()
        if not stripped:
            continue
        if is_section_header(stripped):
            formatted += "\n" + stripped + "\n"
            formatted += "=" * len(stripped) + "\n"
        else:
            formatted += stripped + "\n"

    formatted += "\n\n"
    formatted += UCP_600_FOOTER
    return formatted


def sanitize_export_filename(filename: str | None) -> str:
    """Restrict a requested file name to safe characters and a .txt suffix."""
    if not filename:
        return DEFAULT_EXPORT_FILENAME

    name = re.sub(r"[^A-Za-z0-9._-]", "_", filename.strip()).strip("._")
    if not name:
        return DEFAULT_EXPORT_FILENAME
    if not name.lower().endswith(".txt"):
        name += ".txt"
    return name
