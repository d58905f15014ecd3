"""
MT700 field catalogue and tag-based segmentation.

A draft is treated as a sequence of segments, each one starting at a line of the
form ``:<TAG>:`` and running up to (not including) the next tag line.
"""

import re

# =============================================================================
# Field Catalogue
# =============================================================================

# Canonical MT700 field order as produced by the generation prompt.
FIELD_CATALOGUE: dict[str, str] = {
    "27": "Sequence of Total",
    "40A": "Form of Documentary Credit",
    "20": "Documentary Credit Number",
    "31C": "Date of Issue",
    "40E": "Applicable Rules",
    "31D": "Date and Place of Expiry",
    "50": "Applicant",
    "59": "Beneficiary",
    "32B": "Currency Code, Amount",
    "41D": "Available With ... By ...",
    "42C": "Drafts at ...",
    "42A": "Drawee",
    "43P": "Partial Shipments",
    "43T": "Transhipment",
    "44A": "Place of Taking in Charge/Dispatch from .../Place of Receipt",
    "44B": "Place of Final Destination/For Transportation to .../Place of Delivery",
    "44C": "Latest Date of Shipment",
    "45A": "Description of Goods and/or Services",
    "46A": "Documents Required",
    "47A": "Additional Conditions",
    "71D": "Charges",
    "48": "Period for Presentation in Days",
    "49": "Confirmation Instructions",
    "78": "Instructions to the Paying/Accepting/Negotiating Bank",
    "72Z": "Sender to Receiver Information",
}

START_TAG = "27"

TAG_LINE_PATTERN = re.compile(r"^:(\d{2}[A-Z]?):", re.MULTILINE)

# Zero-width split point in front of every tag line
_SEGMENT_BOUNDARY = re.compile(r"(?=^:\d{2}[A-Z]?:)", re.MULTILINE)


def split_segments(text: str) -> list[str]:
    """
    Split a draft into tag-delimited segments.

    Joining the returned segments with ``""`` reproduces ``text`` exactly.
    """
    return [segment for segment in _SEGMENT_BOUNDARY.split(text) if segment]


def segment_tag(segment: str) -> str | None:
    """Return the tag a segment starts with, or None for untagged text."""
    match = TAG_LINE_PATTERN.match(segment)
    return match.group(1) if match else None


def segment_body(segment: str) -> str:
    """Return the segment text after its ``:TAG:`` marker, without trailing newlines."""
    match = TAG_LINE_PATTERN.match(segment)
    body = segment[match.end():] if match else segment
    return body.rstrip("\r\n")
