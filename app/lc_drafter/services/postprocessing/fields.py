"""
Field-level formatting rules for MT700 drafts.

Each rule is a pure function from a raw field value to a formatted value.
A rule that cannot interpret its input returns None and the field is left
exactly as the model wrote it.
"""

import logging
import re
from typing import Callable

from .mt700 import segment_body, segment_tag, split_segments

logger = logging.getLogger(__name__)


# =============================================================================
# Fixed Values
# =============================================================================

LC_NUMBER_PLACEHOLDER = "INPUT THE LC NUMBER HERE"
PRESENTATION_PERIOD = "21/FROM THE DATE OF SHIPMENT"
CONFIRMATION_INSTRUCTION = "WITHOUT"

SHIPMENT_PROHIBITED = "PROHIBITED"
SHIPMENT_ALLOWED = "ALLOWED"


# =============================================================================
# Rule Functions
# =============================================================================

_AMOUNT_PATTERN = re.compile(r"^([A-Za-z]{3})\s*(\d+)(?:[.,](\d{0,2}))?$")
_PROHIBITED_PATTERN = re.compile(r"PROHIBIT|NOT ALLOW", re.IGNORECASE)


def format_issue_date(value: str) -> str | None:
    """
    Normalize field 31C to YYMMDD.

    All non-digit characters are removed. A four-digit-year date such as
    ``2025-01-14`` loses its century (``250114``); anything else with at least
    six digits keeps its first six.

    Returns:
        The six-digit date, or None if fewer than six digits are present.
    """
    digits = re.sub(r"\D", "", value)
    if len(digits) < 6:
        return None

    if len(digits) == 8 and digits[:2] in ("19", "20"):
        month, day = int(digits[4:6]), int(digits[6:8])
        if 1 <= month <= 12 and 1 <= day <= 31:
            return digits[2:]

    return digits[:6]


def format_amount(value: str) -> str | None:
    """
    Normalize field 32B to ``<CCY><INTEGER>,<FRACTION>``.

    ``USD50000.5`` becomes ``USD50000,50``; a missing fraction becomes ``00``.
    Values with thousands separators, words, or more than two decimals do not
    match and are returned as None.
    """
    match = _AMOUNT_PATTERN.match(value.strip())
    if match is None:
        return None

    currency, integer, fraction = match.groups()
    fraction = (fraction or "").ljust(2, "0")
    return f"{currency.upper()}{integer},{fraction}"


def format_shipment_permission(value: str) -> str:
    """Map fields 43P/43T to PROHIBITED or ALLOWED."""
    if _PROHIBITED_PATTERN.search(value):
        return SHIPMENT_PROHIBITED
    return SHIPMENT_ALLOWED


def _constant(text: str) -> Callable[[str], str]:
    def rule(value: str) -> str:
        return text

    return rule


# Tag -> rule. Tags not listed pass through untouched.
FIELD_RULES: dict[str, Callable[[str], str | None]] = {
    "31C": format_issue_date,
    "32B": format_amount,
    "43P": format_shipment_permission,
    "43T": format_shipment_permission,
    "48": _constant(PRESENTATION_PERIOD),
    # Always WITHOUT, even when the source describes a confirmed credit.
    "49": _constant(CONFIRMATION_INSTRUCTION),
    "20": _constant(LC_NUMBER_PLACEHOLDER),
}


# =============================================================================
# Document-Level Application
# =============================================================================


def _format_segment(segment: str) -> str:
    tag = segment_tag(segment)
    rule = FIELD_RULES.get(tag) if tag else None
    if rule is None:
        return segment

    formatted = rule(segment_body(segment))
    if formatted is None:
        logger.debug("Field %s left unchanged: value did not match its format", tag)
        return segment

    # Preserve the line break that separated this field from the next one
    trailing = segment[len(segment.rstrip("\r\n")):]
    return f":{tag}:{formatted}{trailing}"


def apply_field_rules(text: str) -> str:
    """
    Apply the per-tag formatting rules to every field of a draft.

    A rewritten field collapses to a single ``:TAG:value`` line; its former
    continuation lines are dropped. Fields without a rule, and fields whose
    value a rule cannot interpret, are emitted unchanged.

    Args:
        text: Trimmed draft text.

    Returns:
        Draft text with fixed-value and format rules applied.
    """
    return "".join(_format_segment(segment) for segment in split_segments(text))
