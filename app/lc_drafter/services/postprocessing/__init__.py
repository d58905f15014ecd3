"""
Post-processing package for generated MT700 drafts.

This package provides the deterministic rules applied to raw model output:
- mt700: field catalogue and tag segmentation
- trimming: document start detection and code-fence removal
- fields: per-tag formatting and fixed values
- continuation: dot-prefixed continuation line handling
- pipeline: fail-open composition of the stages above
"""

from .continuation import normalize_continuation_lines
from .fields import (
    CONFIRMATION_INSTRUCTION,
    LC_NUMBER_PLACEHOLDER,
    PRESENTATION_PERIOD,
    apply_field_rules,
    format_amount,
    format_issue_date,
    format_shipment_permission,
)
from .mt700 import FIELD_CATALOGUE, split_segments
from .pipeline import STAGES, Stage, postprocess_draft, run_stage
from .trimming import strip_trailing_fences, trim_to_document_start

__all__ = [
    "CONFIRMATION_INSTRUCTION",
    "FIELD_CATALOGUE",
    "LC_NUMBER_PLACEHOLDER",
    "PRESENTATION_PERIOD",
    "STAGES",
    "Stage",
    "apply_field_rules",
    "format_amount",
    "format_issue_date",
    "format_shipment_permission",
    "normalize_continuation_lines",
    "postprocess_draft",
    "run_stage",
    "split_segments",
    "strip_trailing_fences",
    "trim_to_document_start",
]
