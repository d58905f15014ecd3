"""
Deterministic post-processing pipeline for generated MT700 drafts.

Stages run in a fixed order:
1. trim      - discard any preamble before ``:27:``
2. fields    - apply per-tag formatting and fixed values
3. continuation - normalize continuation lines and strip code fences

Every stage fails open: an exception inside a stage is logged and the stage's
fallback result is used instead.
"""

import logging
from dataclasses import dataclass
from typing import Callable

from .continuation import normalize_continuation_lines
from .fields import apply_field_rules
from .trimming import strip_trailing_fences, trim_to_document_start

logger = logging.getLogger(__name__)


def _unchanged(text: str) -> str:
    return text


@dataclass(frozen=True)
class Stage:
    """A named text transform with the fallback used when it raises."""

    name: str
    transform: Callable[[str], str]
    fallback: Callable[[str], str] = _unchanged


STAGES: tuple[Stage, ...] = (
    Stage("trim", trim_to_document_start),
    Stage("fields", apply_field_rules),
    Stage("continuation", normalize_continuation_lines, fallback=strip_trailing_fences),
)


def run_stage(stage: Stage, text: str) -> str:
    """Run one stage, recovering with its fallback on any error."""
    try:
        return stage.transform(text)
    except Exception:
        logger.exception("Post-processing stage '%s' failed, using fallback", stage.name)
        try:
            return stage.fallback(text)
        except Exception:
            logger.exception("Fallback for stage '%s' failed, keeping input", stage.name)
            return text


def postprocess_draft(raw_draft: str, stages: tuple[Stage, ...] = STAGES) -> str:
    """
    Turn a raw LLM draft into the final MT700 draft text.

    Args:
        raw_draft: Untrusted model output.
        stages: Stages to apply in order (overridable for tests).

    Returns:
        The formatted draft. Never raises.
    """
    text = raw_draft
    for stage in stages:
        text = run_stage(stage, text)

    logger.info(
        "Post-processed draft: %d chars in, %d chars out",
        len(raw_draft),
        len(text),
    )
    return text
