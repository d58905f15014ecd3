"""
Mapping of service errors to HTTP status codes and user-facing messages.
"""

from fastapi import status

from .services.ai.exceptions import AIServiceError, AITimeoutError, RetryExhaustedError

STAGE_LABELS = {
    "extraction": "PDF extraction",
    "generation": "Draft generation",
}


def safe_error_message(exc: object, fallback: str) -> str:
    """Return ``str(exc)`` when it is non-empty and stringifiable, else ``fallback``."""
    try:
        message = str(exc)
    except Exception:
        return fallback
    return message or fallback


def _timeout_stage(exc: AIServiceError) -> str | None:
    if isinstance(exc, AITimeoutError):
        return exc.stage
    if isinstance(exc, RetryExhaustedError) and exc.timed_out:
        return exc.last_error.stage
    return None


def ai_error_response(exc: AIServiceError) -> tuple[int, str]:
    """
    Classify an AI service error.

    Returns:
        (status_code, message): 408 for timeouts, with a message naming the
        stage that timed out; 500 for everything else.
    """
    stage = _timeout_stage(exc)
    if stage is not None:
        label = STAGE_LABELS.get(stage, stage.capitalize())
        return (
            status.HTTP_408_REQUEST_TIMEOUT,
            f"{label} timed out. Please try again. ({safe_error_message(exc, 'timeout')})",
        )

    return (
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        safe_error_message(exc, "AI service error"),
    )
