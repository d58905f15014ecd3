"""
Shared exceptions for AI service modules.
"""


class AIServiceError(Exception):
    """Raised when AI service operations fail."""

    pass


class AITimeoutError(AIServiceError):
    """Raised when a model call does not settle within its time budget."""

    def __init__(self, stage: str, timeout: float):
        self.stage = stage
        self.timeout = timeout
        super().__init__(f"{stage.capitalize()} request timed out after {timeout:g} seconds")


class RetryExhaustedError(AIServiceError):
    """Raised when every attempt of a retried operation has failed."""

    def __init__(self, description: str, attempts: int, last_error: Exception):
        self.attempts = attempts
        self.last_error = last_error
        super().__init__(f"{description} failed after {attempts} attempts: {last_error}")

    @property
    def timed_out(self) -> bool:
        """Whether the final attempt failed by timing out."""
        return isinstance(self.last_error, AITimeoutError)
