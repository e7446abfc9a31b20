"""
Core exceptions for the generation facade.

Callers of GenerationService only ever observe two kinds of error from
generation itself: GenerationInputError (rejected before any network call)
and AllModelsFailed (every model in the chain exhausted its retries).
"""

from typing import Any


class GenerationError(Exception):
    """
    Base exception for errors raised by the generation core.
    """

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class GenerationInputError(GenerationError):
    """
    Raised when the request is unusable before any model is called,
    e.g. empty or whitespace-only content.
    """
    pass
