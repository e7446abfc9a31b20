"""
Custom exceptions for the LLM client layer.

These exceptions provide structured error handling for LLM operations,
allowing the retry controller to distinguish transient saturation
(overloaded, rate limited) from failures that should abort the current
model and move the fallback chain along.
"""


class LLMClientError(Exception):
    """
    Base exception for all LLM client errors.

    All LLM-specific exceptions inherit from this to allow catching
    any LLM-related error with a single except clause.
    """
    def __init__(
        self,
        message: str,
        details: dict | None = None,
        status_code: int | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.details = details or {}
        self.status_code = status_code


class LLMConnectionError(LLMClientError):
    """
    Raised when unable to connect to the LLM provider.

    Includes network errors, DNS failures, refused connections, etc.
    Not retried on the same model: the chain moves to the next model.
    """
    pass


class LLMTimeoutError(LLMConnectionError):
    """
    Raised when the provider does not answer within the client timeout.
    """
    pass


class LLMGenerationError(LLMClientError):
    """
    Raised when the provider returns an error during generation.

    Examples:
    - Invalid request (400)
    - Permission denied / bad API key (403)
    - Internal server error (500)
    """
    pass


class LLMOverloadedError(LLMGenerationError):
    """
    Raised when the provider reports it is temporarily saturated (HTTP 503).

    Retried on the same model with exponential backoff.
    """
    pass


class LLMRateLimitError(LLMGenerationError):
    """
    Raised when the provider rejects the call because quota is exceeded (HTTP 429).

    Retried on the same model with exponential backoff.
    """
    pass


class LLMModelNotAvailableError(LLMGenerationError):
    """
    Raised when the requested model does not exist for this API key (HTTP 404).

    Triggers immediate fallback to the next model.
    """
    pass


class LLMEmptyResponseError(LLMGenerationError):
    """
    Raised when the provider answers successfully but with no usable text,
    e.g. no candidates or a prompt blocked by safety filters.
    """
    pass
