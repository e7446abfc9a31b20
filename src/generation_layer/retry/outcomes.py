"""
Attempt outcomes for the retry controller.

A single model call resolves to exactly one AttemptOutcome:

    Success            model returned text
    RetryableFailure   overloaded / rate limited, worth another try
    FatalFailure       anything else, abandon this model now

Classification is by exception type first, then by any HTTP status the
exception carries, so errors from clients outside this package still land
in the right bucket.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Union

from generation_layer.llm.exceptions import LLMOverloadedError, LLMRateLimitError
from generation_layer.models.enums import FailureClassification


class AttemptState(str, Enum):
    """States of the per-model retry state machine."""

    PENDING = "pending"
    SUCCESS = "success"
    RETRY_WAIT = "retry_wait"
    DONE = "done"


@dataclass(frozen=True)
class Success:
    raw_text: str


@dataclass(frozen=True)
class RetryableFailure:
    classification: FailureClassification
    error: BaseException


@dataclass(frozen=True)
class FatalFailure:
    classification: FailureClassification
    error: BaseException


AttemptOutcome = Union[Success, RetryableFailure, FatalFailure]


def status_code_of(error: BaseException) -> int | None:
    """HTTP status carried by an error, if any."""
    for attr in ("status_code", "status"):
        value = getattr(error, attr, None)
        if isinstance(value, int):
            return value
    return None


def classify_error(error: BaseException) -> FailureClassification:
    """
    Classify a failed model call.

    HTTP 503 means the provider is overloaded, 429 means rate limited;
    everything else (auth, bad request, timeout, network) is OTHER.
    """
    if isinstance(error, LLMOverloadedError):
        return FailureClassification.OVERLOADED
    if isinstance(error, LLMRateLimitError):
        return FailureClassification.RATE_LIMITED

    status_code = status_code_of(error)
    if status_code == 503:
        return FailureClassification.OVERLOADED
    if status_code == 429:
        return FailureClassification.RATE_LIMITED
    return FailureClassification.OTHER


def outcome_for_error(error: BaseException) -> RetryableFailure | FatalFailure:
    classification = classify_error(error)
    if classification.retryable:
        return RetryableFailure(classification=classification, error=error)
    return FatalFailure(classification=classification, error=error)
