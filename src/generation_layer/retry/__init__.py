"""
Retry and fallback layer.

RetryController retries one model on transient failures; ModelFallbackChain
walks the model order; FailureLog records every failed attempt.
"""

from generation_layer.retry.controller import RetryController
from generation_layer.retry.exceptions import AllModelsFailed, ModelAttemptsExhausted
from generation_layer.retry.failure_log import FailureLog, FailureRecord
from generation_layer.retry.fallback import FallbackChainState, ModelFallbackChain
from generation_layer.retry.outcomes import (
    AttemptOutcome,
    AttemptState,
    FatalFailure,
    RetryableFailure,
    Success,
    classify_error,
)

__all__ = [
    "RetryController",
    "ModelFallbackChain",
    "FallbackChainState",
    "FailureLog",
    "FailureRecord",
    "AllModelsFailed",
    "ModelAttemptsExhausted",
    "AttemptOutcome",
    "AttemptState",
    "Success",
    "RetryableFailure",
    "FatalFailure",
    "classify_error",
]
