"""
Per-model retry controller.

Drives one model through an explicit state machine:

    PENDING --success--------------------------> SUCCESS
    PENDING --retryable, attempts left---------> RETRY_WAIT --sleep--> PENDING
    PENDING --retryable on last attempt--------> DONE
    PENDING --any other failure----------------> DONE

The wait before attempt n+1 is backoff_base ** (n - 1) seconds (1s, 2s, 4s
with the default base). There is no sleep after the final failed attempt.
The sleep function is injected so tests run without wall-clock delay.
"""

import asyncio
from typing import Awaitable, Callable, Optional

import structlog

from generation_layer.llm.base_client import BaseLLMClient
from generation_layer.models.enums import FailureClassification, TaskKind
from generation_layer.models.llm_models import LLMGenerationRequest
from generation_layer.monitoring.metrics import llm_attempts_total

from .exceptions import ModelAttemptsExhausted
from .failure_log import FailureLog
from .outcomes import (
    AttemptOutcome,
    AttemptState,
    FatalFailure,
    RetryableFailure,
    Success,
    outcome_for_error,
    status_code_of,
)

logger = structlog.get_logger(__name__)

SleepFn = Callable[[float], Awaitable[None]]


class RetryController:
    """
    Run one model with bounded retries on transient failures.

    Attributes:
        client: Provider client issuing the calls
        failure_log: Sink for every failed attempt
        backoff_base: Base of the exponential wait
    """

    def __init__(
        self,
        client: BaseLLMClient,
        failure_log: Optional[FailureLog] = None,
        sleep: SleepFn = asyncio.sleep,
        backoff_base: float = 2.0,
        temperature: float = 0.4,
        max_tokens: int = 8192,
    ):
        self.client = client
        self.failure_log = failure_log or FailureLog()
        self.backoff_base = backoff_base
        self.temperature = temperature
        self.max_tokens = max_tokens
        self._sleep = sleep

    async def attempt(
        self,
        model: str,
        prompt: str,
        max_retries: int,
        task: Optional[TaskKind] = None,
    ) -> str:
        """
        Obtain raw text from one model.

        Args:
            model: Model identity
            prompt: Fully rendered prompt
            max_retries: Maximum number of calls against this model (>= 1)
            task: Task kind, used only for log records

        Returns:
            Raw model output

        Raises:
            ModelAttemptsExhausted: Retries used up, or a non-retryable failure
        """
        if max_retries < 1:
            raise ValueError(f"max_retries must be >= 1, got {max_retries}")

        state = AttemptState.PENDING
        attempt = 0
        total_delay = 0.0
        outcome: Optional[AttemptOutcome] = None

        while True:
            if state is AttemptState.PENDING:
                attempt += 1
                outcome = await self.execute_once(model, prompt)
                state = self.next_state(outcome, attempt, max_retries)
                if not isinstance(outcome, Success):
                    self._report_failure(task, model, attempt, max_retries, outcome, state)

            elif state is AttemptState.RETRY_WAIT:
                delay = self.backoff_delay(attempt)
                total_delay += delay
                await self._sleep(delay)
                state = AttemptState.PENDING

            elif state is AttemptState.SUCCESS:
                assert isinstance(outcome, Success)
                llm_attempts_total.labels(model=model, outcome="success").inc()
                logger.info("Model call succeeded", model=model, attempt=attempt)
                return outcome.raw_text

            else:
                assert isinstance(outcome, (RetryableFailure, FatalFailure))
                raise ModelAttemptsExhausted(
                    model=model,
                    attempts=attempt,
                    classification=outcome.classification,
                    last_error=outcome.error,
                    total_delay=total_delay,
                )

    async def execute_once(self, model: str, prompt: str) -> AttemptOutcome:
        """Issue exactly one call and classify what came back."""
        request = LLMGenerationRequest(
            prompt=prompt,
            model=model,
            temperature=self.temperature,
            max_tokens=self.max_tokens,
        )
        try:
            response = await self.client.generate(request)
        except Exception as e:
            return outcome_for_error(e)
        return Success(raw_text=response.content)

    @staticmethod
    def next_state(outcome: AttemptOutcome, attempt: int, max_retries: int) -> AttemptState:
        if isinstance(outcome, Success):
            return AttemptState.SUCCESS
        if isinstance(outcome, RetryableFailure) and attempt < max_retries:
            return AttemptState.RETRY_WAIT
        return AttemptState.DONE

    def backoff_delay(self, attempt: int) -> float:
        """Seconds to wait after failed attempt number `attempt` (1-indexed)."""
        return float(self.backoff_base ** (attempt - 1))

    def _report_failure(
        self,
        task: Optional[TaskKind],
        model: str,
        attempt: int,
        max_retries: int,
        outcome: RetryableFailure | FatalFailure,
        next_state: AttemptState,
    ) -> None:
        classification = outcome.classification
        llm_attempts_total.labels(model=model, outcome=classification.value).inc()

        self.failure_log.record(
            model=model,
            attempt=attempt,
            classification=classification,
            error=outcome.error,
            task=task,
        )

        # Status line only: the response body stays in the failure log
        fields = {
            "model": model,
            "attempt": f"{attempt}/{max_retries}",
            "classification": classification.value,
            "status_code": status_code_of(outcome.error),
            "error_type": type(outcome.error).__name__,
        }
        if next_state is AttemptState.RETRY_WAIT:
            if classification is FailureClassification.OVERLOADED:
                logger.warning(f"Model overloaded ({model}), waiting and retrying", **fields)
            else:
                logger.warning(f"Rate limit hit ({model}), waiting and retrying", **fields)
        else:
            logger.warning(f"Model {model} failed, switching to next model", **fields)
