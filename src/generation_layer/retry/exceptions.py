"""
Retry layer exceptions.

ModelAttemptsExhausted is internal to the retry layer: the fallback chain
absorbs it and moves on. AllModelsFailed is the single terminal error the
facade lets through; its message is deliberately generic while the full
per-model detail stays in the failure log.
"""

from typing import TYPE_CHECKING

from generation_layer.exceptions import GenerationError
from generation_layer.models.enums import FailureClassification, TaskKind

if TYPE_CHECKING:
    from generation_layer.retry.fallback import FallbackChainState


class ModelAttemptsExhausted(GenerationError):
    """
    Raised by RetryController when one model cannot produce text.

    Attributes:
        model: Model identity that failed
        attempts: Number of calls made against the model
        classification: Classification of the last failure
        last_error: The last underlying error
        total_delay: Seconds spent in backoff for this model
    """

    def __init__(
        self,
        model: str,
        attempts: int,
        classification: FailureClassification,
        last_error: BaseException,
        total_delay: float = 0.0,
    ) -> None:
        self.model = model
        self.attempts = attempts
        self.classification = classification
        self.last_error = last_error
        self.total_delay = total_delay

        super().__init__(
            f"Model {model} failed after {attempts} attempt(s): {type(last_error).__name__}",
            details={
                "model": model,
                "attempts": attempts,
                "classification": classification.value,
                "total_delay": total_delay,
            },
        )


class AllModelsFailed(GenerationError):
    """
    Raised when every model in the fallback order failed.

    Attributes:
        task: Task kind that was being generated
        chain_state: Final FallbackChainState (for operators, not end users)
    """

    def __init__(self, task: TaskKind, chain_state: "FallbackChainState") -> None:
        self.task = task
        self.chain_state = chain_state

        super().__init__(
            f"All AI models failed to generate {task.label}. Please try again later.",
            details={"task": task.value, "models_tried": list(chain_state.models_tried)},
        )
