"""
Model fallback chain.

Tries each model of a fixed preference order in turn, giving each one a
RetryController run. The first model that returns text wins and its output
goes to the task parser. If every model fails, exactly one AllModelsFailed
is raised.
"""

from dataclasses import dataclass, field
from typing import Callable, Optional, Sequence, TypeVar

import structlog

from generation_layer.models.enums import TaskKind
from generation_layer.monitoring.metrics import generation_exhausted_total, model_fallbacks_total

from .controller import RetryController
from .exceptions import AllModelsFailed, ModelAttemptsExhausted

logger = structlog.get_logger(__name__)

T = TypeVar("T")


@dataclass
class FallbackChainState:
    """
    Progress through the fallback order.

    Attributes:
        model_index: Index of the model currently (or last) tried
        models_tried: Models abandoned so far, in order
        attempts: Total calls made across all models
        total_delay: Total seconds spent in backoff
        last_error: Last underlying error seen
    """

    model_index: int = 0
    models_tried: list[str] = field(default_factory=list)
    attempts: int = 0
    total_delay: float = 0.0
    last_error: Optional[BaseException] = None

    def absorb(self, failure: ModelAttemptsExhausted) -> None:
        self.models_tried.append(failure.model)
        self.attempts += failure.attempts
        self.total_delay += failure.total_delay
        self.last_error = failure.last_error


class ModelFallbackChain:
    """
    Walk a fixed model order until one model produces text.

    Args:
        controller: Per-model retry controller
        models: Model identities, most preferred first (never re-ordered)
        max_retries_per_model: Call budget handed to the controller per model
    """

    def __init__(
        self,
        controller: RetryController,
        models: Sequence[str],
        max_retries_per_model: int = 2,
    ):
        self.models = tuple(models)
        if not self.models:
            raise ValueError("Fallback model order must contain at least one model")
        self.controller = controller
        self.max_retries_per_model = max_retries_per_model

    async def generate(self, prompt: str, parser: Callable[[str], T], task: TaskKind) -> T:
        """
        Produce a parsed result from the first model that answers.

        Args:
            prompt: Fully rendered prompt (identical for every model)
            parser: Task parser applied to the winning model's text
            task: Task kind, for logging and the final error message

        Returns:
            The parser's result

        Raises:
            AllModelsFailed: Every model in the order failed
        """
        state = FallbackChainState()

        for index, model in enumerate(self.models):
            state.model_index = index
            logger.info(f"Trying model: {model}", model=model, task=task.value, position=index + 1)

            try:
                raw_text = await self.controller.attempt(
                    model, prompt, self.max_retries_per_model, task=task
                )
            except ModelAttemptsExhausted as e:
                state.absorb(e)
                model_fallbacks_total.labels(task=task.value, model=model).inc()
                logger.warning(
                    f"Model {model} exhausted, trying next",
                    model=model,
                    attempts=e.attempts,
                    classification=e.classification.value,
                    remaining=len(self.models) - index - 1,
                )
                continue

            logger.info(f"Successfully generated using model: {model}", model=model, task=task.value)
            return parser(raw_text)

        generation_exhausted_total.labels(task=task.value).inc()
        logger.error(
            "All AI models failed",
            task=task.value,
            models_tried=state.models_tried,
            total_attempts=state.attempts,
            total_delay=state.total_delay,
        )
        raise AllModelsFailed(task, state)
