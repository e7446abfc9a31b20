"""
Append-only log of failed model attempts.

Each failure becomes one FailureRecord emitted at ERROR level on the
"generation_layer.failures" structlog logger. When AI_ERROR_LOG_PATH is set,
logging_config attaches a JSON-lines file handler to that logger. Records are
never rewritten; the file is only appended to.
"""

from datetime import datetime, timezone
from typing import Any, Optional

import structlog
from pydantic import BaseModel, ConfigDict, Field

from generation_layer.llm.exceptions import LLMClientError
from generation_layer.logging_config import FAILURE_LOGGER_NAME
from generation_layer.models.enums import FailureClassification, TaskKind

from .outcomes import status_code_of


class FailureRecord(BaseModel):
    """One failed attempt against one model."""

    model_config = ConfigDict(frozen=True)

    task: Optional[TaskKind] = None
    model: str
    attempt: int = Field(..., ge=1)
    classification: FailureClassification
    status_code: Optional[int] = None
    error_type: str
    error: str
    details: dict[str, Any] = Field(default_factory=dict)
    timestamp: str = Field(
        default_factory=lambda: datetime.now(timezone.utc).isoformat()
    )

    @classmethod
    def from_error(
        cls,
        *,
        model: str,
        attempt: int,
        classification: FailureClassification,
        error: BaseException,
        task: Optional[TaskKind] = None,
    ) -> "FailureRecord":
        details = error.details if isinstance(error, LLMClientError) else {}
        return cls(
            task=task,
            model=model,
            attempt=attempt,
            classification=classification,
            status_code=status_code_of(error),
            error_type=type(error).__name__,
            error=str(error),
            details=details,
        )


class FailureLog:
    """
    Sink for FailureRecords.

    Args:
        logger: structlog logger to emit to (defaults to the failures logger)
    """

    def __init__(self, logger: Any = None):
        self._logger = logger if logger is not None else structlog.get_logger(FAILURE_LOGGER_NAME)

    def append(self, record: FailureRecord) -> FailureRecord:
        self._logger.error("AI model attempt failed", **record.model_dump(mode="json"))
        return record

    def record(
        self,
        *,
        model: str,
        attempt: int,
        classification: FailureClassification,
        error: BaseException,
        task: Optional[TaskKind] = None,
    ) -> FailureRecord:
        """Build a FailureRecord from an error and append it."""
        return self.append(
            FailureRecord.from_error(
                model=model,
                attempt=attempt,
                classification=classification,
                error=error,
                task=task,
            )
        )
