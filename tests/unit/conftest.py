"""Unit test fixtures (mocks and stubs).

Provides fake clients and a recording sleep so retry behaviour can be tested
without network access or wall-clock delay.
"""

from typing import Any, Dict, Union
from unittest.mock import MagicMock

import pytest

from generation_layer.llm.base_client import BaseLLMClient
from generation_layer.models.llm_models import LLMGenerationRequest, LLMGenerationResponse
from generation_layer.retry.failure_log import FailureLog


def make_llm_response(content: str, model: str = "model-a") -> LLMGenerationResponse:
    """Build a successful LLMGenerationResponse."""
    return LLMGenerationResponse(
        content=content,
        model_version=model,
        finish_reason="STOP",
        usage_tokens=200,
        prompt_tokens=50,
        completion_tokens=150,
        latency_ms=120,
    )


class RecordingSleep:
    """Async sleep replacement that records requested delays."""

    def __init__(self):
        self.delays: list[float] = []

    async def __call__(self, delay: float) -> None:
        self.delays.append(delay)


class ScriptedLLMClient(BaseLLMClient):
    """
    LLM client that plays back a per-model script.

    Each script entry is either response text or an exception instance to
    raise. The last entry repeats once the script runs out.
    """

    def __init__(self, script: Dict[str, list[Union[str, BaseException]]]):
        super().__init__("https://scripted.test")
        self.script = {model: list(outcomes) for model, outcomes in script.items()}
        self.calls: list[str] = []
        self.requests: list[LLMGenerationRequest] = []
        self.closed = False

    async def generate(self, request: LLMGenerationRequest) -> LLMGenerationResponse:
        self.calls.append(request.model)
        self.requests.append(request)

        outcomes = self.script.get(request.model)
        if not outcomes:
            raise AssertionError(f"No script for model {request.model}")
        outcome = outcomes.pop(0) if len(outcomes) > 1 else outcomes[0]

        if isinstance(outcome, BaseException):
            raise outcome
        return make_llm_response(outcome, request.model)

    async def health_check(self) -> bool:
        return True

    async def close(self):
        self.closed = True


@pytest.fixture
def recording_sleep() -> RecordingSleep:
    """Fresh RecordingSleep per test."""
    return RecordingSleep()


@pytest.fixture
def scripted_client():
    """Factory for ScriptedLLMClient.

    Usage:
        def test_something(scripted_client):
            client = scripted_client({"model-a": [LLMOverloadedError("busy"), "[]"]})
    """
    return ScriptedLLMClient


@pytest.fixture
def failure_logger() -> MagicMock:
    """Mock structlog logger receiving failure records."""
    return MagicMock()


@pytest.fixture
def failure_log(failure_logger: MagicMock) -> FailureLog:
    """FailureLog writing to a mock logger."""
    return FailureLog(logger=failure_logger)
