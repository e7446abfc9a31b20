"""Integration test fixtures.

The FastAPI app is exercised in-process with TestClient; the generation
service behind the routes runs against a scripted provider client so no
network or API key is needed.
"""

from typing import Any
from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient

from generation_layer.api.dependencies import get_generation_service, get_settings
from generation_layer.llm.base_client import BaseLLMClient
from generation_layer.main import app
from generation_layer.models.llm_models import LLMGenerationRequest, LLMGenerationResponse
from generation_layer.retry.failure_log import FailureLog
from generation_layer.service import GenerationService


class QueueLLMClient(BaseLLMClient):
    """Client answering every call from a queue of texts or exceptions."""

    def __init__(self):
        super().__init__("https://queue.test")
        self.outcomes: list[Any] = []
        self.calls: list[LLMGenerationRequest] = []

    async def generate(self, request: LLMGenerationRequest) -> LLMGenerationResponse:
        self.calls.append(request)
        outcome = self.outcomes.pop(0) if len(self.outcomes) > 1 else self.outcomes[0]
        if isinstance(outcome, BaseException):
            raise outcome
        return LLMGenerationResponse(
            content=outcome,
            model_version=request.model,
            finish_reason="STOP",
            latency_ms=10,
        )

    async def health_check(self) -> bool:
        return True


@pytest.fixture
def queue_client() -> QueueLLMClient:
    return QueueLLMClient()


@pytest.fixture
def api_client(test_settings, queue_client):
    """TestClient with the generation service bound to the queue client."""

    async def no_sleep(delay: float) -> None:
        return None

    def service_override() -> GenerationService:
        return GenerationService(
            settings=test_settings,
            client=queue_client,
            failure_log=FailureLog(logger=MagicMock()),
            sleep=no_sleep,
        )

    app.dependency_overrides[get_generation_service] = service_override
    app.dependency_overrides[get_settings] = lambda: test_settings
    try:
        yield TestClient(app, raise_server_exceptions=False)
    finally:
        app.dependency_overrides.clear()
