"""
Unit tests for GeminiClient.

The HTTP layer is replaced with httpx.MockTransport so request shape and
status mapping can be checked without network access.
"""

import json

import httpx
import pytest

from generation_layer.llm.exceptions import (
    LLMConnectionError,
    LLMEmptyResponseError,
    LLMGenerationError,
    LLMModelNotAvailableError,
    LLMOverloadedError,
    LLMRateLimitError,
    LLMTimeoutError,
)
from generation_layer.llm.gemini_client import GeminiClient
from generation_layer.models.llm_models import LLMGenerationRequest

BASE_URL = "https://gemini.test"


def gemini_body(*texts: str, finish_reason: str = "STOP") -> dict:
    return {
        "candidates": [
            {
                "content": {"parts": [{"text": t} for t in texts], "role": "model"},
                "finishReason": finish_reason,
            }
        ],
        "usageMetadata": {"promptTokenCount": 50, "candidatesTokenCount": 150, "totalTokenCount": 200},
        "modelVersion": "gemini-2.0-flash-001",
    }


def make_client(handler) -> GeminiClient:
    return GeminiClient(
        api_key="test-key",
        base_url=BASE_URL,
        timeout=5,
        transport=httpx.MockTransport(handler),
    )


def make_request(model: str = "gemini-2.0-flash") -> LLMGenerationRequest:
    return LLMGenerationRequest(prompt="Generate things", model=model, temperature=0.4, max_tokens=8192)


@pytest.mark.asyncio
async def test_generate_request_shape_and_response():
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json=gemini_body('[{"title": ', '"A"}]'))

    async with make_client(handler) as client:
        response = await client.generate(make_request())

    request = seen[0]
    assert request.method == "POST"
    assert request.url.path == "/v1beta/models/gemini-2.0-flash:generateContent"
    assert request.headers["x-goog-api-key"] == "test-key"
    assert "key=" not in str(request.url)

    payload = json.loads(request.content)
    assert payload["contents"][0]["parts"][0]["text"] == "Generate things"
    assert payload["generationConfig"] == {"temperature": 0.4, "maxOutputTokens": 8192}

    assert response.content == '[{"title": "A"}]'
    assert response.finish_reason == "STOP"
    assert response.model_version == "gemini-2.0-flash-001"
    assert response.prompt_tokens == 50
    assert response.completion_tokens == 150
    assert response.usage_tokens == 200


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "status_code, error_type",
    [
        (503, LLMOverloadedError),
        (429, LLMRateLimitError),
        (404, LLMModelNotAvailableError),
    ],
)
async def test_status_mapping(status_code, error_type):
    def handler(request):
        return httpx.Response(status_code, json={"error": {"message": "nope"}})

    async with make_client(handler) as client:
        with pytest.raises(error_type) as exc_info:
            await client.generate(make_request())

    assert exc_info.value.status_code == status_code
    assert "nope" in exc_info.value.details["error"]


@pytest.mark.asyncio
@pytest.mark.parametrize("status_code", [400, 401, 403, 500, 502])
async def test_other_statuses_are_generation_errors(status_code):
    def handler(request):
        return httpx.Response(status_code, text="failure body")

    async with make_client(handler) as client:
        with pytest.raises(LLMGenerationError) as exc_info:
            await client.generate(make_request())

    assert type(exc_info.value) is LLMGenerationError
    assert exc_info.value.status_code == status_code


@pytest.mark.asyncio
async def test_error_body_truncated():
    def handler(request):
        return httpx.Response(503, text="x" * 5000)

    async with make_client(handler) as client:
        with pytest.raises(LLMOverloadedError) as exc_info:
            await client.generate(make_request())

    assert len(exc_info.value.details["error"]) == 500


@pytest.mark.asyncio
async def test_timeout():
    def handler(request):
        raise httpx.ReadTimeout("timed out", request=request)

    async with make_client(handler) as client:
        with pytest.raises(LLMTimeoutError):
            await client.generate(make_request())


@pytest.mark.asyncio
async def test_connection_error():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    async with make_client(handler) as client:
        with pytest.raises(LLMConnectionError) as exc_info:
            await client.generate(make_request())

    assert not isinstance(exc_info.value, LLMTimeoutError)


@pytest.mark.asyncio
async def test_invalid_json_body():
    def handler(request):
        return httpx.Response(200, text="<html>not json</html>")

    async with make_client(handler) as client:
        with pytest.raises(LLMGenerationError, match="Invalid JSON"):
            await client.generate(make_request())


@pytest.mark.asyncio
async def test_no_candidates():
    def handler(request):
        return httpx.Response(200, json={"promptFeedback": {"blockReason": "SAFETY"}})

    async with make_client(handler) as client:
        with pytest.raises(LLMEmptyResponseError) as exc_info:
            await client.generate(make_request())

    assert exc_info.value.details["block_reason"] == "SAFETY"


@pytest.mark.asyncio
async def test_blank_candidate_text():
    def handler(request):
        return httpx.Response(200, json=gemini_body("  ", finish_reason="MAX_TOKENS"))

    async with make_client(handler) as client:
        with pytest.raises(LLMEmptyResponseError):
            await client.generate(make_request())


@pytest.mark.asyncio
async def test_health_check():
    def healthy(request):
        return httpx.Response(200, json={"models": []})

    def unhealthy(request):
        return httpx.Response(403, json={"error": {"message": "bad key"}})

    async with make_client(healthy) as client:
        assert await client.health_check() is True
    async with make_client(unhealthy) as client:
        assert await client.health_check() is False


@pytest.mark.asyncio
async def test_close_is_idempotent():
    client = make_client(lambda request: httpx.Response(200, json=gemini_body("ok")))
    await client.generate(make_request())

    await client.close()
    await client.close()

    assert client._client.is_closed


def test_requires_api_key():
    with pytest.raises(ValueError, match="API key"):
        GeminiClient(api_key="", base_url=BASE_URL)
