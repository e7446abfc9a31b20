"""
Gemini client implementation for LLM inference.

Communicates with the Generative Language REST API using httpx AsyncClient:
- One POST per generate() call, no internal retries
- HTTP status mapped to typed exceptions (503 overloaded, 429 rate limited)
- Connection pooling via a persistent AsyncClient
- Health checks
"""

import json
import time
from typing import Dict, Any, Optional
import httpx
import structlog

from generation_layer.llm.base_client import BaseLLMClient
from generation_layer.llm.exceptions import (
    LLMConnectionError,
    LLMEmptyResponseError,
    LLMGenerationError,
    LLMModelNotAvailableError,
    LLMOverloadedError,
    LLMRateLimitError,
    LLMTimeoutError,
)
from generation_layer.models.llm_models import LLMGenerationRequest, LLMGenerationResponse
from generation_layer.monitoring.metrics import llm_latency_seconds, llm_tokens_total


logger = structlog.get_logger(__name__)

API_VERSION = "v1beta"


class GeminiClient(BaseLLMClient):
    """
    Gemini-specific LLM client using httpx for async HTTP communication.

    API Endpoints:
    - POST /v1beta/models/{model}:generateContent: Generate completion
    - GET /v1beta/models: Reachability check (health)

    The API key is sent in the x-goog-api-key header so it never appears in
    request URLs or access logs.
    """

    def __init__(
        self,
        api_key: str,
        base_url: str = "https://generativelanguage.googleapis.com",
        timeout: int = 60,
        connection_limits: Optional[httpx.Limits] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        **kwargs
    ):
        """
        Initialize Gemini client.

        Args:
            api_key: Provider API key (one per process lifetime)
            base_url: API base URL
            timeout: Request timeout in seconds
            connection_limits: httpx connection pool limits (default: 10 max connections)
            transport: Optional httpx transport (tests inject httpx.MockTransport)
            **kwargs: Additional config
        """
        super().__init__(base_url, timeout, **kwargs)

        if not api_key:
            raise ValueError("Gemini API key is required")

        if connection_limits is None:
            connection_limits = httpx.Limits(
                max_keepalive_connections=5,
                max_connections=10,
                keepalive_expiry=30.0
            )

        self._api_key = api_key
        self._client: Optional[httpx.AsyncClient] = None
        self._connection_limits = connection_limits
        self._transport = transport

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create the async HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=httpx.Timeout(self.timeout),
                limits=self._connection_limits,
                headers={"x-goog-api-key": self._api_key},
                transport=self._transport,
                follow_redirects=True
            )
            logger.debug("Created new httpx AsyncClient")
        return self._client

    async def generate(self, request: LLMGenerationRequest) -> LLMGenerationResponse:
        """
        Generate completion using the generateContent endpoint.

        Payload:
        {
            "contents": [{"role": "user", "parts": [{"text": "..."}]}],
            "generationConfig": {"temperature": 0.4, "maxOutputTokens": 8192}
        }

        Response:
        {
            "candidates": [
                {"content": {"parts": [{"text": "..."}], "role": "model"},
                 "finishReason": "STOP"}
            ],
            "usageMetadata": {"promptTokenCount": 50, "candidatesTokenCount": 150,
                              "totalTokenCount": 200},
            "modelVersion": "gemini-2.0-flash"
        }
        """
        start_time = time.time()

        payload = {
            "contents": [{"role": "user", "parts": [{"text": request.prompt}]}],
            "generationConfig": {
                "temperature": request.temperature,
                "maxOutputTokens": request.max_tokens,
            },
        }

        logger.debug(
            "Sending generation request to Gemini",
            model=request.model,
            prompt_length=len(request.prompt),
            temperature=request.temperature,
            max_tokens=request.max_tokens,
        )

        try:
            client = await self._get_client()
            response = await client.post(
                f"/{API_VERSION}/models/{request.model}:generateContent",
                json=payload,
            )
            response.raise_for_status()
            response_data = response.json()

        except httpx.TimeoutException as e:
            self._observe_failure(request.model, start_time)
            raise LLMTimeoutError(
                f"Request timeout after {self.timeout}s",
                details={"model": request.model, "timeout": self.timeout, "error": str(e)},
            ) from e

        except httpx.HTTPStatusError as e:
            self._observe_failure(request.model, start_time)
            raise self._status_error(request.model, e.response) from e

        except (httpx.NetworkError, httpx.ConnectError) as e:
            self._observe_failure(request.model, start_time)
            raise LLMConnectionError(
                f"Network error: {str(e)}",
                details={"model": request.model, "error_type": type(e).__name__},
            ) from e

        except json.JSONDecodeError as e:
            self._observe_failure(request.model, start_time)
            raise LLMGenerationError(
                "Invalid JSON response from Gemini",
                details={"model": request.model, "parse_error": str(e)},
            ) from e

        except httpx.HTTPError as e:
            self._observe_failure(request.model, start_time)
            raise LLMConnectionError(
                f"HTTP error: {str(e)}",
                details={"model": request.model, "error_type": type(e).__name__},
            ) from e

        latency_ms = int((time.time() - start_time) * 1000)
        content, finish_reason = self._extract_text(request.model, response_data)

        usage = response_data.get("usageMetadata") or {}
        prompt_tokens = usage.get("promptTokenCount")
        completion_tokens = usage.get("candidatesTokenCount")
        total_tokens = usage.get("totalTokenCount")
        model_version = response_data.get("modelVersion") or request.model

        logger.debug(
            "Gemini generation successful",
            model=model_version,
            latency_ms=latency_ms,
            prompt_tokens=prompt_tokens,
            completion_tokens=completion_tokens,
            finish_reason=finish_reason,
        )

        llm_latency_seconds.labels(model=request.model, success="true").observe(latency_ms / 1000.0)
        if prompt_tokens:
            llm_tokens_total.labels(model=request.model, token_type="prompt").inc(prompt_tokens)
        if completion_tokens:
            llm_tokens_total.labels(model=request.model, token_type="completion").inc(completion_tokens)

        return LLMGenerationResponse(
            content=content,
            model_version=model_version,
            finish_reason=finish_reason,
            usage_tokens=total_tokens,
            prompt_tokens=prompt_tokens,
            completion_tokens=completion_tokens,
            latency_ms=latency_ms,
            raw_metadata={"response_id": response_data.get("responseId")},
        )

    @staticmethod
    def _extract_text(model: str, response_data: Dict[str, Any]) -> tuple[str, str]:
        """Concatenate the text parts of the first candidate."""
        candidates = response_data.get("candidates") or []
        if not candidates:
            block_reason = (response_data.get("promptFeedback") or {}).get("blockReason")
            raise LLMEmptyResponseError(
                "Gemini returned no candidates",
                details={"model": model, "block_reason": block_reason},
            )

        first = candidates[0]
        parts = (first.get("content") or {}).get("parts") or []
        text = "".join(part.get("text", "") for part in parts if isinstance(part, dict))
        finish_reason = first.get("finishReason") or "UNKNOWN"

        if not text.strip():
            raise LLMEmptyResponseError(
                "Empty response from Gemini",
                details={"model": model, "finish_reason": finish_reason},
            )
        return text, finish_reason

    @staticmethod
    def _status_error(model: str, response: httpx.Response) -> LLMGenerationError:
        """Map an HTTP error response to the matching exception type."""
        status_code = response.status_code
        details = {"model": model, "status": status_code, "error": response.text[:500]}

        if status_code == 503:
            return LLMOverloadedError(
                f"Model overloaded: {model}", details=details, status_code=status_code
            )
        if status_code == 429:
            return LLMRateLimitError(
                f"Rate limit exceeded for model: {model}", details=details, status_code=status_code
            )
        if status_code == 404:
            return LLMModelNotAvailableError(
                f"Model not found: {model}", details=details, status_code=status_code
            )
        if status_code >= 500:
            return LLMGenerationError(
                f"Gemini server error: {status_code}", details=details, status_code=status_code
            )
        return LLMGenerationError(
            f"Gemini client error: {status_code}", details=details, status_code=status_code
        )

    @staticmethod
    def _observe_failure(model: str, start_time: float) -> None:
        llm_latency_seconds.labels(model=model, success="false").observe(time.time() - start_time)

    async def health_check(self) -> bool:
        """
        Check provider reachability via GET /v1beta/models.

        Returns True if the API answers with the configured key, False otherwise.
        """
        try:
            client = await self._get_client()
            response = await client.get(f"/{API_VERSION}/models", timeout=5.0)
            response.raise_for_status()
            logger.debug("Gemini health check passed")
            return True
        except Exception as e:
            logger.warning("Gemini health check failed", error=str(e))
            return False

    async def close(self):
        """Close the HTTP client connection."""
        if self._client and not self._client.is_closed:
            await self._client.aclose()
            logger.debug("Closed Gemini client connection")

    async def __aenter__(self):
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        await self.close()
