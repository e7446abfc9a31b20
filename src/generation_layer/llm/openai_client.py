"""
OpenAI client stub for a future second provider.

Registered in the provider registry so deployments can select it by name,
but every generation call fails until it is implemented. When implementing:
- Use the same architecture as GeminiClient (single call per generate())
- Map 503 to LLMOverloadedError and 429 to LLMRateLimitError
- Use /v1/chat/completions with response_format={"type": "json_object"}
"""

import structlog

from generation_layer.llm.base_client import BaseLLMClient
from generation_layer.models.llm_models import LLMGenerationRequest, LLMGenerationResponse


logger = structlog.get_logger(__name__)


class OpenAIClient(BaseLLMClient):
    """
    OpenAI client - FUTURE IMPLEMENTATION.

    Same BaseLLMClient interface, so the retry and parsing layers need no
    changes once generate() is written.
    """

    def __init__(
        self,
        api_key: str,
        base_url: str = "https://api.openai.com",
        timeout: int = 60,
        **kwargs
    ):
        super().__init__(base_url, timeout, **kwargs)
        self._api_key = api_key
        logger.warning(
            "OpenAIClient is a stub - not yet implemented",
            base_url=base_url
        )

    async def generate(self, request: LLMGenerationRequest) -> LLMGenerationResponse:
        """Generate completion - NOT IMPLEMENTED."""
        raise NotImplementedError("OpenAI provider not yet implemented")

    async def health_check(self) -> bool:
        """Health check - NOT IMPLEMENTED."""
        logger.error("OpenAIClient.health_check() not implemented")
        return False
