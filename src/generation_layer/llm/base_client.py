"""
Abstract base client for LLM inference.

Defines the capability interface every provider client implements. The set of
implementations is closed and registered in `generation_layer.llm.registry`;
the fixed fallback order of model identities relies on there being a small,
known set of providers.
"""

from abc import ABC, abstractmethod
import structlog

from generation_layer.models.llm_models import LLMGenerationRequest, LLMGenerationResponse


logger = structlog.get_logger(__name__)


class BaseLLMClient(ABC):
    """
    Abstract base class for LLM provider clients.

    Responsibilities:
    - Send exactly one generation request per `generate` call
    - Parse responses into standardized format
    - Translate transport/HTTP failures into LLMClientError subclasses

    Does NOT handle:
    - Prompt construction (that's PromptBuilder's job)
    - Response parsing into records (that's the parsing layer's job)
    - Retries and model fallback (that's RetryController / ModelFallbackChain)
    """

    def __init__(
        self,
        base_url: str,
        timeout: int = 60,
        **kwargs
    ):
        """
        Initialize base client.

        Args:
            base_url: Base URL of the provider API
            timeout: Request timeout in seconds
            **kwargs: Additional provider-specific config
        """
        self.base_url = base_url.rstrip('/')
        self.timeout = timeout
        self.extra_config = kwargs

        logger.info(
            "Initialized LLM client",
            client_class=self.__class__.__name__,
            base_url=self.base_url,
            timeout=timeout,
        )

    @abstractmethod
    async def generate(self, request: LLMGenerationRequest) -> LLMGenerationResponse:
        """
        Generate completion from the LLM.

        Implementations issue a single HTTP call and fully consume the
        response before returning. No internal retries.

        Args:
            request: Standardized generation request

        Returns:
            LLMGenerationResponse with generated text and metadata

        Raises:
            LLMOverloadedError: Provider saturated (503)
            LLMRateLimitError: Quota exceeded (429)
            LLMModelNotAvailableError: Model not found
            LLMTimeoutError: Request exceeded timeout
            LLMConnectionError: Network errors
            LLMGenerationError: Any other provider-side failure
        """
        pass

    @abstractmethod
    async def health_check(self) -> bool:
        """
        Check if the provider is reachable with the configured credentials.

        Returns:
            True if healthy, False otherwise

        Note:
            This should NOT raise exceptions - return False on error.
        """
        pass

    async def close(self):
        """
        Close client connections and cleanup resources.

        Default implementation does nothing. Subclasses holding persistent
        connections override it.
        """
        logger.debug("Closing LLM client", client_class=self.__class__.__name__)

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"base_url={self.base_url}, "
            f"timeout={self.timeout}s)"
        )
