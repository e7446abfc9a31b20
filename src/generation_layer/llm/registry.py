"""
Provider registry.

The set of providers is closed: ProviderKind enumerates every variant and
_PROVIDERS maps each one to its client class. Adding a provider means adding
an enum member and a registry entry, nothing else.
"""

from enum import Enum
from typing import Optional

import structlog

from generation_layer.config import Settings
from generation_layer.llm.base_client import BaseLLMClient
from generation_layer.llm.gemini_client import GeminiClient
from generation_layer.llm.openai_client import OpenAIClient

logger = structlog.get_logger(__name__)


class ProviderKind(str, Enum):
    """Known LLM providers."""

    GEMINI = "gemini"
    OPENAI = "openai"


_PROVIDERS: dict[ProviderKind, type[BaseLLMClient]] = {
    ProviderKind.GEMINI: GeminiClient,
    ProviderKind.OPENAI: OpenAIClient,
}


def create_llm_client(
    settings: Settings,
    api_key: Optional[str] = None,
    provider: Optional[str] = None,
) -> BaseLLMClient:
    """
    Build the client for the configured provider.

    Args:
        settings: Application settings
        api_key: Overrides settings.GEMINI_API_KEY when given
        provider: Overrides settings.LLM_PROVIDER when given

    Returns:
        Client instance for the provider

    Raises:
        ValueError: Unknown provider name or missing API key
    """
    name = (provider or settings.LLM_PROVIDER).strip().lower()
    try:
        kind = ProviderKind(name)
    except ValueError:
        raise ValueError(f"Unsupported AI provider: {name}") from None

    key = api_key if api_key is not None else settings.GEMINI_API_KEY
    client_class = _PROVIDERS[kind]

    logger.info("Creating LLM client", provider=kind.value, client_class=client_class.__name__)

    if kind is ProviderKind.GEMINI:
        return client_class(
            api_key=key,
            base_url=settings.GEMINI_BASE_URL,
            timeout=settings.LLM_TIMEOUT,
        )
    return client_class(api_key=key, timeout=settings.LLM_TIMEOUT)
