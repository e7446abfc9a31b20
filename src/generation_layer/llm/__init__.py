"""
LLM client abstraction and implementations.

Components:
- BaseLLMClient: Capability interface for provider clients
- GeminiClient: Implementation for the Gemini Generative Language API
- OpenAIClient: Registered stub for a future second provider
- create_llm_client / ProviderKind: Closed provider registry
- PromptBuilder: Renders task-specific prompts
- exceptions: LLM-specific exceptions
"""

from generation_layer.llm.base_client import BaseLLMClient
from generation_layer.llm.gemini_client import GeminiClient
from generation_layer.llm.openai_client import OpenAIClient
from generation_layer.llm.prompt_builder import PromptBuilder
from generation_layer.llm.registry import ProviderKind, create_llm_client
from generation_layer.llm.exceptions import (
    LLMClientError,
    LLMConnectionError,
    LLMEmptyResponseError,
    LLMGenerationError,
    LLMModelNotAvailableError,
    LLMOverloadedError,
    LLMRateLimitError,
    LLMTimeoutError,
)

__all__ = [
    "BaseLLMClient",
    "GeminiClient",
    "OpenAIClient",
    "PromptBuilder",
    "ProviderKind",
    "create_llm_client",
    "LLMClientError",
    "LLMConnectionError",
    "LLMEmptyResponseError",
    "LLMGenerationError",
    "LLMModelNotAvailableError",
    "LLMOverloadedError",
    "LLMRateLimitError",
    "LLMTimeoutError",
]
