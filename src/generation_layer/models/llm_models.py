"""
LLM-specific data models for request/response cycle.

These models are internal to the LLM layer and handle the raw communication
with the provider API. They are separate from the business models
(GeneratedTestCase, GeneratedDocument) so the provider can be swapped without
touching the parsing layer.
"""

from typing import Any, Dict, Optional
from pydantic import BaseModel, Field, ConfigDict


class LLMGenerationRequest(BaseModel):
    """
    Internal request model for LLM generation.

    This is the standardized format sent to any LLM client implementation.
    """
    model_config = ConfigDict(frozen=True)

    prompt: str = Field(..., description="Complete prompt text")
    model: str = Field(..., description="Model identity (e.g., 'gemini-2.0-flash')")
    temperature: float = Field(default=0.4, ge=0.0, le=2.0, description="Sampling temperature")
    max_tokens: int = Field(default=8192, ge=1, description="Maximum tokens to generate")


class LLMGenerationResponse(BaseModel):
    """
    Internal response model from LLM generation.

    Contains the raw generated text plus metadata for logging. Parsing of the
    content into structured records happens in the parsing layer.
    """
    model_config = ConfigDict(frozen=True)

    content: str = Field(..., description="Generated text (nominally JSON, may be wrapped)")
    model_version: str = Field(..., description="Model version reported by the provider")
    finish_reason: str = Field(..., description="Why generation stopped: 'STOP', 'MAX_TOKENS', etc.")
    usage_tokens: Optional[int] = Field(default=None, description="Total tokens used")
    prompt_tokens: Optional[int] = Field(default=None, description="Tokens in prompt")
    completion_tokens: Optional[int] = Field(default=None, description="Tokens in completion")
    latency_ms: int = Field(..., ge=0, description="Generation latency in milliseconds")
    raw_metadata: Dict[str, Any] = Field(
        default_factory=dict,
        description="Provider-specific metadata (for debugging)"
    )
