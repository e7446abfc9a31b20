"""
API-specific request and response models for FastAPI endpoints.

Request and response bodies use the camelCase keys the browser extension
sends (projectContext, documentType, customPrompt, testCases). They wrap the
core models without changing them.
"""

from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from generation_layer.models.input_models import ConversationTranscript
from generation_layer.models.output_models import GeneratedDocument, GeneratedTestCase


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class TestCasesRequest(BaseModel):
    """Request for test case generation."""

    __test__ = False

    model_config = ConfigDict(populate_by_name=True)

    content: str = Field(description="Page HTML or equivalent context")
    project_context: Optional[str] = Field(
        default=None,
        alias="projectContext",
        description="Free-text project context",
    )


class DocumentRequest(BaseModel):
    """Request for document generation."""

    model_config = ConfigDict(populate_by_name=True)

    content: str = Field(description="Page HTML or equivalent context")
    conversation: Optional[ConversationTranscript] = Field(
        default=None,
        description="Scraped chat transcript ({messages|mergedMessages, url?, title?})",
    )
    document_type: Optional[str] = Field(
        default=None,
        alias="documentType",
        description="requirements, specs, guides, api or faq",
        examples=["requirements"],
    )
    custom_prompt: Optional[str] = Field(
        default=None,
        alias="customPrompt",
        description="Replaces the default task description",
    )
    project_context: Optional[str] = Field(
        default=None,
        alias="projectContext",
        description="Free-text project context",
    )


class TestCasesResponse(BaseModel):
    """Response for test case generation."""

    __test__ = False

    model_config = ConfigDict(populate_by_name=True)

    test_cases: list[GeneratedTestCase] = Field(
        alias="testCases",
        description="Generated test cases (never empty)",
    )


class DocumentResponse(BaseModel):
    """Response for document generation."""

    document: GeneratedDocument = Field(description="Generated document")


class HealthResponse(BaseModel):
    """Response for health check endpoint."""

    status: str = Field(
        description="Overall health status",
        examples=["healthy", "unhealthy"]
    )
    version: str = Field(
        description="Generation layer version",
        examples=["0.1.0"]
    )
    provider: str = Field(
        description="Configured LLM provider",
        examples=["gemini"]
    )
    models: list[str] = Field(
        description="Fallback order, most preferred first"
    )
    timestamp: datetime = Field(
        default_factory=_utcnow,
        description="Health check timestamp (UTC)"
    )


class ModelsResponse(BaseModel):
    """Response for the models endpoint."""

    provider: str = Field(description="Configured LLM provider")
    models: list[str] = Field(description="Fallback order, most preferred first")


class ErrorResponse(BaseModel):
    """Standard error response format."""

    error: str = Field(
        description="Error code or type",
        examples=["invalid_input", "all_models_failed", "internal_error"]
    )
    message: str = Field(
        description="Human-readable error message"
    )
    details: Optional[dict] = Field(
        default=None,
        description="Additional error details"
    )
    timestamp: datetime = Field(
        default_factory=_utcnow,
        description="Error timestamp (UTC)"
    )
