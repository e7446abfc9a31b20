"""
Input data models for the AI Generation Layer.

These models represent an already-validated generation request handed over by
the HTTP layer: the page content, an optional scraped conversation, and the
task-specific parameters.
"""

from typing import Any, Optional
from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from generation_layer.models.enums import DocumentKind, Speaker, TaskKind


class ConversationMessage(BaseModel):
    """
    One message of a scraped chat transcript.

    The extension reports the assistant side as sender "ai"; it is accepted
    as an alias of "assistant".
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    speaker: Speaker = Field(
        ...,
        validation_alias=AliasChoices("speaker", "sender"),
        description="Who wrote the message",
    )
    text: str = Field(..., description="Message text")
    timestamp: Optional[str] = Field(default=None, description="Optional timestamp as scraped")

    @field_validator("speaker", mode="before")
    @classmethod
    def normalize_speaker(cls, v: Any) -> Any:
        if isinstance(v, str) and v.strip().lower() == "ai":
            return Speaker.ASSISTANT
        return v


class ConversationTranscript(BaseModel):
    """Ordered conversation plus the page it was scraped from."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    messages: list[ConversationMessage] = Field(
        default_factory=list,
        validation_alias=AliasChoices("messages", "mergedMessages"),
        description="Messages in display order",
    )
    url: Optional[str] = Field(default=None, description="Page URL")
    title: Optional[str] = Field(default=None, description="Page title")


class GenerationRequest(BaseModel):
    """
    Immutable input for one logical generation call.

    The non-empty-content invariant is enforced by GenerationService before
    any network activity, so that it surfaces as GenerationInputError rather
    than a model validation error.
    """

    model_config = ConfigDict(frozen=True)

    content: str = Field(..., description="Page HTML or equivalent context")
    task: TaskKind = Field(..., description="Which generation task to run")
    conversation: Optional[ConversationTranscript] = Field(
        default=None,
        description="Optional chat transcript used as extra context for documents",
    )
    document_kind: DocumentKind = Field(
        default=DocumentKind.REQUIREMENTS,
        description="Document sub-type (document task only)",
    )
    custom_prompt: Optional[str] = Field(
        default=None,
        description="Replaces the default task description when set (document task only)",
    )
    project_context: Optional[str] = Field(
        default=None,
        description="Free-text project context embedded in the prompt",
    )
