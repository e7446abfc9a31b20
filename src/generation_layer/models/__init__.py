"""
Pydantic data models for the AI Generation Layer.

Includes:
- Enums (TaskKind, DocumentKind, PriorityEnum, Speaker, FailureClassification)
- Input models (ConversationMessage, ConversationTranscript, GenerationRequest)
- Output models (TestStep, GeneratedTestCase, GeneratedDocument)
- LLM models (LLMGenerationRequest, LLMGenerationResponse)
"""

from generation_layer.models.enums import (
    DocumentKind,
    FailureClassification,
    PriorityEnum,
    Speaker,
    TaskKind,
)
from generation_layer.models.input_models import (
    ConversationMessage,
    ConversationTranscript,
    GenerationRequest,
)
from generation_layer.models.output_models import (
    GeneratedDocument,
    GeneratedTestCase,
    TestStep,
)
from generation_layer.models.llm_models import (
    LLMGenerationRequest,
    LLMGenerationResponse,
)

__all__ = [
    # Enums
    "TaskKind",
    "DocumentKind",
    "PriorityEnum",
    "Speaker",
    "FailureClassification",
    # Input models
    "ConversationMessage",
    "ConversationTranscript",
    "GenerationRequest",
    # Output models
    "TestStep",
    "GeneratedTestCase",
    "GeneratedDocument",
    # LLM models
    "LLMGenerationRequest",
    "LLMGenerationResponse",
]
