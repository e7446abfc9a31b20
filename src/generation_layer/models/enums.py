"""
Enumerations for AI Generation Layer data models.

All enums are closed taxonomies - no values outside these sets are permitted.
"""

from enum import Enum


class TaskKind(str, Enum):
    """Kind of generation task a request drives."""

    TEST_CASES = "test-cases"
    DOCUMENT = "document"

    @property
    def label(self) -> str:
        """Human wording used in user-facing error messages."""
        return "test cases" if self is TaskKind.TEST_CASES else "document"


class DocumentKind(str, Enum):
    """
    Document sub-types the generator can produce.

    Each kind carries the phrase used to describe it in the default prompt.
    """

    REQUIREMENTS = "requirements"
    SPECS = "specs"
    GUIDES = "guides"
    API = "api"
    FAQ = "faq"

    @property
    def description(self) -> str:
        return _DOCUMENT_DESCRIPTIONS[self]


_DOCUMENT_DESCRIPTIONS = {
    DocumentKind.REQUIREMENTS: "comprehensive project requirements document",
    DocumentKind.SPECS: "detailed technical specifications",
    DocumentKind.GUIDES: "user-friendly documentation and guides",
    DocumentKind.API: "API documentation",
    DocumentKind.FAQ: "frequently asked questions and answers",
}


class PriorityEnum(str, Enum):
    """
    Test case priority.

    Values outside this set are coerced to MEDIUM by the output models.
    """

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class Speaker(str, Enum):
    """Author of one conversation message."""

    USER = "user"
    ASSISTANT = "assistant"


class FailureClassification(str, Enum):
    """
    Classification of a failed model call.

    OVERLOADED and RATE_LIMITED are transient and retried with backoff on the
    same model. OTHER aborts the model immediately.
    """

    OVERLOADED = "overloaded"
    RATE_LIMITED = "rate_limited"
    OTHER = "other"

    @property
    def retryable(self) -> bool:
        return self in (FailureClassification.OVERLOADED, FailureClassification.RATE_LIMITED)
