"""
Output data models for the AI Generation Layer.

These records are produced transiently by one generation call and handed to
the caller for persistence and serialization. Field-level coercion lives here
so that anything the parser builds is well-formed by construction.
"""

from typing import Any
from pydantic import BaseModel, ConfigDict, Field, field_validator

from generation_layer.models.enums import DocumentKind, PriorityEnum


class TestStep(BaseModel):
    """A single step of a generated test case."""

    __test__ = False  # not a pytest test class

    model_config = ConfigDict(frozen=True)

    description: str = Field(..., description="What to do in this step")


class GeneratedTestCase(BaseModel):
    """
    A test case produced by the model.

    Serialized with the camelCase key `expectedResult` expected by the
    extension and the test records API.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    title: str = Field(..., description="Short test case name")
    description: str = Field(default="", description="What this test validates")
    steps: list[TestStep] = Field(..., min_length=1, description="Ordered steps")
    expected_result: str = Field(
        ...,
        alias="expectedResult",
        description="What should happen",
    )
    priority: PriorityEnum = Field(default=PriorityEnum.MEDIUM, description="low, medium or high")

    @field_validator("priority", mode="before")
    @classmethod
    def coerce_priority(cls, v: Any) -> PriorityEnum:
        """Anything outside the enum becomes MEDIUM."""
        if isinstance(v, PriorityEnum):
            return v
        if isinstance(v, str):
            try:
                return PriorityEnum(v.strip().lower())
            except ValueError:
                pass
        return PriorityEnum.MEDIUM


class GeneratedDocument(BaseModel):
    """A markdown document produced by the model."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    title: str = Field(..., description="Document title")
    content: str = Field(..., description="Document body in markdown")
    document_kind: DocumentKind = Field(
        default=DocumentKind.REQUIREMENTS,
        alias="type",
        description="Document sub-type",
    )

    @field_validator("document_kind", mode="before")
    @classmethod
    def coerce_document_kind(cls, v: Any) -> DocumentKind:
        if isinstance(v, DocumentKind):
            return v
        if isinstance(v, str):
            try:
                return DocumentKind(v.strip().lower())
            except ValueError:
                pass
        return DocumentKind.REQUIREMENTS
