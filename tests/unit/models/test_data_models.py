"""
Unit tests for input and output data models.
"""

import pytest
from pydantic import ValidationError

from generation_layer.models.enums import DocumentKind, PriorityEnum, Speaker, TaskKind
from generation_layer.models.input_models import (
    ConversationMessage,
    ConversationTranscript,
    GenerationRequest,
)
from generation_layer.models.output_models import GeneratedDocument, GeneratedTestCase, TestStep


class TestConversationModels:
    """Test conversation parsing from extension payloads."""

    @pytest.mark.parametrize("sender", ["ai", "AI", "assistant"])
    def test_assistant_aliases(self, sender):
        message = ConversationMessage.model_validate({"sender": sender, "text": "hi"})
        assert message.speaker is Speaker.ASSISTANT

    def test_speaker_key(self):
        message = ConversationMessage.model_validate({"speaker": "user", "text": "hi"})
        assert message.speaker is Speaker.USER
        assert message.timestamp is None

    def test_unknown_speaker_rejected(self):
        with pytest.raises(ValidationError):
            ConversationMessage.model_validate({"sender": "bot", "text": "hi"})

    def test_transcript_from_extension_payload(self, sample_conversation_data):
        transcript = ConversationTranscript.model_validate(sample_conversation_data)

        assert [m.speaker for m in transcript.messages] == [Speaker.USER, Speaker.ASSISTANT]
        assert transcript.title == "Login page planning"
        assert transcript.url == "https://chat.example.com/c/123"

    def test_transcript_immutable(self, sample_conversation_data):
        transcript = ConversationTranscript.model_validate(sample_conversation_data)
        with pytest.raises(ValidationError):
            transcript.title = "changed"


class TestGenerationRequest:
    """Test the core request model."""

    def test_defaults(self):
        request = GenerationRequest(content="<html/>", task=TaskKind.DOCUMENT)

        assert request.document_kind is DocumentKind.REQUIREMENTS
        assert request.conversation is None
        assert request.custom_prompt is None

    def test_task_from_string(self):
        assert GenerationRequest(content="x", task="test-cases").task is TaskKind.TEST_CASES

    def test_frozen(self):
        request = GenerationRequest(content="x", task=TaskKind.DOCUMENT)
        with pytest.raises(ValidationError):
            request.content = "y"


class TestGeneratedTestCase:
    """Test output model coercion and serialization."""

    def test_serializes_camel_case(self):
        tc = GeneratedTestCase(
            title="T",
            steps=[TestStep(description="s")],
            expected_result="E",
            priority="low",
        )

        dumped = tc.model_dump(by_alias=True, mode="json")
        assert dumped["expectedResult"] == "E"
        assert dumped["priority"] == "low"
        assert "expected_result" not in dumped

    def test_accepts_alias_on_input(self):
        tc = GeneratedTestCase.model_validate(
            {"title": "T", "steps": [{"description": "s"}], "expectedResult": "E"}
        )
        assert tc.expected_result == "E"
        assert tc.priority is PriorityEnum.MEDIUM

    def test_steps_required(self):
        with pytest.raises(ValidationError):
            GeneratedTestCase(title="T", steps=[], expected_result="E")

    @pytest.mark.parametrize("value, expected", [
        ("High", PriorityEnum.HIGH),
        (" low ", PriorityEnum.LOW),
        ("critical", PriorityEnum.MEDIUM),
        (None, PriorityEnum.MEDIUM),
    ])
    def test_priority_coercion(self, value, expected):
        tc = GeneratedTestCase(title="T", steps=[TestStep(description="s")], expected_result="E", priority=value)
        assert tc.priority is expected


class TestGeneratedDocument:
    """Test document model."""

    def test_type_alias(self):
        document = GeneratedDocument.model_validate({"title": "T", "content": "C", "type": "faq"})

        assert document.document_kind is DocumentKind.FAQ
        assert document.model_dump(by_alias=True)["type"] is DocumentKind.FAQ

    def test_unknown_type_coerced(self):
        document = GeneratedDocument(title="T", content="C", document_kind="whitepaper")
        assert document.document_kind is DocumentKind.REQUIREMENTS


def test_task_labels():
    assert TaskKind.TEST_CASES.label == "test cases"
    assert TaskKind.DOCUMENT.label == "document"


def test_document_descriptions():
    assert DocumentKind.REQUIREMENTS.description == "comprehensive project requirements document"
    assert DocumentKind.API.description == "API documentation"
