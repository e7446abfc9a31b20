"""
Generation facade.

GenerationService is the only entry point callers need: it validates input,
renders the prompt, runs the model fallback chain and hands the winning raw
text to the task parser. Callers observe either a parsed result,
GenerationInputError (before any network call), or AllModelsFailed.
"""

import asyncio
from pathlib import Path
from typing import Any, Optional, Sequence, Union

import structlog

from generation_layer.config import Settings, settings as default_settings
from generation_layer.exceptions import GenerationInputError
from generation_layer.llm.base_client import BaseLLMClient
from generation_layer.llm.prompt_builder import PromptBuilder
from generation_layer.llm.registry import create_llm_client
from generation_layer.models.enums import DocumentKind, TaskKind
from generation_layer.models.input_models import (
    ConversationMessage,
    ConversationTranscript,
    GenerationRequest,
)
from generation_layer.models.output_models import GeneratedDocument, GeneratedTestCase
from generation_layer.monitoring.metrics import generation_requests_total
from generation_layer.parsing import DocumentParser, TestCaseParser
from generation_layer.retry.controller import RetryController, SleepFn
from generation_layer.retry.exceptions import AllModelsFailed
from generation_layer.retry.failure_log import FailureLog
from generation_layer.retry.fallback import ModelFallbackChain

logger = structlog.get_logger(__name__)

ConversationInput = Union[ConversationTranscript, Sequence[ConversationMessage], Sequence[dict], None]


class GenerationService:
    """
    Generate test cases and documents from page content.

    Args:
        settings: Application settings (defaults to the global instance)
        client: Provider client; built from settings when omitted
        api_key: Overrides the configured API key when the client is built here
        prompt_builder: Prompt builder; built from settings when omitted
        failure_log: Sink for failed attempts
        sleep: Backoff sleep function (tests pass a recorder)
        models: Overrides the configured fallback order
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        client: Optional[BaseLLMClient] = None,
        api_key: Optional[str] = None,
        prompt_builder: Optional[PromptBuilder] = None,
        failure_log: Optional[FailureLog] = None,
        sleep: SleepFn = asyncio.sleep,
        models: Optional[Sequence[str]] = None,
    ):
        self.settings = settings or default_settings
        self.client = client or create_llm_client(self.settings, api_key=api_key)

        if prompt_builder is None:
            templates_dir = self.settings.PROMPT_TEMPLATES_DIR
            prompt_builder = PromptBuilder(Path(templates_dir) if templates_dir else None)
        self.prompt_builder = prompt_builder

        self.controller = RetryController(
            self.client,
            failure_log=failure_log,
            sleep=sleep,
            backoff_base=self.settings.RETRY_BACKOFF_BASE,
            temperature=self.settings.LLM_TEMPERATURE,
            max_tokens=self.settings.LLM_MAX_TOKENS,
        )
        self.chain = ModelFallbackChain(
            self.controller,
            models if models is not None else self.settings.FALLBACK_MODELS,
            max_retries_per_model=self.settings.MAX_RETRIES_PER_MODEL,
        )
        self.test_case_parser = TestCaseParser()
        self.document_parser = DocumentParser()

    @property
    def models(self) -> tuple[str, ...]:
        """The fallback order, most preferred first."""
        return self.chain.models

    async def generate_test_cases(
        self,
        content: str,
        project_context: Optional[str] = None,
    ) -> list[GeneratedTestCase]:
        """
        Generate test cases for a page.

        Raises:
            GenerationInputError: content is empty or whitespace
            AllModelsFailed: every model failed
        """
        self._require_content(content, TaskKind.TEST_CASES)
        request = GenerationRequest(
            content=content,
            task=TaskKind.TEST_CASES,
            project_context=project_context,
        )
        return await self.generate(request)

    async def generate_document(
        self,
        content: str,
        conversation: ConversationInput = None,
        document_kind: Union[DocumentKind, str, None] = None,
        custom_prompt: Optional[str] = None,
        project_context: Optional[str] = None,
    ) -> GeneratedDocument:
        """
        Generate a document from a page and an optional conversation.

        Raises:
            GenerationInputError: content is empty/whitespace or document_kind unknown
            AllModelsFailed: every model failed
        """
        self._require_content(content, TaskKind.DOCUMENT)
        request = GenerationRequest(
            content=content,
            task=TaskKind.DOCUMENT,
            conversation=self._transcript(conversation),
            document_kind=self._document_kind(document_kind),
            custom_prompt=custom_prompt,
            project_context=project_context,
        )
        return await self.generate(request)

    async def generate(self, request: GenerationRequest) -> Any:
        """
        Run one generation request end to end.

        Returns:
            list[GeneratedTestCase] for TEST_CASES, GeneratedDocument for DOCUMENT
        """
        task = request.task
        self._require_content(request.content, task)

        parser = self.test_case_parser.parse if task is TaskKind.TEST_CASES else self.document_parser.parse
        prompt = self.prompt_builder.build_prompt(request)

        logger.info(
            "Generation started",
            task=task.value,
            content_length=len(request.content),
            models=list(self.models),
        )

        try:
            result = await self.chain.generate(prompt, parser, task)
        except AllModelsFailed:
            generation_requests_total.labels(task=task.value, status="exhausted").inc()
            raise

        generation_requests_total.labels(task=task.value, status="success").inc()
        return result

    @staticmethod
    def _require_content(content: Any, task: TaskKind) -> None:
        if not isinstance(content, str) or not content.strip():
            generation_requests_total.labels(task=task.value, status="invalid_input").inc()
            raise GenerationInputError(
                f"Content is required for {task.label} generation",
                details={"task": task.value},
            )

    @staticmethod
    def _document_kind(value: Union[DocumentKind, str, None]) -> DocumentKind:
        if value is None:
            return DocumentKind.REQUIREMENTS
        try:
            return DocumentKind(value)
        except ValueError as e:
            raise GenerationInputError(
                f"Unknown document type: {value}",
                details={"allowed": [k.value for k in DocumentKind]},
            ) from e

    @staticmethod
    def _transcript(conversation: ConversationInput) -> Optional[ConversationTranscript]:
        if conversation is None or isinstance(conversation, ConversationTranscript):
            return conversation
        return ConversationTranscript(messages=list(conversation))

    async def close(self) -> None:
        await self.client.close()

    async def __aenter__(self) -> "GenerationService":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()
