"""
Prompt builder for LLM requests.

Responsible for:
- Loading and rendering Jinja2 templates (test cases + document prompts)
- Rendering conversation transcripts as alternating "User:" / "AI:" lines
- Applying a caller-supplied custom prompt in place of the default framing
"""

from pathlib import Path
from typing import Optional
from jinja2 import Environment, FileSystemLoader, StrictUndefined
import structlog

from generation_layer.models.enums import DocumentKind, PriorityEnum, Speaker, TaskKind
from generation_layer.models.input_models import ConversationTranscript, GenerationRequest


logger = structlog.get_logger(__name__)

DEFAULT_TEMPLATES_DIR = Path(__file__).parent / "templates"

TEST_CASES_TEMPLATE = "test_cases_prompt.txt"
DOCUMENT_TEMPLATE = "document_prompt.txt"


class PromptBuilder:
    """
    Build task-specific prompts.

    Every prompt embeds the content blob and ends with an explicit instruction
    that the model must return only the JSON payload.
    """

    def __init__(self, templates_dir: Optional[Path] = None):
        """
        Initialize prompt builder.

        Args:
            templates_dir: Directory containing prompt templates
                (defaults to the templates bundled with the package)
        """
        self.templates_dir = Path(templates_dir) if templates_dir else DEFAULT_TEMPLATES_DIR

        self.jinja_env = Environment(
            loader=FileSystemLoader(str(self.templates_dir)),
            trim_blocks=True,
            lstrip_blocks=True,
            undefined=StrictUndefined,
            autoescape=False  # We're generating prompts, not HTML
        )

        try:
            self.test_cases_template = self.jinja_env.get_template(TEST_CASES_TEMPLATE)
            self.document_template = self.jinja_env.get_template(DOCUMENT_TEMPLATE)
            logger.info("Loaded prompt templates", templates_dir=str(self.templates_dir))
        except Exception as e:
            logger.error("Failed to load prompt templates", error=str(e))
            raise

    def build_prompt(self, request: GenerationRequest) -> str:
        """Build the prompt for whichever task the request carries."""
        if request.task is TaskKind.TEST_CASES:
            return self.build_test_cases_prompt(request.content, request.project_context)
        return self.build_document_prompt(
            request.content,
            conversation=request.conversation,
            document_kind=request.document_kind,
            custom_prompt=request.custom_prompt,
            project_context=request.project_context,
        )

    def build_test_cases_prompt(
        self,
        content: str,
        project_context: Optional[str] = None,
    ) -> str:
        """
        Build the test case generation prompt.

        Args:
            content: Page HTML
            project_context: Optional free-text project context

        Returns:
            Rendered prompt
        """
        rendered = self.test_cases_template.render(
            content=content,
            project_context=(project_context or "").strip(),
            priorities=[p.value for p in PriorityEnum],
        ).strip()

        logger.debug(
            "Test cases prompt built",
            prompt_length=len(rendered),
            has_project_context=bool(project_context),
        )
        return rendered

    def build_document_prompt(
        self,
        content: str,
        conversation: Optional[ConversationTranscript] = None,
        document_kind: DocumentKind = DocumentKind.REQUIREMENTS,
        custom_prompt: Optional[str] = None,
        project_context: Optional[str] = None,
    ) -> str:
        """
        Build the document generation prompt.

        A non-blank custom_prompt replaces the default task description
        entirely; it is not appended to it.

        Args:
            content: Page HTML
            conversation: Optional chat transcript
            document_kind: Document sub-type
            custom_prompt: Optional caller-supplied task description
            project_context: Optional free-text project context

        Returns:
            Rendered prompt
        """
        document_kind = DocumentKind(document_kind)

        if custom_prompt and custom_prompt.strip():
            task_description = custom_prompt.strip()
        else:
            task_description = (
                "You are an expert technical writer. "
                f"Generate a {document_kind.description} based on the provided information."
            )

        rendered = self.document_template.render(
            task_description=task_description,
            project_context=(project_context or "").strip(),
            conversation_source=self._conversation_source(conversation),
            conversation_lines=self.render_conversation(conversation),
            content=content,
            document_kind=document_kind.value,
        ).strip()

        logger.debug(
            "Document prompt built",
            prompt_length=len(rendered),
            document_kind=document_kind.value,
            custom_prompt=bool(custom_prompt and custom_prompt.strip()),
            conversation_messages=len(conversation.messages) if conversation else 0,
        )
        return rendered

    @staticmethod
    def render_conversation(conversation: Optional[ConversationTranscript]) -> list[str]:
        """Render messages in order as "User: ..." / "AI: ..." lines."""
        if conversation is None:
            return []
        return [
            f"{'User' if message.speaker is Speaker.USER else 'AI'}: {message.text}"
            for message in conversation.messages
        ]

    @staticmethod
    def _conversation_source(conversation: Optional[ConversationTranscript]) -> str:
        if conversation is None:
            return ""
        if conversation.title and conversation.url:
            return f"{conversation.title} ({conversation.url})"
        return conversation.title or conversation.url or ""
