"""
Document parsing.

Recovers a GeneratedDocument from model output through a degradation ladder:

1. Strip code fences and parse the whole text as a JSON object
2. Parse the first top-level balanced {...} span embedded in surrounding prose
3. Regex-extract a "content": "..." string field from the raw text
4. Use the raw text itself as the document body

A malformed response always yields a user-visible document; it never raises.
"""

import json
import re
from typing import Any

import structlog

from generation_layer.models.enums import DocumentKind, TaskKind
from generation_layer.models.output_models import GeneratedDocument
from generation_layer.monitoring.metrics import parse_fallbacks_total

from .exceptions import ResponseParseError
from .json_extract import find_embedded_json, load_json, strip_code_fences

logger = structlog.get_logger(__name__)

DEFAULT_TITLE = "Generated Document"
DEFAULT_CONTENT = "Document content could not be parsed."
FALLBACK_TITLE = "AI Generated Document"

# "content": "<JSON string literal body>", escape-aware
_CONTENT_FIELD = re.compile(r'"content"\s*:\s*"((?:[^"\\]|\\.)*)"', re.DOTALL)


class DocumentParser:
    """Parser for the document generation task."""

    task = TaskKind.DOCUMENT

    def parse(self, text: str) -> GeneratedDocument:
        """
        Parse model output into a document.

        Args:
            text: Raw model output

        Returns:
            GeneratedDocument; degraded but never missing
        """
        if not isinstance(text, str):
            text = "" if text is None else str(text)

        try:
            document = self._from_json(self._extract_object(text))
            logger.debug("Parsed document", title=document.title, type=document.document_kind.value)
            return document
        except (ResponseParseError, ValueError, RecursionError) as e:
            logger.error(
                "Error parsing AI document response, salvaging content",
                error=str(e),
                error_type=type(e).__name__,
                details=getattr(e, "details", {}),
            )

        return self._salvage(text)

    def _extract_object(self, text: str) -> dict[str, Any]:
        cleaned = strip_code_fences(text)
        try:
            parsed = load_json(cleaned)
        except ResponseParseError:
            parsed = None

        if isinstance(parsed, dict):
            return parsed

        embedded = find_embedded_json(cleaned, dict, "{")
        if embedded is None:
            raise ResponseParseError(
                "No JSON object found in model output",
                raw_content=cleaned,
            )
        parse_fallbacks_total.labels(task=self.task.value, level="embedded_json").inc()
        return embedded

    @staticmethod
    def _from_json(data: dict[str, Any]) -> GeneratedDocument:
        """Build a document from an untrusted JSON object, defaulting every field."""
        return GeneratedDocument(
            title=_text(data.get("title"), DEFAULT_TITLE),
            content=_text(data.get("content"), DEFAULT_CONTENT),
            document_kind=data.get("type") or DocumentKind.REQUIREMENTS,
        )

    def _salvage(self, text: str) -> GeneratedDocument:
        """Best-effort recovery once the output is known not to hold a JSON object."""
        match = _CONTENT_FIELD.search(text)
        if match:
            content = _unescape(match.group(1))
            level = "content_regex"
        else:
            content = text if text.strip() else DEFAULT_CONTENT
            level = "raw_text"

        parse_fallbacks_total.labels(task=self.task.value, level=level).inc()
        logger.warning("Document recovered from unparseable output", recovery=level)

        return GeneratedDocument(
            title=FALLBACK_TITLE,
            content=content,
            document_kind=DocumentKind.REQUIREMENTS,
        )


def _text(value: Any, default: str) -> str:
    if isinstance(value, str) and value.strip():
        return value
    return default


def _unescape(literal: str) -> str:
    """Decode a JSON string literal body, tolerating invalid escapes."""
    try:
        return json.loads(f'"{literal}"', strict=False)
    except json.JSONDecodeError:
        return literal.replace("\\n", "\n").replace('\\"', '"')


def parse_document(text: str) -> GeneratedDocument:
    """Parse model output into a document. Never raises."""
    return DocumentParser().parse(text)
