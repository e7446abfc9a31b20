"""
Parsing-specific exceptions.

These never leave the parsing package: the public parsers catch them and
degrade to a placeholder record instead of failing the generation call.
"""

from typing import Any


class ResponseParseError(Exception):
    """
    Raised when model output cannot be turned into the expected JSON shape.
    """

    def __init__(
        self,
        message: str,
        raw_content: str | None = None,
        parse_error: str | None = None,
    ):
        """
        Initialize parse error.

        Args:
            message: Error description
            raw_content: Model output (first 500 chars are kept for debugging)
            parse_error: Original json.JSONDecodeError message
        """
        details: dict[str, Any] = {}
        if raw_content:
            details["content_snippet"] = raw_content[:500]
        if parse_error:
            details["parse_error"] = parse_error

        super().__init__(message)
        self.message = message
        self.details = details

    def __str__(self) -> str:
        if self.details.get("parse_error"):
            return f"{self.message} ({self.details['parse_error']})"
        return self.message
