"""
Response parsing: model text to structured records.

- json_extract.py: Fence stripping and balanced JSON span search
- test_cases.py: Test case parser (placeholder on failure)
- documents.py: Document parser (degradation ladder on failure)

Parsers never raise; ResponseParseError stays inside this package.
"""

from .documents import DocumentParser, parse_document
from .exceptions import ResponseParseError
from .test_cases import TestCaseParser, parse_test_cases, placeholder_test_case

__all__ = [
    "DocumentParser",
    "TestCaseParser",
    "parse_document",
    "parse_test_cases",
    "placeholder_test_case",
    "ResponseParseError",
]
