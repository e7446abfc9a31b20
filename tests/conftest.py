"""Shared test fixtures and configuration for all tests.

This conftest.py provides common fixtures used across unit and integration tests.
"""

import json
from typing import Any, Dict

import pytest

from generation_layer.config import Settings


@pytest.fixture
def test_settings() -> Settings:
    """Test settings with safe defaults for local testing.

    Override specific settings in individual tests as needed:
        def test_something(test_settings):
            test_settings.MAX_RETRIES_PER_MODEL = 3
    """
    return Settings(
        # === Application ===
        APP_NAME="AI Generation Layer (Test)",
        APP_VERSION="0.1.0",
        DEBUG=True,
        LOG_LEVEL="DEBUG",
        ENVIRONMENT="development",

        # === Provider ===
        LLM_PROVIDER="gemini",
        GEMINI_API_KEY="test-api-key",
        GEMINI_BASE_URL="https://gemini.test",
        LLM_TIMEOUT=5,

        # === Retry & Fallback ===
        FALLBACK_MODELS=["model-a", "model-b"],
        MAX_RETRIES_PER_MODEL=2,
        RETRY_BACKOFF_BASE=2.0,

        # === Logging / Monitoring ===
        AI_ERROR_LOG_PATH=None,
        PROMETHEUS_ENABLED=False,  # Disable metrics in tests unless explicitly needed
    )


@pytest.fixture
def sample_html() -> str:
    """Small page snippet used as generation content."""
    return (
        '<form id="login"><input name="email" type="email"/>'
        '<input name="password" type="password"/>'
        '<button type="submit">Sign in</button></form>'
    )


@pytest.fixture
def sample_conversation_data() -> Dict[str, Any]:
    """Conversation payload as the browser extension sends it."""
    return {
        "mergedMessages": [
            {"sender": "user", "text": "We need a login page", "timestamp": "10:00"},
            {"sender": "ai", "text": "Email and password fields, plus a submit button."},
        ],
        "url": "https://chat.example.com/c/123",
        "title": "Login page planning",
    }


@pytest.fixture
def valid_test_cases_data() -> list[Dict[str, Any]]:
    """Well-formed test case array as a model would return it."""
    return [
        {
            "title": "Valid login",
            "description": "User signs in with valid credentials",
            "steps": [
                {"description": "Enter a registered email"},
                {"description": "Enter the matching password"},
                {"description": "Click Sign in"},
            ],
            "expectedResult": "User lands on the dashboard",
            "priority": "high",
        },
        {
            "title": "Empty password",
            "description": "Submitting without a password is rejected",
            "steps": [{"description": "Enter an email only"}, {"description": "Click Sign in"}],
            "expectedResult": "A validation message is shown",
            "priority": "medium",
        },
    ]


@pytest.fixture
def valid_test_cases_json(valid_test_cases_data: list[Dict[str, Any]]) -> str:
    return json.dumps(valid_test_cases_data)


@pytest.fixture
def valid_document_json() -> str:
    return json.dumps(
        {
            "title": "Login Requirements",
            "content": "# Login\n\n- Email field\n- Password field",
            "type": "requirements",
        }
    )
