"""
AI Generation Layer for the feature/test tracking extension backend.

Turns a single generation request into a resilient sequence of LLM calls:
- Test case generation from page HTML
- Document generation (requirements, specs, guides, API docs, FAQ)

Architecture: async facade + fixed model fallback chain + per-model retry
controller + tolerant response parsing.
"""

__version__ = "0.1.0"
