"""
Integration tests for the AI Generation Layer.

Test components together through the HTTP surface:
- API endpoints (FastAPI TestClient with dependency overrides)
- Full pipeline (request → prompt → scripted provider → fallback → parsing → response)
- Health and error envelopes
"""
