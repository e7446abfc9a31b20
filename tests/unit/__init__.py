"""
Unit tests for the AI Generation Layer.

Test individual components in isolation:
- Data models (aliases, coercion, frozen records)
- Prompt builder (conversation rendering, custom prompts)
- Response parsers (degradation ladder, placeholder)
- Retry controller and fallback chain (fake clock, scripted client)
- Gemini client (httpx MockTransport)
"""
