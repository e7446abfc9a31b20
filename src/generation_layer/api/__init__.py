"""
FastAPI API routes and endpoints.

- routes.py: POST /generate/test-cases, POST /generate/document, GET /health, GET /models
- dependencies.py: Dependency injection for LLM client, prompt builder, service
- models.py: API-specific request/response models
- error_handlers.py: Exception handlers for structured error responses
- middleware.py: Request ID tracing
"""

from generation_layer.api import dependencies, error_handlers, models
from generation_layer.api.routes import router

__all__ = [
    "router",
    "dependencies",
    "error_handlers",
    "models",
]
