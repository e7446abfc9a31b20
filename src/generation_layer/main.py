"""
FastAPI application entry point for the AI Generation Layer.
"""

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from prometheus_fastapi_instrumentator import Instrumentator

from generation_layer.api.dependencies import get_llm_client, get_prompt_builder
from generation_layer.api.error_handlers import EXCEPTION_HANDLERS
from generation_layer.api.middleware import RequestTracingMiddleware
from generation_layer.api.routes import router
from generation_layer.config import settings
from generation_layer.logging_config import configure_logging

# Configure structured logging before any other imports
configure_logging(settings.LOG_LEVEL, settings.ENVIRONMENT, settings.AI_ERROR_LOG_PATH)
logger = structlog.get_logger(__name__)

# Create FastAPI app
app = FastAPI(
    title="AI Generation Layer",
    description="Test case and document generation with model fallback",
    version=settings.APP_VERSION,
    docs_url="/docs",
    redoc_url="/redoc",
)

# Request tracing middleware (must be first for request_id in all logs)
app.add_middleware(RequestTracingMiddleware)

# The browser extension calls from its own origin
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Register exception handlers
for exc_class, handler in EXCEPTION_HANDLERS.items():
    app.add_exception_handler(exc_class, handler)

app.include_router(router, tags=["generation"])


@app.on_event("startup")
async def startup():
    """Application startup - load templates and verify the provider."""
    logger.info(
        "Application startup",
        version=settings.APP_VERSION,
        environment=settings.ENVIRONMENT,
        provider=settings.LLM_PROVIDER,
        models=settings.FALLBACK_MODELS,
    )

    # Fail fast on broken templates
    get_prompt_builder()

    if not settings.GEMINI_API_KEY:
        logger.warning("GEMINI_API_KEY not set, generation requests will fail")
    elif await get_llm_client().health_check():
        logger.info("LLM provider connection successful")
    else:
        logger.warning("LLM provider health check failed")

    logger.info("Application startup complete")


@app.on_event("shutdown")
async def shutdown():
    """Application shutdown - close the pooled provider connection."""
    logger.info("Application shutdown")
    if get_llm_client.cache_info().currsize:
        await get_llm_client().close()
    logger.info("Application shutdown complete")


# Prometheus metrics instrumentation
if settings.PROMETHEUS_ENABLED:
    Instrumentator().instrument(app).expose(app)


@app.get("/")
async def root():
    """Root endpoint with API documentation links."""
    return {
        "service": "AI Generation Layer",
        "version": settings.APP_VERSION,
        "docs": "/docs",
        "health": "/health",
        "models": "/models",
        "metrics": "/metrics" if settings.PROMETHEUS_ENABLED else None,
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "generation_layer.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.DEBUG,
    )
