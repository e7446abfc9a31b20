"""
API routes for test case and document generation.

Each generation request runs synchronously through the model fallback chain;
failures are mapped to HTTP responses by the handlers in error_handlers.py.
"""

import logging
import time

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from generation_layer import __version__
from generation_layer.api.dependencies import (
    get_generation_service,
    get_llm_client,
    get_settings,
)
from generation_layer.api.models import (
    DocumentRequest,
    DocumentResponse,
    ErrorResponse,
    HealthResponse,
    ModelsResponse,
    TestCasesRequest,
    TestCasesResponse,
)
from generation_layer.config import Settings
from generation_layer.llm.base_client import BaseLLMClient
from generation_layer.service import GenerationService

logger = logging.getLogger(__name__)

router = APIRouter()

_GENERATION_RESPONSES = {
    400: {"model": ErrorResponse, "description": "Empty content or unknown document type"},
    422: {"description": "Invalid request format"},
    503: {"model": ErrorResponse, "description": "All AI models failed"},
}


@router.post(
    "/generate/test-cases",
    response_model=TestCasesResponse,
    status_code=status.HTTP_200_OK,
    summary="Generate test cases for a page",
    responses=_GENERATION_RESPONSES,
)
async def generate_test_cases(
    request: TestCasesRequest,
    service: GenerationService = Depends(get_generation_service),
) -> TestCasesResponse:
    """
    Generate test cases from page content.

    Always returns at least one test case; unparseable model output yields a
    placeholder flagged for manual review.
    """
    start_time = time.time()

    test_cases = await service.generate_test_cases(
        request.content,
        project_context=request.project_context,
    )

    logger.info(
        "Test cases generated",
        extra={
            "count": len(test_cases),
            "duration_ms": int((time.time() - start_time) * 1000),
        },
    )
    return TestCasesResponse(test_cases=test_cases)


@router.post(
    "/generate/document",
    response_model=DocumentResponse,
    status_code=status.HTTP_200_OK,
    summary="Generate a document from a page and conversation",
    responses=_GENERATION_RESPONSES,
)
async def generate_document(
    request: DocumentRequest,
    service: GenerationService = Depends(get_generation_service),
) -> DocumentResponse:
    """
    Generate a markdown document.

    customPrompt, when given, replaces the default task description.
    """
    start_time = time.time()

    document = await service.generate_document(
        request.content,
        conversation=request.conversation,
        document_kind=request.document_type,
        custom_prompt=request.custom_prompt,
        project_context=request.project_context,
    )

    logger.info(
        "Document generated",
        extra={
            "type": document.document_kind.value,
            "content_length": len(document.content),
            "duration_ms": int((time.time() - start_time) * 1000),
        },
    )
    return DocumentResponse(document=document)


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
    responses={
        200: {"description": "Provider reachable"},
        503: {"description": "Provider unreachable or not configured"},
    },
)
async def health_check(
    settings: Settings = Depends(get_settings),
):
    """
    Check that the configured provider answers with the configured key.
    """
    try:
        client: BaseLLMClient = get_llm_client()
        healthy = await client.health_check()
    except ValueError as e:
        # Missing API key or unknown provider
        logger.warning("LLM client not configured", extra={"error": str(e)})
        healthy = False

    response = HealthResponse(
        status="healthy" if healthy else "unhealthy",
        version=__version__,
        provider=settings.LLM_PROVIDER,
        models=list(settings.FALLBACK_MODELS),
    )

    logger.info("Health check", extra={"status": response.status})

    return JSONResponse(
        status_code=status.HTTP_200_OK if healthy else status.HTTP_503_SERVICE_UNAVAILABLE,
        content=response.model_dump(mode="json"),
    )


@router.get(
    "/models",
    response_model=ModelsResponse,
    summary="Model fallback order",
)
async def list_models(
    settings: Settings = Depends(get_settings),
) -> ModelsResponse:
    """Return the fixed model fallback order, most preferred first."""
    return ModelsResponse(
        provider=settings.LLM_PROVIDER,
        models=list(settings.FALLBACK_MODELS),
    )
