"""
FastAPI exception handlers for structured error responses.

Maps generation exceptions to HTTP status codes. Request shape errors keep
FastAPI's default 422 handling.
"""

import logging

from fastapi import Request, status
from fastapi.responses import JSONResponse

from generation_layer.api.models import ErrorResponse
from generation_layer.exceptions import GenerationInputError
from generation_layer.retry.exceptions import AllModelsFailed

logger = logging.getLogger(__name__)


async def input_error_handler(request: Request, exc: GenerationInputError) -> JSONResponse:
    """
    Handle rejected input (empty content, unknown document type).

    Maps to 400 Bad Request.
    """
    logger.warning(
        "Invalid generation input",
        extra={"error": exc.message, "details": exc.details},
    )

    body = ErrorResponse(error="invalid_input", message=exc.message, details=exc.details)
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=body.model_dump(mode="json"),
    )


async def all_models_failed_handler(request: Request, exc: AllModelsFailed) -> JSONResponse:
    """
    Handle fallback chain exhaustion.

    Maps to 503 Service Unavailable. The message is generic; per-model
    detail is already in the failure log.
    """
    logger.error(
        "All models failed",
        extra={
            "task": exc.task.value,
            "models_tried": exc.chain_state.models_tried,
            "total_attempts": exc.chain_state.attempts,
        },
    )

    body = ErrorResponse(error="all_models_failed", message=exc.message)
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content=body.model_dump(mode="json"),
    )


async def generic_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Handle unexpected errors.

    Maps to 500 Internal Server Error.
    """
    logger.exception(
        "Unexpected error",
        extra={"error_type": type(exc).__name__},
    )

    body = ErrorResponse(error="internal_error", message="An unexpected error occurred")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=body.model_dump(mode="json"),
    )


# Exception handler mapping for FastAPI app.add_exception_handler()
EXCEPTION_HANDLERS = {
    GenerationInputError: input_error_handler,
    AllModelsFailed: all_models_failed_handler,
    Exception: generic_error_handler,
}
