"""
Mapping of queue errors to HTTP responses.
"""

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from cloud_queue.core import (
    InvalidJobResult,
    InvalidJobType,
    JobNotFound,
    NoJobsAvailable,
    QueueError,
)
from cloud_queue.observability.logging import get_logger
from cloud_queue.types.api import ErrorResponse

logger = get_logger(__name__)

ERROR_STATUS_CODES: dict[type[QueueError], int] = {
    NoJobsAvailable: status.HTTP_404_NOT_FOUND,
    JobNotFound: status.HTTP_404_NOT_FOUND,
    InvalidJobType: status.HTTP_400_BAD_REQUEST,
    InvalidJobResult: status.HTTP_400_BAD_REQUEST,
}


async def queue_error_handler(request: Request, exc: QueueError) -> JSONResponse:
    """Render a queue error as an ErrorResponse."""
    status_code = ERROR_STATUS_CODES.get(
        type(exc), status.HTTP_500_INTERNAL_SERVER_ERROR
    )

    logger.warning(
        "Queue error",
        code=exc.code,
        detail=exc.message,
        status_code=status_code,
        path=request.url.path,
    )

    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(code=exc.code, detail=exc.message).model_dump(),
    )


def register_error_handlers(app: FastAPI) -> None:
    """Attach queue error handlers to the application."""
    app.add_exception_handler(QueueError, queue_error_handler)
