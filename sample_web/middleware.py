"""Middleware и обработчики ошибок."""

import time

from fastapi import Request
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from zoomclient.logger import get_logger

from .exceptions import APIException

logger = get_logger("sample_web")


class LoggingMiddleware(BaseHTTPMiddleware):
    """Middleware для логирования HTTP запросов."""

    async def dispatch(self, request: Request, call_next):
        start_time = time.time()
        response = await call_next(request)
        process_time = time.time() - start_time
        logger.debug(
            f"Response: {request.method} {request.url.path} | status={response.status_code} | time={process_time:.3f}s"
        )
        return response


async def api_exception_handler(request: Request, exc: APIException) -> JSONResponse:
    """Обработчик API исключений."""
    logger.warning(f"{request.method} {request.url.path}: {exc.detail}")
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail},
    )
