"""Request pipeline: per-request logging and the single top-level handler for unexpected errors."""

import logging
import time
import uuid

from fastapi import Request, status
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.responses import Response

from inventory.schemas.common import ApiResponse

logger = logging.getLogger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"
INTERNAL_ERROR_MESSAGE = "Internal server error"


def envelope_response(
    status_code: int,
    message: str,
    errors: list[str] | None = None,
    headers: dict[str, str] | None = None,
) -> JSONResponse:
    """JSON failure envelope: {success: false, message, data: null, errors}."""
    body = ApiResponse.fail(message, errors).model_dump()
    return JSONResponse(status_code=status_code, content=body, headers=headers)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Outermost middleware. Logs start and completion (status, elapsed ms) of
    every request under a short correlation id, echoed in X-Request-ID.

    Exceptions that escape the routes and exception handlers are logged with
    their traceback here and turned into a generic 500 envelope.
    """

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        request_id = uuid.uuid4().hex[:8]
        request.state.request_id = request_id
        method, path = request.method, request.url.path
        start = time.perf_counter()
        status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
        logger.info("[%s] %s %s started", request_id, method, path)
        try:
            try:
                response = await call_next(request)
            except Exception:
                logger.exception("[%s] Unhandled error on %s %s", request_id, method, path)
                response = envelope_response(
                    status.HTTP_500_INTERNAL_SERVER_ERROR, INTERNAL_ERROR_MESSAGE
                )
            status_code = response.status_code
            response.headers[REQUEST_ID_HEADER] = request_id
            return response
        finally:
            elapsed_ms = (time.perf_counter() - start) * 1000
            logger.info(
                "[%s] %s %s -> %s in %.1fms",
                request_id,
                method,
                path,
                status_code,
                elapsed_ms,
            )
