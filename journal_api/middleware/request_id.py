"""
Daily Journal API - Request ID Middleware
===========================================

What:  Assigns a short correlation ID to each request and echoes it back in
       the X-Request-ID response header.
How:   Reuses a client-supplied X-Request-ID or generates one, stores it in a
       ContextVar for loggers and exception handlers, and in request.state for
       route handlers.

Exceptions no handler claimed are turned into the generic 500 here. Starlette
would otherwise answer them from ServerErrorMiddleware, outside this
middleware, and the response would lose its X-Request-ID.
"""

import logging
import uuid
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import JSONResponse, Response

from journal_api.exceptions import UNEXPECTED_ERROR_MESSAGE

logger = logging.getLogger(__name__)

# Coroutine-local: concurrent requests on the same event loop each see their own ID
request_id_var: ContextVar[str] = ContextVar("request_id", default="")


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Middleware that assigns a unique ID to each request for tracing."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        rid = request.headers.get("X-Request-ID") or str(uuid.uuid4())[:8]

        request_id_var.set(rid)
        request.state.request_id = rid

        try:
            response = await call_next(request)
        except Exception as e:
            logger.error("[%s] Unexpected error: %s", rid, str(e), exc_info=True)
            response = JSONResponse(status_code=500, content={"message": UNEXPECTED_ERROR_MESSAGE})
        response.headers["X-Request-ID"] = rid
        return response
