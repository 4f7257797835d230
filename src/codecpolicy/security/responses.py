"""Error-to-response mapping for Starlette applications.

Translates :class:`ResponseStatusError` into a JSON response encoded with
the application's CodecPolicy. 4xx errors are client faults and are logged
at debug level only.
"""

from __future__ import annotations

import logging
from typing import Any

from pydantic import BaseModel, Field
from starlette.applications import Starlette
from starlette.requests import Request
from starlette.responses import Response

from codecpolicy.codec.policy import CodecPolicy
from codecpolicy.errors import ResponseStatusError

logger = logging.getLogger(__name__)


class ErrorBody(BaseModel):
    """JSON body of an error response."""

    model_config = {"frozen": True}

    status: int
    error: str
    message: str
    detail: dict[str, Any] = Field(default_factory=dict)


def error_response(error: ResponseStatusError, policy: CodecPolicy) -> Response:
    """Render *error* as a JSON response with its status code."""
    body = ErrorBody(
        status=error.status_code,
        error=error.reason,
        message=error.message,
        detail=dict(error.detail),
    )
    return Response(
        content=policy.encode(body),
        status_code=error.status_code,
        media_type="application/json",
    )


def install_error_handlers(app: Starlette, policy: CodecPolicy) -> None:
    """Register the :class:`ResponseStatusError` handler on *app*."""

    async def handle(request: Request, exc: ResponseStatusError) -> Response:
        if exc.status_code >= 500:
            logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
        else:
            logger.debug(
                "%s %s rejected (%d): %s",
                request.method,
                request.url.path,
                exc.status_code,
                exc.message,
            )
        return error_response(exc, policy)

    app.add_exception_handler(ResponseStatusError, handle)  # type: ignore[arg-type]
