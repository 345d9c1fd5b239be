from __future__ import annotations

import logging
from typing import Callable, Dict, Optional

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import JSONResponse, Response

from skillops.core.observability.metrics import inc_named

log = logging.getLogger("skillops.errors")


def error_payload(request_id: Optional[str]) -> Dict[str, str]:
    payload = {"error": "internal_error", "detail": "Internal Server Error"}
    if request_id:
        payload["request_id"] = request_id
    return payload


class SafeErrorMiddleware(BaseHTTPMiddleware):
    """
    Turns unhandled exceptions into a bare 500 body.

    The traceback goes to the ``skillops.errors`` log only; clients get the
    request id so the two can be matched up.
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        try:
            return await call_next(request)
        except Exception:
            rid = getattr(request.state, "request_id", None) or request.headers.get("x-request-id")
            inc_named("errors_total")
            log.exception("Unhandled error rid=%s %s %s", rid, request.method, request.url.path)
            return JSONResponse(status_code=500, content=error_payload(rid))
