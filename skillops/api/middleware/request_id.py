import logging
import re
import time
import uuid

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from skillops.core.observability.metrics import inc_named

log = logging.getLogger("skillops.requests")

REQUEST_ID_HEADER = "X-Request-Id"

# caller-supplied ids are echoed back, so keep them header-safe
_SAFE_ID_RE = re.compile(r"^[A-Za-z0-9._:-]{1,128}$")


def resolve_request_id(incoming: str | None) -> str:
    if incoming and _SAFE_ID_RE.match(incoming):
        return incoming
    return str(uuid.uuid4())


class RequestIdMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        rid = resolve_request_id(request.headers.get(REQUEST_ID_HEADER))
        request.state.request_id = rid
        inc_named("requests_total")
        started = time.perf_counter()

        response: Response = await call_next(request)
        response.headers[REQUEST_ID_HEADER] = rid
        log.debug(
            "%s %s -> %s rid=%s %.1fms",
            request.method,
            request.url.path,
            response.status_code,
            rid,
            (time.perf_counter() - started) * 1000,
        )
        return response
