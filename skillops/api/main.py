from __future__ import annotations

from fastapi import FastAPI

from skillops import __version__
from skillops.api.endpoints import health, marketplace, release, skills
from skillops.api.middleware.error_shaping import SafeErrorMiddleware
from skillops.api.middleware.request_id import RequestIdMiddleware

app = FastAPI(
    title="Skill Ops API",
    version=__version__,
)

# ------------------------------------------------------------
# Middleware stack (ORDER MATTERS)
# Starlette reverses add_middleware order: the LAST call is the OUTERMOST wrapper.
#   SafeErrorMiddleware -> RequestIdMiddleware -> handler
# ------------------------------------------------------------
app.add_middleware(RequestIdMiddleware)
app.add_middleware(SafeErrorMiddleware)

app.include_router(health.router)
app.include_router(skills.router)
app.include_router(release.router)
app.include_router(marketplace.router)
