from __future__ import annotations

from fastapi import APIRouter
from starlette.responses import JSONResponse

from skillops.api.deps import project_root
from skillops.core.observability.metrics import inc_named, snapshot_named

router = APIRouter()


# ------------------------------------------------------------
# Unversioned health
# ------------------------------------------------------------
@router.get("/health/live")
async def live():
    inc_named("health_live")
    return {"status": "ok"}


# ------------------------------------------------------------
# Versioned health
# ------------------------------------------------------------
@router.get("/api/v1/health/live")
def liveness():
    inc_named("health_live")
    return {"status": "alive"}


@router.get("/api/v1/health/ready")
def readiness():
    """Ready when the configured project root exists and is a directory."""
    inc_named("health_ready")
    root = project_root()
    if not root.is_dir():
        return JSONResponse(
            status_code=503,
            content={"status": "not_ready", "problems": [f"missing_root:{root}"]},
        )
    return {"status": "ready", "root": str(root)}


@router.get("/api/v1/metrics/snapshot")
def metrics_snapshot():
    return {"named": snapshot_named()}
