from __future__ import annotations

from fastapi import APIRouter, HTTPException

from skillops.api.deps import project_root, project_settings
from skillops.core.release.changesets import ChangesetError
from skillops.core.release.readiness import check_release_readiness
from skillops.core.release.versioning import version_packages

router = APIRouter(prefix="/api/v1/release", tags=["release"])


@router.get("/plan")
def release_plan():
    """Dry-run of the version-bump run; nothing is written."""
    try:
        plan = version_packages(project_root(), project_settings(), dry_run=True)
    except (ChangesetError, ValueError) as e:
        raise HTTPException(status_code=422, detail=str(e))
    return plan.to_dict()


@router.get("/readiness")
def release_readiness():
    return check_release_readiness(project_root(), project_settings())
