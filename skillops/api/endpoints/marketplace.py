from __future__ import annotations

import json

from fastapi import APIRouter, HTTPException

from skillops.api.deps import project_root, project_settings
from skillops.core.marketplace import check_marketplace, load_marketplace
from skillops.core.release.packages import discover_packages
from skillops.core.skills import discover_skills, load_skill

router = APIRouter(prefix="/api/v1/marketplace", tags=["marketplace"])


@router.get("")
def get_marketplace():
    root = project_root()
    settings = project_settings()
    try:
        data = load_marketplace(root / settings.marketplace_path)
    except (ValueError, json.JSONDecodeError) as e:
        raise HTTPException(status_code=422, detail=f"invalid marketplace file: {e}")
    if data is None:
        raise HTTPException(status_code=404, detail=f"{settings.marketplace_path} not found")

    packages = discover_packages(root, settings.package_globs)
    skill_names = [load_skill(p).name for p in discover_skills(root, settings.skills_dirs)]
    return {
        "marketplace": data,
        "problems": check_marketplace(data, packages, [n for n in skill_names if n]),
    }
