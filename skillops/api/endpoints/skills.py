from __future__ import annotations

from pathlib import Path
from typing import Optional

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, Field

from skillops.api.deps import project_root, project_settings
from skillops.core.observability.metrics import inc_validation
from skillops.core.quality import default_engine
from skillops.core.quality.rules import NAME_RE
from skillops.core.skills import SKILL_MARKDOWN_FILENAME, discover_skills, load_skill, parse_skill

router = APIRouter(prefix="/api/v1/skills", tags=["skills"])


class ValidateRequest(BaseModel):
    path: str = Field(..., description="Skill file or directory, relative to the project root")
    threshold: Optional[float] = Field(default=None, ge=0, le=10)


class ScoreRequest(BaseModel):
    content: str = Field(..., description="Raw SKILL.md content")
    skill_dir_name: Optional[str] = Field(
        default=None,
        description="Directory name the skill would live in; reference links resolve against it",
    )
    threshold: Optional[float] = Field(default=None, ge=0, le=10)


def _resolve_inside_root(rel: str) -> Path:
    root = project_root()
    p = (root / rel).resolve()
    if p != root and root not in p.parents:
        raise HTTPException(status_code=400, detail="path escapes project root")
    if not p.exists():
        raise HTTPException(status_code=404, detail=f"not found: {rel}")
    if p.is_dir():
        p = p / SKILL_MARKDOWN_FILENAME
        if not p.is_file():
            raise HTTPException(status_code=404, detail=f"no {SKILL_MARKDOWN_FILENAME} in {rel}")
    return p


@router.get("")
def list_skills():
    root = project_root()
    settings = project_settings()
    engine = default_engine()
    items = []
    for path in discover_skills(root, settings.skills_dirs):
        doc = load_skill(path)
        report = engine.evaluate(doc, settings)
        items.append(
            {
                "path": path.relative_to(root).as_posix(),
                "name": doc.name or None,
                "description": doc.description or None,
                "score": report.score,
                "passed": report.passes(settings.quality_threshold),
            }
        )
    return {"kind": "skill_list", "count": len(items), "skills": items}


@router.post("/validate")
def validate_skill(req: ValidateRequest):
    settings = project_settings()
    threshold = settings.quality_threshold if req.threshold is None else req.threshold
    path = _resolve_inside_root(req.path)

    report = default_engine().evaluate(load_skill(path), settings)
    passed = report.passes(threshold)
    inc_validation(passed)
    body = report.to_dict(threshold)
    body["path"] = path.relative_to(project_root()).as_posix()
    return body


@router.post("/score")
def score_content(req: ScoreRequest):
    settings = project_settings()
    threshold = settings.quality_threshold if req.threshold is None else req.threshold
    if req.skill_dir_name is not None and (
        "/" in req.skill_dir_name or "\\" in req.skill_dir_name or req.skill_dir_name in ("", ".", "..")
    ):
        raise HTTPException(status_code=400, detail="skill_dir_name must be a single directory name")

    # scored as if it lived at <first skills dir>/<dir name>/SKILL.md
    doc = parse_skill(req.content, Path(SKILL_MARKDOWN_FILENAME))
    dir_name = req.skill_dir_name or (doc.name if NAME_RE.match(doc.name) else "_inline")
    base = project_root() / (settings.skills_dirs[0] if settings.skills_dirs else ".")
    doc.path = base / dir_name / SKILL_MARKDOWN_FILENAME

    report = default_engine().evaluate(doc, settings)
    inc_validation(report.passes(threshold))
    body = report.to_dict(threshold)
    body["path"] = None
    return body
