"""Release readiness gate: documentation hygiene and release bookkeeping checks."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, List

from skillops.core.config import SkillOpsSettings
from skillops.core.marketplace.registry import check_marketplace, load_marketplace
from skillops.core.skills.scanner import discover_skills, load_skill

from .changelog import has_version_section
from .changesets import ChangesetError, read_changesets
from .packages import discover_packages


def check_release_readiness(root: Path, settings: SkillOpsSettings) -> Dict[str, Any]:
    root = Path(root)
    failures: List[str] = []

    skill_names: List[str] = []
    for path in discover_skills(root, settings.skills_dirs):
        rel = path.relative_to(root.resolve()).as_posix()
        doc = load_skill(path)
        if doc.frontmatter_error or doc.raw_frontmatter is None:
            failures.append(f"skill_frontmatter_invalid:{rel}")
            continue
        if not doc.name:
            failures.append(f"skill_missing_name:{rel}")
        else:
            skill_names.append(doc.name)
        if not doc.description:
            failures.append(f"skill_missing_description:{rel}")

    try:
        packages = discover_packages(root, settings.package_globs)
    except ValueError as exc:
        failures.append(f"packages_invalid:{exc}")
        packages = []

    for pkg in packages:
        if not pkg.changelog_path.is_file():
            continue
        text = pkg.changelog_path.read_text(encoding="utf-8")
        if not has_version_section(text, pkg.version):
            failures.append(f"changelog_missing_version:{pkg.name}@{pkg.version}")

    try:
        market = load_marketplace(root / settings.marketplace_path)
    except (ValueError, json.JSONDecodeError) as exc:
        failures.append(f"marketplace_invalid:{exc}")
        market = None
    if market is not None:
        failures.extend(f"marketplace:{p}" for p in check_marketplace(market, packages, skill_names))

    try:
        pending = read_changesets(root / settings.changeset_dir)
    except ChangesetError as exc:
        failures.append(f"changeset_invalid:{exc}")
        pending = []
    failures.extend(f"pending_changeset:{cs.id}" for cs in pending)

    return {
        "kind": "release_readiness_report",
        "ready": not failures,
        "failures": failures,
    }
