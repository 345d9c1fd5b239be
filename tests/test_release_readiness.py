from __future__ import annotations

import json
from pathlib import Path

from conftest import write_package, write_skill
from skillops.core.config import SkillOpsSettings
from skillops.core.release.changesets import write_changeset
from skillops.core.release.readiness import check_release_readiness


def _ready_repo(root: Path) -> Path:
    write_skill(root, "tailwind-v4")
    write_package(root / "skills" / "tailwind-v4", "tailwind-v4", "1.1.0", changelog="# tailwind-v4\n\n## 1.1.0\n\n- x\n")
    (root / ".claude-plugin").mkdir()
    (root / ".claude-plugin" / "marketplace.json").write_text(
        json.dumps({"name": "demo", "plugins": [{"name": "tailwind-v4", "version": "1.1.0", "description": "T"}]}),
        encoding="utf-8",
    )
    return root


def test_ready(tmp_path: Path):
    report = check_release_readiness(_ready_repo(tmp_path), SkillOpsSettings())
    assert report == {"kind": "release_readiness_report", "ready": True, "failures": []}


def test_not_ready_collects_every_failure(tmp_path: Path):
    root = _ready_repo(tmp_path)
    write_skill(root, "nameless", content="---\ndescription: ''\n---\n# x\n", with_reference=False)
    write_package(root / "skills" / "solana", "solana", "0.2.0", changelog="# solana\n\n## 0.1.0\n\n- x\n")
    write_changeset(root / ".changeset", {"solana": "patch"}, "Pending", changeset_id="pending-one")

    report = check_release_readiness(root, SkillOpsSettings())

    assert report["ready"] is False
    assert set(report["failures"]) == {
        "skill_missing_name:skills/nameless/SKILL.md",
        "skill_missing_description:skills/nameless/SKILL.md",
        "changelog_missing_version:solana@0.2.0",
        "pending_changeset:pending-one",
    }
