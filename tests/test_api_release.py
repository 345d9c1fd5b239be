from __future__ import annotations

import json
from pathlib import Path

from fastapi.testclient import TestClient

from conftest import write_package
from skillops.api.main import app
from skillops.core.release.changesets import write_changeset


def _client(monkeypatch, root: Path) -> TestClient:
    monkeypatch.setenv("SKILLOPS_ROOT", str(root))
    return TestClient(app)


def test_plan_is_a_dry_run(monkeypatch, skill_workspace: Path):
    write_changeset(skill_workspace / ".changeset", {"tailwind-v4": "minor"}, "Add container queries", changeset_id="cq")
    c = _client(monkeypatch, skill_workspace)

    r = c.get("/api/v1/release/plan")

    assert r.status_code == 200, r.text
    body = r.json()
    assert body["kind"] == "version_plan"
    assert body["applied"] is False
    assert body["releases"][0]["new_version"] == "1.2.0"
    assert (skill_workspace / ".changeset" / "cq.md").exists()


def test_plan_unknown_package_is_422(monkeypatch, skill_workspace: Path):
    write_changeset(skill_workspace / ".changeset", {"ghost": "patch"}, "?", changeset_id="ghost")
    r = _client(monkeypatch, skill_workspace).get("/api/v1/release/plan")
    assert r.status_code == 422
    assert "ghost" in r.json()["detail"]


def test_readiness(monkeypatch, skill_workspace: Path):
    c = _client(monkeypatch, skill_workspace)
    assert c.get("/api/v1/release/readiness").json()["ready"] is True

    write_package(skill_workspace / "skills" / "solana", "solana", "0.2.0", changelog="# solana\n")
    body = c.get("/api/v1/release/readiness").json()
    assert body["ready"] is False
    assert body["failures"] == ["changelog_missing_version:solana@0.2.0"]


def test_marketplace_endpoint(monkeypatch, skill_workspace: Path):
    c = _client(monkeypatch, skill_workspace)
    assert c.get("/api/v1/marketplace").status_code == 404

    market = skill_workspace / ".claude-plugin" / "marketplace.json"
    market.parent.mkdir()
    market.write_text(
        json.dumps({"name": "demo", "plugins": [{"name": "tailwind-v4", "version": "1.0.0", "description": "T"}]}),
        encoding="utf-8",
    )
    r = c.get("/api/v1/marketplace")
    assert r.status_code == 200
    assert r.json()["problems"] == ["version_drift:tailwind-v4:1.0.0!=1.1.0"]

    market.write_text('{"plugins": {}}', encoding="utf-8")
    assert c.get("/api/v1/marketplace").status_code == 422
