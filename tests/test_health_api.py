from pathlib import Path

from fastapi.testclient import TestClient

from skillops.api.main import app


def test_live_endpoints():
    c = TestClient(app)
    assert c.get("/health/live").json() == {"status": "ok"}
    assert c.get("/api/v1/health/live").json() == {"status": "alive"}


def test_ready_reports_missing_root(monkeypatch, tmp_path: Path):
    c = TestClient(app)
    monkeypatch.setenv("SKILLOPS_ROOT", str(tmp_path))
    assert c.get("/api/v1/health/ready").status_code == 200

    monkeypatch.setenv("SKILLOPS_ROOT", str(tmp_path / "gone"))
    r = c.get("/api/v1/health/ready")
    assert r.status_code == 503
    assert r.json()["status"] == "not_ready"


def test_metrics_snapshot_counts_traffic():
    c = TestClient(app)
    c.get("/api/v1/health/live")
    r = c.get("/api/v1/metrics/snapshot")
    assert r.status_code == 200
    named = r.json()["named"]
    assert named["health_live"] == 1
    assert named["requests_total"] == 2
