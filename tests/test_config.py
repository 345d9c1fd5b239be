"""
Settings loader tests.
"""
from __future__ import annotations

from pathlib import Path

import pytest

from skillops.core.config import SkillOpsSettings, load_settings


def test_defaults_when_file_missing(tmp_path: Path):
    s = load_settings(tmp_path)
    assert s == SkillOpsSettings()
    assert s.quality_threshold == pytest.approx(8.0)
    assert s.skills_dirs == ["skills"]


def test_reads_yaml_file(tmp_path: Path):
    (tmp_path / "skillops.yaml").write_text(
        "skills_dirs: [docs/skills]\nquality_threshold: 9.5\nmax_body_lines: 300\n",
        encoding="utf-8",
    )
    s = load_settings(tmp_path)
    assert s.skills_dirs == ["docs/skills"]
    assert s.quality_threshold == pytest.approx(9.5)
    assert s.max_body_lines == 300


def test_unknown_keys_are_ignored(tmp_path: Path, caplog):
    (tmp_path / "skillops.yaml").write_text("bogus: 1\npush_tags: true\n", encoding="utf-8")
    s = load_settings(tmp_path)
    assert s.push_tags is True
    assert "bogus" in caplog.text


def test_malformed_file_returns_defaults(tmp_path: Path):
    (tmp_path / "skillops.yaml").write_text("this: is: not: valid: yaml:\n  {{{{", encoding="utf-8")
    assert load_settings(tmp_path) == SkillOpsSettings()


def test_non_mapping_file_returns_defaults(tmp_path: Path):
    (tmp_path / "skillops.yaml").write_text("- a\n- b\n", encoding="utf-8")
    assert load_settings(tmp_path) == SkillOpsSettings()


def test_invalid_value_falls_back_to_defaults(tmp_path: Path):
    (tmp_path / "skillops.yaml").write_text("max_body_lines: lots\n", encoding="utf-8")
    assert load_settings(tmp_path).max_body_lines == 500


def test_env_overrides_file(tmp_path: Path, monkeypatch):
    (tmp_path / "skillops.yaml").write_text("quality_threshold: 7\npush_tags: false\n", encoding="utf-8")
    monkeypatch.setenv("SKILLOPS_QUALITY_THRESHOLD", "9")
    monkeypatch.setenv("SKILLOPS_PUSH_TAGS", "yes")
    monkeypatch.setenv("SKILLOPS_GIT_REMOTE", "upstream")
    s = load_settings(tmp_path)
    assert s.quality_threshold == pytest.approx(9.0)
    assert s.push_tags is True
    assert s.git_remote == "upstream"


def test_config_path_from_env(tmp_path: Path, monkeypatch):
    cfg = tmp_path / "elsewhere.yaml"
    cfg.write_text("changeset_dir: .changes\n", encoding="utf-8")
    monkeypatch.setenv("SKILLOPS_CONFIG", str(cfg))
    assert load_settings(tmp_path / "repo").changeset_dir == ".changes"
