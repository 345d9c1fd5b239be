"""
Settings loader for skill validation and release tooling.

Reads an optional YAML file and layers environment overrides on top:

    skills_dirs: [skills]
    package_globs: ["skills/*", "packages/*"]
    quality_threshold: 8.0
    push_tags: false

Environment variables:
    SKILLOPS_CONFIG            : path to the settings file (optional).
                                 Default search path: <root>/skillops.yaml
    SKILLOPS_QUALITY_THRESHOLD : overrides quality_threshold
    SKILLOPS_PUSH_TAGS         : overrides push_tags
    SKILLOPS_GITHUB_RELEASES   : overrides github_releases
    SKILLOPS_GIT_REMOTE        : overrides git_remote
"""
from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml
from pydantic import BaseModel, Field, ValidationError

_log = logging.getLogger("skillops.config")

DEFAULT_CONFIG_NAME = "skillops.yaml"

_TRUE_VALUES = ("1", "true", "yes")


class SkillOpsSettings(BaseModel):
    skills_dirs: List[str] = Field(default_factory=lambda: ["skills"])
    package_globs: List[str] = Field(default_factory=lambda: ["skills/*", "packages/*"])
    changeset_dir: str = ".changeset"
    marketplace_path: str = ".claude-plugin/marketplace.json"

    quality_threshold: float = 8.0
    strict_threshold: float = 10.0
    max_body_lines: int = 500
    warn_body_lines: int = 400

    notes_fallback_lines: int = 50
    git_remote: str = "origin"
    push_tags: bool = False
    github_releases: bool = True

    audit_log: str = ".skillops/audit.log"


def _env_bool(name: str) -> Optional[bool]:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return None
    return raw.strip().lower() in _TRUE_VALUES


def _resolve_path(root: Path, path: Optional[Path]) -> Path:
    if path is not None:
        return Path(path)
    env_path = os.getenv("SKILLOPS_CONFIG", "").strip()
    if env_path:
        return Path(env_path)
    return root / DEFAULT_CONFIG_NAME


def _read_file(resolved: Path) -> Dict[str, Any]:
    if not resolved.exists():
        return {}
    try:
        data = yaml.safe_load(resolved.read_text(encoding="utf-8"))
    except (OSError, yaml.YAMLError) as exc:
        _log.warning("Failed to read settings file %s: %s", resolved, exc)
        return {}

    if data is None:
        return {}
    if not isinstance(data, dict):
        _log.warning("Settings file %s must be a mapping, got %s", resolved, type(data).__name__)
        return {}

    known = set(SkillOpsSettings.model_fields)
    out: Dict[str, Any] = {}
    for key, value in data.items():
        if key not in known:
            _log.warning("Ignoring unknown settings key %r in %s", key, resolved)
            continue
        out[key] = value
    return out


def _env_overrides() -> Dict[str, Any]:
    out: Dict[str, Any] = {}

    threshold = os.getenv("SKILLOPS_QUALITY_THRESHOLD", "").strip()
    if threshold:
        try:
            out["quality_threshold"] = float(threshold)
        except ValueError:
            _log.warning("Ignoring non-numeric SKILLOPS_QUALITY_THRESHOLD=%r", threshold)

    for key, env_name in (("push_tags", "SKILLOPS_PUSH_TAGS"), ("github_releases", "SKILLOPS_GITHUB_RELEASES")):
        v = _env_bool(env_name)
        if v is not None:
            out[key] = v

    remote = os.getenv("SKILLOPS_GIT_REMOTE", "").strip()
    if remote:
        out["git_remote"] = remote
    return out


def load_settings(root: Path, path: Optional[Path] = None) -> SkillOpsSettings:
    """
    Build settings for a repository root.

    A missing or malformed file yields defaults; env overrides always apply.
    """
    resolved = _resolve_path(Path(root), path)
    values = _read_file(resolved)
    values.update(_env_overrides())

    try:
        settings = SkillOpsSettings(**values)
    except ValidationError as exc:
        _log.warning("Invalid settings in %s, using defaults: %s", resolved, exc)
        settings = SkillOpsSettings(**_env_overrides())

    _log.debug("Loaded settings from %s: %s", resolved, settings.model_dump())
    return settings
