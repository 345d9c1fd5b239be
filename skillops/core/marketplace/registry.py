"""
Plugin marketplace registry (``.claude-plugin/marketplace.json``).

    {
      "name": "my-skills",
      "owner": {"name": "..."},
      "plugins": [
        {"name": "tailwind", "version": "1.2.0", "description": "...", "source": "./skills/tailwind"}
      ]
    }
"""
from __future__ import annotations

import json
import logging
from collections import Counter
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional

from skillops.core.release.packages import Package

_log = logging.getLogger("skillops.marketplace")


def load_marketplace(path: Path) -> Optional[Dict[str, Any]]:
    p = Path(path)
    if not p.exists():
        return None
    data = json.loads(p.read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        raise ValueError(f"{p} must contain a JSON object")
    plugins = data.get("plugins", [])
    if not isinstance(plugins, list):
        raise ValueError(f"{p}: 'plugins' must be a list")
    return data


def save_marketplace(path: Path, data: Dict[str, Any]) -> None:
    Path(path).write_text(json.dumps(data, indent=2, ensure_ascii=False) + "\n", encoding="utf-8")


def _plugins(data: Dict[str, Any]) -> List[Dict[str, Any]]:
    return [p for p in (data.get("plugins") or []) if isinstance(p, dict)]


def sync_versions(data: Dict[str, Any], packages: Iterable[Package]) -> List[str]:
    by_name = {p.name: p for p in packages}
    changed: List[str] = []
    for plugin in _plugins(data):
        pkg = by_name.get(plugin.get("name"))
        if pkg is None:
            continue
        if plugin.get("version") != pkg.version:
            _log.info("Marketplace entry %s: %s -> %s", pkg.name, plugin.get("version"), pkg.version)
            plugin["version"] = pkg.version
            changed.append(pkg.name)
    return changed


def check_marketplace(
    data: Dict[str, Any],
    packages: Iterable[Package],
    skill_names: Iterable[str] = (),
) -> List[str]:
    """Problems as ``code:subject`` strings; empty when consistent."""
    by_name = {p.name: p for p in packages}
    known_skills = set(skill_names)
    problems: List[str] = []

    plugins = _plugins(data)
    counts = Counter(p.get("name") for p in plugins)
    for name, n in sorted((k, v) for k, v in counts.items() if k):
        if n > 1:
            problems.append(f"duplicate_plugin:{name}")

    for plugin in plugins:
        name = plugin.get("name")
        if not name:
            problems.append("plugin_missing_name")
            continue
        if not str(plugin.get("description") or "").strip():
            problems.append(f"empty_description:{name}")
        pkg = by_name.get(name)
        if pkg is None:
            if name not in known_skills:
                problems.append(f"unknown_plugin:{name}")
            continue
        if plugin.get("version") != pkg.version:
            problems.append(f"version_drift:{name}:{plugin.get('version')}!={pkg.version}")

    return problems
