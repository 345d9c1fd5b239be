from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Iterable, List

_log = logging.getLogger("skillops.release")

PACKAGE_MANIFEST = "package.json"
CHANGELOG_FILE = "CHANGELOG.md"


@dataclass
class Package:
    name: str
    version: str
    path: Path
    private: bool = False

    @property
    def manifest_path(self) -> Path:
        return self.path / PACKAGE_MANIFEST

    @property
    def changelog_path(self) -> Path:
        return self.path / CHANGELOG_FILE

    @property
    def tag(self) -> str:
        return f"{self.name}@{self.version}"


def read_manifest(path: Path) -> Dict[str, Any]:
    return json.loads(Path(path).read_text(encoding="utf-8"))


def write_manifest(path: Path, data: Dict[str, Any]) -> None:
    # npm style: 2-space indent, key order preserved, trailing newline
    Path(path).write_text(json.dumps(data, indent=2, ensure_ascii=False) + "\n", encoding="utf-8")


def load_package(directory: Path) -> Package:
    directory = Path(directory)
    data = read_manifest(directory / PACKAGE_MANIFEST)
    name = data.get("name")
    version = data.get("version")
    if not name or not version:
        raise ValueError(f"{directory / PACKAGE_MANIFEST} must define name and version")
    return Package(name=str(name), version=str(version), path=directory, private=bool(data.get("private", False)))


def discover_packages(root: Path, globs: Iterable[str]) -> List[Package]:
    root = Path(root)
    seen: Dict[str, Package] = {}
    dirs = set()
    for pattern in globs:
        for d in root.glob(pattern):
            if d.is_dir() and "node_modules" not in d.parts and (d / PACKAGE_MANIFEST).is_file():
                dirs.add(d.resolve())

    for d in sorted(dirs):
        try:
            pkg = load_package(d)
        except (ValueError, json.JSONDecodeError) as exc:
            _log.warning("Skipping %s: %s", d, exc)
            continue
        if pkg.name in seen:
            raise ValueError(f"duplicate package name {pkg.name!r} in {seen[pkg.name].path} and {d}")
        seen[pkg.name] = pkg

    return sorted(seen.values(), key=lambda p: p.name)


def write_package_version(pkg: Package, new_version: str) -> None:
    data = read_manifest(pkg.manifest_path)
    data["version"] = new_version
    write_manifest(pkg.manifest_path, data)
    pkg.version = new_version
