from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List

from skillops.core.config import SkillOpsSettings
from skillops.core.marketplace.registry import load_marketplace, save_marketplace, sync_versions
from skillops.core.observability.audit import audit_event
from skillops.core.observability.metrics import inc_release_action

from .changelog import prepend_section, render_section
from .changesets import Changeset, ChangesetError, pending_bumps, read_changesets
from .packages import Package, discover_packages, write_package_version
from .semver import BumpType, bump_version

_log = logging.getLogger("skillops.release")


@dataclass
class PackageRelease:
    name: str
    bump: BumpType
    old_version: str
    new_version: str
    entries: Dict[BumpType, List[str]] = field(default_factory=dict)

    @property
    def tag(self) -> str:
        return f"{self.name}@{self.new_version}"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "bump": self.bump.value,
            "old_version": self.old_version,
            "new_version": self.new_version,
            "tag": self.tag,
        }


@dataclass
class VersionPlan:
    releases: List[PackageRelease] = field(default_factory=list)
    changesets: List[Changeset] = field(default_factory=list)
    applied: bool = False

    @property
    def empty(self) -> bool:
        return not self.releases

    def to_dict(self) -> Dict[str, Any]:
        return {
            "kind": "version_plan",
            "applied": self.applied,
            "changesets": [c.id for c in self.changesets],
            "releases": [r.to_dict() for r in self.releases],
        }


def plan_versions(changesets: List[Changeset], packages: List[Package]) -> VersionPlan:
    by_name = {p.name: p for p in packages}
    unknown = sorted({n for cs in changesets for n in cs.releases if n not in by_name})
    if unknown:
        raise ChangesetError(f"changesets reference unknown packages: {', '.join(unknown)}")

    plan = VersionPlan(changesets=list(changesets))
    for name, bump in sorted(pending_bumps(changesets).items()):
        if bump == BumpType.NONE:
            continue
        pkg = by_name[name]
        release = PackageRelease(
            name=name,
            bump=bump,
            old_version=pkg.version,
            new_version=bump_version(pkg.version, bump),
        )
        for cs in changesets:
            b = cs.releases.get(name)
            if b is None or b == BumpType.NONE or not cs.summary:
                continue
            release.entries.setdefault(b, []).append(cs.summary)
        plan.releases.append(release)
    return plan


def version_packages(root: Path, settings: SkillOpsSettings, dry_run: bool = False) -> VersionPlan:
    """
    Consume pending changesets: bump package.json versions, prepend CHANGELOG
    sections, sync marketplace versions, then delete the changeset files.
    """
    root = Path(root)
    changesets = read_changesets(root / settings.changeset_dir)
    if not changesets:
        _log.info("No pending changesets")
        return VersionPlan()

    packages = discover_packages(root, settings.package_globs)
    plan = plan_versions(changesets, packages)
    # a broken marketplace must stop the run before any file is rewritten
    marketplace_path = root / settings.marketplace_path
    market = load_marketplace(marketplace_path)
    if dry_run:
        return plan

    by_name = {p.name: p for p in packages}
    for release in plan.releases:
        pkg = by_name[release.name]
        write_package_version(pkg, release.new_version)
        prepend_section(pkg.changelog_path, pkg.name, render_section(release.new_version, release.entries))
        _log.info("Versioned %s %s -> %s", release.name, release.old_version, release.new_version)
        inc_release_action("version")

    if market is not None:
        changed = sync_versions(market, packages)
        if changed:
            save_marketplace(marketplace_path, market)

    for cs in changesets:
        if cs.path is not None and cs.path.exists():
            cs.path.unlink()

    plan.applied = True
    audit_event(
        "version_packages",
        extra={"releases": [r.to_dict() for r in plan.releases], "changesets": [c.id for c in changesets]},
        audit_path=root / settings.audit_log,
    )
    return plan
