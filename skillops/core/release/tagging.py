from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional

from skillops.core.config import SkillOpsSettings
from skillops.core.git_ops.github import GitHubCli
from skillops.core.git_ops.repo import create_tag, head_commit, push_tag, remote_tag_exists, tag_commit, tag_exists
from skillops.core.observability.audit import audit_event
from skillops.core.observability.metrics import inc_release_action

from .changelog import extract_release_notes
from .packages import discover_packages

_log = logging.getLogger("skillops.release")


@dataclass
class TagOutcome:
    package: str
    tag: str
    tag_created: bool
    tag_pushed: bool = False
    release_created: bool = False
    release_skipped_reason: Optional[str] = None
    notes_exact: Optional[bool] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "package": self.package,
            "tag": self.tag,
            "tag_created": self.tag_created,
            "tag_pushed": self.tag_pushed,
            "release_created": self.release_created,
            "release_skipped_reason": self.release_skipped_reason,
            "notes_exact": self.notes_exact,
        }


def tag_releases(
    root: Path,
    settings: SkillOpsSettings,
    gh: Optional[GitHubCli] = None,
    dry_run: bool = False,
) -> List[TagOutcome]:
    """
    Create ``name@version`` tags and GitHub releases for every package with a
    CHANGELOG.md. Existing tags and releases are left alone, so reruns are
    no-ops. The first failing git/gh call aborts the run.
    """
    root = Path(root)
    audit_path = root / settings.audit_log
    outcomes: List[TagOutcome] = []

    for pkg in discover_packages(root, settings.package_globs):
        if not pkg.changelog_path.is_file():
            continue

        tag = pkg.tag
        exists = tag_exists(root, tag)
        outcome = TagOutcome(package=pkg.name, tag=tag, tag_created=False)

        if exists:
            _log.info("Tag %s already exists, skipping", tag)
        elif dry_run:
            _log.info("Would create tag %s", tag)
        else:
            create_tag(root, tag, message=tag)
            outcome.tag_created = True
            inc_release_action("tag")
            audit_event(
                "tag_created",
                package=pkg.name,
                tag=tag,
                extra={"commit": head_commit(root)},
                audit_path=audit_path,
            )

        # a tag left unpushed by an earlier failed run is pushed now
        on_remote = False
        if settings.push_tags and not dry_run:
            on_remote = remote_tag_exists(root, tag, remote=settings.git_remote)
            if not on_remote:
                push_tag(root, tag, remote=settings.git_remote)
                outcome.tag_pushed = True
                on_remote = True

        if not settings.github_releases:
            outcome.release_skipped_reason = "disabled"
        elif gh is None:
            outcome.release_skipped_reason = "gh_unavailable"
        elif dry_run:
            outcome.release_skipped_reason = "dry_run"
        elif gh.release_exists(tag):
            _log.info("GitHub release %s already exists, skipping", tag)
            outcome.release_skipped_reason = "exists"
        else:
            notes, exact = extract_release_notes(
                pkg.changelog_path.read_text(encoding="utf-8"),
                pkg.version,
                fallback_lines=settings.notes_fallback_lines,
            )
            gh.create_release(tag, title=tag, notes=notes, target=None if on_remote else tag_commit(root, tag))
            outcome.release_created = True
            outcome.notes_exact = exact
            inc_release_action("github_release")
            audit_event(
                "github_release_created",
                package=pkg.name,
                tag=tag,
                extra={"notes_exact": exact},
                audit_path=audit_path,
            )

        outcomes.append(outcome)

    return outcomes
