"""
Conventional Commits parsing.

    feat(tailwind): add container query guide
    fix!: rename skill directory

    BREAKING CHANGE: skill names are now kebab-case

Breaking changes map to a major bump, ``feat`` to minor, ``fix``/``perf`` to
patch. Every other type (docs, chore, ci, ...) releases nothing.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterable, Optional

from .semver import BumpType, max_bump

_HEADER_RE = re.compile(r"^(?P<type>[a-zA-Z]+)(?:\((?P<scope>[^()\r\n]*)\))?(?P<bang>!)?:\s+(?P<subject>\S.*)$")
_BREAKING_FOOTER_RE = re.compile(r"^BREAKING[ -]CHANGE:\s*(?P<note>.*)$", re.MULTILINE)

PATCH_TYPES = ("fix", "perf")


@dataclass(frozen=True)
class ConventionalCommit:
    type: str
    scope: Optional[str]
    subject: str
    breaking: bool
    body: str = ""
    breaking_note: Optional[str] = None


def parse_commit(message: str) -> Optional[ConventionalCommit]:
    text = (message or "").strip()
    if not text:
        return None
    header, _, rest = text.partition("\n")
    m = _HEADER_RE.match(header.strip())
    if not m:
        return None

    body = rest.strip()
    footer = _BREAKING_FOOTER_RE.search(body)
    return ConventionalCommit(
        type=m["type"].lower(),
        scope=(m["scope"] or "").strip() or None,
        subject=m["subject"].strip(),
        breaking=bool(m["bang"]) or footer is not None,
        body=body,
        breaking_note=footer["note"].strip() if footer else None,
    )


def bump_for_commit(commit: ConventionalCommit) -> BumpType:
    if commit.breaking:
        return BumpType.MAJOR
    if commit.type == "feat":
        return BumpType.MINOR
    if commit.type in PATCH_TYPES:
        return BumpType.PATCH
    return BumpType.NONE


def bump_for_commits(commits: Iterable[ConventionalCommit]) -> BumpType:
    return max_bump(bump_for_commit(c) for c in commits)
