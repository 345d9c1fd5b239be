"""
CHANGELOG.md rendering and release-notes extraction.

Layout produced by a version-bump run:

    # my-skill

    ## 1.2.0

    ### Minor Changes

    - Add container query guide

    ## 1.1.0
    ...
"""
from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Dict, List, Tuple

from .semver import BumpType

_log = logging.getLogger("skillops.release")

SECTION_TITLES = (
    (BumpType.MAJOR, "Major Changes"),
    (BumpType.MINOR, "Minor Changes"),
    (BumpType.PATCH, "Patch Changes"),
)

_H2_RE = re.compile(r"^##\s+(?!#)(?P<title>.*)$")


def _entry(summary: str) -> str:
    lines = summary.strip().splitlines() or [""]
    head = f"- {lines[0]}"
    rest = [f"  {ln}" if ln.strip() else "" for ln in lines[1:]]
    return "\n".join([head, *rest])


def render_section(version: str, entries: Dict[BumpType, List[str]]) -> str:
    parts = [f"## {version}"]
    for bump, title in SECTION_TITLES:
        items = [e for e in entries.get(bump, []) if e.strip()]
        if not items:
            continue
        parts.append(f"### {title}")
        parts.append("\n".join(_entry(e) for e in items))
    return "\n\n".join(parts) + "\n"


def prepend_section(path: Path, package_name: str, section: str) -> None:
    path = Path(path)
    if not path.exists():
        path.write_text(f"# {package_name}\n\n{section}", encoding="utf-8")
        return

    text = path.read_text(encoding="utf-8")
    lines = text.splitlines(keepends=True)
    if lines and lines[0].startswith("# "):
        title, rest = lines[0], "".join(lines[1:]).lstrip("\n")
        new = f"{title.rstrip()}\n\n{section}" + (f"\n{rest}" if rest else "")
    else:
        new = f"# {package_name}\n\n{section}" + (f"\n{text.lstrip()}" if text.strip() else "")
    path.write_text(new, encoding="utf-8")


def _header_version(title: str) -> str:
    # "## [1.2.0] - 2026-01-01", "## v1.2.0", "## 1.2.0 (beta)"
    token = title.strip().split()[0] if title.strip() else ""
    token = token.strip("[]()")
    return token[1:] if token[:1] in ("v", "V") else token


def has_version_section(text: str, version: str) -> bool:
    for line in text.splitlines():
        m = _H2_RE.match(line)
        if m and _header_version(m["title"]) == version:
            return True
    return False


def extract_release_notes(text: str, version: str, fallback_lines: int = 50) -> Tuple[str, bool]:
    """
    Notes between the ``## <version>`` header and the next ``## `` header.

    Falls back to the first ``fallback_lines`` lines of the changelog when the
    section is missing or empty; the boolean reports whether the section was
    found exactly.
    """
    lines = text.splitlines()
    start = None
    for i, line in enumerate(lines):
        m = _H2_RE.match(line)
        if m and _header_version(m["title"]) == version:
            start = i + 1
            break

    if start is not None:
        end = len(lines)
        for j in range(start, len(lines)):
            if _H2_RE.match(lines[j]):
                end = j
                break
        notes = "\n".join(lines[start:end]).strip()
        if notes:
            return notes, True

    _log.warning("Changelog section for %s not found; using first %d lines", version, fallback_lines)
    return "\n".join(lines[:fallback_lines]).strip(), False
