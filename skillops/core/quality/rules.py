from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Tuple
from urllib.parse import unquote

from skillops.core.config import SkillOpsSettings
from skillops.core.skills.models import SkillDocument

from .models import RuleStatus

Finding = Tuple[RuleStatus, str, Optional[Dict[str, Any]]]
CheckFn = Callable[[SkillDocument, SkillOpsSettings], Finding]

ALLOWED_FRONTMATTER_KEYS = ("name", "description", "version", "license", "allowed-tools", "metadata")
NAME_RE = re.compile(r"^[a-z0-9]+(-[a-z0-9]+)*$")
MAX_NAME_LEN = 64
MAX_DESCRIPTION_LEN = 1024
MIN_DESCRIPTION_LEN = 40

TRIGGER_PHRASES = (
    "use when",
    "use this",
    "use for",
    "when the user",
    "when working",
    "when asked",
    "trigger",
)

_URL_SCHEME_RE = re.compile(r"^[a-zA-Z][a-zA-Z0-9+.-]*:")


@dataclass(frozen=True)
class QualityRule:
    name: str
    weight: float
    check: CheckFn


def _ok(message: str) -> Finding:
    return RuleStatus.PASS, message, None


def check_frontmatter(doc: SkillDocument, settings: SkillOpsSettings) -> Finding:
    if doc.frontmatter_error:
        return RuleStatus.FAIL, f"Frontmatter could not be parsed: {doc.frontmatter_error}", None
    if doc.raw_frontmatter is None:
        return RuleStatus.FAIL, "Missing YAML frontmatter block delimited by '---'.", None
    return _ok("Frontmatter present.")


def check_frontmatter_keys(doc: SkillDocument, settings: SkillOpsSettings) -> Finding:
    fm = doc.raw_frontmatter
    if fm is None:
        return RuleStatus.FAIL, "No frontmatter keys to check.", None
    unknown = sorted(str(k) for k in fm if k not in ALLOWED_FRONTMATTER_KEYS)
    if unknown:
        return (
            RuleStatus.WARN,
            f"Unexpected frontmatter keys: {', '.join(unknown)}.",
            {"unknown": unknown, "allowed": list(ALLOWED_FRONTMATTER_KEYS)},
        )
    return _ok("Frontmatter keys are all recognised.")


def check_name(doc: SkillDocument, settings: SkillOpsSettings) -> Finding:
    name = doc.name
    if not name:
        return RuleStatus.FAIL, "Frontmatter 'name' is missing or empty.", {"field": "name"}
    if len(name) > MAX_NAME_LEN:
        return RuleStatus.FAIL, f"Name is longer than {MAX_NAME_LEN} characters.", {"length": len(name)}
    if not NAME_RE.match(name):
        return RuleStatus.FAIL, f"Name {name!r} must be kebab-case (lowercase letters, digits, hyphens).", {"name": name}
    dir_name = doc.skill_dir.name
    if dir_name and dir_name != name:
        return (
            RuleStatus.WARN,
            f"Name {name!r} does not match its directory {dir_name!r}.",
            {"name": name, "directory": dir_name},
        )
    return _ok("Name is valid.")


def check_description(doc: SkillDocument, settings: SkillOpsSettings) -> Finding:
    desc = doc.description
    if not desc:
        return RuleStatus.FAIL, "Frontmatter 'description' is missing or empty.", {"field": "description"}
    if len(desc) > MAX_DESCRIPTION_LEN:
        return (
            RuleStatus.FAIL,
            f"Description is longer than {MAX_DESCRIPTION_LEN} characters.",
            {"length": len(desc)},
        )
    if "<" in desc or ">" in desc:
        return RuleStatus.FAIL, "Description must not contain angle brackets.", None
    if len(desc) < MIN_DESCRIPTION_LEN:
        return (
            RuleStatus.WARN,
            f"Description is shorter than {MIN_DESCRIPTION_LEN} characters; be specific.",
            {"length": len(desc)},
        )
    return _ok("Description is present.")


def check_description_triggers(doc: SkillDocument, settings: SkillOpsSettings) -> Finding:
    desc = doc.description.lower()
    if not desc:
        return RuleStatus.FAIL, "No description to check for triggers.", None
    hits = [p for p in TRIGGER_PHRASES if p in desc]
    if not hits:
        return (
            RuleStatus.WARN,
            "Description does not say when to use the skill (e.g. 'Use when ...').",
            {"expected_any": list(TRIGGER_PHRASES)},
        )
    return RuleStatus.PASS, "Description states when to apply the skill.", {"matched": hits}


def check_line_count(doc: SkillDocument, settings: SkillOpsSettings) -> Finding:
    n = doc.body_lines
    details = {"lines": n, "max": settings.max_body_lines, "warn": settings.warn_body_lines}
    if n > settings.max_body_lines:
        return (
            RuleStatus.FAIL,
            f"Body has {n} lines (limit {settings.max_body_lines}); move detail into reference files.",
            details,
        )
    if n > settings.warn_body_lines:
        return RuleStatus.WARN, f"Body has {n} lines; approaching the {settings.max_body_lines} line limit.", details
    return RuleStatus.PASS, f"Body has {n} lines.", details


def check_code_examples(doc: SkillDocument, settings: SkillOpsSettings) -> Finding:
    unclosed = [b.start_line for b in doc.code_blocks if not b.closed]
    if unclosed:
        return RuleStatus.FAIL, f"Unclosed code fence starting at line {unclosed[0]}.", {"lines": unclosed}
    if not doc.code_blocks:
        return RuleStatus.WARN, "No fenced code examples found.", None
    langs = sorted({b.language for b in doc.code_blocks if b.language})
    return RuleStatus.PASS, f"{len(doc.code_blocks)} code example(s).", {"languages": langs}


def check_structure(doc: SkillDocument, settings: SkillOpsSettings) -> Finding:
    if not doc.headings:
        return RuleStatus.FAIL, "Document has no headings.", None
    sections = [h for lvl, h in doc.headings if lvl == 2]
    if len(sections) < 2:
        return (
            RuleStatus.WARN,
            f"Only {len(sections)} '##' section(s); split the guide into sections.",
            {"sections": sections},
        )
    return RuleStatus.PASS, f"{len(sections)} sections.", {"sections": sections}


def _local_target(link: str) -> Optional[str]:
    if link.startswith("#") or _URL_SCHEME_RE.match(link) or link.startswith("//"):
        return None
    target = link.split("#", 1)[0].split("?", 1)[0]
    return unquote(target) or None


def check_references(doc: SkillDocument, settings: SkillOpsSettings) -> Finding:
    broken: List[str] = []
    outside: List[str] = []
    checked = 0
    base = doc.skill_dir.resolve()
    for link in doc.links:
        target = _local_target(link)
        if target is None:
            continue
        checked += 1
        # reference files live inside the skill directory; nothing else is probed
        resolved = (base / target).resolve()
        if target.startswith("/") or (resolved != base and base not in resolved.parents):
            outside.append(link)
        elif not resolved.exists():
            broken.append(link)
    if broken or outside:
        return (
            RuleStatus.FAIL,
            f"{len(broken) + len(outside)} broken reference link(s).",
            {"broken": broken, "outside_skill_dir": outside},
        )
    return RuleStatus.PASS, f"{checked} local reference(s) resolve.", {"checked": checked}


DEFAULT_RULES: List[QualityRule] = [
    QualityRule("frontmatter", 1.0, check_frontmatter),
    QualityRule("frontmatter_keys", 0.5, check_frontmatter_keys),
    QualityRule("name", 1.0, check_name),
    QualityRule("description", 1.5, check_description),
    QualityRule("description_triggers", 1.5, check_description_triggers),
    QualityRule("line_count", 1.5, check_line_count),
    QualityRule("code_examples", 1.5, check_code_examples),
    QualityRule("structure", 1.0, check_structure),
    QualityRule("references", 0.5, check_references),
]
