"""
Rubric rules for skill documents.
"""
from __future__ import annotations

from pathlib import Path

from skillops.core.config import SkillOpsSettings
from skillops.core.quality.models import RuleStatus
from skillops.core.quality.rules import (
    check_code_examples,
    check_description,
    check_description_triggers,
    check_frontmatter,
    check_frontmatter_keys,
    check_line_count,
    check_name,
    check_references,
    check_structure,
)
from skillops.core.skills import parse_skill

SETTINGS = SkillOpsSettings()


def _doc(text: str, path: Path = Path("skills/demo-skill/SKILL.md")):
    return parse_skill(text, path)


def _fm(**fields) -> str:
    lines = ["---"] + [f"{k}: {v}" for k, v in fields.items()] + ["---", ""]
    return "\n".join(lines)


# ---------------------------------------------------------------------------
# frontmatter
# ---------------------------------------------------------------------------

def test_missing_frontmatter_fails():
    status, _, _ = check_frontmatter(_doc("# Title\n"), SETTINGS)
    assert status == RuleStatus.FAIL


def test_broken_frontmatter_fails_with_reason():
    status, message, _ = check_frontmatter(_doc("---\nname: x\n"), SETTINGS)
    assert status == RuleStatus.FAIL
    assert "not closed" in message


def test_unknown_frontmatter_key_warns():
    doc = _doc(_fm(name="demo-skill", description="d", tags="x"))
    status, _, details = check_frontmatter_keys(doc, SETTINGS)
    assert status == RuleStatus.WARN
    assert details["unknown"] == ["tags"]


def test_allowed_tools_key_is_recognised():
    doc = _doc("---\nname: demo-skill\ndescription: d\nallowed-tools: [Read, Grep]\n---\n")
    status, _, _ = check_frontmatter_keys(doc, SETTINGS)
    assert status == RuleStatus.PASS


# ---------------------------------------------------------------------------
# name / description
# ---------------------------------------------------------------------------

def test_name_must_be_kebab_case():
    status, _, _ = check_name(_doc(_fm(name="Demo_Skill", description="d")), SETTINGS)
    assert status == RuleStatus.FAIL


def test_name_missing_fails():
    status, _, _ = check_name(_doc(_fm(description="d")), SETTINGS)
    assert status == RuleStatus.FAIL


def test_name_directory_mismatch_warns():
    doc = _doc(_fm(name="other-skill", description="d"))
    status, _, details = check_name(doc, SETTINGS)
    assert status == RuleStatus.WARN
    assert details == {"name": "other-skill", "directory": "demo-skill"}


def test_name_too_long_fails():
    status, _, _ = check_name(_doc(_fm(name="a" * 65, description="d")), SETTINGS)
    assert status == RuleStatus.FAIL


def test_description_checks():
    assert check_description(_doc(_fm(name="demo-skill", description="''")), SETTINGS)[0] == RuleStatus.FAIL
    assert check_description(_doc(_fm(name="demo-skill", description="short")), SETTINGS)[0] == RuleStatus.WARN
    long_desc = "word " * 300
    assert check_description(_doc(_fm(name="demo-skill", description=long_desc)), SETTINGS)[0] == RuleStatus.FAIL
    brackets = "Handles <tags> in templates for the frontend build pipeline"
    assert check_description(_doc(_fm(name="demo-skill", description=brackets)), SETTINGS)[0] == RuleStatus.FAIL


def test_description_triggers():
    no_trigger = _doc(_fm(name="demo-skill", description="Guide to Solana programs and accounts"))
    assert check_description_triggers(no_trigger, SETTINGS)[0] == RuleStatus.WARN

    trigger = _doc(_fm(name="demo-skill", description="Solana guide. Use when writing Anchor programs"))
    status, _, details = check_description_triggers(trigger, SETTINGS)
    assert status == RuleStatus.PASS
    assert details["matched"] == ["use when"]


# ---------------------------------------------------------------------------
# body
# ---------------------------------------------------------------------------

def test_line_count_thresholds():
    settings = SkillOpsSettings(max_body_lines=10, warn_body_lines=5)
    head = _fm(name="demo-skill", description="d")
    assert check_line_count(_doc(head + "x\n" * 3), settings)[0] == RuleStatus.PASS
    assert check_line_count(_doc(head + "x\n" * 7), settings)[0] == RuleStatus.WARN
    status, _, details = check_line_count(_doc(head + "x\n" * 11), settings)
    assert status == RuleStatus.FAIL
    assert details["lines"] == 11


def test_code_examples():
    head = _fm(name="demo-skill", description="d")
    assert check_code_examples(_doc(head + "no code\n"), SETTINGS)[0] == RuleStatus.WARN

    status, _, details = check_code_examples(_doc(head + "```ts\nconst a = 1\n```\n"), SETTINGS)
    assert status == RuleStatus.PASS
    assert details["languages"] == ["ts"]

    status, message, _ = check_code_examples(_doc(head + "text\n```py\nprint(1)\n"), SETTINGS)
    assert status == RuleStatus.FAIL
    assert "line 6" in message


def test_headings_inside_code_are_ignored():
    head = _fm(name="demo-skill", description="d")
    doc = _doc(head + "```md\n# not a heading\n## nope\n```\n")
    assert check_structure(doc, SETTINGS)[0] == RuleStatus.FAIL


def test_structure_requires_sections():
    head = _fm(name="demo-skill", description="d")
    assert check_structure(_doc(head + "# Title\n## One\n"), SETTINGS)[0] == RuleStatus.WARN
    assert check_structure(_doc(head + "# Title\n## One\n## Two\n"), SETTINGS)[0] == RuleStatus.PASS


def test_references_resolve_relative_to_skill_dir(tmp_path: Path):
    skill_dir = tmp_path / "skills" / "demo-skill"
    (skill_dir / "references").mkdir(parents=True)
    (skill_dir / "references" / "api.md").write_text("# API\n", encoding="utf-8")
    body = (
        _fm(name="demo-skill", description="d")
        + "See [api](references/api.md#auth), [site](https://example.com), [top](#setup).\n"
    )
    status, _, details = check_references(_doc(body, skill_dir / "SKILL.md"), SETTINGS)
    assert status == RuleStatus.PASS
    assert details["checked"] == 1

    broken = _doc(body + "Also [missing](references/missing.md).\n", skill_dir / "SKILL.md")
    status, _, details = check_references(broken, SETTINGS)
    assert status == RuleStatus.FAIL
    assert details["broken"] == ["references/missing.md"]


def test_references_outside_skill_dir_are_broken_even_if_present(tmp_path: Path):
    skill_dir = tmp_path / "skills" / "demo-skill"
    skill_dir.mkdir(parents=True)
    (tmp_path / "secret.txt").write_text("x", encoding="utf-8")
    body = _fm(name="demo-skill", description="d") + (
        "[abs](/etc/hostname) [up](../../secret.txt) [deep](../../../../../../etc/passwd)\n"
    )

    status, _, details = check_references(_doc(body, skill_dir / "SKILL.md"), SETTINGS)

    assert status == RuleStatus.FAIL
    assert details["broken"] == []
    assert details["outside_skill_dir"] == ["/etc/hostname", "../../secret.txt", "../../../../../../etc/passwd"]
