from .models import SKILL_MARKDOWN_FILENAME, CodeBlock, SkillDocument, SkillFrontmatter
from .scanner import discover_skills, load_skill, parse_skill

__all__ = [
    "SKILL_MARKDOWN_FILENAME",
    "CodeBlock",
    "SkillDocument",
    "SkillFrontmatter",
    "discover_skills",
    "load_skill",
    "parse_skill",
]
