from __future__ import annotations

from pathlib import Path
from typing import Iterable, List

from skillops.core.frontmatter import FrontmatterError, split_frontmatter

from .models import SKILL_MARKDOWN_FILENAME, SkillDocument

SKIP_DIRS = {"node_modules", ".git", "__pycache__", "dist", "build"}


def _is_skipped(rel: Path) -> bool:
    for part in rel.parts[:-1]:
        if part in SKIP_DIRS or part.startswith("."):
            return True
    return False


def discover_skills(root: Path, skills_dirs: Iterable[str]) -> List[Path]:
    root = Path(root)
    found: set[Path] = set()
    for rel in skills_dirs:
        base = (root / rel)
        if not base.exists():
            continue
        if base.is_file():
            if base.name == SKILL_MARKDOWN_FILENAME:
                found.add(base.resolve())
            continue
        for f in base.rglob(SKILL_MARKDOWN_FILENAME):
            if not f.is_file():
                continue
            if _is_skipped(f.relative_to(base)):
                continue
            found.add(f.resolve())
    return sorted(found)


def parse_skill(text: str, path: Path) -> SkillDocument:
    """Content problems are recorded on the document rather than raised."""
    try:
        fm, body, start = split_frontmatter(text)
    except FrontmatterError as exc:
        return SkillDocument(path=Path(path), raw_frontmatter=None, body=text, frontmatter_error=str(exc))
    return SkillDocument(path=Path(path), raw_frontmatter=fm, body=body, body_start_line=start)


def load_skill(path: Path) -> SkillDocument:
    p = Path(path)
    if not p.is_file():
        raise FileNotFoundError(f"skill file not found: {p}")
    raw = p.read_bytes()
    try:
        return parse_skill(raw.decode("utf-8"), p)
    except UnicodeDecodeError as exc:
        doc = parse_skill(raw.decode("utf-8", errors="replace"), p)
        doc.frontmatter_error = f"file is not valid UTF-8 (byte 0x{raw[exc.start]:02x} at offset {exc.start})"
        return doc
