from __future__ import annotations

import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field

SKILL_MARKDOWN_FILENAME = "SKILL.md"

_HEADING_RE = re.compile(r"^(#{1,6})\s+(.+?)\s*#*\s*$")
_FENCE_RE = re.compile(r"^\s{0,3}(`{3,}|~{3,})(.*)$")
_LINK_RE = re.compile(r"!?\[[^\]]*\]\(\s*<?([^)\s>]+)>?(?:\s+\"[^\"]*\")?\s*\)")


class SkillFrontmatter(BaseModel):
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    name: str
    description: str
    version: Optional[str] = None
    license: Optional[str] = None
    allowed_tools: Optional[Union[List[str], str]] = Field(default=None, alias="allowed-tools")
    metadata: Optional[Dict[str, Any]] = None


@dataclass(frozen=True)
class CodeBlock:
    start_line: int
    language: str
    closed: bool


@dataclass
class SkillDocument:
    path: Path
    raw_frontmatter: Optional[Dict[str, Any]]
    body: str
    body_start_line: int = 1
    frontmatter_error: Optional[str] = None

    headings: List[Tuple[int, str]] = field(default_factory=list, init=False)
    code_blocks: List[CodeBlock] = field(default_factory=list, init=False)
    links: List[str] = field(default_factory=list, init=False)

    def __post_init__(self) -> None:
        self._scan_body()

    @property
    def skill_dir(self) -> Path:
        return self.path.parent

    @property
    def body_lines(self) -> int:
        return len(self.body.splitlines())

    @property
    def name(self) -> str:
        fm = self.raw_frontmatter or {}
        return str(fm.get("name") or "").strip()

    @property
    def description(self) -> str:
        fm = self.raw_frontmatter or {}
        return str(fm.get("description") or "").strip()

    def _scan_body(self) -> None:
        fence: Optional[str] = None
        fence_start = 0
        fence_lang = ""

        for offset, line in enumerate(self.body.splitlines()):
            lineno = self.body_start_line + offset
            m = _FENCE_RE.match(line)
            if fence is not None:
                # closing fence must use the same char and be at least as long
                if m and m.group(1)[0] == fence[0] and len(m.group(1)) >= len(fence) and not m.group(2).strip():
                    self.code_blocks.append(CodeBlock(fence_start, fence_lang, True))
                    fence = None
                continue
            if m:
                fence = m.group(1)
                fence_start = lineno
                fence_lang = m.group(2).strip().split(" ")[0] if m.group(2).strip() else ""
                continue

            h = _HEADING_RE.match(line)
            if h:
                self.headings.append((len(h.group(1)), h.group(2).strip()))

            for target in _LINK_RE.findall(line):
                self.links.append(target)

        if fence is not None:
            self.code_blocks.append(CodeBlock(fence_start, fence_lang, False))

    def parsed_frontmatter(self) -> Optional[SkillFrontmatter]:
        if self.raw_frontmatter is None:
            return None
        try:
            return SkillFrontmatter.model_validate(self.raw_frontmatter)
        except ValueError:
            return None
