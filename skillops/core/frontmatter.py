from __future__ import annotations

from typing import Any, Dict, Optional, Tuple

import yaml

DELIMITER = "---"


class FrontmatterError(ValueError):
    pass


def split_frontmatter(text: str) -> Tuple[Optional[Dict[str, Any]], str, int]:
    """
    Split a Markdown document into (frontmatter, body, body_start_line).

    body_start_line is 1-based. Documents without an opening ``---`` line have
    no frontmatter and the whole text is the body.
    """
    lines = text.splitlines(keepends=True)
    if not lines or lines[0].strip() != DELIMITER:
        return None, text, 1

    closing = None
    for i in range(1, len(lines)):
        if lines[i].strip() == DELIMITER:
            closing = i
            break
    if closing is None:
        raise FrontmatterError("frontmatter is not closed with '---'")

    raw = "".join(lines[1:closing])
    try:
        data = yaml.safe_load(raw) if raw.strip() else {}
    except yaml.YAMLError as exc:
        raise FrontmatterError(f"invalid YAML in frontmatter: {exc}") from exc

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise FrontmatterError(f"frontmatter must be a mapping, got {type(data).__name__}")

    body = "".join(lines[closing + 1:])
    return data, body, closing + 2


def render_frontmatter(data: Dict[str, Any], body: str) -> str:
    dumped = yaml.safe_dump(data, sort_keys=False, allow_unicode=True).rstrip("\n") if data else ""
    head = f"{DELIMITER}\n{dumped}\n{DELIMITER}\n" if dumped else f"{DELIMITER}\n{DELIMITER}\n"
    if body and not body.startswith("\n"):
        body = "\n" + body
    return head + body
