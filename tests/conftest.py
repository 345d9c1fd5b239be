from __future__ import annotations

import json
import os
import subprocess
from pathlib import Path

import pytest

from skillops.core.observability.audit import close_audit_handlers
from skillops.core.observability.metrics import reset_metrics


GOOD_SKILL = """---
name: tailwind-v4
description: Tailwind CSS v4 setup and utility patterns. Use when the user is styling components with Tailwind or migrating from v3.
---

# Tailwind v4

Short guide; see [the reference](references/utilities.md) for the full utility list.

## Setup

```bash
npm install tailwindcss @tailwindcss/vite
```

## Patterns

```css
@import "tailwindcss";
```
"""


@pytest.fixture(scope="session", autouse=True)
def _git_identity():
    # commits in temporary repos must not depend on the developer's git config
    os.environ.setdefault("GIT_AUTHOR_NAME", "Test Author")
    os.environ.setdefault("GIT_AUTHOR_EMAIL", "test@example.com")
    os.environ.setdefault("GIT_COMMITTER_NAME", "Test Author")
    os.environ.setdefault("GIT_COMMITTER_EMAIL", "test@example.com")
    for key in ("SKILLOPS_CONFIG", "SKILLOPS_QUALITY_THRESHOLD", "SKILLOPS_PUSH_TAGS", "SKILLOPS_GITHUB_RELEASES"):
        os.environ.pop(key, None)


@pytest.fixture(autouse=True)
def _clean_metrics():
    reset_metrics()
    yield
    close_audit_handlers()


def git(repo: Path, *args: str) -> str:
    p = subprocess.run(["git", *args], cwd=str(repo), check=True, capture_output=True, text=True)
    return p.stdout.strip()


def write_skill(root: Path, name: str, content: str = GOOD_SKILL, with_reference: bool = True) -> Path:
    d = root / "skills" / name
    d.mkdir(parents=True, exist_ok=True)
    (d / "SKILL.md").write_text(content, encoding="utf-8")
    if with_reference:
        (d / "references").mkdir(exist_ok=True)
        (d / "references" / "utilities.md").write_text("# Utilities\n", encoding="utf-8")
    return d / "SKILL.md"


def write_package(directory: Path, name: str, version: str, changelog: str | None = None) -> Path:
    directory.mkdir(parents=True, exist_ok=True)
    manifest = {"name": name, "version": version, "private": True, "files": ["SKILL.md"]}
    (directory / "package.json").write_text(json.dumps(manifest, indent=2) + "\n", encoding="utf-8")
    if changelog is not None:
        (directory / "CHANGELOG.md").write_text(changelog, encoding="utf-8")
    return directory


@pytest.fixture()
def tmp_repo(tmp_path: Path):
    """
    A temporary git repo with one commit.
    """
    repo = tmp_path / "repo"
    repo.mkdir(parents=True, exist_ok=True)
    subprocess.run(["git", "init", "-q"], cwd=str(repo), check=True)
    (repo / "README.md").write_text("x", encoding="utf-8")
    git(repo, "add", ".")
    git(repo, "commit", "-q", "-m", "chore: init")
    return repo


@pytest.fixture()
def skill_workspace(tmp_repo: Path):
    """
    Repo with one skill package (tailwind-v4 @ 1.1.0) already committed.
    """
    pkg_dir = tmp_repo / "skills" / "tailwind-v4"
    write_skill(tmp_repo, "tailwind-v4")
    write_package(
        pkg_dir,
        "tailwind-v4",
        "1.1.0",
        changelog="# tailwind-v4\n\n## 1.1.0\n\n### Minor Changes\n\n- Add v4 migration notes\n\n## 1.0.0\n\n### Major Changes\n\n- Initial release\n",
    )
    git(tmp_repo, "add", ".")
    git(tmp_repo, "commit", "-q", "-m", "feat(tailwind-v4): add skill")
    return tmp_repo


class FakeGh:
    """Stands in for subprocess.run when GitHubCli shells out to gh."""

    def __init__(self, existing=(), fail_create: bool = False):
        self.releases = {t: "" for t in existing}
        self.calls = []
        self.fail_create = fail_create

    def __call__(self, cmd, cwd=None, input=None, capture_output=True, text=True):
        self.calls.append(list(cmd))
        sub = cmd[1:3]
        if sub == ["release", "view"]:
            rc = 0 if cmd[3] in self.releases else 1
            return subprocess.CompletedProcess(cmd, rc, stdout="", stderr="" if rc == 0 else "release not found")
        if sub == ["release", "create"]:
            if self.fail_create:
                return subprocess.CompletedProcess(cmd, 1, stdout="", stderr="HTTP 403")
            self.releases[cmd[3]] = input or ""
            return subprocess.CompletedProcess(cmd, 0, stdout="https://github.com/o/r/releases/tag/x", stderr="")
        return subprocess.CompletedProcess(cmd, 1, stdout="", stderr="unsupported")


@pytest.fixture()
def fake_gh():
    return FakeGh()
