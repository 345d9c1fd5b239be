from __future__ import annotations

import logging
import shutil
import subprocess
from pathlib import Path
from typing import Callable, List, Optional

_log = logging.getLogger("skillops.github")

Runner = Callable[..., subprocess.CompletedProcess]


class GitHubError(RuntimeError):
    pass


class GitHubCli:
    """Thin wrapper over the `gh` CLI. Authentication is left to gh itself."""

    def __init__(self, repo_path: Path, runner: Optional[Runner] = None):
        self.repo_path = Path(repo_path)
        self._runner = runner or subprocess.run

    @staticmethod
    def available() -> bool:
        return shutil.which("gh") is not None

    def _run(self, args: List[str], input_text: Optional[str] = None) -> subprocess.CompletedProcess:
        return self._runner(
            ["gh", *args],
            cwd=str(self.repo_path),
            input=input_text,
            capture_output=True,
            text=True,
        )

    def release_exists(self, tag: str) -> bool:
        r = self._run(["release", "view", tag, "--json", "tagName"])
        return r.returncode == 0

    def create_release(self, tag: str, title: str, notes: str, target: Optional[str] = None) -> None:
        """
        Without ``target`` the tag must already be on GitHub. With it, gh
        creates the tag remotely at that commit.
        """
        args = ["release", "create", tag, "--title", title, "--notes-file", "-"]
        args += ["--target", target] if target else ["--verify-tag"]
        r = self._run(args, input_text=notes)
        if r.returncode != 0:
            raise GitHubError(f"gh release create {tag} failed: {(r.stderr or r.stdout or '').strip()}")
        _log.info("Created GitHub release %s", tag)
