# skillops/core/git_ops/repo.py

from __future__ import annotations

import logging
import os
import subprocess
from pathlib import Path
from typing import List, Optional, Tuple

_log = logging.getLogger("skillops.git")

# unit separator between commit fields, record separator between commits
_FIELD_SEP = "\x1f"
_RECORD_SEP = "\x1e"


class GitError(RuntimeError):
    pass


# ---------------------------------------------------------------------
# Core git runner (deterministic, no pager, strict semantics)
# ---------------------------------------------------------------------

def run_git(repo_path: Path, args: list[str]) -> Tuple[int, str, str]:
    p = subprocess.run(
        ["git", "--no-pager", *args],
        cwd=str(repo_path),
        capture_output=True,
        text=True,
        encoding="utf-8",
        errors="replace",
        env={**os.environ, "GIT_PAGER": "cat", "PAGER": "cat"},
    )
    return p.returncode, (p.stdout or "").strip(), (p.stderr or "").strip()


def _check(repo_path: Path, args: list[str], what: str) -> str:
    rc, out, err = run_git(repo_path, args)
    if rc != 0:
        raise GitError(f"{what} failed: {err or out}")
    return out


# ---------------------------------------------------------------------
# Basic state
# ---------------------------------------------------------------------

def head_commit(repo_path: Path) -> str:
    return _check(repo_path, ["rev-parse", "HEAD"], "git rev-parse HEAD")


def is_dirty(repo_path: Path) -> bool:
    return bool(_check(repo_path, ["status", "--porcelain"], "git status"))


# ---------------------------------------------------------------------
# Tags
# ---------------------------------------------------------------------

def tag_exists(repo_path: Path, tag: str) -> bool:
    rc, _, _ = run_git(repo_path, ["rev-parse", "-q", "--verify", f"refs/tags/{tag}"])
    return rc == 0


def create_tag(repo_path: Path, tag: str, message: Optional[str] = None, ref: str = "HEAD") -> None:
    _check(repo_path, ["tag", "-a", tag, "-m", message or tag, ref], f"git tag {tag}")
    _log.info("Created tag %s", tag)


def push_tag(repo_path: Path, tag: str, remote: str = "origin") -> None:
    _check(repo_path, ["push", remote, f"refs/tags/{tag}"], f"git push {remote} {tag}")
    _log.info("Pushed tag %s to %s", tag, remote)


def remote_tag_exists(repo_path: Path, tag: str, remote: str = "origin") -> bool:
    out = _check(repo_path, ["ls-remote", "--tags", remote, f"refs/tags/{tag}"], f"git ls-remote {remote}")
    return bool(out)


def tag_commit(repo_path: Path, tag: str) -> str:
    return _check(repo_path, ["rev-list", "-n", "1", tag], f"git rev-list {tag}")


def last_tag_for(repo_path: Path, prefix: str) -> Optional[str]:
    """Most recent tag reachable from HEAD whose name starts with prefix."""
    rc, out, _ = run_git(repo_path, ["describe", "--tags", "--abbrev=0", "--match", f"{prefix}*"])
    if rc != 0:
        return None
    return out or None


# ---------------------------------------------------------------------
# History
# ---------------------------------------------------------------------

def log_messages(
    repo_path: Path,
    since_ref: Optional[str] = None,
    paths: Optional[List[str]] = None,
) -> List[Tuple[str, str]]:
    """
    Return (sha, full message) pairs, oldest first.

    An empty repository (no HEAD yet) has no history.
    """
    rc, _, _ = run_git(repo_path, ["rev-parse", "--verify", "-q", "HEAD"])
    if rc != 0:
        return []

    rev = f"{since_ref}..HEAD" if since_ref else "HEAD"
    args = ["log", "--reverse", f"--format=%H{_FIELD_SEP}%B{_RECORD_SEP}", rev]
    if paths:
        args += ["--", *paths]
    out = _check(repo_path, args, "git log")

    commits: List[Tuple[str, str]] = []
    for record in out.split(_RECORD_SEP):
        record = record.strip()
        if not record:
            continue
        sha, _, message = record.partition(_FIELD_SEP)
        commits.append((sha.strip(), message.strip()))
    return commits
