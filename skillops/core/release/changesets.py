from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterable, List, Optional

from skillops.core.frontmatter import FrontmatterError, render_frontmatter, split_frontmatter
from skillops.core.git_ops.repo import last_tag_for, log_messages

from .conventional import bump_for_commit, parse_commit
from .packages import Package
from .semver import BumpType, max_bump

_log = logging.getLogger("skillops.release")

NON_CHANGESET_FILES = {"README.md", "config.json"}

_ID_WORDS = (
    "amber", "brave", "calm", "clever", "cool", "curly", "dry", "eager", "early", "fair",
    "fast", "fluffy", "gentle", "giant", "happy", "honest", "kind", "late", "lazy", "loud",
    "lucky", "mighty", "neat", "odd", "old", "proud", "quick", "quiet", "rare", "red",
    "shy", "silly", "slow", "smart", "soft", "sour", "swift", "tall", "tidy", "warm",
    "apples", "bats", "bears", "birds", "boats", "cats", "clouds", "cows", "crabs", "dogs",
    "ducks", "eels", "foxes", "frogs", "geese", "goats", "hats", "kings", "lamps", "moles",
    "owls", "pans", "pears", "pigs", "plums", "rats", "rivers", "seals", "snails", "trees",
)


class ChangesetError(ValueError):
    pass


@dataclass
class Changeset:
    id: str
    releases: Dict[str, BumpType]
    summary: str
    path: Optional[Path] = field(default=None, compare=False)


def parse_changeset(text: str, changeset_id: str, path: Optional[Path] = None) -> Changeset:
    where = str(path or changeset_id)
    try:
        fm, body, _ = split_frontmatter(text)
    except FrontmatterError as exc:
        raise ChangesetError(f"{where}: {exc}") from exc
    if not fm:
        raise ChangesetError(f"{where}: changeset declares no packages")

    releases: Dict[str, BumpType] = {}
    for name, bump in fm.items():
        try:
            releases[str(name)] = BumpType.parse(bump)
        except ValueError as exc:
            raise ChangesetError(f"{where}: {exc}") from exc

    return Changeset(id=changeset_id, releases=releases, summary=body.strip(), path=path)


def read_changesets(directory: Path) -> List[Changeset]:
    directory = Path(directory)
    if not directory.is_dir():
        return []
    out: List[Changeset] = []
    for f in sorted(directory.glob("*.md")):
        if f.name in NON_CHANGESET_FILES:
            continue
        out.append(parse_changeset(f.read_text(encoding="utf-8"), f.stem, f))
    return out


def _generate_id(directory: Path) -> str:
    rng = random.SystemRandom()
    for _ in range(100):
        candidate = "-".join(rng.choice(_ID_WORDS) for _ in range(3))
        if not (directory / f"{candidate}.md").exists():
            return candidate
    raise ChangesetError(f"could not allocate a changeset id in {directory}")


def write_changeset(
    directory: Path,
    releases: Dict[str, BumpType],
    summary: str,
    changeset_id: Optional[str] = None,
) -> Path:
    if not releases:
        raise ChangesetError("a changeset must release at least one package")
    directory = Path(directory)
    directory.mkdir(parents=True, exist_ok=True)

    cid = changeset_id or _generate_id(directory)
    path = directory / f"{cid}.md"
    if path.exists():
        raise ChangesetError(f"changeset already exists: {path}")

    fm = {name: BumpType.parse(b).value for name, b in releases.items()}
    path.write_text(render_frontmatter(fm, summary.strip() + "\n"), encoding="utf-8")
    _log.info("Wrote changeset %s", path)
    return path


def changesets_from_commits(
    repo_path: Path,
    packages: Iterable[Package],
    directory: Path,
) -> List[Path]:
    """
    One changeset per releasable conventional commit touching a package since
    its last ``name@`` tag. Commits that release nothing are skipped.
    """
    repo_path = Path(repo_path).resolve()
    written: List[Path] = []
    for pkg in packages:
        since = last_tag_for(repo_path, f"{pkg.name}@")
        rel = Path(pkg.path).resolve().relative_to(repo_path).as_posix()
        for sha, message in log_messages(repo_path, since_ref=since, paths=[rel]):
            commit = parse_commit(message)
            if commit is None:
                _log.debug("Skipping non-conventional commit %s", sha[:12])
                continue
            bump = bump_for_commit(commit)
            if bump == BumpType.NONE:
                continue
            summary = commit.subject
            if commit.breaking_note:
                summary = f"{summary}\n\nBREAKING CHANGE: {commit.breaking_note}"
            written.append(write_changeset(directory, {pkg.name: bump}, summary))
    return written


def pending_bumps(changesets: Iterable[Changeset]) -> Dict[str, BumpType]:
    out: Dict[str, BumpType] = {}
    for cs in changesets:
        for name, bump in cs.releases.items():
            out[name] = max_bump([out.get(name, BumpType.NONE), bump])
    return out
