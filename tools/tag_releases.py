"""Create name@version git tags and GitHub releases; safe to rerun."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

# ---- sys.path bootstrap ----
PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))
# ----------------------------

from skillops.core.config import load_settings  # noqa: E402
from skillops.core.git_ops.github import GitHubCli, GitHubError  # noqa: E402
from skillops.core.git_ops.repo import GitError, is_dirty  # noqa: E402
from skillops.core.logging_setup import configure_logging  # noqa: E402
from skillops.core.release.tagging import tag_releases  # noqa: E402


def main(argv: list[str] | None = None) -> int:
    ap = argparse.ArgumentParser(description=__doc__)
    ap.add_argument("--root", default=".", help="Repository root (default: current directory)")
    ap.add_argument("--dry-run", action="store_true", help="Report what would be created")
    ap.add_argument("--push", action="store_true", help="Push created tags to the configured remote")
    ap.add_argument("--no-github", action="store_true", help="Skip GitHub releases")
    args = ap.parse_args(argv)

    configure_logging()
    root = Path(args.root).resolve()
    settings = load_settings(root)
    if args.push:
        settings.push_tags = True
    if args.no_github:
        settings.github_releases = False

    gh = None
    if settings.github_releases:
        if GitHubCli.available():
            gh = GitHubCli(root)
        else:
            print("WARNING: gh CLI not found; GitHub releases will be skipped", file=sys.stderr)

    try:
        if not args.dry_run and is_dirty(root):
            print("WARNING: working tree has uncommitted changes; tags point at HEAD", file=sys.stderr)
        outcomes = tag_releases(root, settings, gh=gh, dry_run=args.dry_run)
    except (GitError, GitHubError, ValueError) as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 2

    print(json.dumps([o.to_dict() for o in outcomes], indent=2, sort_keys=True))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
