from __future__ import annotations

import argparse
import sys
from pathlib import Path

# ---- sys.path bootstrap ----
PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))
# ----------------------------

from skillops.core.config import load_settings  # noqa: E402
from skillops.core.git_ops.repo import GitError  # noqa: E402
from skillops.core.logging_setup import configure_logging  # noqa: E402
from skillops.core.release.changesets import (  # noqa: E402
    ChangesetError,
    changesets_from_commits,
    write_changeset,
)
from skillops.core.release.packages import discover_packages  # noqa: E402
from skillops.core.release.semver import BumpType  # noqa: E402


def _parse_release(item: str) -> tuple[str, BumpType]:
    if ":" not in item:
        raise ChangesetError(f"expected PACKAGE:BUMP, got {item!r}")
    name, bump = item.rsplit(":", 1)
    return name.strip(), BumpType.parse(bump)


def main(argv: list[str] | None = None) -> int:
    ap = argparse.ArgumentParser(description="Record a pending version bump as a changeset file")
    ap.add_argument("--root", default=".", help="Repository root (default: current directory)")
    ap.add_argument("--release", action="append", default=[], help="PACKAGE:major|minor|patch (repeatable)")
    ap.add_argument("-m", "--message", default="", help="Changelog summary")
    ap.add_argument("--id", default=None, help="Changeset id (default: generated)")
    ap.add_argument(
        "--from-commits",
        action="store_true",
        help="Derive changesets from conventional commits since each package's last tag",
    )
    args = ap.parse_args(argv)

    configure_logging()
    root = Path(args.root).resolve()
    settings = load_settings(root)
    directory = root / settings.changeset_dir

    try:
        packages = discover_packages(root, settings.package_globs)
        if args.from_commits:
            written = changesets_from_commits(root, packages, directory)
            for p in written:
                print(p)
            if not written:
                print("No releasable commits found.")
            return 0

        if not args.release or not args.message.strip():
            print("ERROR: --release and --message are required (or use --from-commits)", file=sys.stderr)
            return 2

        releases = dict(_parse_release(r) for r in args.release)
        known = {p.name for p in packages}
        unknown = sorted(set(releases) - known)
        if unknown:
            print(f"ERROR: unknown package(s): {', '.join(unknown)}", file=sys.stderr)
            return 2

        print(write_changeset(directory, releases, args.message, changeset_id=args.id))
    except (ChangesetError, GitError, ValueError) as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 2
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
