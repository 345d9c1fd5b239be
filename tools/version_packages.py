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
from skillops.core.logging_setup import configure_logging  # noqa: E402
from skillops.core.release.changesets import ChangesetError  # noqa: E402
from skillops.core.release.versioning import version_packages  # noqa: E402


def main(argv: list[str] | None = None) -> int:
    ap = argparse.ArgumentParser(description="Apply pending changesets to package versions and changelogs")
    ap.add_argument("--root", default=".", help="Repository root (default: current directory)")
    ap.add_argument("--dry-run", action="store_true", help="Print the plan without writing anything")
    args = ap.parse_args(argv)

    configure_logging()
    root = Path(args.root).resolve()
    settings = load_settings(root)

    try:
        plan = version_packages(root, settings, dry_run=args.dry_run)
    except (ChangesetError, ValueError) as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 2

    if plan.empty and not plan.changesets:
        print("No pending changesets.")
        return 0

    print(json.dumps(plan.to_dict(), indent=2, sort_keys=True))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
