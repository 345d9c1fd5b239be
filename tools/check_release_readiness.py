"""Release readiness gate for skill packages."""

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
from skillops.core.release.readiness import check_release_readiness  # noqa: E402


def main(argv: list[str] | None = None) -> int:
    ap = argparse.ArgumentParser(description=__doc__)
    ap.add_argument("--root", default=".", help="Repository root (default: current directory)")
    args = ap.parse_args(argv)

    configure_logging()
    root = Path(args.root).resolve()
    report = check_release_readiness(root, load_settings(root))
    print(json.dumps(report, indent=2, sort_keys=True))
    return 0 if report["ready"] else 1


if __name__ == "__main__":
    raise SystemExit(main())
