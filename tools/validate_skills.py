"""Quality gate for skill documents; exits non-zero when any skill scores below the threshold."""

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
from skillops.core.quality import RuleStatus, validate_paths  # noqa: E402

_MARK = {RuleStatus.PASS: "ok  ", RuleStatus.WARN: "warn", RuleStatus.FAIL: "FAIL"}


def main(argv: list[str] | None = None) -> int:
    ap = argparse.ArgumentParser(description="Score SKILL.md files against the quality rubric")
    ap.add_argument("paths", nargs="*", help="Skill files or directories (default: configured skills dirs)")
    ap.add_argument("--root", default=".", help="Repository root (default: current directory)")
    ap.add_argument("--config", default=None, help="Settings file (default: <root>/skillops.yaml)")
    ap.add_argument("--strict", action="store_true", help="Require a perfect score")
    ap.add_argument("--threshold", type=float, default=None, help="Override the passing score")
    ap.add_argument("--json", action="store_true", help="Print the summary as JSON")
    ap.add_argument("--verbose", action="store_true", help="Show passing rules too")
    args = ap.parse_args(argv)

    configure_logging()
    root = Path(args.root).resolve()
    settings = load_settings(root, Path(args.config) if args.config else None)

    threshold = args.threshold
    if threshold is None:
        threshold = settings.strict_threshold if args.strict else settings.quality_threshold

    # relative paths are taken from --root, like the default skills dirs
    targets = [root / p for p in args.paths] or [root / d for d in settings.skills_dirs if (root / d).exists()]
    try:
        summary = validate_paths(targets, settings, threshold=threshold)
    except FileNotFoundError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 2

    if not summary.reports:
        print("ERROR: no SKILL.md files found", file=sys.stderr)
        return 2

    if args.json:
        print(json.dumps(summary.to_dict(), indent=2, sort_keys=True))
    else:
        for report in summary.reports:
            verdict = "PASS" if report.passes(threshold) else "FAIL"
            print(f"{verdict} {report.score:4.1f}/{report.max_score:.0f}  {report.path}")
            for r in report.results:
                if r.status == RuleStatus.PASS and not args.verbose:
                    continue
                print(f"    [{_MARK[r.status]}] {r.rule}: {r.message}")
        print(f"\n{len(summary.reports) - len(summary.failed)}/{len(summary.reports)} skill(s) at or above {threshold:.1f}")

    return 0 if summary.ok else 1


if __name__ == "__main__":
    raise SystemExit(main())
