from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, List, Optional

from skillops.core.config import SkillOpsSettings
from skillops.core.observability.metrics import inc_validation
from skillops.core.skills.models import SKILL_MARKDOWN_FILENAME, SkillDocument
from skillops.core.skills.scanner import discover_skills, load_skill

from .models import QualityReport, RuleResult, ValidationSummary
from .rules import DEFAULT_RULES, QualityRule

_log = logging.getLogger("skillops.quality")


class QualityEngine:
    def __init__(self, rules: List[QualityRule]):
        self._rules = rules

    @property
    def rules(self) -> List[QualityRule]:
        return list(self._rules)

    def evaluate(self, doc: SkillDocument, settings: SkillOpsSettings) -> QualityReport:
        results: List[RuleResult] = []
        for rule in self._rules:
            status, message, details = rule.check(doc, settings)
            results.append(
                RuleResult(rule=rule.name, status=status, message=message, weight=rule.weight, details=details)
            )
        report = QualityReport(path=doc.path, results=results)
        _log.debug("Scored %s: %.1f", doc.path, report.score)
        return report


def default_engine() -> QualityEngine:
    return QualityEngine(rules=list(DEFAULT_RULES))


def expand_targets(paths: Iterable[Path]) -> List[Path]:
    """Files are taken as-is; directories are scanned for SKILL.md files."""
    out: List[Path] = []
    for p in paths:
        p = Path(p)
        if p.is_dir():
            out.extend(discover_skills(p, ["."]))
        elif p.is_file():
            out.append(p.resolve())
        else:
            raise FileNotFoundError(f"path not found: {p}")
    return sorted(dict.fromkeys(out))


def validate_paths(
    paths: Iterable[Path],
    settings: SkillOpsSettings,
    threshold: Optional[float] = None,
    engine: Optional[QualityEngine] = None,
) -> ValidationSummary:
    threshold = settings.quality_threshold if threshold is None else threshold
    engine = engine or default_engine()
    summary = ValidationSummary(threshold=threshold)

    for path in expand_targets(paths):
        if path.name != SKILL_MARKDOWN_FILENAME:
            _log.info("Scoring non-standard skill file name: %s", path)
        report = engine.evaluate(load_skill(path), settings)
        passed = report.passes(threshold)
        inc_validation(passed)
        if not passed:
            _log.warning("%s scored %.1f/%.0f (gate %.1f)", path, report.score, report.max_score, threshold)
        summary.reports.append(report)

    return summary
