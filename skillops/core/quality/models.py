from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional

MAX_SCORE = 10.0


class RuleStatus(str, Enum):
    PASS = "PASS"
    WARN = "WARN"
    FAIL = "FAIL"


@dataclass(frozen=True)
class RuleResult:
    rule: str
    status: RuleStatus
    message: str
    weight: float
    details: Optional[Dict[str, Any]] = None

    @property
    def points(self) -> float:
        if self.status == RuleStatus.PASS:
            return self.weight
        if self.status == RuleStatus.WARN:
            return self.weight / 2
        return 0.0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "rule": self.rule,
            "status": self.status.value,
            "message": self.message,
            "weight": self.weight,
            "points": self.points,
            "details": self.details,
        }


@dataclass
class QualityReport:
    path: Path
    results: List[RuleResult]
    max_score: float = MAX_SCORE

    @property
    def score(self) -> float:
        total = sum(r.points for r in self.results)
        return round(min(max(total, 0.0), self.max_score), 1)

    @property
    def has_failures(self) -> bool:
        return any(r.status == RuleStatus.FAIL for r in self.results)

    @property
    def has_warnings(self) -> bool:
        return any(r.status == RuleStatus.WARN for r in self.results)

    def passes(self, threshold: float) -> bool:
        # a perfect-score gate tolerates no findings at all
        if threshold >= self.max_score:
            return not self.has_failures and not self.has_warnings
        return self.score >= threshold

    def findings(self) -> List[RuleResult]:
        return [r for r in self.results if r.status != RuleStatus.PASS]

    def to_dict(self, threshold: Optional[float] = None) -> Dict[str, Any]:
        out: Dict[str, Any] = {
            "path": str(self.path),
            "score": self.score,
            "max_score": self.max_score,
            "has_failures": self.has_failures,
            "results": [r.to_dict() for r in self.results],
        }
        if threshold is not None:
            out["threshold"] = threshold
            out["passed"] = self.passes(threshold)
        return out


@dataclass
class ValidationSummary:
    threshold: float
    reports: List[QualityReport] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return bool(self.reports) and all(r.passes(self.threshold) for r in self.reports)

    @property
    def failed(self) -> List[QualityReport]:
        return [r for r in self.reports if not r.passes(self.threshold)]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "kind": "skill_quality_summary",
            "threshold": self.threshold,
            "ok": self.ok,
            "checked": len(self.reports),
            "failed": [str(r.path) for r in self.failed],
            "reports": [r.to_dict(self.threshold) for r in self.reports],
        }
