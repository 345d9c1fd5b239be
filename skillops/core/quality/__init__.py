from .engine import QualityEngine, default_engine, expand_targets, validate_paths
from .models import MAX_SCORE, QualityReport, RuleResult, RuleStatus, ValidationSummary
from .rules import DEFAULT_RULES, QualityRule

__all__ = [
    "DEFAULT_RULES",
    "MAX_SCORE",
    "QualityEngine",
    "QualityReport",
    "QualityRule",
    "RuleResult",
    "RuleStatus",
    "ValidationSummary",
    "default_engine",
    "expand_targets",
    "validate_paths",
]
