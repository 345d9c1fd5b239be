from __future__ import annotations

from collections import Counter
from typing import Dict

from prometheus_client import Counter as PromCounter

# Named counters (custom)
_NAMED = Counter()

_PROM_VALIDATIONS = PromCounter(
    "skillops_validations_total",
    "Skill documents scored by the quality validator",
    ["result"],
)

_PROM_RELEASE_ACTIONS = PromCounter(
    "skillops_release_actions_total",
    "Release bookkeeping actions performed",
    ["action"],
)


def reset_metrics() -> None:
    """
    Test helper: clears in-process counters to avoid cross-test leakage.
    Prometheus counters are process-global and only ever grow.
    """
    _NAMED.clear()


def inc_named(name: str, value: int = 1) -> None:
    if not name:
        return
    _NAMED[name] += int(value)


def inc_validation(passed: bool) -> None:
    result = "pass" if passed else "fail"
    _NAMED[f"validations_{result}"] += 1
    _PROM_VALIDATIONS.labels(result=result).inc()


def inc_release_action(action: str) -> None:
    _NAMED[f"release_{action}"] += 1
    _PROM_RELEASE_ACTIONS.labels(action=action).inc()


def snapshot_named() -> Dict[str, int]:
    return dict(_NAMED)
