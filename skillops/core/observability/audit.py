"""
Release audit trail.

One JSON object per line, appended to ``<root>/.skillops/audit.log`` by
default and rotated at 10MB with 5 backups. Records carry the event type,
the package and tag involved, and the actor (``GITHUB_ACTOR`` in CI, else
``USER``).
"""
import json
import logging
import logging.handlers
import os
import time
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional

DEFAULT_AUDIT_PATH = Path(".skillops") / "audit.log"

_MAX_BYTES = 10 * 1024 * 1024
_BACKUP_COUNT = 5

_loggers: Dict[Path, logging.Logger] = {}


def _actor() -> Optional[str]:
    return os.getenv("GITHUB_ACTOR") or os.getenv("USER") or None


def _audit_logger(audit_path: Path) -> logging.Logger:
    key = audit_path.resolve()
    logger = _loggers.get(key)
    if logger is None:
        key.parent.mkdir(parents=True, exist_ok=True)
        handler = logging.handlers.RotatingFileHandler(
            str(key),
            maxBytes=_MAX_BYTES,
            backupCount=_BACKUP_COUNT,
            encoding="utf-8",
        )
        handler.setFormatter(logging.Formatter("%(message)s"))
        # one logger per file; never reaches the root handlers
        logger = logging.getLogger(f"skillops.audit.{len(_loggers)}")
        logger.handlers = [handler]
        logger.setLevel(logging.INFO)
        logger.propagate = False
        _loggers[key] = logger
    return logger


def close_audit_handlers() -> None:
    for logger in _loggers.values():
        for h in logger.handlers:
            h.close()
        logger.handlers = []
    _loggers.clear()


def audit_event(
    event_type: str,
    *,
    package: Optional[str] = None,
    tag: Optional[str] = None,
    extra: Optional[Dict[str, Any]] = None,
    audit_path: Path = DEFAULT_AUDIT_PATH,
) -> Dict[str, Any]:
    record: Dict[str, Any] = {
        "ts_ms": int(time.time() * 1000),
        "type": event_type,
        "actor": _actor(),
        "package": package,
        "tag": tag,
    }
    if extra:
        record["extra"] = extra

    logger = _audit_logger(Path(audit_path))
    logger.info(json.dumps(record, separators=(",", ":"), ensure_ascii=False, sort_keys=True))
    for h in logger.handlers:
        h.flush()
    return record


def iter_audit_events(audit_path: Path) -> Iterator[Dict[str, Any]]:
    p = Path(audit_path)
    if not p.exists():
        return
    with p.open(encoding="utf-8") as f:
        for line in f:
            line = line.strip()
            if line:
                yield json.loads(line)


def read_audit_events(audit_path: Path, event_type: Optional[str] = None) -> List[Dict[str, Any]]:
    return [e for e in iter_audit_events(audit_path) if event_type is None or e.get("type") == event_type]
