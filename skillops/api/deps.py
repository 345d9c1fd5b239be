from __future__ import annotations

import os
from pathlib import Path

from skillops.core.config import SkillOpsSettings, load_settings


def project_root() -> Path:
    return Path(os.getenv("SKILLOPS_ROOT") or ".").resolve()


def project_settings() -> SkillOpsSettings:
    return load_settings(project_root())
