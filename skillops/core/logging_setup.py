from __future__ import annotations

import logging
import os
from typing import Optional


def configure_logging(level: Optional[str] = None) -> None:
    """Console logging for the tools/ scripts; SKILLOPS_LOG_LEVEL wins when set."""
    name = (os.getenv("SKILLOPS_LOG_LEVEL") or level or "INFO").strip().upper()
    logging.basicConfig(
        level=getattr(logging, name, logging.INFO),
        format="%(levelname)s %(name)s: %(message)s",
    )
