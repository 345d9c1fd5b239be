"""Serve the skill ops API: ``python -m skillops.main``."""
import os

import uvicorn

from skillops.core.logging_setup import configure_logging


def main() -> None:
    configure_logging()
    host = os.getenv("SKILLOPS_HOST", "127.0.0.1")
    port = int(os.getenv("SKILLOPS_PORT", "8010"))
    uvicorn.run("skillops.api.main:app", host=host, port=port, log_config=None)


if __name__ == "__main__":
    main()
