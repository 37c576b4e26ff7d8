from __future__ import annotations

import logging
import sys
from typing import Optional


def configure_logging(level: Optional[str] = None) -> None:
    log_level = (level or "INFO").upper()
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )
    # Per-request PostgREST lines drown out engine warnings at INFO.
    logging.getLogger("httpx").setLevel(logging.WARNING)
