from __future__ import annotations

import logging

from storerate.core.config import settings

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def setup_logging(level: str | None = None) -> None:
    """Configure the root logger once. Uvicorn's own handlers are left alone."""
    root = logging.getLogger()
    lvl = (level or settings.LOG_LEVEL or "INFO").upper()
    if not root.handlers:
        logging.basicConfig(level=lvl, format=LOG_FORMAT)
    else:
        root.setLevel(lvl)
