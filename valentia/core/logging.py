"""Process-wide logging setup. Modules log through logging.getLogger(__name__)."""

import logging
from typing import Optional

from valentia.core.config import settings

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: Optional[str] = None) -> None:
    root = logging.getLogger()
    root.setLevel((level or settings.log_level).upper())
    # Idempotent: create_app() may run more than once (tests, reloader)
    if any(getattr(h, "_valentia", False) for h in root.handlers):
        return
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    handler._valentia = True
    root.addHandler(handler)
