from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Optional

from ..config import get_settings

_CONFIGURED = False


def configure_logging(*, level: Optional[str] = None) -> None:
    """Send log records to the console and to a dated file in the configured log directory."""

    global _CONFIGURED
    if _CONFIGURED:
        return

    settings = get_settings().logging
    resolved_level = getattr(logging, (level or settings.level).upper(), logging.INFO)
    settings.directory.mkdir(parents=True, exist_ok=True)
    timestamp = datetime.now(timezone.utc).strftime("%Y%m%d")
    log_path = settings.directory / f"rangecal-{timestamp}.log"

    handlers: list[logging.Handler] = [
        logging.StreamHandler(),
        logging.FileHandler(log_path, encoding="utf-8"),
    ]

    logging.basicConfig(
        level=resolved_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        handlers=handlers,
    )
    _CONFIGURED = True
    logging.getLogger(__name__).debug("Logging configured. Output file: %s", log_path)
