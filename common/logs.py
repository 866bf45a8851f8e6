# common/logs.py
from __future__ import annotations
import logging
from typing import Optional
from common.settings import settings

LOGGER_NAME = "form-handler"


def setup_logging(level: Optional[str] = None) -> logging.Logger:
    """Configure root logging once (no-op if handlers exist) and return the app logger."""
    logging.basicConfig(level=(level or settings.log_level).upper())
    return logging.getLogger(LOGGER_NAME)
