from __future__ import annotations

import logging
import os
from typing import Optional

from .settings import Settings, get_settings

LOGGER = logging.getLogger("countdown")
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"

_HANDLER_ATTR = "_countdown_handler"


# PUBLIC_INTERFACE
def setup_logging(settings: Optional[Settings] = None) -> logging.Logger:
    """
    Configure the 'countdown' logger used as the diagnostics sink.

    Behavior:
    - Logs go to settings.log_file when set, otherwise to stderr.
    - The level comes from settings.log_level; unknown names fall back to INFO.
    - Calling this again replaces the handler installed by the previous call
      instead of stacking a second one.
    """
    settings = settings or get_settings()

    for handler in list(LOGGER.handlers):
        if getattr(handler, _HANDLER_ATTR, False):
            LOGGER.removeHandler(handler)
            handler.close()

    if settings.log_file:
        os.makedirs(os.path.dirname(settings.log_file) or ".", exist_ok=True)
        handler: logging.Handler = logging.FileHandler(settings.log_file, encoding="utf-8")
    else:
        handler = logging.StreamHandler()
    setattr(handler, _HANDLER_ATTR, True)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))

    level = logging.getLevelName(settings.log_level)
    LOGGER.setLevel(level if isinstance(level, int) else logging.INFO)
    LOGGER.addHandler(handler)
    LOGGER.propagate = False
    return LOGGER
