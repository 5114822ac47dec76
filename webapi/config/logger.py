# webapi/config/logger.py

import os
from typing import Optional

from webapi.shared.logger import StructuredLogger
from webapi.config.settings import Settings

default_settings = Settings()


def get_logger(name: str | None = None, settings: Optional[Settings] = None) -> StructuredLogger:
    """
    Return the StructuredLogger for *name* (defaults to the app name).

    File and level come from *settings*, or from the environment-loaded
    defaults when none are given. Loggers are cached per name, file and
    level, so repeated calls share handlers.
    """
    settings = settings or default_settings

    # Ensure the log directory exists
    log_dir = os.path.dirname(settings.app.log_file)
    if log_dir and not os.path.exists(log_dir):
        os.makedirs(log_dir, exist_ok=True)

    return StructuredLogger(
        name=name or settings.app.app_name,
        log_file=settings.app.log_file,
        level=settings.app.log_level,
    )
