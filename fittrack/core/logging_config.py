"""Logging setup for the API process."""

import logging
import sys

from fittrack.core.config import Settings

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(settings: Settings) -> None:
    """Single stdout handler on the root logger; DEBUG when settings.debug."""
    level_name = "DEBUG" if settings.debug else settings.log_level.upper()
    level = getattr(logging, level_name, logging.INFO)
    logging.basicConfig(format=LOG_FORMAT, stream=sys.stdout, level=level, force=True)
    # SQL echo is controlled by the engine; keep the sqlalchemy logger quieter otherwise
    if not settings.debug:
        logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
