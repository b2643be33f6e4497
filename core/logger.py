import logging
import sys
from pythonjsonlogger import jsonlogger

from core.config import settings

LOG_FORMAT = '%(asctime)s %(name)s %(levelname)s %(message)s'

def get_logger(name: str) -> logging.Logger:
    """
    Returns a logger that writes one JSON object per record to stdout.
    Structured context passed through `extra=` ends up as top-level keys.
    """
    logger = logging.getLogger(name)

    # Configured loggers are returned as-is so repeated imports don't stack handlers
    if logger.handlers:
        return logger

    logger.setLevel(settings.LOG_LEVEL.upper())
    logger.propagate = False

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(jsonlogger.JsonFormatter(LOG_FORMAT, rename_fields={"levelname": "level"}))
    logger.addHandler(handler)

    return logger
