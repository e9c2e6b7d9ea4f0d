import logging
from typing import Optional

from src.config import settings

LOG_FORMAT = '%(asctime)s | %(name)s | %(levelname)s | %(message)s'

#-- initialize a logger that writes to stderr
def setup_logger(name: str, level: Optional[str] = None):
    formatter = logging.Formatter(LOG_FORMAT)
    handler = logging.StreamHandler()
    handler.setFormatter(formatter)

    logger = logging.getLogger(name)
    logger.setLevel(level or settings.LOG_LEVEL)

    if not logger.handlers:
        logger.addHandler(handler)

    return logger
