import logging
from typing import Optional

from config.config import LOGGING_LEVEL

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def setup_logging(level: Optional[str] = None) -> None:
    """Configure the root logger for the CLI and the dev proxy."""
    logging.basicConfig(
        level=getattr(logging, (level or LOGGING_LEVEL).upper(), logging.INFO),
        format=LOG_FORMAT,
    )
    # urllib3 logs every pooled connection at DEBUG
    logging.getLogger("urllib3").setLevel(logging.WARNING)
