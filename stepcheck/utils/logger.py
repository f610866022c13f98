# stepcheck/utils/logger.py
import logging
from typing import Optional

from stepcheck.config import LOG_LEVEL

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(message)s"


def setup_logging(level: Optional[str] = None) -> None:
    """Configure the root logger once for the CLI / API entry points."""
    logging.basicConfig(level=(level or LOG_LEVEL).upper(), format=LOG_FORMAT)


def log_info(msg: str):
    logging.info(msg)


def log_error(msg: str):
    logging.error(msg)
