"""
lottostats/utils/logger.py
Package logger tree: every area logs under "lottostats.<area>" and shares one
Rich console handler and one rotating file (logs/lottostats.log).
"""
import logging
import os
from logging.handlers import RotatingFileHandler

from rich.logging import RichHandler

from lottostats.utils.config import LOG_DIR, LOG_FILE, LOG_LEVEL

ROOT_LOGGER = "lottostats"
FILE_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"

# Chatty transport loggers pulled in by requests and supabase
QUIET_LOGGERS = ("urllib3", "httpx", "httpcore", "hpack")


def _configure_root() -> logging.Logger:
    root = logging.getLogger(ROOT_LOGGER)
    if root.handlers:
        return root

    root.setLevel(getattr(logging, LOG_LEVEL, logging.INFO))
    root.propagate = False
    root.addHandler(RichHandler(rich_tracebacks=True, show_path=False))

    if LOG_FILE:
        os.makedirs(LOG_DIR, exist_ok=True)
        file_handler = RotatingFileHandler(
            os.path.join(LOG_DIR, f"{ROOT_LOGGER}.log"),
            maxBytes=10 * 1024 * 1024,
            backupCount=5,
            encoding="utf-8",
        )
        file_handler.setFormatter(logging.Formatter(FILE_FORMAT))
        root.addHandler(file_handler)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
    return root


def get_logger(name: str = ROOT_LOGGER) -> logging.Logger:
    """
    get_logger("crawler.soda") -> the "lottostats.crawler.soda" logger.
    Children carry no handlers of their own and propagate to the package root.
    """
    root = _configure_root()
    if name == ROOT_LOGGER:
        return root
    if name.startswith(f"{ROOT_LOGGER}."):
        name = name[len(ROOT_LOGGER) + 1:]
    return root.getChild(name)
