import logging
import os
from logging.handlers import TimedRotatingFileHandler

import atm.config as cfg


def setup_logging():
    """
    Configure application-wide logging to a rotating file.

    No console handler: stdout carries the ATM dialogue.
    """
    root = logging.getLogger()
    if root.handlers:
        # Avoid double configuration if reloaded
        return

    root.setLevel(getattr(logging, cfg.LOG_LEVEL, logging.INFO))

    fmt = logging.Formatter("%(asctime)s [%(levelname)s] [%(name)s] %(message)s")

    os.makedirs(cfg.LOG_DIR, exist_ok=True)
    file_handler = TimedRotatingFileHandler(cfg.LOG_FILE, when="midnight", backupCount=7, encoding="utf-8")
    file_handler.setFormatter(fmt)
    root.addHandler(file_handler)
