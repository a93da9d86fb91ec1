# path: src/span_beam/services/logging_setup.py
from __future__ import annotations

import logging
import os
from logging.handlers import RotatingFileHandler

LOGGER_NAME = "span_beam"
LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


def setup_logging(log_dir: str = "logs", log_name: str = "span_beam.log", level: int = logging.INFO) -> logging.Logger:
    os.makedirs(log_dir, exist_ok=True)
    log_path = os.path.join(log_dir, log_name)

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)

    # Evitar duplicar handlers si se llama más de una vez
    if logger.handlers:
        return logger

    fmt = logging.Formatter(LOG_FORMAT)

    fh = RotatingFileHandler(log_path, maxBytes=2_000_000, backupCount=3, encoding="utf-8")
    fh.setLevel(level)
    fh.setFormatter(fmt)

    sh = logging.StreamHandler()
    sh.setLevel(level)
    sh.setFormatter(fmt)

    logger.addHandler(fh)
    logger.addHandler(sh)

    logger.info("Logging inicializado. Archivo: %s", log_path)
    return logger
