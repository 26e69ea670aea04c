"""Logging setup for scripts and notebooks using the toolbox."""

import logging


LOG_FORMAT = "%(levelname)s: %(message)s"


def configure_logging(level: int | str = logging.INFO) -> logging.Logger:
    """Configure root logging once and return the package logger.

    Library modules only create module-level loggers; applications decide where
    records go by calling this (or their own ``logging`` setup).
    """
    if isinstance(level, str):
        resolved = logging.getLevelName(level.upper())
        if not isinstance(resolved, int):
            raise ValueError(f"Unknown log level: {level}")
        level = resolved
    logging.basicConfig(level=level, format=LOG_FORMAT)
    pkg_logger = logging.getLogger("sales_tlbx")
    pkg_logger.setLevel(level)
    return pkg_logger
