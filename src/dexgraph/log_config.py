# dexgraph/log_config.py
"""Logging configuration for the dexgraph library using Loguru.

Every module in the package logs through the ``logger`` re-exported here so a
single call to :func:`configure_logging` controls the output of the whole
client.
"""

import sys

from loguru import logger

__all__ = ["configure_logging", "logger"]


def configure_logging(level: str = "INFO", sink=sys.stderr):
    """
    Configures Loguru logger.

    Removes existing handlers and adds a new one with the specified level and sink.

    Args:
        level: The minimum logging level (e.g., "DEBUG", "INFO", "WARNING").
        sink: The output sink (e.g., sys.stderr, "dexgraph.log").
    """
    logger.remove()
    logger.add(
        sink,
        level=level.upper(),
        format="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>",
        colorize=sink is sys.stderr,
        backtrace=True,
        diagnose=False,
    )
    logger.debug(f"dexgraph logging configured with level={level.upper()}")
