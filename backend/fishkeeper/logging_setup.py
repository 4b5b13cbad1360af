"""Centralized logger configuration.

Usage:
    from fishkeeper.logging_setup import get_logger
    logger = get_logger(__name__)
"""
import logging
import os

DEFAULT_LEVEL = os.getenv("FISHKEEPER_LOG_LEVEL", "INFO").upper()
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def setup_logging(level: str = DEFAULT_LEVEL) -> None:
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format=LOG_FORMAT,
    )


def get_logger(name: str) -> logging.Logger:
    if not logging.getLogger().handlers:
        setup_logging()
    return logging.getLogger(name)
