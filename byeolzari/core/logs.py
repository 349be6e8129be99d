"""Logging setup shared by the API process."""

from __future__ import annotations

import logging
import sys

LOG_FORMAT = (
    '{"timestamp": "%(asctime)s", "level": "%(levelname)s", '
    '"logger": "%(name)s", "message": "%(message)s"}'
)


def setup_logging(log_level: str = "INFO") -> None:
    """Configure the root logger with a single stdout handler."""

    logging.basicConfig(
        level=getattr(logging, log_level.upper(), logging.INFO),
        format=LOG_FORMAT,
        handlers=[logging.StreamHandler(sys.stdout)],
    )


__all__ = ["setup_logging"]
