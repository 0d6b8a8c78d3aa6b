"""Console logging with colored level names."""
from __future__ import annotations

import logging
from typing import Union

import colorlog


LOG_FORMAT = "%(green)s%(asctime)s%(reset)s - %(purple)s%(name)s%(reset)s - %(log_color)s%(levelname)-8s%(reset)s - %(message)s"

LOG_COLORS = {
    "DEBUG": "cyan",
    "INFO": "blue",
    "WARNING": "yellow",
    "ERROR": "red",
    "CRITICAL": "red,bg_white",
}


def setup_logging(level: Union[int, str] = logging.INFO) -> logging.Logger:
    """Install a single colored console handler on the root logger.

    Existing root handlers are removed so repeated calls don't duplicate
    output. Returns the root logger.
    """
    if isinstance(level, str):
        resolved = logging.getLevelName(level.upper())
        if not isinstance(resolved, int):
            raise ValueError(f"unknown log level: {level!r}")
        level = resolved

    handler = colorlog.StreamHandler()
    handler.setLevel(level)
    handler.setFormatter(colorlog.ColoredFormatter(LOG_FORMAT, log_colors=LOG_COLORS))

    root = logging.getLogger()
    root.setLevel(level)
    root.handlers = []
    root.addHandler(handler)
    return root
