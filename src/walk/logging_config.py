# src/walk/logging_config.py
"""
Central logging configuration for gridwalk.

Call configure_logging() once from an entrypoint:

    from walk.logging_config import configure_logging
    configure_logging("DEBUG")

nav.* and walk.* loggers then print to stdout (or the given stream).
"""

from __future__ import annotations

import logging
import sys
from typing import IO, Optional, Union

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def configure_logging(
    level: Union[int, str] = logging.INFO,
    stream: Optional[IO[str]] = None,
) -> None:
    """
    Attach one stream handler to the root logger unless one is already there.

    Args:
        level: logging level as int or name ("INFO", "debug", ...)
        stream: defaults to sys.stdout
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            raise ValueError(f"Unknown logging level: {level}")

    root = logging.getLogger()
    root.setLevel(level)

    if root.handlers:
        return

    handler = logging.StreamHandler(stream=stream or sys.stdout)
    handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT))
    root.addHandler(handler)
