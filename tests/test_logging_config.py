# tests/test_logging_config.py
"""
configure_logging must install exactly one handler on a bare root logger.

pytest attaches its own capture handlers to the root logger around each
test call, so the root is emptied inside the test body and restored after.
"""

from __future__ import annotations

import io
import logging
from contextlib import contextmanager
from typing import Iterator

import pytest

from walk.logging_config import LOG_FORMAT, configure_logging


@contextmanager
def bare_root_logger() -> Iterator[logging.Logger]:
    root = logging.getLogger()
    saved_handlers = root.handlers[:]
    saved_level = root.level
    for handler in saved_handlers:
        root.removeHandler(handler)
    try:
        yield root
    finally:
        for handler in root.handlers[:]:
            root.removeHandler(handler)
        for handler in saved_handlers:
            root.addHandler(handler)
        root.setLevel(saved_level)


def test_installs_single_handler() -> None:
    stream = io.StringIO()

    with bare_root_logger() as root:
        configure_logging("debug", stream=stream)
        configure_logging("debug", stream=stream)

        assert len(root.handlers) == 1
        assert root.level == logging.DEBUG
        assert root.handlers[0].formatter._fmt == LOG_FORMAT  # type: ignore[union-attr]

        logging.getLogger("nav.pathfinder").debug("hello")

    assert "[DEBUG] nav.pathfinder: hello" in stream.getvalue()


def test_existing_handler_is_kept() -> None:
    existing = logging.NullHandler()

    with bare_root_logger() as root:
        root.addHandler(existing)
        configure_logging(logging.WARNING, stream=io.StringIO())

        assert root.handlers == [existing]
        assert root.level == logging.WARNING


def test_unknown_level_rejected() -> None:
    with bare_root_logger():
        with pytest.raises(ValueError):
            configure_logging("LOUD")
