"""Tests for root logger configuration."""

import logging
from collections.abc import Iterator
from contextlib import contextmanager

import pytest

from hostwatch.adapters.logging import LOG_FORMAT, configure_logging


@contextmanager
def bare_root_logger() -> Iterator[logging.Logger]:
    """Root logger without handlers (including pytest's), restored on exit."""
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


class TestConfigureLogging:
    """Tests for configure_logging()."""

    @pytest.mark.core
    def test_installs_single_handler(self) -> None:
        with bare_root_logger() as root:
            configure_logging("DEBUG")
            configure_logging("DEBUG")

            assert len(root.handlers) == 1
            assert root.handlers[0].formatter._fmt == LOG_FORMAT
            assert root.level == logging.DEBUG

    @pytest.mark.core
    def test_unknown_level_name_falls_back_to_info(self) -> None:
        with bare_root_logger() as root:
            configure_logging("chatty")

            assert root.level == logging.INFO

    @pytest.mark.core
    def test_accepts_numeric_level(self) -> None:
        with bare_root_logger() as root:
            configure_logging(logging.WARNING)

            assert root.level == logging.WARNING

    @pytest.mark.core
    def test_quiets_aiosqlite(self) -> None:
        with bare_root_logger():
            configure_logging("DEBUG")

            assert logging.getLogger("aiosqlite").level == logging.WARNING
