"""Tests for shared/logging.py."""

import logging

import pytest

from shared.logging import configure_logging


@pytest.fixture
def root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield root
    root.handlers[:] = handlers
    root.setLevel(level)


class TestConfigureLogging:
    def test_sets_level(self, root_logger):
        configure_logging("debug")
        assert root_logger.level == logging.DEBUG

    def test_adds_single_handler(self, root_logger):
        """Repeated calls should not stack handlers."""
        configure_logging("INFO")
        configure_logging("WARNING")
        ours = [h for h in root_logger.handlers if getattr(h, "_ecochallenge", False)]
        assert len(ours) == 1
        assert root_logger.level == logging.WARNING
