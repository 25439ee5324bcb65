"""Shared pytest fixtures."""

import logging

import pytest


@pytest.fixture(autouse=True)
def reset_package_logger():
    """Drop handlers installed by configure_logging during a test."""
    yield
    logger = logging.getLogger("nutrilabel")
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)
    logger.propagate = True
