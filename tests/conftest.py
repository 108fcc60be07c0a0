from __future__ import annotations

import logging

import pytest


@pytest.fixture(autouse=True)
def _reset_root_logging():
    """Drop handlers installed by `setup_logging` during a test."""
    yield
    root = logging.getLogger()
    for handler in list(root.handlers):
        if type(handler) in (logging.StreamHandler, logging.FileHandler):
            root.removeHandler(handler)
            handler.close()
    logging.captureWarnings(False)
