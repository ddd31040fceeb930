# tests/conftest.py
from __future__ import annotations

import logging

import pytest


@pytest.fixture(autouse=True)
def _reset_root_logging():
    """CLI entry points attach a root handler; drop it so captured streams do not leak between tests."""
    root = logging.getLogger()
    level = root.level
    yield
    for h in list(root.handlers):
        if getattr(h, "_fileseen", False):
            root.removeHandler(h)
    root.setLevel(level)
