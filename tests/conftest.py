"""
pytest configuration for inputguard tests.

Adds src directory to Python path for imports and isolates tests from the
caller's INPUTGUARD_* environment.
"""

import logging
import os
import sys
from pathlib import Path

import pytest

# Add src directory to Python path
src_dir = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(src_dir))


@pytest.fixture(autouse=True)
def clean_inputguard_env(monkeypatch):
    """Remove INPUTGUARD_* variables so config tests see true defaults."""
    for key in list(os.environ):
        if key.startswith("INPUTGUARD_"):
            monkeypatch.delenv(key, raising=False)
    from inputguard.config import reset_config

    reset_config()
    yield
    reset_config()


@pytest.fixture
def debug_logs(caplog):
    """Capture inputguard DEBUG records (rejection logs)."""
    caplog.set_level(logging.DEBUG, logger="inputguard")
    return caplog
