"""
conftest.py: environment isolation for the TSLisp test suite.

Settings are read from TSLISP_* environment variables, so every test gets
those variables snapshotted and restored.
"""
import os
import sys

import pytest

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))


@pytest.fixture(autouse=True)
def _clean_env_vars():
    """Snapshot and restore TSLISP_* environment variables after each test."""
    saved = {k: v for k, v in os.environ.items() if k.startswith("TSLISP_")}

    yield

    for key in [k for k in os.environ if k.startswith("TSLISP_")]:
        if key not in saved:
            os.environ.pop(key, None)
    os.environ.update(saved)
