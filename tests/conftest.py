"""Pytest configuration for the cssbake test suite."""

import sys
from pathlib import Path

import pytest

# Add the repository root to path for cssbake imports
ROOT_DIR = Path(__file__).parent.parent
sys.path.insert(0, str(ROOT_DIR))

from cssbake.options import Options  # noqa: E402
from cssbake.transform.context import CompilationUnit  # noqa: E402


@pytest.fixture
def unit() -> CompilationUnit:
    """Empty compilation unit; tests add bindings as needed."""
    return CompilationUnit()


@pytest.fixture
def quiet_options() -> Options:
    """No labels and no source maps: only the fast/fallback decision shows."""
    return Options(auto_label="never", source_map=False)
