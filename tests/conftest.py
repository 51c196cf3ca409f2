"""Pytest configuration file."""

# Fix import path for test_helpers
import sys
from pathlib import Path
from unittest.mock import patch

import pytest

# Add tests directory to path
tests_dir = Path(__file__).parent
if str(tests_dir) not in sys.path:
    sys.path.insert(0, str(tests_dir))

from test_helpers import MockProcess, is_windows


@pytest.fixture
def is_windows_fixture():
    """Fixture that returns True if running on Windows."""
    return is_windows


@pytest.fixture
def mock_find_cli():
    """Mock CLI discovery so no real claude binary is needed."""
    with patch("claude_stream_sdk.transport.find_cli", return_value="/usr/bin/claude") as mock:
        yield mock


@pytest.fixture
def mock_cli_process():
    """Create a mock CLI process with given stdout/stderr lines."""

    def _create(stdout_lines=None, stderr_lines=None, returncode=0):
        return MockProcess(
            stdout_lines=stdout_lines,
            stderr_lines=stderr_lines,
            returncode=returncode,
        )

    return _create
