"""Shared test fixtures and utilities for transport and query tests."""

import json
import os
import platform
import stat
import sys
from pathlib import Path
from unittest.mock import MagicMock

import pytest

# ========== Platform Detection ==========
IS_WINDOWS = platform.system() == "Windows"
is_windows = IS_WINDOWS  # Alias for consistency


# ========== Mock Subprocess ==========


class MockStreamReader:
    """Mock asyncio.StreamReader that returns preset lines from readline()."""

    def __init__(self, lines):
        self.lines = [line.encode() if isinstance(line, str) else line for line in lines]
        self.index = 0

    async def readline(self):
        if self.index >= len(self.lines):
            return b""
        line = self.lines[self.index]
        self.index += 1
        return line if line.endswith(b"\n") else line + b"\n"


class MockProcess:
    """Mock asyncio.subprocess.Process.

    The process counts as running until wait() is called or it is
    terminated, like a real CLI that is still producing output.
    """

    def __init__(self, stdout_lines=None, stderr_lines=None, returncode=0):
        self.stdout = MockStreamReader(stdout_lines or [])
        self.stderr = MockStreamReader(stderr_lines or [])
        self.returncode = None
        self._exit_code = returncode
        self.terminate = MagicMock(side_effect=self._on_terminate)
        self.kill = MagicMock(side_effect=self._on_terminate)

    def _on_terminate(self):
        self.returncode = -15

    async def wait(self):
        if self.returncode is None:
            self.returncode = self._exit_code
        return self.returncode


def json_lines(*payloads):
    """Encode payloads as stdout lines."""
    return [json.dumps(payload) for payload in payloads]


ASSISTANT_HELLO = {
    "type": "assistant",
    "message": {"model": "sonnet", "content": [{"type": "text", "text": "Hello!"}]},
}

RESULT_SUCCESS = {
    "type": "result",
    "subtype": "success",
    "duration_ms": 1000,
    "duration_api_ms": 800,
    "is_error": False,
    "num_turns": 1,
    "session_id": "sess-123",
    "total_cost_usd": 0.001,
}


# ========== Fake CLI ==========

# Behaviour is chosen by the prompt, which is always the last argument.
FAKE_CLI_SOURCE = '''\
import json
import os
import sys
import time

prompt = sys.argv[-1]

def emit(payload):
    print(json.dumps(payload), flush=True)

print("fake cli starting", flush=True)
emit({
    "type": "system",
    "subtype": "init",
    "args": sys.argv[1:],
    "cwd": os.getcwd(),
    "entrypoint": os.environ.get("CLAUDE_CODE_ENTRYPOINT"),
    "pid": os.getpid(),
})

if prompt == "fail":
    print("boom", file=sys.stderr, flush=True)
    print("detail", file=sys.stderr, flush=True)
    sys.exit(2)

if prompt == "slow":
    time.sleep(30)

if prompt == "noisy":
    # One line over the 1 MB reader limit, then ~4 MB more stderr
    sys.stderr.write("x" * (1024 * 1024 + 10) + "\\n")
    for _ in range(40000):
        sys.stderr.write("y" * 99 + "\\n")
    sys.stderr.flush()

emit({
    "type": "assistant",
    "message": {"model": "fake", "content": [{"type": "text", "text": "echo: " + prompt}]},
})
emit({"type": "mystery"})
emit({
    "type": "result",
    "subtype": "success",
    "duration_ms": 5,
    "duration_api_ms": 3,
    "is_error": False,
    "num_turns": 1,
    "session_id": "fake-session",
})
'''


def write_fake_cli(directory: Path) -> Path:
    """Write an executable fake `claude` script into directory."""
    script = directory / "claude"
    script.write_text(f"#!{sys.executable}\n{FAKE_CLI_SOURCE}")
    script.chmod(script.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    return script


def make_executable(path: Path) -> Path:
    """Create an empty executable file at path."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text("")
    os.chmod(path, 0o755)
    return path


def skip_if_windows(reason="Test not compatible with Windows"):
    """Skip test on Windows."""
    return pytest.mark.skipif(IS_WINDOWS, reason=reason)
