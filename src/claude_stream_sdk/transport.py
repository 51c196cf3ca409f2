"""Subprocess transport for the Claude Code CLI.

The transport owns exactly one CLI process and is responsible only for:
- Locating the CLI binary
- Starting the process
- Decoding stdout lines into raw JSON values
- Collecting stderr for error reports
- Terminating the process

Turning raw values into typed messages is handled in message_parser.py.
"""

import asyncio
import json
import logging
import os
import subprocess
import sys
from abc import ABC, abstractmethod
from collections.abc import AsyncIterator, Sequence
from contextlib import suppress
from pathlib import Path
from typing import Any

from claude_stream_sdk.exceptions import (
    CLIConnectionError,
    CLIJSONDecodeError,
    CLINotFoundError,
    ProcessError,
)
from claude_stream_sdk.options import ClaudeCodeOptions
from claude_stream_sdk.utils import find_cli

logger = logging.getLogger(__name__)

# Maximum length of a single stdout/stderr line (tool results can be large)
MAX_LINE_BYTES = 1024 * 1024

# Recorded in place of a stderr line longer than MAX_LINE_BYTES
STDERR_TRUNCATED_LINE = "<line truncated>"

# Seconds to wait after SIGTERM before killing the process
PROCESS_WAIT_TIMEOUT = 5.0


class Transport(ABC):
    """Abstract base class for CLI transports."""

    @abstractmethod
    async def connect(self) -> None:
        """Start the CLI and prepare its output for reading."""

    @abstractmethod
    async def disconnect(self) -> None:
        """Stop the CLI and release its streams. Safe to call repeatedly."""

    @abstractmethod
    def receive_messages(self) -> AsyncIterator[Any]:
        """Yield decoded JSON values from the CLI output."""

    @abstractmethod
    def is_connected(self) -> bool:
        """Check whether a live CLI process is held."""


class SubprocessCLITransport(Transport):
    """Transport that runs one Claude Code CLI process per prompt.

    Lifecycle is one-way: unconnected -> connected -> disconnected. A
    disconnected transport cannot be connected again.

    Example:
        ```python
        transport = SubprocessCLITransport("Hello", ClaudeCodeOptions())
        await transport.connect()
        try:
            async for data in transport.receive_messages():
                print(data["type"])
        finally:
            await transport.disconnect()
        ```
    """

    def __init__(
        self,
        prompt: str,
        options: ClaudeCodeOptions,
        cli_path: str | Path | None = None,
        fallback_dirs: Sequence[str] | None = None,
    ) -> None:
        """Initialize the transport and resolve the CLI location.

        Args:
            prompt: Prompt passed to the CLI.
            options: Query options used to build the command line.
            cli_path: Explicit CLI path. Falls back to options.cli_path, then
                to discovery via find_cli().
            fallback_dirs: Install directories checked during discovery when
                the CLI is not on PATH.

        Raises:
            CLINotFoundError: If no CLI path was given and none can be found.
        """
        self._prompt = prompt
        self._options = options

        if cli_path is None:
            cli_path = options.cli_path
        self._cli_path = (
            str(cli_path) if cli_path is not None else find_cli(fallback_dirs=fallback_dirs)
        )

        self._process: asyncio.subprocess.Process | None = None
        self._stdout: asyncio.StreamReader | None = None
        self._stderr: asyncio.StreamReader | None = None
        self._stderr_task: asyncio.Task[None] | None = None
        self._stderr_lines: list[str] = []
        self._closed = False

        # Cache debug flag to avoid repeated environment variable lookups
        self._debug = os.environ.get("CLAUDE_SDK_DEBUG", "false").lower() == "true"

    @property
    def cli_path(self) -> str:
        """Resolved path of the CLI binary."""
        return self._cli_path

    @property
    def stderr_lines(self) -> list[str]:
        """Copy of the stderr lines collected so far."""
        return list(self._stderr_lines)

    async def connect(self) -> None:
        """Start the CLI process.

        Does nothing if already connected.

        Raises:
            CLINotFoundError: If the CLI executable does not exist.
            CLIConnectionError: If the process cannot be started, or the
                transport was already disconnected.
        """
        if self._process is not None:
            return
        if self._closed:
            raise CLIConnectionError("Transport is closed and cannot be reconnected")

        cmd = self._options.build_command(self._prompt, self._cli_path)
        kwargs = self._options.build_subprocess_kwargs()

        # Prevent console window from appearing on Windows
        if sys.platform == "win32":
            kwargs["creationflags"] = subprocess.CREATE_NO_WINDOW

        logger.debug("Starting Claude Code CLI: %s", self._cli_path)
        self._log_debug("Command: %s", cmd)

        try:
            process = await asyncio.create_subprocess_exec(
                *cmd,
                stdin=asyncio.subprocess.DEVNULL,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
                limit=MAX_LINE_BYTES,
                **kwargs,
            )
        except FileNotFoundError as e:
            raise CLINotFoundError("Claude Code not found", cli_path=self._cli_path) from e
        except OSError as e:
            raise CLIConnectionError(f"Failed to start Claude Code: {e}") from e

        self._process = process
        self._stdout = process.stdout
        self._stderr = process.stderr
        self._stderr_lines = []

        if self._stderr is not None:
            self._stderr_task = asyncio.create_task(
                self._stderr_reader(self._stderr),
                name="claude-stderr-reader",
            )

    async def disconnect(self) -> None:
        """Terminate the CLI process if it is still running.

        The process gets SIGTERM, then SIGKILL if it has not exited within
        PROCESS_WAIT_TIMEOUT. References are cleared either way.
        """
        self._closed = True
        process = self._process
        if process is None:
            return

        if process.returncode is None:
            self._log_debug("Terminating CLI process")
            await _terminate_process(process)

        if self._stderr_task is not None and not self._stderr_task.done():
            self._stderr_task.cancel()
            with suppress(asyncio.CancelledError):
                await self._stderr_task

        self._process = None
        self._stdout = None
        self._stderr = None
        self._stderr_task = None

    async def receive_messages(self) -> AsyncIterator[Any]:
        """Read stdout line by line and yield each decoded JSON value.

        Blank lines and lines that do not look like JSON are skipped. Once
        stdout closes, the process exit status is checked.

        Yields:
            Decoded JSON values, one per stdout line

        Raises:
            CLIConnectionError: If not connected.
            CLIJSONDecodeError: If a line starting with '{' or '[' is not
                valid JSON, or a line exceeds MAX_LINE_BYTES and cannot be
                decoded at all.
            ProcessError: If the CLI exits with a non-zero code.
        """
        if self._process is None or self._stdout is None:
            raise CLIConnectionError("Not connected")

        process = self._process
        stdout = self._stdout

        line_count = 0
        while True:
            try:
                raw_line = await stdout.readline()
            except ValueError as e:
                raise CLIJSONDecodeError(
                    f"<stdout line longer than {MAX_LINE_BYTES} bytes>", e
                ) from e
            if not raw_line:  # EOF
                break

            line = raw_line.decode("utf-8", errors="replace").strip()
            if not line:
                continue

            line_count += 1
            try:
                data = json.loads(line)
            except json.JSONDecodeError as e:
                if line.startswith(("{", "[")):
                    raise CLIJSONDecodeError(line, e) from e
                self._log_debug("[STDOUT] Skipping non-JSON line: %s", line[:100])
                continue

            self._log_debug("[STDOUT] Line #%d decoded", line_count)
            yield data

        self._log_debug("[STDOUT] EOF received (read %d lines total)", line_count)

        returncode = await process.wait()

        # stderr must be fully collected before it is reported
        if self._stderr_task is not None:
            await self._stderr_task

        if returncode:
            raise ProcessError(
                "CLI process failed",
                exit_code=returncode,
                stderr="\n".join(self._stderr_lines),
            )

    def is_connected(self) -> bool:
        """Check if the CLI process is held and still running."""
        return self._process is not None and self._process.returncode is None

    def _log_debug(self, message: str, *args: Any) -> None:
        """Log debug message only if debug mode is enabled.

        Args:
            message: The log message format string
            *args: Arguments for string formatting
        """
        if self._debug:
            logger.debug(message, *args)

    async def _stderr_reader(self, stream: asyncio.StreamReader) -> None:
        """Background task that collects stderr lines until EOF.

        Lines longer than MAX_LINE_BYTES are recorded as a placeholder; the
        stream keeps being drained so the CLI never blocks on stderr.
        """
        while True:
            try:
                line = await stream.readline()
            except ValueError as e:
                # readline() has already discarded the oversized chunk
                logger.warning("Truncated over-long CLI stderr line: %s", e)
                self._stderr_lines.append(STDERR_TRUNCATED_LINE)
                continue
            if not line:  # EOF
                break

            line_str = line.decode("utf-8", errors="replace").rstrip("\r\n")
            self._stderr_lines.append(line_str)
            self._log_debug("[STDERR] %s", line_str)


async def _terminate_process(process: asyncio.subprocess.Process) -> None:
    """Terminate a subprocess, killing it if it does not exit in time.

    Args:
        process: The subprocess to stop
    """
    try:
        process.terminate()
    except ProcessLookupError:
        return

    try:
        await asyncio.wait_for(process.wait(), timeout=PROCESS_WAIT_TIMEOUT)
    except asyncio.TimeoutError:
        with suppress(ProcessLookupError):
            process.kill()
        await process.wait()
