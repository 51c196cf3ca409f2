"""Tests for the error taxonomy."""

import json

from claude_stream_sdk import (
    ClaudeSDKError,
    CLIConnectionError,
    CLIJSONDecodeError,
    CLINotFoundError,
    ProcessError,
)


class TestErrorHierarchy:
    """Test how the error classes relate to each other."""

    def test_base_error(self):
        """Test the base ClaudeSDKError."""
        error = ClaudeSDKError("Something went wrong")
        assert str(error) == "Something went wrong"
        assert isinstance(error, Exception)

    def test_connection_error_is_sdk_error(self):
        """Test CLIConnectionError derives from the base error."""
        error = CLIConnectionError("Failed to connect to CLI")
        assert isinstance(error, ClaudeSDKError)
        assert "Failed to connect to CLI" in str(error)

    def test_not_found_is_connection_error(self):
        """Test CLINotFoundError is a specialised connection error."""
        error = CLINotFoundError("Claude Code not found")
        assert isinstance(error, CLIConnectionError)
        assert isinstance(error, ClaudeSDKError)

    def test_process_and_decode_errors_are_not_connection_errors(self):
        """Test execution and protocol failures are separate categories."""
        assert not issubclass(ProcessError, CLIConnectionError)
        assert not issubclass(CLIJSONDecodeError, CLIConnectionError)
        assert issubclass(ProcessError, ClaudeSDKError)
        assert issubclass(CLIJSONDecodeError, ClaudeSDKError)


class TestCLINotFoundError:
    """Test CLINotFoundError formatting."""

    def test_default_message(self):
        """Test default message without a path."""
        error = CLINotFoundError()
        assert str(error) == "Claude Code not found"
        assert error.cli_path is None

    def test_message_with_path(self):
        """Test the attempted path is appended and kept."""
        error = CLINotFoundError("Not found", cli_path="/path/to/cli")
        assert str(error) == "Not found: /path/to/cli"
        assert error.cli_path == "/path/to/cli"


class TestProcessError:
    """Test ProcessError formatting."""

    def test_with_exit_code_and_stderr(self):
        """Test exit code and stderr appear in the message and attributes."""
        error = ProcessError("Process failed", exit_code=1, stderr="Command not found")
        assert error.exit_code == 1
        assert error.stderr == "Command not found"
        assert "Process failed" in str(error)
        assert "exit code: 1" in str(error)
        assert "Command not found" in str(error)

    def test_without_exit_code(self):
        """Test plain message when nothing else is known."""
        error = ProcessError("Process failed")
        assert error.exit_code is None
        assert error.stderr is None
        assert str(error) == "Process failed"

    def test_empty_stderr_not_appended(self):
        """Test empty stderr does not add an 'Error output' section."""
        error = ProcessError("Process failed", exit_code=3, stderr="")
        assert str(error) == "Process failed (exit code: 3)"


class TestCLIJSONDecodeError:
    """Test CLIJSONDecodeError formatting."""

    def _decode_error(self, text):
        try:
            json.loads(text)
        except json.JSONDecodeError as e:
            return e
        raise AssertionError("expected invalid JSON")

    def test_keeps_line_and_original_error(self):
        """Test the full line and cause are retained."""
        original = self._decode_error("{invalid json}")
        error = CLIJSONDecodeError("{invalid json}", original)
        assert error.line == "{invalid json}"
        assert error.original_error is original
        assert str(error) == "Failed to decode JSON: {invalid json}..."

    def test_truncates_long_lines_in_message(self):
        """Test the message keeps only the first 100 characters."""
        long_line = "{" + "a" * 199
        error = CLIJSONDecodeError(long_line, self._decode_error(long_line))
        assert error.line == long_line
        assert str(error) == f"Failed to decode JSON: {long_line[:100]}..."
        assert len(str(error)) < len(long_line)
