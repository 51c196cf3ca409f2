"""Exception classes for claude-stream-sdk."""

# Characters of the offending line kept in a decode error's message
_LINE_PREVIEW_LENGTH = 100


class ClaudeSDKError(Exception):
    """Base exception for all claude-stream-sdk errors."""


class CLIConnectionError(ClaudeSDKError):
    """Claude Code could not be started, or was used before connecting."""


class CLINotFoundError(CLIConnectionError):
    """Claude Code CLI not found."""

    def __init__(self, message: str = "Claude Code not found", cli_path: str | None = None):
        self.cli_path = cli_path
        if cli_path:
            message = f"{message}: {cli_path}"
        super().__init__(message)


class ProcessError(ClaudeSDKError):
    """CLI process exited with a non-zero exit code."""

    def __init__(self, message: str, exit_code: int | None = None, stderr: str | None = None):
        self.exit_code = exit_code
        self.stderr = stderr

        if exit_code is not None:
            message = f"{message} (exit code: {exit_code})"
        if stderr:
            message = f"{message}\nError output: {stderr}"

        super().__init__(message)


class CLIJSONDecodeError(ClaudeSDKError):
    """A stdout line that looks like JSON could not be decoded.

    The message only carries a preview of the line; the full text is kept
    on ``line``.
    """

    def __init__(self, line: str, original_error: Exception):
        self.line = line
        self.original_error = original_error
        super().__init__(f"Failed to decode JSON: {line[:_LINE_PREVIEW_LENGTH]}...")
