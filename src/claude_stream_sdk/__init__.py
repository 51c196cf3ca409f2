"""Claude Stream SDK - Async streaming client for the Claude Code CLI.

Runs the user's installed Claude Code CLI as a subprocess and turns its
stream-json output into typed messages.

Example:
    ```python
    from claude_stream_sdk import query, ClaudeCodeOptions

    async def main():
        options = ClaudeCodeOptions(model="sonnet")

        async for message in query(
            "What is the capital of France?",
            options=options,
        ):
            print(message)
    ```
"""

__version__ = "0.1.0"

from .client import InternalClient
from .exceptions import (
    ClaudeSDKError,
    CLIConnectionError,
    CLIJSONDecodeError,
    CLINotFoundError,
    ProcessError,
)
from .message_handler import (
    AsyncDefaultMessageHandler,
    AsyncMessageEventListener,
    QueryEventEmitter,
)
from .message_parser import parse_message
from .options import ClaudeCodeOptions, McpServerConfig
from .query import query, query_text
from .transport import SubprocessCLITransport, Transport
from .types import (
    AssistantMessage,
    ContentBlock,
    Message,
    PermissionMode,
    ResultMessage,
    SystemMessage,
    TextBlock,
    ToolResultBlock,
    ToolUseBlock,
    UserMessage,
)
from .utils import find_cli

__all__ = [
    # Version
    "__version__",
    # Core functions
    "query",
    "query_text",
    # Options
    "ClaudeCodeOptions",
    "McpServerConfig",
    "PermissionMode",
    # Event adapter
    "QueryEventEmitter",
    "AsyncMessageEventListener",
    "AsyncDefaultMessageHandler",
    # Transport
    "Transport",
    "SubprocessCLITransport",
    "InternalClient",
    "find_cli",
    # Message types
    "Message",
    "AssistantMessage",
    "UserMessage",
    "SystemMessage",
    "ResultMessage",
    # Content blocks
    "ContentBlock",
    "TextBlock",
    "ToolUseBlock",
    "ToolResultBlock",
    # Errors
    "ClaudeSDKError",
    "CLIConnectionError",
    "CLINotFoundError",
    "CLIJSONDecodeError",
    "ProcessError",
    "parse_message",
]
