"""Internal client that runs one Claude Code CLI process per query."""

import logging
from collections.abc import AsyncIterator
from contextlib import aclosing

from claude_stream_sdk.message_parser import parse_message
from claude_stream_sdk.options import ClaudeCodeOptions
from claude_stream_sdk.transport import SubprocessCLITransport, Transport
from claude_stream_sdk.types import Message, ResultMessage

logger = logging.getLogger(__name__)


class InternalClient:
    """Drives a transport from start to finish and translates its output.

    Each call to process_query() owns a fresh transport. The transport is
    disconnected exactly once, whether the stream is exhausted, fails, or
    is closed early by the caller.
    """

    def _create_transport(self, prompt: str, options: ClaudeCodeOptions) -> Transport:
        """Create the transport for one query."""
        return SubprocessCLITransport(prompt, options)

    async def process_query(
        self,
        prompt: str,
        options: ClaudeCodeOptions,
    ) -> AsyncIterator[Message]:
        """Run a query and yield messages as the CLI produces them.

        Args:
            prompt: The prompt to send to Claude
            options: Query options

        Yields:
            Typed messages; unrecognized output is skipped

        Raises:
            CLINotFoundError: If the CLI cannot be found
            CLIConnectionError: If the CLI cannot be started
            CLIJSONDecodeError: If the CLI emits malformed JSON
            ProcessError: If the CLI exits with a non-zero code
        """
        transport = self._create_transport(prompt, options)
        try:
            await transport.connect()
            async with aclosing(transport.receive_messages()) as raw_messages:
                async for data in raw_messages:
                    message = parse_message(data)
                    if message is None:
                        continue

                    if isinstance(message, ResultMessage) and message.is_error:
                        logger.error("Query completed with error: %s", message.result)

                    yield message
        finally:
            await transport.disconnect()
