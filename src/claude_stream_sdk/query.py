"""Query functions for one-shot interactions with Claude Code.

Each call starts the user's installed Claude Code CLI as a subprocess and
streams its output back as typed messages.
"""

from collections.abc import AsyncIterator
from contextlib import aclosing

from claude_stream_sdk.client import InternalClient
from claude_stream_sdk.options import ClaudeCodeOptions
from claude_stream_sdk.types import AssistantMessage, Message, TextBlock


async def query(
    prompt: str,
    options: ClaudeCodeOptions | None = None,
) -> AsyncIterator[Message]:
    """
    Query Claude Code for a one-shot interaction.

    Messages are yielded as soon as the CLI writes them. The CLI process is
    terminated when the iteration ends, fails, or is closed early. To stop
    early and have the process cleaned up immediately, close the generator,
    e.g. with ``contextlib.aclosing``.

    Args:
        prompt: The prompt to send to Claude
        options: Optional configuration (defaults to ClaudeCodeOptions() if None)

    Yields:
        Messages from the conversation (UserMessage, AssistantMessage,
        SystemMessage, ResultMessage)

    Raises:
        CLINotFoundError: If claude CLI is not found
        CLIConnectionError: If the CLI cannot be started
        CLIJSONDecodeError: If the CLI emits malformed JSON
        ProcessError: If the CLI exits with a non-zero code

    Example - Simple query:
        ```python
        from claude_stream_sdk import query

        async def main():
            async for message in query("What is the capital of France?"):
                if isinstance(message, AssistantMessage):
                    for block in message.content:
                        if isinstance(block, TextBlock):
                            print(block.text)
        ```

    Example - Stop after the first message:
        ```python
        from contextlib import aclosing

        async with aclosing(query("Write a long story")) as messages:
            async for message in messages:
                print(message)
                break
        ```
    """
    if options is None:
        options = ClaudeCodeOptions()

    client = InternalClient()
    async with aclosing(client.process_query(prompt, options)) as messages:
        async for message in messages:
            yield message


async def query_text(
    prompt: str,
    options: ClaudeCodeOptions | None = None,
) -> str:
    """
    Convenience function to get only the text response from Claude.

    Args:
        prompt: The prompt to send to Claude
        options: Optional configuration

    Returns:
        The concatenated text of all assistant text blocks

    Example:
        ```python
        from claude_stream_sdk import query_text

        async def main():
            response = await query_text(
                "Name the capital of France in one word.",
                options=ClaudeCodeOptions(model="haiku"),
            )
            print(response)
            # Output: Paris
        ```
    """
    text_parts = []

    async for message in query(prompt, options):
        if isinstance(message, AssistantMessage):
            for block in message.content:
                if isinstance(block, TextBlock):
                    text_parts.append(block.text)

    return "".join(text_parts)
