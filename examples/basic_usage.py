"""Basic usage examples for claude-stream-sdk."""

import asyncio
from contextlib import aclosing

from claude_stream_sdk import ClaudeCodeOptions, query, query_text
from claude_stream_sdk.types import AssistantMessage, ResultMessage, TextBlock, ToolUseBlock


async def example_basic_query():
    """Basic query example."""
    print("=== Basic Query Example ===\n")

    async for message in query(prompt="What is 2 + 2?"):
        if isinstance(message, AssistantMessage):
            for block in message.content:
                if isinstance(block, TextBlock):
                    print(f"Claude: {block.text}")
        elif isinstance(message, ResultMessage):
            print(f"Cost: ${message.total_cost_usd:.4f}" if message.total_cost_usd else "Cost: N/A")
            print(f"Turns: {message.num_turns}")


async def example_query_text():
    """Simplified text response example."""
    print("\n=== Query Text Example ===\n")

    response = await query_text(prompt="What is the capital of Japan? One word only.")
    print(f"Response: {response.strip()}")


async def example_with_options():
    """Example with options."""
    print("\n=== Example with Options ===\n")

    options = ClaudeCodeOptions(
        model="haiku",
        system_prompt="You are a helpful assistant",
        max_turns=1,
    )

    response = await query_text(prompt="Count from 1 to 3", options=options)
    print(f"Response: {response.strip()}")


async def example_tools():
    """Example letting Claude use read-only tools."""
    print("\n=== Tools Example ===\n")

    options = ClaudeCodeOptions(allowed_tools=["Read", "Glob"], max_turns=3)

    async for message in query(prompt="How many Python files are in this directory?", options=options):
        if isinstance(message, AssistantMessage):
            for block in message.content:
                if isinstance(block, ToolUseBlock):
                    print(f"[Tool: {block.name}] {block.input}")
                elif isinstance(block, TextBlock):
                    print(f"Claude: {block.text}")


async def example_stop_early():
    """Example stopping after the first assistant message."""
    print("\n=== Stop Early Example ===\n")

    # aclosing terminates the CLI as soon as the loop is left
    async with aclosing(query(prompt="Write a long poem about the sea")) as messages:
        async for message in messages:
            if isinstance(message, AssistantMessage):
                print(f"First reply has {len(message.content)} block(s), stopping.")
                break


async def example_concurrent_queries():
    """Example of concurrent queries."""
    print("\n=== Concurrent Queries Example ===\n")

    async def get_answer(prompt: str) -> str:
        """Get answer from Claude."""
        return await query_text(prompt=prompt, options=ClaudeCodeOptions(model="haiku"))

    # Each query runs its own CLI process
    results = await asyncio.gather(
        get_answer("What is 2 + 2? One word."),
        get_answer("What is 3 + 3? One word."),
        get_answer("What is 4 + 4? One word."),
    )

    for i, result in enumerate(results, 1):
        print(f"Query {i}: {result.strip()}")


async def main():
    """Run all examples."""
    print("Claude Stream SDK - Basic Usage Examples")
    print("=" * 50)

    await example_basic_query()
    await example_query_text()
    await example_with_options()
    await example_tools()
    await example_stop_early()
    await example_concurrent_queries()

    print("\n" + "=" * 50)
    print("Examples completed!")


if __name__ == "__main__":
    asyncio.run(main())
