#!/usr/bin/env python3
"""Event-driven query example using QueryEventEmitter.

Messages are printed by a listener as they arrive. Press Ctrl+C to abort
the query; the CLI process is terminated and the listener still gets
on_end.
"""

import asyncio
import logging
import os
import signal
import sys

from claude_stream_sdk import (
    AssistantMessage,
    AsyncMessageEventListener,
    ClaudeCodeOptions,
    QueryEventEmitter,
    ResultMessage,
    SystemMessage,
    TextBlock,
    ToolUseBlock,
)

# Enable debug mode to see transport details
DEBUG = os.environ.get("CLAUDE_SDK_DEBUG", "false").lower() == "true"

if DEBUG:
    logging.basicConfig(level=logging.DEBUG, format="%(name)s - %(levelname)s - %(message)s")


class PrintingListener(AsyncMessageEventListener):
    """Prints every event of one query."""

    async def on_query_start(self, prompt: str):
        print(f"> {prompt}")

    async def on_message(self, message):
        if isinstance(message, AssistantMessage):
            for block in message.content:
                if isinstance(block, TextBlock):
                    print(f"\nClaude: {block.text}", flush=True)
                elif isinstance(block, ToolUseBlock):
                    print(f"\n[Tool: {block.name}] {block.input}", flush=True)
        elif isinstance(message, SystemMessage):
            print(f"[System: {message.subtype or 'unknown'}]", flush=True)
        elif isinstance(message, ResultMessage):
            if message.is_error:
                print(f"\n[Error: {message.result}]")
            elif message.total_cost_usd:
                print(f"\n[Cost: ${message.total_cost_usd:.4f}]")

    async def on_error(self, error: Exception):
        print(f"\n[Query failed: {error}]")

    async def on_query_complete(self, messages):
        print(f"\n[{len(messages)} messages received]")

    async def on_end(self):
        print("[Done]")


async def main():
    prompt = " ".join(sys.argv[1:]) or "Explain what a subprocess is in three sentences."
    emitter = QueryEventEmitter(prompt, PrintingListener(), ClaudeCodeOptions(max_turns=1))

    loop = asyncio.get_running_loop()
    # add_signal_handler is not available on Windows
    if sys.platform != "win32":
        loop.add_signal_handler(signal.SIGINT, emitter.abort)

    emitter.start()
    await emitter.wait()


if __name__ == "__main__":
    asyncio.run(main())
