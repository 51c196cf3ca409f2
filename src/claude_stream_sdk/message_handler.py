"""Message event listener for handling query messages.

This module provides a push-style alternative to iterating over query():
QueryEventEmitter runs the query in a background task and forwards every
message to an AsyncMessageEventListener as it arrives.
"""

import asyncio
import logging
from contextlib import aclosing

from .options import ClaudeCodeOptions
from .query import query
from .types import Message

logger = logging.getLogger(__name__)


class AsyncMessageEventListener:
    """Base class for async message event handlers.

    Override the callbacks you need; all of them default to doing nothing.

    Example:
        ```python
        class MyHandler(AsyncMessageEventListener):
            async def on_message(self, message: Message):
                print(f"Received: {type(message).__name__}")

            async def on_error(self, error: Exception):
                print(f"Query failed: {error}")
        ```
    """

    async def on_query_start(self, prompt: str) -> None:
        """Called before the CLI is started."""

    async def on_message(self, message: Message) -> None:
        """Called for every message, in order."""

    async def on_error(self, error: Exception) -> None:
        """Called when the query fails. No end event follows."""

    async def on_query_complete(self, messages: list[Message]) -> None:
        """Called when the query ran to completion without being aborted."""

    async def on_end(self) -> None:
        """Called when the stream ended normally or was aborted."""


class AsyncDefaultMessageHandler(AsyncMessageEventListener):
    """Default async handler that buffers the messages of one query."""

    def __init__(self) -> None:
        """Initialize the async default handler."""
        self._lock = asyncio.Lock()
        self._messages: list[Message] = []
        self._error: Exception | None = None
        self._done = asyncio.Event()

    async def on_query_start(self, prompt: str) -> None:
        """Reset the buffer for a new query."""
        async with self._lock:
            self._messages = []
            self._error = None
            self._done.clear()

    async def on_message(self, message: Message) -> None:
        """Buffer message for current query."""
        async with self._lock:
            self._messages.append(message)

    async def on_error(self, error: Exception) -> None:
        """Record the error and mark the query as finished."""
        async with self._lock:
            self._error = error
        self._done.set()

    async def on_end(self) -> None:
        """Mark the query as finished."""
        self._done.set()

    async def get_messages(self) -> list[Message]:
        """Get all buffered messages for current query."""
        async with self._lock:
            return list(self._messages)

    async def get_error(self) -> Exception | None:
        """Get the error the query failed with, if any."""
        async with self._lock:
            return self._error

    async def wait_for_completion(self, timeout: float = 60.0) -> bool:
        """Wait for the query to end or fail.

        Returns:
            True if it finished within timeout, False otherwise
        """
        try:
            await asyncio.wait_for(self._done.wait(), timeout=timeout)
            return True
        except asyncio.TimeoutError:
            return False

    def is_complete(self) -> bool:
        """Check if current query has finished."""
        return self._done.is_set()


class QueryEventEmitter:
    """Runs query() in the background and pushes its messages to a listener.

    Errors raised by the query are delivered to ``on_error`` rather than
    propagated. ``abort()`` stops the query and terminates the CLI.

    Example:
        ```python
        handler = AsyncDefaultMessageHandler()
        emitter = QueryEventEmitter("What is 2 + 2?", handler)
        emitter.start()
        await handler.wait_for_completion(timeout=30.0)
        messages = await handler.get_messages()
        ```
    """

    def __init__(
        self,
        prompt: str,
        listener: AsyncMessageEventListener,
        options: ClaudeCodeOptions | None = None,
    ) -> None:
        """Initialize the emitter.

        Args:
            prompt: The prompt to send to Claude
            listener: Receives the query events
            options: Optional configuration

        Raises:
            ValueError: If listener is None.
        """
        if listener is None:
            raise ValueError("listener is required and cannot be None")

        self._prompt = prompt
        self._listener = listener
        self._options = options
        self._task: asyncio.Task[None] | None = None
        self._aborted = False
        self._streaming = False
        self._dispatching = False

    @property
    def aborted(self) -> bool:
        """Whether abort() has been called."""
        return self._aborted

    def start(self) -> asyncio.Task[None]:
        """Start the query in a background task on the running loop.

        Returns:
            The background task

        Raises:
            RuntimeError: If already started.
        """
        if self._task is not None:
            raise RuntimeError("Query already started")

        self._task = asyncio.create_task(self._run(), name="claude-query-emitter")
        return self._task

    def abort(self) -> None:
        """Stop the query. The CLI process is terminated and on_end fires."""
        self._aborted = True
        # Before streaming starts or inside a callback, _run sees the flag itself
        if (
            self._streaming
            and not self._dispatching
            and self._task is not None
            and not self._task.done()
        ):
            self._task.cancel()

    async def wait(self) -> None:
        """Wait until the background task has finished."""
        if self._task is None:
            raise RuntimeError("Query not started. Call start() first.")
        await self._task

    async def _run(self) -> None:
        """Drain query() and dispatch events."""
        messages: list[Message] = []
        await self._listener.on_query_start(self._prompt)

        if self._aborted:
            await self._listener.on_end()
            return

        self._streaming = True
        try:
            async with aclosing(query(self._prompt, self._options)) as stream:
                async for message in stream:
                    messages.append(message)
                    self._dispatching = True
                    try:
                        await self._listener.on_message(message)
                    finally:
                        self._dispatching = False
                    if self._aborted:
                        break
        except asyncio.CancelledError:
            if not self._aborted:
                raise
            logger.debug("Query aborted after %d messages", len(messages))
        except Exception as e:
            logger.debug("Query failed: %s", e)
            await self._listener.on_error(e)
            return
        finally:
            self._streaming = False

        if not self._aborted:
            await self._listener.on_query_complete(messages)
        await self._listener.on_end()
