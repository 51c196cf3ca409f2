"""Message parser for Claude Code stream-json output."""

import logging
from typing import Any

from .types import (
    AssistantMessage,
    ContentBlock,
    Message,
    ResultMessage,
    SystemMessage,
    TextBlock,
    ToolResultBlock,
    ToolUseBlock,
    UserMessage,
)

logger = logging.getLogger(__name__)


def parse_message(data: Any) -> Message | None:
    """
    Parse one decoded CLI output value into a typed Message.

    Only the ``type`` discriminator is trusted. Values that are not objects,
    carry an unknown or missing ``type``, or cannot be shaped into their
    message type produce None, and the caller skips them.

    Args:
        data: Raw decoded JSON value from one line of CLI output

    Returns:
        Parsed Message object, or None if the value is not a known message

    Example:
        ```python
        msg = parse_message({"type": "assistant", "message": {"content": [...]}})
        isinstance(msg, AssistantMessage)  # True

        parse_message({"type": "future_type"})  # None
        ```
    """
    if not isinstance(data, dict):
        logger.debug("Ignoring non-object CLI output of type %s", type(data).__name__)
        return None

    message_type = data.get("type")

    try:
        match message_type:
            case "user":
                return _parse_user_message(data)
            case "assistant":
                return _parse_assistant_message(data)
            case "system":
                return _parse_system_message(data)
            case "result":
                return _parse_result_message(data)
            case _:
                logger.debug("Ignoring message with unknown type: %s", message_type)
                return None
    except (KeyError, TypeError, ValueError, AttributeError) as e:
        logger.warning("Failed to parse %s message, skipping it: %s", message_type, e)
        return None


def _parse_content_block(block: Any) -> ContentBlock | None:
    """Parse a single content block, or None if it is unknown or malformed."""
    if not isinstance(block, dict):
        return None

    block_type = block.get("type")
    try:
        match block_type:
            case "text":
                return TextBlock(text=block["text"])
            case "tool_use":
                return ToolUseBlock(
                    id=block["id"],
                    name=block["name"],
                    input=block["input"],
                )
            case "tool_result":
                return ToolResultBlock(
                    tool_use_id=block["tool_use_id"],
                    content=block.get("content"),
                    is_error=block.get("is_error"),
                )
            case _:
                logger.debug("Dropping content block with unknown type: %s", block_type)
                return None
    except (KeyError, ValueError) as e:
        logger.warning("Dropping malformed %s block: %s", block_type, e)
        return None


def _parse_content_blocks(blocks: list[Any]) -> list[ContentBlock]:
    """Parse content blocks from message data.

    Args:
        blocks: List of content block dictionaries

    Returns:
        Parsed blocks, with unknown or malformed ones left out

    Raises:
        TypeError: If blocks is not a list.
    """
    if not isinstance(blocks, list):
        raise TypeError(f"content must be a list, got {type(blocks).__name__}")

    content_blocks: list[ContentBlock] = []
    for block in blocks:
        parsed = _parse_content_block(block)
        if parsed is not None:
            content_blocks.append(parsed)
    return content_blocks


def _parse_user_message(data: dict[str, Any]) -> UserMessage:
    """Parse a user message."""
    content = data["message"]["content"]

    # Tool results come back to the model as a list of blocks
    if isinstance(content, list):
        return UserMessage(content=_parse_content_blocks(content))

    return UserMessage(content=content)


def _parse_assistant_message(data: dict[str, Any]) -> AssistantMessage:
    """Parse an assistant message."""
    message = data["message"]

    return AssistantMessage(
        content=_parse_content_blocks(message["content"]),
        model=message.get("model"),
    )


def _parse_system_message(data: dict[str, Any]) -> SystemMessage:
    """Parse a system message."""
    return SystemMessage(
        subtype=data.get("subtype"),
        data=data,
    )


def _parse_result_message(data: dict[str, Any]) -> ResultMessage:
    """Parse a result message."""
    return ResultMessage(
        subtype=data.get("subtype"),
        duration_ms=data.get("duration_ms"),
        duration_api_ms=data.get("duration_api_ms"),
        is_error=data.get("is_error"),
        num_turns=data.get("num_turns"),
        session_id=data.get("session_id"),
        total_cost_usd=data.get("total_cost_usd"),
        usage=data.get("usage"),
        result=data.get("result"),
    )
