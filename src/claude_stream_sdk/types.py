"""Message types for claude-stream-sdk.

Every message and content block carries a ``type`` discriminator matching
the ``type`` field of the CLI's stream-json output. Instances are frozen
once constructed.
"""

from typing import Any, Literal

from pydantic import (
    BaseModel,
    ConfigDict,
    ValidationError,
    ValidatorFunctionWrapHandler,
    field_validator,
)


PermissionMode = Literal["default", "acceptEdits", "bypassPermissions"]


class _FrozenModel(BaseModel):
    model_config = ConfigDict(frozen=True)


def _none_if_invalid(value: Any, handler: ValidatorFunctionWrapHandler) -> Any:
    """Validate value, degrading it to None when it has an unexpected type."""
    try:
        return handler(value)
    except ValidationError:
        return None


class TextBlock(_FrozenModel):
    """Text content block."""

    text: str
    type: Literal["text"] = "text"


class ToolUseBlock(_FrozenModel):
    """Tool use content block."""

    id: str
    name: str
    input: dict[str, Any]
    type: Literal["tool_use"] = "tool_use"


class ToolResultBlock(_FrozenModel):
    """Tool result content block.

    ``tool_use_id`` refers back to the ``id`` of an earlier ``ToolUseBlock``.
    Matching the two up is left to the caller.
    """

    tool_use_id: str
    content: str | list[dict[str, Any]] | None = None
    is_error: bool | None = None
    type: Literal["tool_result"] = "tool_result"


ContentBlock = TextBlock | ToolUseBlock | ToolResultBlock


class UserMessage(_FrozenModel):
    """User message."""

    content: str | list[ContentBlock]
    type: Literal["user"] = "user"


class AssistantMessage(_FrozenModel):
    """Assistant message with content blocks.

    Example:
        ```python
        for block in msg.content:
            if isinstance(block, ToolUseBlock):
                print(f"{msg.model} wants to run {block.name}")
        ```
    """

    content: list[ContentBlock]
    model: str | None = None
    type: Literal["assistant"] = "assistant"

    @field_validator("model", mode="wrap")
    def drop_invalid_model(cls, v: Any, handler: ValidatorFunctionWrapHandler) -> Any:
        return _none_if_invalid(v, handler)


class SystemMessage(_FrozenModel):
    """System message; ``data`` holds the whole raw payload."""

    subtype: str | None = None
    data: dict[str, Any]
    type: Literal["system"] = "system"

    @field_validator("subtype", mode="wrap")
    def drop_invalid_subtype(cls, v: Any, handler: ValidatorFunctionWrapHandler) -> Any:
        return _none_if_invalid(v, handler)


class ResultMessage(_FrozenModel):
    """Result message with timing, cost and usage information.

    Fields missing from the CLI output stay ``None``; an ``is_error`` result
    still arrives as a message rather than an exception.

    Example:
        ```python
        if msg.subtype == "error_max_turns":
            print(f"Stopped after {msg.num_turns} turns in session {msg.session_id}")
        ```
    """

    subtype: str | None = None
    duration_ms: int | float | None = None
    duration_api_ms: int | float | None = None
    is_error: bool | None = None
    num_turns: int | None = None
    session_id: str | None = None
    total_cost_usd: float | None = None
    usage: dict[str, Any] | None = None
    result: str | None = None
    type: Literal["result"] = "result"

    @field_validator(
        "subtype",
        "duration_ms",
        "duration_api_ms",
        "is_error",
        "num_turns",
        "session_id",
        "total_cost_usd",
        "usage",
        "result",
        mode="wrap",
    )
    def drop_invalid_field(cls, v: Any, handler: ValidatorFunctionWrapHandler) -> Any:
        """Keep the message when a single field has an unexpected type."""
        return _none_if_invalid(v, handler)


Message = UserMessage | AssistantMessage | SystemMessage | ResultMessage
