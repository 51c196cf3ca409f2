"""Tests for message and content block types."""

import pytest
from pydantic import ValidationError

from claude_stream_sdk.types import (
    AssistantMessage,
    ResultMessage,
    SystemMessage,
    TextBlock,
    ToolResultBlock,
    ToolUseBlock,
    UserMessage,
)


class TestContentBlocks:
    """Test content block types."""

    def test_text_block(self):
        """Test creating a TextBlock."""
        block = TextBlock(text="Hello, world!")
        assert block.text == "Hello, world!"
        assert block.type == "text"

    def test_tool_use_block(self):
        """Test creating a ToolUseBlock."""
        block = ToolUseBlock(id="tool_123", name="Bash", input={"command": "ls -la"})
        assert block.id == "tool_123"
        assert block.name == "Bash"
        assert block.input == {"command": "ls -la"}
        assert block.type == "tool_use"

    def test_tool_result_block_defaults(self):
        """Test ToolResultBlock optional fields default to None."""
        block = ToolResultBlock(tool_use_id="tool_123")
        assert block.content is None
        assert block.is_error is None
        assert block.type == "tool_result"

    def test_tool_result_block_with_list_content(self):
        """Test ToolResultBlock with list content."""
        content = [{"type": "text", "text": "Output line 1"}]
        block = ToolResultBlock(tool_use_id="tool_123", content=content, is_error=False)
        assert block.content == content
        assert block.is_error is False

    def test_blocks_are_frozen(self):
        """Test content blocks cannot be modified after construction."""
        block = TextBlock(text="original")
        with pytest.raises(ValidationError):
            block.text = "changed"


class TestMessages:
    """Test message types."""

    def test_user_message_with_string_content(self):
        """Test UserMessage with text content."""
        msg = UserMessage(content="What is the capital of France?")
        assert msg.content == "What is the capital of France?"
        assert msg.type == "user"

    def test_assistant_message(self):
        """Test AssistantMessage with mixed blocks."""
        content = [
            TextBlock(text="Let me check."),
            ToolUseBlock(id="tool_1", name="Read", input={"file_path": "a.py"}),
        ]
        msg = AssistantMessage(content=content)
        assert msg.content == content
        assert msg.model is None
        assert msg.type == "assistant"

    def test_system_message(self):
        """Test SystemMessage keeps the raw data."""
        data = {"type": "system", "subtype": "init", "tools": ["Read"]}
        msg = SystemMessage(subtype="init", data=data)
        assert msg.data == data
        assert msg.type == "system"

    def test_result_message_all_fields_optional(self):
        """Test ResultMessage can be built with no fields."""
        msg = ResultMessage()
        assert msg.type == "result"
        assert msg.subtype is None
        assert msg.duration_ms is None
        assert msg.session_id is None
        assert msg.total_cost_usd is None

    def test_result_message_serialization(self):
        """Test ResultMessage JSON serialization."""
        msg = ResultMessage(
            subtype="success",
            duration_ms=1500,
            duration_api_ms=1200,
            is_error=False,
            num_turns=3,
            session_id="abc-123",
            total_cost_usd=0.001,
            result="Done",
        )
        data = msg.model_dump()
        assert data["type"] == "result"
        assert data["num_turns"] == 3
        assert data["result"] == "Done"

    def test_messages_are_frozen(self):
        """Test messages cannot be modified after construction."""
        msg = ResultMessage(subtype="success")
        with pytest.raises(ValidationError):
            msg.subtype = "error"
