"""Query options for invoking the Claude Code CLI via subprocess.

This module provides the options model accepted by ``query()`` and the
mapping from those options to Claude Code CLI arguments.
"""

import json
import os
from pathlib import Path
from typing import Any, get_args

from pydantic import BaseModel, ConfigDict, Field, field_validator

from claude_stream_sdk.types import PermissionMode

# Marker variable telling the CLI which client launched it
ENTRYPOINT_ENV_VAR = "CLAUDE_CODE_ENTRYPOINT"
ENTRYPOINT = "sdk-py"


class McpServerConfig(BaseModel):
    """Command line and environment for one MCP server."""

    transport: list[str] = Field(description="Command used to launch the server")
    env: dict[str, Any] | None = Field(
        default=None, description="Environment variables for the server process"
    )

    model_config = ConfigDict(frozen=True)

    def to_cli_config(self) -> dict[str, Any]:
        """Return the server entry as written under ``mcpServers``."""
        config: dict[str, Any] = {"transport": list(self.transport)}
        if self.env is not None:
            config["env"] = dict(self.env)
        return config


class ClaudeCodeOptions(BaseModel):
    """Options for a single query against the Claude Code CLI.

    Every field is optional and independent of the others; combinations are
    validated by the CLI itself.

    Example:
        ```python
        options = ClaudeCodeOptions(
            model="sonnet",
            system_prompt="You are a helpful assistant",
            allowed_tools=["Read", "Write"],
        )
        cmd = options.build_command("Hello, Claude!", cli_path="/usr/local/bin/claude")
        ```
    """

    # ===== Tools =====

    allowed_tools: list[str] = Field(
        default_factory=list,
        description="Tool names to allow (e.g., ['Read', 'Bash(git:*)'])",
    )
    disallowed_tools: list[str] = Field(
        default_factory=list,
        description="Tool names to deny",
    )
    mcp_tools: list[str] = Field(
        default_factory=list,
        description="MCP tool names (kept for compatibility, not passed to the CLI)",
    )

    # ===== System Prompt =====

    system_prompt: str | None = Field(
        default=None, description="System prompt to use for the session"
    )
    append_system_prompt: str | None = Field(
        default=None, description="Append a system prompt to the default system prompt"
    )

    # ===== Limits =====

    max_turns: int | None = Field(
        default=None,
        gt=0,
        description="Maximum number of conversation turns",
    )
    max_thinking_tokens: int | None = Field(
        default=None,
        description="Max tokens for thinking blocks (not passed to the CLI)",
    )

    # ===== Model =====

    model: str | None = Field(
        default=None, description="Model to use (e.g., 'sonnet', 'opus', 'haiku')"
    )

    # ===== Permissions =====

    permission_mode: str | None = Field(
        default=None,
        description="Permission mode: 'default', 'acceptEdits' or 'bypassPermissions'",
    )
    permission_prompt_tool_name: str | None = Field(
        default=None,
        description="MCP tool used to answer permission prompts",
    )

    # ===== Session Management =====

    continue_conversation: bool = Field(
        default=False,
        description="Continue the most recent conversation in the current directory",
        alias="continue",
    )
    resume: str | None = Field(default=None, description="Resume a conversation by session ID")

    # ===== MCP Servers =====

    mcp_servers: dict[str, McpServerConfig] = Field(
        default_factory=dict,
        description="MCP servers keyed by name",
        examples=[{"files": {"transport": ["node", "server.js"], "env": {"ROOT": "/tmp"}}}],
    )

    # ===== Process =====

    cwd: str | Path | None = Field(
        default=None,
        description="Working directory for the CLI execution",
    )
    cli_path: str | Path | None = Field(
        default=None,
        description="Path to the Claude Code CLI binary (skips discovery)",
    )

    model_config = ConfigDict(
        populate_by_name=True,  # Allow using the 'continue' alias
        arbitrary_types_allowed=True,  # Allow Path types
        frozen=True,
    )

    @field_validator("permission_mode")
    def validate_permission_mode(cls, v: str | None) -> str | None:
        """Validate permission mode value."""
        if v is None:
            return v
        valid_modes = get_args(PermissionMode)
        if v not in valid_modes:
            raise ValueError(
                f"Invalid permission_mode: {v}. Must be one of: {', '.join(valid_modes)}"
            )
        return v

    @field_validator("allowed_tools", "disallowed_tools")
    def deduplicate_tools(cls, v: list[str]) -> list[str]:
        """Drop repeated tool names, keeping the first occurrence."""
        return list(dict.fromkeys(v))

    def build_command(self, prompt: str, cli_path: str | Path) -> list[str]:
        """Build the complete command list for subprocess invocation.

        Flags are always emitted in the same order, so equal options give
        identical command lines. The prompt always comes last, after
        ``--print``.

        Args:
            prompt: Prompt to send to Claude.
            cli_path: Resolved path to the Claude Code CLI binary.

        Returns:
            List of command arguments.

        Example:
            ```python
            options = ClaudeCodeOptions(model="haiku")
            options.build_command("Hello!", "/usr/bin/claude")
            # ['/usr/bin/claude', '--output-format', 'stream-json', '--verbose',
            #  '--model', 'haiku', '--print', 'Hello!']
            ```
        """
        # verbose is required by the CLI for --print with stream-json output
        cmd = [str(cli_path), "--output-format", "stream-json", "--verbose"]

        if self.system_prompt:
            cmd.extend(["--system-prompt", self.system_prompt])

        if self.append_system_prompt:
            cmd.extend(["--append-system-prompt", self.append_system_prompt])

        if self.allowed_tools:
            cmd.extend(["--allowedTools", ",".join(self.allowed_tools)])

        if self.max_turns is not None:
            cmd.extend(["--max-turns", str(self.max_turns)])

        if self.disallowed_tools:
            cmd.extend(["--disallowedTools", ",".join(self.disallowed_tools)])

        if self.model:
            cmd.extend(["--model", self.model])

        if self.permission_prompt_tool_name:
            cmd.extend(["--permission-prompt-tool", self.permission_prompt_tool_name])

        if self.permission_mode:
            cmd.extend(["--permission-mode", self.permission_mode])

        if self.continue_conversation:
            cmd.append("--continue")

        if self.resume:
            cmd.extend(["--resume", self.resume])

        if self.mcp_servers:
            servers = {
                name: server.to_cli_config()
                for name, server in self.mcp_servers.items()
            }
            cmd.extend(["--mcp-config", json.dumps({"mcpServers": servers})])

        cmd.extend(["--print", prompt])

        return cmd

    def build_subprocess_kwargs(self) -> dict[str, Any]:
        """Build subprocess keyword arguments.

        Returns:
            Dictionary of kwargs for ``asyncio.create_subprocess_exec``:
            - cwd: Working directory, made absolute (only when set)
            - env: Current environment plus the SDK entrypoint marker
        """
        result: dict[str, Any] = {}

        if self.cwd:
            result["cwd"] = os.path.abspath(self.cwd)

        result["env"] = {**os.environ, ENTRYPOINT_ENV_VAR: ENTRYPOINT}

        return result
