"""
Hook Input Reader.

Parses the JSON the host pipes to the gate for each tool call:

    {"tool_name": "Write", "tool_input": {"content": "..."}, "cwd": "..."}

Objects without a tool_input key are treated as the payload themselves.
"""

import json
from dataclasses import dataclass
from typing import Optional

from vcpgate.errors import InputParseError
from vcpgate.policy.engine import SHELL_TOOLS


@dataclass
class ToolRequest:
    """The tool call under inspection."""

    tool_name: str
    content: str
    cwd: Optional[str] = None
    shell_tools: tuple[str, ...] = SHELL_TOOLS

    @property
    def is_shell(self) -> bool:
        return self.tool_name in self.shell_tools

    @property
    def is_empty(self) -> bool:
        return not self.content


def extract_content(tool_name: str, tool_input: dict, shell_tools: tuple[str, ...] = SHELL_TOOLS) -> str:
    """
    Pick the field to scan for a tool.

    Shell tools are scanned on their command. Write and Edit are scanned
    on new_string, falling back to content.

    Raises:
        InputParseError: If the field holds something other than text
    """
    if tool_name in shell_tools:
        value = tool_input.get("command")
    else:
        value = tool_input.get("new_string")
        if value is None:
            value = tool_input.get("content")

    if value is None:
        return ""

    if not isinstance(value, str):
        raise InputParseError(f"Expected text to scan, got {type(value).__name__}")

    return value


def parse_request(raw: str, shell_tools: tuple[str, ...] = SHELL_TOOLS) -> ToolRequest:
    """
    Parse hook input into a ToolRequest.

    Args:
        raw: Everything read from stdin
        shell_tools: Tool names treated as shell execution

    Returns:
        Parsed request

    Raises:
        InputParseError: If the input is not a JSON object the gate understands
    """
    try:
        data = json.loads(raw)
    except (ValueError, RecursionError) as e:
        raise InputParseError(f"Invalid JSON: {e}") from e

    if not isinstance(data, dict):
        raise InputParseError(f"Expected a JSON object, got {type(data).__name__}")

    tool_name = data.get("tool_name") or ""
    if not isinstance(tool_name, str):
        raise InputParseError("tool_name must be a string")

    tool_input = data.get("tool_input")
    if tool_input is None:
        tool_input = data
    if not isinstance(tool_input, dict):
        raise InputParseError("tool_input must be an object")

    cwd = data.get("cwd")
    if not isinstance(cwd, str):
        cwd = None

    return ToolRequest(
        tool_name=tool_name,
        content=extract_content(tool_name, tool_input, shell_tools),
        cwd=cwd,
        shell_tools=shell_tools,
    )
