"""Tool Registry for the HomeSlice MCP server.

Holds the tool catalog advertised on tools/list. Tools are registered
by the domains at startup and never change afterwards.
"""

from typing import Optional

from mcp import types

from shared.logging import get_logger
from shared.models import ToolDefinition
from shared.schema import check_tool_schema

logger = get_logger(__name__)


class ToolRegistry:
    """
    Catalog of all MCP tools.

    Responsibilities:
    - Register tools from domains
    - Lookup tools by name
    - List tools in registration order
    - Reject malformed input schemas
    """

    def __init__(self) -> None:
        self._tools: dict[str, ToolDefinition] = {}

    def register(self, tool: ToolDefinition) -> None:
        """
        Register a tool in the registry.

        Args:
            tool: Tool definition to register

        Raises:
            ValueError: If the name is taken or the input schema is invalid
        """
        if tool.name in self._tools:
            raise ValueError(f"Tool '{tool.name}' is already registered")

        problems = check_tool_schema(tool.input_schema)
        if problems:
            raise ValueError(
                f"Tool '{tool.name}' has an invalid input schema: {'; '.join(problems)}"
            )

        self._tools[tool.name] = tool

        logger.debug("Tool registered", tool=tool.name, domain=tool.domain)

    def register_many(self, tools: list[ToolDefinition]) -> None:
        """Register multiple tools at once."""
        for tool in tools:
            self.register(tool)

    def get(self, tool_name: str) -> Optional[ToolDefinition]:
        """
        Get a tool by name.

        Returns:
            ToolDefinition if found, None otherwise
        """
        return self._tools.get(tool_name)

    def list_tools(self, domain: Optional[str] = None) -> list[ToolDefinition]:
        """List registered tools, optionally filtered by domain."""
        tools = list(self._tools.values())

        if domain:
            tools = [t for t in tools if t.domain == domain]

        return tools

    def list_mcp_tools(self) -> list[types.Tool]:
        """Get the catalog in the shape returned by tools/list."""
        return [tool.to_mcp_tool() for tool in self.list_tools()]

    def __len__(self) -> int:
        return len(self._tools)

    def __contains__(self, tool_name: object) -> bool:
        return tool_name in self._tools
