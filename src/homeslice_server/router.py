"""Tool Router for the HomeSlice MCP server.

Routes tool calls to the domain adapter that owns them and turns every
outcome, success or failure, into a ToolResult. Nothing raised by an
adapter escapes this module.
"""

import time
from typing import Any, Optional

from mcp import types

from shared.errors import HomeSliceError, UnknownToolError, ValidationError
from shared.logging import get_logger
from shared.models import ToolResult, ToolResultStatus
from domains.base import BaseAdapter
from homeslice_server.registry import ToolRegistry

logger = get_logger(__name__)


class ToolRouter:
    """
    Routes tool calls to domain adapters.

    Responsibilities:
    - Look up the called tool
    - Route to the owning adapter
    - Convert errors into tool results
    """

    def __init__(self, registry: Optional[ToolRegistry] = None) -> None:
        self.registry = registry or ToolRegistry()
        self._adapters: dict[str, BaseAdapter] = {}

    def register_adapter(self, domain: str, adapter: BaseAdapter) -> None:
        """
        Register a domain adapter.

        Args:
            domain: Domain name
            adapter: Adapter executing the domain's tools
        """
        self._adapters[domain] = adapter
        logger.debug("Adapter registered", domain=domain)

    async def execute(self, tool_name: str, arguments: Optional[dict[str, Any]] = None) -> ToolResult:
        """
        Execute a tool call.

        Args:
            tool_name: Name of the called tool
            arguments: Tool arguments (None is treated as no arguments)

        Returns:
            Tool execution result
        """
        start_time = time.time()
        arguments = arguments or {}

        logger.debug("Executing tool", tool=tool_name)

        tool = self.registry.get(tool_name)
        if not tool:
            logger.warning("Unknown tool called", tool=tool_name)
            return ToolResult(
                tool_name=tool_name,
                status=ToolResultStatus.NOT_FOUND,
                error=str(UnknownToolError(tool_name)),
                error_code="TOOL_NOT_FOUND"
            )

        adapter = self._adapters.get(tool.domain)
        if not adapter:
            result = ToolResult(
                tool_name=tool_name,
                status=ToolResultStatus.ERROR,
                error=f"{tool.failure_label}: No adapter registered for domain '{tool.domain}'",
                error_code="NO_ADAPTER"
            )
            return result

        try:
            data = await adapter.execute(tool.name, arguments)
            result = ToolResult(
                tool_name=tool_name,
                status=ToolResultStatus.SUCCESS,
                data=data
            )
        except ValidationError as e:
            logger.info("Tool arguments rejected", tool=tool_name, error=str(e))
            result = ToolResult(
                tool_name=tool_name,
                status=ToolResultStatus.VALIDATION_ERROR,
                error=f"{tool.failure_label}: {e}",
                error_code="VALIDATION_ERROR"
            )
        except UnknownToolError as e:
            result = ToolResult(
                tool_name=tool_name,
                status=ToolResultStatus.NOT_FOUND,
                error=str(e),
                error_code="TOOL_NOT_FOUND"
            )
        except HomeSliceError as e:
            logger.warning("Tool execution failed", tool=tool_name, error=str(e))
            result = ToolResult(
                tool_name=tool_name,
                status=ToolResultStatus.ERROR,
                error=f"{tool.failure_label}: {e}",
                error_code="REMOTE_ERROR"
            )
        except Exception as e:
            logger.error(
                "Tool execution crashed",
                tool=tool_name,
                error=str(e),
                exc_info=True
            )
            result = ToolResult(
                tool_name=tool_name,
                status=ToolResultStatus.ERROR,
                error=f"{tool.failure_label}: {e}",
                error_code="EXECUTION_ERROR"
            )

        result.execution_time_ms = (time.time() - start_time) * 1000

        logger.info(
            "Tool executed",
            tool=tool_name,
            status=result.status.value,
            execution_time_ms=round(result.execution_time_ms, 1)
        )

        return result

    async def call_tool(
        self,
        tool_name: str,
        arguments: Optional[dict[str, Any]] = None
    ) -> types.CallToolResult:
        """Execute a tool call and render it as the MCP tool envelope."""
        result = await self.execute(tool_name, arguments)
        return result.to_call_tool_result()

    def list_tools(self) -> list[types.Tool]:
        """Tools advertised on tools/list."""
        return self.registry.list_mcp_tools()

    async def close(self) -> None:
        """Close all adapters."""
        for adapter in self._adapters.values():
            await adapter.close()
