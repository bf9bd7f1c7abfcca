"""HomeSlice MCP Server - tool catalog and call routing over stdio.

Exposes the mortgage tools of the HomeSlice API to MCP clients.
"""

from homeslice_server.registry import ToolRegistry
from homeslice_server.router import ToolRouter

__all__ = [
    "ToolRegistry",
    "ToolRouter",
]
