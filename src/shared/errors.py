"""Error types for the HomeSlice MCP server.

Every error a tool invocation can produce derives from HomeSliceError.
The router converts them into tool results; only ConfigurationError is
fatal to the process.
"""

from typing import Optional


class HomeSliceError(Exception):
    """Base exception for HomeSlice MCP errors."""
    pass


class ValidationError(HomeSliceError):
    """Caller-supplied tool arguments are missing or malformed."""
    pass


class RemoteError(HomeSliceError):
    """The HomeSlice API returned a non-success status or could not be reached."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        reason: Optional[str] = None
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.reason = reason


class UnknownToolError(HomeSliceError):
    """A tool name that is not in the catalog was invoked."""

    def __init__(self, tool_name: str) -> None:
        super().__init__(f"Unknown tool: {tool_name}")
        self.tool_name = tool_name


class ConfigurationError(HomeSliceError):
    """Required startup configuration is missing."""
    pass
