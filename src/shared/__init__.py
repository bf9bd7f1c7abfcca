"""Shared utilities and base classes for the HomeSlice MCP server."""

from shared.models import (
    ToolDefinition,
    ToolResult,
    ToolResultStatus,
)
from shared.config import HomeSliceSettings, get_settings, load_settings
from shared.errors import (
    ConfigurationError,
    HomeSliceError,
    RemoteError,
    UnknownToolError,
    ValidationError,
)
from shared.logging import get_logger, setup_logging

__all__ = [
    "ToolDefinition",
    "ToolResult",
    "ToolResultStatus",
    "HomeSliceSettings",
    "get_settings",
    "load_settings",
    "ConfigurationError",
    "HomeSliceError",
    "RemoteError",
    "UnknownToolError",
    "ValidationError",
    "get_logger",
    "setup_logging",
]
