"""Base classes for domain adapters.

All adapters must:
- Declare the tools they execute
- Validate caller arguments before any backend call
- Translate tool calls into backend requests
- Raise HomeSliceError subclasses on failure
- Keep no state between calls
"""

from abc import ABC, abstractmethod
from typing import Any

from shared.logging import get_logger
from shared.models import ToolDefinition

logger = get_logger(__name__)


class BaseAdapter(ABC):
    """
    Base class for domain adapters.

    Each adapter:
    - Handles one domain only
    - Translates MCP calls to backend APIs
    - Is stateless
    """

    def __init__(self, domain: str) -> None:
        self.domain = domain
        self._tools: dict[str, ToolDefinition] = {}

    @property
    def tools(self) -> list[ToolDefinition]:
        """Return all tool definitions for this domain, in declaration order."""
        return list(self._tools.values())

    @abstractmethod
    async def execute(self, action: str, parameters: dict[str, Any]) -> Any:
        """
        Execute a tool action.

        Args:
            action: Tool name
            parameters: Tool arguments as received from the client

        Returns:
            JSON-serializable tool output

        Raises:
            ValidationError: If the arguments are invalid
            RemoteError: If the backend call fails
            UnknownToolError: If the action is not handled by this adapter
        """
        pass

    async def close(self) -> None:
        """Release backend resources."""
        pass
