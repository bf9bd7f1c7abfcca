"""Core data models for the HomeSlice MCP server.

This module defines the tool catalog entries, the per-invocation
request and response values, and the result type every tool call
resolves to before it is rendered for the transport.
"""

import json
from enum import Enum
from typing import Any, Optional, Union

from mcp import types
from pydantic import BaseModel, ConfigDict, Field, field_validator


class ToolDefinition(BaseModel):
    """
    Complete definition of an MCP tool.

    Tools are declarative and discoverable. The domain names the adapter
    that executes the tool; the name is what MCP clients call.
    """
    name: str = Field(..., description="Tool name as advertised to clients")
    domain: str = Field(..., description="Domain whose adapter executes the tool")
    description: str = Field(..., description="Clear description for LLM usage")

    input_schema: dict[str, Any] = Field(
        default_factory=dict,
        description="JSON Schema for input validation"
    )

    # Prefixed to every failure message for this tool
    failure_label: str = Field(default="Tool call failed")

    examples: list[dict[str, Any]] = Field(default_factory=list)

    def to_mcp_tool(self) -> types.Tool:
        """Return the tool as advertised over MCP."""
        return types.Tool(
            name=self.name,
            description=self.description,
            inputSchema=self.input_schema or {"type": "object", "properties": {}}
        )


class ToolResultStatus(str, Enum):
    """Status of tool execution."""
    SUCCESS = "success"
    ERROR = "error"
    NOT_FOUND = "not_found"
    VALIDATION_ERROR = "validation_error"


class ToolResult(BaseModel):
    """
    Result of a tool execution.

    Either data (on success) or an error message. It is collapsed into
    the MCP content envelope only when handed back to the transport.
    """
    tool_name: str
    status: ToolResultStatus
    data: Optional[Any] = None
    error: Optional[str] = None
    error_code: Optional[str] = None
    execution_time_ms: float = 0

    @property
    def is_error(self) -> bool:
        return self.status != ToolResultStatus.SUCCESS

    def to_text(self) -> str:
        if self.is_error:
            return f"Error: {self.error}"
        return json.dumps(self.data, indent=2)

    def to_call_tool_result(self) -> types.CallToolResult:
        """Render the result as the uniform tool envelope."""
        return types.CallToolResult(
            content=[types.TextContent(type="text", text=self.to_text())],
            isError=self.is_error
        )


class DownPaymentType(str, Enum):
    """How down_payment_amt is interpreted."""
    PERCENT = "percent"
    AMOUNT = "amount"


class RateQuery(BaseModel):
    """Arguments of get_mortgage_rates."""
    state: str = Field(..., min_length=2, max_length=2)

    model_config = ConfigDict(extra="ignore")


# Integers stay integers so large values are sent exactly
Number = Union[int, float]


class MortgageRequest(BaseModel):
    """Arguments of calculate_mortgage."""
    home_price: Number
    down_payment_amt: Number
    down_payment_type: DownPaymentType
    state: str = Field(..., min_length=2, max_length=2)
    loan_term: Optional[Number] = None

    interest_rate: Optional[Number] = None
    yearly_insurance: Optional[Number] = None
    yearly_property_tax: Optional[Number] = None
    monthly_pmi: Optional[Number] = None
    monthly_hoa: Optional[Number] = None

    model_config = ConfigDict(extra="ignore")

    @field_validator("home_price")
    @classmethod
    def _positive(cls, value: Number) -> Number:
        if value <= 0:
            raise ValueError("must be greater than 0")
        return value

    @field_validator("down_payment_amt")
    @classmethod
    def _non_negative(cls, value: Number) -> Number:
        if value < 0:
            raise ValueError("must be greater than or equal to 0")
        return value


OPTIONAL_MORTGAGE_FIELDS = (
    "interest_rate",
    "yearly_insurance",
    "yearly_property_tax",
    "monthly_pmi",
    "monthly_hoa",
)

DEFAULT_LOAN_TERM = 30


class RateProducts(BaseModel):
    """
    Rates per mortgage product.

    Validated from the provider's field names and dumped under the
    stable output names. Values are passed through untouched.
    """
    thirty_year_fixed: Any = Field(default=None, serialization_alias="30_year_fixed")
    thirty_year_fixed_fha: Any = Field(default=None, serialization_alias="30_year_fixed_fha")
    thirty_year_fixed_va: Any = Field(default=None, serialization_alias="30_year_fixed_va")
    twenty_year_fixed: Any = Field(default=None, serialization_alias="20_year_fixed")
    fifteen_year_fixed: Any = Field(default=None, serialization_alias="15_year_fixed")
    ten_year_fixed: Any = Field(default=None, serialization_alias="10_year_fixed")
    seven_year_arm: Any = Field(default=None, serialization_alias="7_year_arm")
    five_year_arm: Any = Field(default=None, serialization_alias="5_year_arm")

    model_config = ConfigDict(extra="ignore")


class RateQuoteSet(BaseModel):
    """Live rates for one state."""
    state: str
    event_datetime: Optional[Any] = None
    rates: RateProducts
    source: str = "HomeSlice API"

    @classmethod
    def from_provider(cls, payload: dict[str, Any], requested_state: str) -> "RateQuoteSet":
        """Re-shape a /rates response body."""
        state = payload.get("state") or requested_state
        return cls(
            state=str(state).upper(),
            event_datetime=payload.get("event_datetime"),
            rates=RateProducts.model_validate(payload),
        )

    def to_output(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True)
